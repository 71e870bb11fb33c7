import pytest
from decimal import Decimal
from django.db import OperationalError

from apps.inventory.measurement import MeasurementUnit
from apps.inventory.models import Ingredient
from apps.menu.models import MenuItem
from apps.orders.models import Order
from apps.orders.services import (
    InsufficientStockError,
    LedgerStore,
    MissingReferenceError,
    TransactionConflictError,
    ConcurrentUpdateError,
    consume_order_ingredients,
    place_order,
)


class ConflictingStore(LedgerStore):
    """
    Store whose reads are overtaken by another writer.

    For the first ``conflicts`` ingredient reads the row's version is bumped
    right after reading, so the following conditional write loses.
    """

    def __init__(self, conflicts=1, **kwargs):
        kwargs.setdefault('retry_delay', 0)
        super().__init__(**kwargs)
        self.conflicts = conflicts
        self.reads = 0

    def get_ingredient(self, ingredient_id):
        self.reads += 1
        ingredient = super().get_ingredient(ingredient_id)
        if self.conflicts:
            self.conflicts -= 1
            Ingredient.objects.filter(pk=ingredient_id).update(version=ingredient.version + 1)
        return ingredient


class StaleReadStore(LedgerStore):
    """Store that serves a snapshot taken before another order committed, once."""

    def __init__(self, snapshot, **kwargs):
        kwargs.setdefault('retry_delay', 0)
        super().__init__(**kwargs)
        self.snapshot = snapshot

    def get_ingredient(self, ingredient_id):
        if self.snapshot is not None and self.snapshot.pk == ingredient_id:
            snapshot, self.snapshot = self.snapshot, None
            return snapshot
        return super().get_ingredient(ingredient_id)


@pytest.mark.django_db
class TestWriteIngredient:

    def test_bumps_version(self, sugar):
        store = LedgerStore()
        store.write_ingredient(sugar, used=10.0)

        assert sugar.version == 1
        sugar.refresh_from_db()
        assert sugar.used == 10
        assert sugar.version == 1

    def test_stale_version_rejected(self, sugar):
        stale = Ingredient.objects.get(pk=sugar.pk)
        LedgerStore().write_ingredient(sugar, used=10.0)

        with pytest.raises(ConcurrentUpdateError):
            LedgerStore().write_ingredient(stale, used=20.0)

        sugar.refresh_from_db()
        assert sugar.used == 10


@pytest.mark.django_db
class TestRunTransaction:

    def test_returns_work_result(self, db):
        assert LedgerStore().run_transaction(lambda txn: 42) == 42

    def test_operational_error_retried(self, db):
        calls = []

        def work(txn):
            calls.append(txn.attempts)
            if len(calls) == 1:
                raise OperationalError('database is locked')
            return 'done'

        store = LedgerStore(retry_delay=0)
        assert store.run_transaction(work) == 'done'
        assert calls == [1, 2]

    def test_other_errors_not_retried(self, db):
        store = LedgerStore(retry_delay=0)

        def work(txn):
            raise MissingReferenceError('gone')

        with pytest.raises(MissingReferenceError):
            store.run_transaction(work)
        assert store.attempts == 1

    def test_max_attempts_from_settings(self, settings):
        settings.POS_TRANSACTION_MAX_ATTEMPTS = 7
        assert LedgerStore().max_attempts == 7


@pytest.mark.django_db
class TestConcurrentOrders:

    def test_conflict_retried_and_applied_once(self, order_shop, draft_for, sweet_tea, sugar):
        store = ConflictingStore(conflicts=1)

        result = place_order(order_shop, draft_for((sweet_tea, 2)), store=store)

        assert store.attempts == 2
        sugar.refresh_from_db()
        assert sugar.used == 100
        assert Order.objects.filter(pk=result.order_id).count() == 1
        assert Order.objects.count() == 1

    def test_retries_exhausted(self, order_shop, draft_for, sweet_tea, sugar):
        store = ConflictingStore(conflicts=100, max_attempts=3)

        with pytest.raises(TransactionConflictError):
            place_order(order_shop, draft_for((sweet_tea, 2)), store=store)

        assert store.attempts == 3
        sugar.refresh_from_db()
        assert sugar.used == 0
        assert Order.objects.count() == 0

    def test_overdrawing_pair_commits_only_one(self, order_shop, draft_for, syrup_order_item, sugar):
        # Both orders passed validation against the same stock; the second
        # one reads stale stock first and must re-check after its conflict.
        snapshot = Ingredient.objects.get(pk=sugar.pk)

        place_order(order_shop, draft_for((syrup_order_item, 1)))

        store = StaleReadStore(snapshot)
        with pytest.raises(InsufficientStockError) as exc_info:
            store.run_transaction(lambda txn: _consume(txn, syrup_order_item))

        assert exc_info.value.ingredient_name == 'Sugar'
        assert store.attempts == 2
        sugar.refresh_from_db()
        assert sugar.used == 6000
        assert Order.objects.count() == 1

    def test_sequential_overdraw(self, order_shop, draft_for, syrup_order_item, sugar):
        place_order(order_shop, draft_for((syrup_order_item, 1)))

        with pytest.raises(InsufficientStockError):
            place_order(order_shop, draft_for((syrup_order_item, 1)))

        sugar.refresh_from_db()
        assert sugar.used == 6000
        assert Order.objects.count() == 1


def _consume(txn, item):
    return consume_order_ingredients(txn, [(txn.get_menu_item(item.id), 1)])


@pytest.fixture
def syrup_order_item(order_shop, sugar, recipe_line):
    """Item needing 6 kg of sugar: two of them overdraw the 10 kg stock."""
    item = MenuItem.objects.create(shop=order_shop, name='Sugar Bucket', price=Decimal('100000'))
    recipe_line(item, sugar, 6, MeasurementUnit.KILOGRAM)
    return item
