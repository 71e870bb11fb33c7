"""
Ledger Store
============

Storage handle passed into the consumption engine and the restock/reset
operations instead of a process-wide singleton.

Every ingredient write is a conditional update on ``(id, version)``. A
write that matches no row means another transaction committed first; the
surrounding :meth:`LedgerStore.run_transaction` then rolls back and re-runs
the whole unit of work with fresh reads.

Example:
    Running a unit of work with retry-on-conflict::

        store = LedgerStore()

        def work(txn):
            sugar = txn.get_ingredient(sugar_id)
            return txn.write_ingredient(sugar, used=sugar.used + 50)

        sugar = store.run_transaction(work)
"""

import logging
import time

from django.conf import settings
from django.db import DEFAULT_DB_ALIAS, OperationalError, transaction
from django.db.models import F
from django.utils import timezone

from apps.analytics.aggregation import upsert_daily_record
from apps.inventory.models import Ingredient
from apps.menu.models import MenuItem
from apps.menu.services.availability import refresh_menu_availability
from apps.shops.models import Customer
from ..models import Order, OrderItem
from .exceptions import (
    ConcurrentUpdateError,
    MissingReferenceError,
    TransactionConflictError,
)

logger = logging.getLogger(__name__)


class LedgerStore:
    """
    Transactional access to menu items, ingredients and orders.

    Args:
        using: Database alias.
        max_attempts: Attempts before giving up with TransactionConflictError.
            Defaults to ``settings.POS_TRANSACTION_MAX_ATTEMPTS``.
        retry_delay: Base backoff in seconds, multiplied by the attempt
            number. Defaults to ``settings.POS_TRANSACTION_RETRY_DELAY``.
    """

    def __init__(self, using=DEFAULT_DB_ALIAS, max_attempts=None, retry_delay=None):
        self.using = using
        self.max_attempts = max(1, max_attempts or settings.POS_TRANSACTION_MAX_ATTEMPTS)
        self.retry_delay = settings.POS_TRANSACTION_RETRY_DELAY if retry_delay is None else retry_delay
        self.attempts = 0

    # Transactions

    def run_transaction(self, work):
        """
        Run ``work(store)`` atomically, retrying the whole call on conflict.

        Conflicts are stale conditional writes and database operational
        errors (lock timeouts, deadlocks, serialization failures). Any other
        exception aborts immediately with nothing written.

        Raises:
            TransactionConflictError: every attempt conflicted
        """
        last_error = None
        for attempt in range(1, self.max_attempts + 1):
            self.attempts = attempt
            try:
                with transaction.atomic(using=self.using):
                    return work(self)
            except (ConcurrentUpdateError, OperationalError) as exc:
                last_error = exc
                if attempt == self.max_attempts:
                    break
                logger.warning(
                    "Ledger transaction conflict (attempt %d/%d), retrying: %s",
                    attempt, self.max_attempts, exc,
                )
                if self.retry_delay:
                    time.sleep(self.retry_delay * attempt)

        logger.error(
            "Ledger transaction abandoned after %d attempts: %s",
            self.max_attempts, last_error,
        )
        raise TransactionConflictError(
            'Stock is being updated by another order. Please try again.'
        ) from last_error

    # Reads

    def get_menu_item(self, menu_item_id, shop=None):
        queryset = MenuItem.objects.using(self.using).prefetch_related('recipe_lines')
        if shop is not None:
            queryset = queryset.filter(shop=shop)
        try:
            return queryset.get(pk=menu_item_id)
        except MenuItem.DoesNotExist:
            raise MissingReferenceError(f"Menu item {menu_item_id} no longer exists.")

    def get_ingredient(self, ingredient_id):
        """Read an ingredient row, locking it where the backend supports it."""
        try:
            return Ingredient.objects.using(self.using).select_for_update().get(pk=ingredient_id)
        except Ingredient.DoesNotExist:
            raise MissingReferenceError(f"Ingredient {ingredient_id} no longer exists.")

    def get_customer(self, shop, customer_id):
        try:
            return Customer.objects.using(self.using).get(pk=customer_id, shop=shop)
        except Customer.DoesNotExist:
            raise MissingReferenceError(f"Customer {customer_id} does not exist in this shop.")

    # Writes

    def write_ingredient(self, ingredient, **changes):
        """
        Conditionally update ``ingredient`` and bump its version.

        Raises:
            ConcurrentUpdateError: the row's version moved since it was read
        """
        changes['updated_at'] = timezone.now()
        updated = Ingredient.objects.using(self.using).filter(
            pk=ingredient.pk,
            version=ingredient.version,
        ).update(version=F('version') + 1, **changes)
        if not updated:
            raise ConcurrentUpdateError(
                f"{ingredient.name} was modified by another transaction (version {ingredient.version})."
            )

        for name, value in changes.items():
            setattr(ingredient, name, value)
        ingredient.version += 1
        return ingredient

    def create_order(self, shop, draft, created_by=None, customer=None):
        """Persist ``draft`` as an Order with its items."""
        order = Order.objects.using(self.using).create(
            shop=shop,
            customer=customer,
            created_by=created_by,
            subtotal=draft.subtotal,
            discount_percent=draft.discount_percent,
            discount_amount=draft.discount_amount,
            total_amount=draft.total,
            payment_method=draft.payment_method,
        )
        OrderItem.objects.using(self.using).bulk_create([
            OrderItem(
                order=order,
                menu_item_id=line.menu_item_id,
                name=line.name,
                unit_price=line.unit_price,
                quantity=line.quantity,
                note=line.note,
                temperature=line.temperature,
                consumption=line.consumption,
                position=position,
            )
            for position, line in enumerate(draft.lines)
        ])
        return order

    def refresh_availability(self, shop, ingredient_ids):
        return refresh_menu_availability(shop, ingredient_ids)

    def upsert_daily_record(self, order):
        return upsert_daily_record(order)
