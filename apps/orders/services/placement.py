"""
Order Placement Service
=======================

Validates a draft, runs the consumption transaction and notifies the
collaborators that depend on a committed sale.

Data flow::

    OrderDraft -> validate_order -> LedgerStore.run_transaction(
        read menu items -> consume_order_ingredients -> create_order
        -> refresh menu availability
    ) -> daily revenue record -> loyalty points -> order_placed signal

Everything inside the transaction commits or aborts together. The steps
after it are best effort: their failures are logged and never undo the
sale.

Example:
    Placing an order for two teas::

        from apps.orders.cart import OrderDraft
        from apps.orders.services import place_order

        draft = OrderDraft(shop_id=shop.id)
        draft.add_item(sweet_tea, quantity=2)

        result = place_order(shop, draft, created_by=request.user)
        result.order.short_code     # '#A1B2C3'
        result.alerts               # [LowStockAlert(...)]
"""

import logging
from dataclasses import dataclass, field

from apps.inventory.models import Ingredient
from apps.menu.services.availability import build_menu_index
from apps.shops.services import credit_loyalty_points
from ..models import Order
from ..signals import order_placed
from .consumption import consume_order_ingredients
from .exceptions import (
    InsufficientStockError,
    MissingReferenceError,
    OrderValidationFailed,
)
from .store import LedgerStore
from .validation import IssueCode, validate_order

logger = logging.getLogger(__name__)

STOCK_ISSUE_CODES = {IssueCode.INSUFFICIENT_STOCK, IssueCode.UNIT_MISMATCH}


@dataclass
class PlacementResult:
    order: Order
    alerts: list = field(default_factory=list)

    @property
    def order_id(self):
        return self.order.id


def load_indexes(shop, draft):
    """
    Read the menu items and ingredients a draft refers to.

    Returns:
        tuple: (menu index, ingredient index), both keyed by id.
    """
    menu_index = build_menu_index(shop, {line.menu_item_id for line in draft.lines})
    ingredient_ids = {
        line.ingredient_id
        for item in menu_index.values()
        for line in item.recipe_lines.all()
        if line.ingredient_id is not None
    }
    ingredient_index = Ingredient.objects.filter(shop=shop).in_bulk(list(ingredient_ids))
    return menu_index, ingredient_index


def check_order(shop, draft):
    """Validate ``draft`` against current menu and stock. Returns the issue list."""
    menu_index, ingredient_index = load_indexes(shop, draft)
    return validate_order(draft, menu_index, ingredient_index)


def place_order(shop, draft, created_by=None, store=None):
    """
    Place ``draft`` for ``shop``.

    Args:
        shop: Shop selling the order.
        draft: OrderDraft with at least one line.
        created_by: Staff user taking the order.
        store: LedgerStore; a default one is created when omitted.

    Returns:
        PlacementResult: The committed order and low stock alerts.

    Raises:
        MissingReferenceError: a menu item, ingredient or customer is gone
        OrderValidationFailed: the draft has validation issues
        InsufficientStockError: an ingredient cannot cover the order
        TransactionConflictError: concurrent orders kept conflicting
    """
    store = store or LedgerStore()

    menu_index, ingredient_index = load_indexes(shop, draft)
    missing = [line.name for line in draft.lines if line.menu_item_id not in menu_index]
    if missing:
        raise MissingReferenceError(f"No longer on the menu: {', '.join(missing)}.")

    issues = validate_order(draft, menu_index, ingredient_index)
    if issues:
        _raise_for_issues(shop, issues)

    customer = None
    if draft.customer_id:
        customer = store.get_customer(shop, draft.customer_id)

    quantities = {}
    for menu_item_id, quantity in draft.requested_quantities():
        quantities[menu_item_id] = quantities.get(menu_item_id, 0) + quantity

    def work(txn):
        order_lines = [
            (txn.get_menu_item(menu_item_id, shop=shop), quantity)
            for menu_item_id, quantity in quantities.items()
        ]
        consumption = consume_order_ingredients(txn, order_lines)
        order = txn.create_order(shop, draft, created_by=created_by, customer=customer)
        txn.refresh_availability(shop, consumption.ingredient_ids)
        return order, consumption.alerts

    try:
        order, alerts = store.run_transaction(work)
    except InsufficientStockError as exc:
        logger.info("Order rejected for shop %s: %s", shop.id, exc)
        raise

    logger.info(
        "Order %s committed for shop %s: total=%s items=%d attempts=%d",
        order.short_code, shop.id, order.total_amount, len(draft.lines), store.attempts,
    )
    for alert in alerts:
        logger.warning("Low stock in shop %s: %s", shop.id, alert.message)

    _after_commit(order, alerts, store)
    return PlacementResult(order=order, alerts=alerts)


def _raise_for_issues(shop, issues):
    """
    Raise the error matching ``issues``.

    Drafts whose only problems are stock shortfalls raise
    InsufficientStockError, as the consumption engine does.
    """
    codes = {issue.code for issue in issues}
    if codes <= STOCK_ISSUE_CODES:
        issue = issues[0]
        logger.info("Order rejected for shop %s: %s", shop.id, issue.message)
        raise InsufficientStockError(issue.ingredient, message=issue.message)
    if codes == {IssueCode.MISSING_INGREDIENT}:
        raise MissingReferenceError(issues[0].message)
    raise OrderValidationFailed(issues)


def _after_commit(order, alerts, store):
    try:
        store.upsert_daily_record(order)
    except Exception:
        logger.exception("Daily revenue update failed for order %s", order.id)

    try:
        credit_loyalty_points(order)
    except Exception:
        logger.exception("Loyalty points credit failed for order %s", order.id)

    for receiver, response in order_placed.send_robust(sender=Order, order=order, alerts=alerts):
        if isinstance(response, Exception):
            logger.error(
                "order_placed receiver %r failed for order %s: %s",
                receiver, order.id, response,
                exc_info=(type(response), response, response.__traceback__),
            )
