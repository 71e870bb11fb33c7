"""
Revenue aggregator.

Folds a committed order into its shop's DailyRevenueRecord for the
order's local calendar day, creating the record on the first order of the
day. Runs after the consumption transaction has committed, in its own
transaction.
"""

import logging

from django.db import transaction
from django.utils import timezone

from apps.orders.models import Order
from .models import DailyRevenueRecord

logger = logging.getLogger(__name__)


def is_returning_customer(order):
    """A customer with an earlier order in the same shop is returning; walk-ins are new."""
    if order.customer_id is None:
        return False
    return Order.objects.filter(
        shop_id=order.shop_id,
        customer_id=order.customer_id,
        created_at__lt=order.created_at,
    ).exclude(pk=order.pk).exists()


def upsert_daily_record(order):
    """
    Add ``order`` to the daily revenue record of its shop.

    Returns:
        DailyRevenueRecord: The updated record.
    """
    local_time = timezone.localtime(order.created_at)
    items = list(order.items.all())
    is_returning = is_returning_customer(order)

    with transaction.atomic():
        record, created = DailyRevenueRecord.objects.select_for_update().get_or_create(
            shop_id=order.shop_id,
            date=local_time.date(),
        )
        record.apply_order(
            order,
            items,
            hour=local_time.hour,
            weekday=local_time.isoweekday() % 7,
            is_returning=is_returning,
        )
        record.save()

    logger.debug(
        "%s daily revenue record %s for shop %s: revenue=%s orders=%d",
        'Created' if created else 'Updated', record.date, order.shop_id, record.revenue, record.total_orders,
    )
    return record
