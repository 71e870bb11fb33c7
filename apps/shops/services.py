"""Shop access and loyalty helpers shared by the other apps."""

from decimal import Decimal, ROUND_DOWN
from uuid import UUID

from django.db.models import F
from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from .models import Customer, Shop


def get_shop_for_member(user, shop_id) -> Shop:
    """
    Resolve a shop the user works at.

    Raises:
        ValidationError: shop id missing or malformed
        NotFound: shop does not exist or is inactive
        PermissionDenied: user is not on the shop's staff
    """
    if not shop_id:
        raise ValidationError({'shop': 'This parameter is required.'})

    try:
        shop_uuid = UUID(str(shop_id))
    except ValueError:
        raise ValidationError({'shop': 'Must be a valid UUID.'})

    try:
        shop = Shop.objects.get(id=shop_uuid, is_active=True)
    except Shop.DoesNotExist:
        raise NotFound('Shop not found.')

    if not shop.has_member(user):
        raise PermissionDenied('You must be a member of this shop.')

    return shop


def credit_loyalty_points(order):
    """
    Credit the order's customer with ``total_amount * shop.point_rate`` points.

    Returns:
        Decimal: Points credited, zero for anonymous orders.
    """
    if order.customer_id is None:
        return Decimal('0.00')

    points = (order.total_amount * order.shop.point_rate).quantize(Decimal('0.01'), rounding=ROUND_DOWN)
    if points > 0:
        Customer.objects.filter(pk=order.customer_id).update(
            points=F('points') + points,
            updated_at=timezone.now(),
        )
    return points
