"""
Serializers for orders app.

Input serializers turn a till request into an OrderDraft; the draft is
then checked by the validation service, which reports business rule
problems (quantities, notes, discount, stock) as issue codes rather than
serializer field errors.
"""

from decimal import Decimal
from rest_framework import serializers

from apps.menu.models import MenuItem
from .cart import DraftLine, OrderDraft
from .models import (
    ConsumptionMode,
    Order,
    OrderItem,
    PaymentMethod,
    Temperature,
)


# =============================================================================
# Input Serializers
# =============================================================================

class OrderLineInputSerializer(serializers.Serializer):
    menu_item = serializers.UUIDField()
    quantity = serializers.IntegerField(default=1)
    note = serializers.CharField(required=False, allow_blank=True, default='')
    temperature = serializers.ChoiceField(choices=Temperature.choices, default=Temperature.HOT)
    consumption = serializers.ChoiceField(choices=ConsumptionMode.choices, default=ConsumptionMode.DINE_IN)


class OrderInputSerializer(serializers.Serializer):
    """
    Validate an order request from the till.

    Example body::

        {
            "shop": "<uuid>",
            "items": [{"menu_item": "<uuid>", "quantity": 2, "temperature": "cold"}],
            "discount_percent": "10",
            "payment_method": "card",
            "customer": "<uuid>"
        }
    """

    shop = serializers.UUIDField()
    items = OrderLineInputSerializer(many=True, allow_empty=True)
    discount_percent = serializers.DecimalField(
        max_digits=6, decimal_places=2, required=False, default=Decimal('0')
    )
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, default=PaymentMethod.CASH)
    customer = serializers.UUIDField(required=False, allow_null=True)

    def to_draft(self, shop):
        """
        Build an OrderDraft capturing current menu names and prices.

        Ids that are not on ``shop``'s menu are kept as lines named after
        the id with a zero price, so validation can report them.
        """
        data = self.validated_data
        ids = {line['menu_item'] for line in data['items']}
        menu_items = MenuItem.objects.filter(shop=shop).in_bulk(list(ids))

        draft = OrderDraft(
            shop_id=shop.id,
            discount_percent=data.get('discount_percent') or Decimal('0'),
            payment_method=data['payment_method'],
            customer_id=data.get('customer'),
        )
        for line in data['items']:
            menu_item = menu_items.get(line['menu_item'])
            if menu_item is None:
                draft.lines.append(DraftLine(
                    menu_item_id=line['menu_item'],
                    name=str(line['menu_item']),
                    unit_price=Decimal('0'),
                    quantity=line['quantity'],
                    note=line['note'],
                    temperature=line['temperature'],
                    consumption=line['consumption'],
                ))
                continue
            draft.add_item(
                menu_item,
                quantity=line['quantity'],
                temperature=line['temperature'],
                consumption=line['consumption'],
                note=line['note'],
            )
        return draft


# =============================================================================
# Response Serializers
# =============================================================================

class OrderItemSerializer(serializers.ModelSerializer):
    """Serializer for a committed order line."""

    line_total = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            'id',
            'menu_item',
            'name',
            'unit_price',
            'quantity',
            'line_total',
            'note',
            'temperature',
            'consumption',
            'position',
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Main serializer for committed orders."""

    items = OrderItemSerializer(many=True, read_only=True)
    short_code = serializers.CharField(read_only=True)
    customer_name = serializers.CharField(source='customer.display_name', read_only=True, default=None)

    class Meta:
        model = Order
        fields = [
            'id',
            'short_code',
            'shop',
            'customer',
            'customer_name',
            'created_by',
            'subtotal',
            'discount_percent',
            'discount_amount',
            'total_amount',
            'payment_method',
            'items',
            'created_at',
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for order listings."""

    short_code = serializers.CharField(read_only=True)
    item_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Order
        fields = [
            'id',
            'short_code',
            'customer',
            'total_amount',
            'payment_method',
            'item_count',
            'created_at',
        ]
        read_only_fields = fields


class ValidationIssueSerializer(serializers.Serializer):
    code = serializers.CharField()
    message = serializers.CharField()
    line = serializers.IntegerField(allow_null=True)
    ingredient = serializers.CharField(allow_null=True)


class OrderCheckResponseSerializer(serializers.Serializer):
    """Response serializer for the validate endpoint."""
    valid = serializers.BooleanField()
    errors = ValidationIssueSerializer(many=True)


class MeasurementSerializer(serializers.Serializer):
    value = serializers.FloatField()
    unit = serializers.CharField()


class LowStockAlertSerializer(serializers.Serializer):
    ingredient_id = serializers.UUIDField()
    name = serializers.CharField()
    available = MeasurementSerializer()
    threshold = MeasurementSerializer()
    stock_status = serializers.CharField()
    percentage = serializers.FloatField()
    is_urgent = serializers.BooleanField()
    message = serializers.CharField()


class PlacedOrderResponseSerializer(serializers.Serializer):
    """Response serializer for a committed order."""
    order = OrderSerializer()
    alerts = LowStockAlertSerializer(many=True)


class OrderErrorsSerializer(serializers.Serializer):
    """Response serializer for a rejected draft."""
    errors = ValidationIssueSerializer(many=True)


class StockErrorSerializer(serializers.Serializer):
    """Response serializer for an insufficient stock rejection."""
    error = serializers.CharField()
    ingredient = serializers.CharField(allow_null=True)


class ErrorSerializer(serializers.Serializer):
    """Standard error response serializer."""
    error = serializers.CharField()
