from rest_framework import serializers
from .models import Ingredient


class MeasurementField(serializers.Field):
    """Read-only ``{'value', 'unit'}`` rendering of a Measurement."""

    def __init__(self, **kwargs):
        kwargs['read_only'] = True
        super().__init__(**kwargs)

    def to_representation(self, value):
        return value.to_dict()


class IngredientSerializer(serializers.ModelSerializer):
    """Ledger entry with its derived stock figures."""

    available = MeasurementField(source='available_measurement')
    total = MeasurementField(source='total_measurement')
    low_stock_threshold = MeasurementField(source='threshold_measurement')
    available_display = serializers.CharField(source='available_measurement.display', read_only=True)
    stock_status = serializers.CharField(read_only=True)
    stock_percentage = serializers.FloatField(read_only=True)
    is_low_stock = serializers.BooleanField(read_only=True)
    is_expired = serializers.BooleanField(read_only=True)
    is_expiring_soon = serializers.BooleanField(read_only=True)

    class Meta:
        model = Ingredient
        fields = [
            'id',
            'shop',
            'name',
            'quantity',
            'unit_value',
            'unit',
            'used',
            'min_quantity',
            'cost_price',
            'expiry_date',
            'available',
            'total',
            'low_stock_threshold',
            'available_display',
            'stock_status',
            'stock_percentage',
            'is_low_stock',
            'is_expired',
            'is_expiring_soon',
            'version',
            'updated_at',
        ]
        read_only_fields = fields


class RestockSerializer(serializers.Serializer):
    """Input for restocking: number of stock units to add."""
    quantity = serializers.FloatField(min_value=0, help_text='Stock units to add')

    def validate_quantity(self, value):
        if value <= 0:
            raise serializers.ValidationError('Restock quantity must be greater than zero.')
        return value


class ErrorSerializer(serializers.Serializer):
    """Standard error response serializer."""
    error = serializers.CharField()
