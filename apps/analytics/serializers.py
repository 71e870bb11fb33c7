"""
Serializers for analytics app.

This module contains:
1. Input serializers - Query parameter validation
2. Response serializers - API documentation and output formatting

Input Serializers:
    DailyRevenueQuerySerializer - Validates shop and day parameters
    PeriodQuerySerializer - Validates shop, period and date range parameters
    TopItemsQuerySerializer - Adds the result limit

Response Serializers:
    DailyRevenueSerializer - One day's rollup
    RevenueSummarySerializer - Period summary
    PeakHoursResponseSerializer - Revenue per hour
    TopItemsResponseSerializer - Best selling items
    TimeseriesResponseSerializer - Revenue per day for charts
"""

from rest_framework import serializers
from datetime import datetime, timedelta
from django.utils import timezone

DEFAULT_PERIOD_DAYS = 30


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class DailyRevenueQuerySerializer(serializers.Serializer):
    """
    Validate query parameters for the daily rollup.

    Query Parameters:
        shop (UUID): Shop id
        date (date): Day to report, defaults to today in the shop time zone
    """

    shop = serializers.UUIDField()
    date = serializers.DateField(required=False)

    def validate(self, attrs):
        attrs.setdefault('date', timezone.localdate())
        return attrs


class PeriodQuerySerializer(serializers.Serializer):
    """
    Validate period and date range query parameters.

    Query Parameters:
        shop (UUID): Shop id
        period (str): Month period in YYYY-MM format (e.g., '2025-01')
        start_date (date): Start of date range
        end_date (date): End of date range

    Note:
        If 'period' is provided, it takes precedence and is converted
        to start_date and end_date for the full month. Without any of
        them the last 30 days up to today are reported.
    """

    shop = serializers.UUIDField()
    period = serializers.RegexField(
        regex=r'^\d{4}-(0[1-9]|1[0-2])$',
        required=False,
        allow_blank=True,
        help_text='Month period in YYYY-MM format'
    )
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        """Parse period into date range if provided."""
        period = attrs.get('period')

        if period:
            year, month = (int(part) for part in period.split('-'))
            attrs['start_date'] = datetime(year, month, 1).date()
            if month == 12:
                attrs['end_date'] = datetime(year + 1, 1, 1).date() - timedelta(days=1)
            else:
                attrs['end_date'] = datetime(year, month + 1, 1).date() - timedelta(days=1)

        if not attrs.get('start_date') and not attrs.get('end_date'):
            today = timezone.localdate()
            attrs['end_date'] = today
            attrs['start_date'] = today - timedelta(days=DEFAULT_PERIOD_DAYS - 1)

        start = attrs.get('start_date')
        end = attrs.get('end_date')
        if start and end and start > end:
            raise serializers.ValidationError({
                'start_date': 'Start date must be before end date'
            })

        return attrs


class TopItemsQuerySerializer(PeriodQuerySerializer):
    """
    Validate query parameters for top items endpoint.

    Query Parameters:
        limit (int): Number of results to return (1-100)
    """

    limit = serializers.IntegerField(
        min_value=1,
        max_value=100,
        required=False,
        default=10,
        help_text='Number of results (1-100)'
    )


# =============================================================================
# Response Serializers (API Documentation)
# =============================================================================

class DailyRevenueSerializer(serializers.Serializer):
    """Response serializer for one day's rollup."""
    date = serializers.DateField()
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_orders = serializers.IntegerField()
    average_order_value = serializers.DecimalField(max_digits=14, decimal_places=2)
    top_selling_items = serializers.DictField(child=serializers.IntegerField())
    peak_hours = serializers.DictField(child=serializers.FloatField())
    day_of_week_revenue = serializers.DictField(child=serializers.FloatField())
    payment_methods = serializers.DictField(child=serializers.IntegerField())
    new_customers = serializers.IntegerField()
    returning_customers = serializers.IntegerField()
    total_customers = serializers.IntegerField()


class PaymentMethodShareSerializer(serializers.Serializer):
    """Nested serializer for a payment method's share of orders."""
    method = serializers.CharField()
    count = serializers.IntegerField()
    percentage = serializers.FloatField()


class BestDaySerializer(serializers.Serializer):
    """Nested serializer for the weekday with most revenue."""
    day = serializers.IntegerField(help_text='0 = Sunday')
    name = serializers.CharField()
    percentage = serializers.FloatField()


class RevenueSummarySerializer(serializers.Serializer):
    """Response serializer for a period summary."""
    period_start = serializers.DateField(allow_null=True)
    period_end = serializers.DateField(allow_null=True)
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_orders = serializers.IntegerField()
    average_order_value = serializers.DecimalField(max_digits=14, decimal_places=2)
    new_customers = serializers.IntegerField()
    returning_customers = serializers.IntegerField()
    return_rate = serializers.FloatField()
    payment_methods = PaymentMethodShareSerializer(many=True)
    best_day_of_week = BestDaySerializer(allow_null=True)
    total_expenses = serializers.DecimalField(max_digits=14, decimal_places=2)
    net_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    days_with_sales = serializers.IntegerField()


class PeakHourSerializer(serializers.Serializer):
    """Nested serializer for revenue in one hour of day."""
    hour = serializers.IntegerField()
    revenue = serializers.FloatField()
    percentage = serializers.FloatField()


class PeakHoursResponseSerializer(serializers.Serializer):
    """Response serializer for peak hours."""
    period_start = serializers.DateField(allow_null=True)
    period_end = serializers.DateField(allow_null=True)
    results = PeakHourSerializer(many=True)


class TopItemSerializer(serializers.Serializer):
    """Nested serializer for a single top selling item."""
    menu_item_id = serializers.CharField()
    name = serializers.CharField()
    quantity = serializers.IntegerField()


class TopItemsResponseSerializer(serializers.Serializer):
    """Response serializer for top selling items."""
    period_start = serializers.DateField(allow_null=True)
    period_end = serializers.DateField(allow_null=True)
    results = TopItemSerializer(many=True)


class TimeseriesPointSerializer(serializers.Serializer):
    """Nested serializer for a single timeseries data point."""
    date = serializers.DateField()
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    orders_count = serializers.IntegerField()


class TimeseriesResponseSerializer(serializers.Serializer):
    """Response serializer for revenue timeseries."""
    data = TimeseriesPointSerializer(many=True)


class ErrorSerializer(serializers.Serializer):
    """Standard error response serializer."""
    error = serializers.CharField()
