"""
Tests for analytics input serializers.
"""
import pytest
import uuid
from datetime import date, timedelta
from django.utils import timezone
from apps.analytics.serializers import (
    DailyRevenueQuerySerializer,
    PeriodQuerySerializer,
    TopItemsQuerySerializer,
)

SHOP_ID = str(uuid.uuid4())


class TestPeriodQuerySerializer:
    """Test PeriodQuerySerializer validation."""

    def test_valid_period_format(self):
        serializer = PeriodQuerySerializer(data={'shop': SHOP_ID, 'period': '2025-01'})
        assert serializer.is_valid()
        assert serializer.validated_data['start_date'] == date(2025, 1, 1)
        assert serializer.validated_data['end_date'] == date(2025, 1, 31)

    def test_valid_period_december(self):
        """Period conversion for December rolls into the next year."""
        serializer = PeriodQuerySerializer(data={'shop': SHOP_ID, 'period': '2024-12'})
        assert serializer.is_valid()
        assert serializer.validated_data['end_date'] == date(2024, 12, 31)

    def test_valid_period_february_leap_year(self):
        serializer = PeriodQuerySerializer(data={'shop': SHOP_ID, 'period': '2024-02'})
        assert serializer.is_valid()
        assert serializer.validated_data['end_date'] == date(2024, 2, 29)

    @pytest.mark.parametrize('period', ['2025-1', '2025-13', 'abcd-01'])
    def test_invalid_period(self, period):
        serializer = PeriodQuerySerializer(data={'shop': SHOP_ID, 'period': period})
        assert not serializer.is_valid()
        assert 'period' in serializer.errors

    def test_shop_required(self):
        serializer = PeriodQuerySerializer(data={'period': '2025-01'})
        assert not serializer.is_valid()
        assert 'shop' in serializer.errors

    def test_date_range_valid(self):
        serializer = PeriodQuerySerializer(data={
            'shop': SHOP_ID,
            'start_date': '2025-01-01',
            'end_date': '2025-01-31',
        })
        assert serializer.is_valid()
        assert serializer.validated_data['start_date'] == date(2025, 1, 1)

    def test_date_range_validation_fails(self):
        serializer = PeriodQuerySerializer(data={
            'shop': SHOP_ID,
            'start_date': '2025-02-01',
            'end_date': '2025-01-01',
        })
        assert not serializer.is_valid()
        assert 'start_date' in serializer.errors

    def test_defaults_to_last_30_days(self):
        serializer = PeriodQuerySerializer(data={'shop': SHOP_ID})
        assert serializer.is_valid()
        today = timezone.localdate()
        assert serializer.validated_data['end_date'] == today
        assert serializer.validated_data['start_date'] == today - timedelta(days=29)

    def test_open_ended_range_kept(self):
        serializer = PeriodQuerySerializer(data={'shop': SHOP_ID, 'start_date': '2025-01-01'})
        assert serializer.is_valid()
        assert 'end_date' not in serializer.validated_data

    def test_period_overrides_dates(self):
        serializer = PeriodQuerySerializer(data={
            'shop': SHOP_ID,
            'period': '2025-03',
            'start_date': '2025-01-01',
            'end_date': '2025-01-10',
        })
        assert serializer.is_valid()
        assert serializer.validated_data['start_date'] == date(2025, 3, 1)
        assert serializer.validated_data['end_date'] == date(2025, 3, 31)


class TestDailyRevenueQuerySerializer:

    def test_defaults_to_today(self):
        serializer = DailyRevenueQuerySerializer(data={'shop': SHOP_ID})
        assert serializer.is_valid()
        assert serializer.validated_data['date'] == timezone.localdate()

    def test_explicit_date(self):
        serializer = DailyRevenueQuerySerializer(data={'shop': SHOP_ID, 'date': '2025-01-06'})
        assert serializer.is_valid()
        assert serializer.validated_data['date'] == date(2025, 1, 6)

    def test_invalid_date(self):
        serializer = DailyRevenueQuerySerializer(data={'shop': SHOP_ID, 'date': '06/01/2025'})
        assert not serializer.is_valid()
        assert 'date' in serializer.errors


class TestTopItemsQuerySerializer:

    def test_default_limit(self):
        serializer = TopItemsQuerySerializer(data={'shop': SHOP_ID})
        assert serializer.is_valid()
        assert serializer.validated_data['limit'] == 10

    @pytest.mark.parametrize('limit', [0, 101])
    def test_limit_bounds(self, limit):
        serializer = TopItemsQuerySerializer(data={'shop': SHOP_ID, 'limit': limit})
        assert not serializer.is_valid()
        assert 'limit' in serializer.errors
