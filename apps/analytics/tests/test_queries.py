import pytest
from decimal import Decimal
from datetime import date

from apps.analytics.analytics import RevenueQueries
from apps.analytics.exceptions import InvalidDateRangeError

MONDAY = date(2025, 1, 6)
JANUARY = {'start_date': date(2025, 1, 1), 'end_date': date(2025, 1, 31)}


@pytest.mark.django_db
class TestDailyRecord:

    def test_existing_record(self, analytics_shop, monday_record, tea):
        data = RevenueQueries.daily_record(analytics_shop.id, MONDAY)

        assert data['revenue'] == Decimal('100000.00')
        assert data['peak_hours'] == {8: 60000.0, 14: 40000.0}
        assert data['day_of_week_revenue'] == {1: 100000.0}
        assert data['top_selling_items'][str(tea.id)] == 5

    def test_day_without_orders(self, analytics_shop):
        data = RevenueQueries.daily_record(analytics_shop.id, date(2025, 1, 7))

        assert data['date'] == date(2025, 1, 7)
        assert data['revenue'] == Decimal('0.00')
        assert data['total_orders'] == 0
        assert data['peak_hours'] == {}


@pytest.mark.django_db
class TestPeriodSummary:

    def test_totals(self, analytics_shop, january_records, january_expenses):
        summary = RevenueQueries.period_summary(analytics_shop.id, **JANUARY)

        assert summary['total_revenue'] == Decimal('150000.00')
        assert summary['total_orders'] == 5
        assert summary['average_order_value'] == Decimal('30000.00')
        assert summary['days_with_sales'] == 2

    def test_customers(self, analytics_shop, january_records):
        summary = RevenueQueries.period_summary(analytics_shop.id, **JANUARY)

        assert summary['new_customers'] == 3
        assert summary['returning_customers'] == 2
        assert summary['return_rate'] == 40.0

    def test_payment_methods_and_best_day(self, analytics_shop, january_records):
        summary = RevenueQueries.period_summary(analytics_shop.id, **JANUARY)

        assert summary['payment_methods'] == [
            {'method': 'cash', 'count': 3, 'percentage': 60.0},
            {'method': 'card', 'count': 2, 'percentage': 40.0},
        ]
        assert summary['best_day_of_week'] == {'day': 1, 'name': 'Monday', 'percentage': 66.7}

    def test_only_approved_expenses_in_period(self, analytics_shop, january_records, january_expenses):
        summary = RevenueQueries.period_summary(analytics_shop.id, **JANUARY)

        assert summary['total_expenses'] == Decimal('20000.00')
        assert summary['net_revenue'] == Decimal('130000.00')

    def test_empty_period(self, analytics_shop):
        summary = RevenueQueries.period_summary(analytics_shop.id, **JANUARY)

        assert summary['total_revenue'] == Decimal('0.00')
        assert summary['average_order_value'] == Decimal('0.00')
        assert summary['return_rate'] == 0.0
        assert summary['best_day_of_week'] is None
        assert summary['total_expenses'] == Decimal('0.00')

    def test_narrow_range(self, analytics_shop, january_records):
        summary = RevenueQueries.period_summary(analytics_shop.id, MONDAY, MONDAY)
        assert summary['total_orders'] == 4

    def test_invalid_range(self, analytics_shop):
        with pytest.raises(InvalidDateRangeError):
            RevenueQueries.period_summary(analytics_shop.id, date(2025, 2, 1), date(2025, 1, 1))


@pytest.mark.django_db
class TestPeakHoursAndTopItems:

    def test_peak_hours_busiest_first(self, analytics_shop, january_records):
        hours = RevenueQueries.peak_hours(analytics_shop.id, **JANUARY)

        assert hours == [
            {'hour': 8, 'revenue': 110000.0, 'percentage': 73.3},
            {'hour': 14, 'revenue': 40000.0, 'percentage': 26.7},
        ]

    def test_top_items_with_names(self, analytics_shop, january_records, tea, coffee):
        items = RevenueQueries.top_items(analytics_shop.id, **JANUARY)

        assert [(item['name'], item['quantity']) for item in items] == [
            ('Iced Tea', 5),
            ('Black Coffee', 3),
            ('Old Cake', 1),
        ]
        assert items[0]['menu_item_id'] == str(tea.id)

    def test_top_items_limit(self, analytics_shop, january_records):
        items = RevenueQueries.top_items(analytics_shop.id, limit=1, **JANUARY)
        assert len(items) == 1

    def test_timeseries(self, analytics_shop, january_records):
        points = RevenueQueries.revenue_timeseries(analytics_shop.id, **JANUARY)

        assert [(p['date'], p['orders_count']) for p in points] == [
            (date(2025, 1, 6), 4),
            (date(2025, 1, 11), 1),
        ]
