"""
Analytics Module
=================

Read-only reporting over daily revenue records and expenses.

Classes:
    RevenueQueries: Static methods for revenue reports.

Key Features:
    - Single day rollup
    - Period summary with customer return rate, payment method shares,
      best weekday and approved expenses
    - Peak hours and top selling items over a period
    - Daily revenue timeseries for charts

Example:
    Summarising the last 30 days::

        from apps.analytics.analytics import RevenueQueries

        summary = RevenueQueries.period_summary(
            shop_id=shop.id,
            start_date=date.today() - timedelta(days=29),
            end_date=date.today(),
        )
        print(f"Revenue: {summary['total_revenue']} over {summary['total_orders']} orders")

Note:
    Methods return plain dictionaries and lists suitable for JSON
    responses. Histogram keys coming out of records are strings; they are
    turned back into integers here.
"""

from django.core.exceptions import ValidationError
from django.db.models import Sum
from django.db.models.functions import Coalesce
from decimal import Decimal

from apps.menu.models import MenuItem
from .exceptions import InvalidDateRangeError
from .models import DailyRevenueRecord, Expense, ExpenseStatus, CENT

WEEKDAY_NAMES = ('Sunday', 'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday')


def _percentage(part, whole):
    if not whole:
        return 0.0
    return round(float(part) / float(whole) * 100, 1)


class RevenueQueries:
    """
    Revenue reports for a shop.

    Methods:
        daily_record: Rollup for one day.
        period_summary: Totals and ratios over a date range.
        peak_hours: Revenue per hour of day over a date range.
        top_items: Best selling menu items over a date range.
        revenue_timeseries: Revenue per day for charts.
    """

    @staticmethod
    def _records(shop_id, start_date, end_date):
        if start_date and end_date and start_date > end_date:
            raise InvalidDateRangeError('Start date must be before end date')
        records = DailyRevenueRecord.objects.filter(shop_id=shop_id)
        if start_date:
            records = records.filter(date__gte=start_date)
        if end_date:
            records = records.filter(date__lte=end_date)
        return records.order_by('date')

    @staticmethod
    def daily_record(shop_id, day):
        """
        Get the rollup for ``day``.

        Returns:
            dict: Record fields with integer histogram keys. A zeroed
            rollup when no order was placed that day.
        """
        record = DailyRevenueRecord.objects.filter(shop_id=shop_id, date=day).first()
        if record is None:
            return {
                'date': day,
                'revenue': Decimal('0.00'),
                'total_orders': 0,
                'average_order_value': Decimal('0.00'),
                'top_selling_items': {},
                'peak_hours': {},
                'day_of_week_revenue': {},
                'payment_methods': {},
                'new_customers': 0,
                'returning_customers': 0,
                'total_customers': 0,
            }
        return {
            'date': record.date,
            'revenue': record.revenue,
            'total_orders': record.total_orders,
            'average_order_value': record.average_order_value,
            'top_selling_items': dict(record.top_selling_items),
            'peak_hours': {int(hour): value for hour, value in record.peak_hours.items()},
            'day_of_week_revenue': {int(day): value for day, value in record.day_of_week_revenue.items()},
            'payment_methods': dict(record.payment_methods),
            'new_customers': record.new_customers,
            'returning_customers': record.returning_customers,
            'total_customers': record.total_customers,
        }

    @staticmethod
    def period_summary(shop_id, start_date=None, end_date=None):
        """
        Summarise revenue between two dates, both inclusive.

        Args:
            shop_id (UUID): The shop.
            start_date (date, optional): First day; open-ended when None.
            end_date (date, optional): Last day; open-ended when None.

        Returns:
            dict: A dictionary containing:
                - total_revenue, total_orders, average_order_value
                - new_customers, returning_customers, return_rate (%)
                - payment_methods (list[dict]): method, count, percentage
                - best_day_of_week (dict | None): day, name, percentage
                - total_expenses: sum of approved expenses in the period
                - net_revenue: total_revenue - total_expenses
                - days_with_sales (int)

        Raises:
            InvalidDateRangeError: start_date is after end_date
        """
        records = list(RevenueQueries._records(shop_id, start_date, end_date))

        total_revenue = sum((r.revenue for r in records), Decimal('0.00'))
        total_orders = sum(r.total_orders for r in records)
        new_customers = sum(r.new_customers for r in records)
        returning_customers = sum(r.returning_customers for r in records)
        average = (total_revenue / total_orders).quantize(CENT) if total_orders else Decimal('0.00')

        method_counts = {}
        weekday_revenue = {}
        for record in records:
            for method, count in record.payment_methods.items():
                method_counts[method] = method_counts.get(method, 0) + count
            for day, revenue in record.day_of_week_revenue.items():
                weekday_revenue[int(day)] = weekday_revenue.get(int(day), 0.0) + revenue

        payment_methods = [
            {
                'method': method,
                'count': count,
                'percentage': _percentage(count, total_orders),
            }
            for method, count in sorted(method_counts.items(), key=lambda pair: -pair[1])
        ]

        best_day = None
        if weekday_revenue:
            day, revenue = max(weekday_revenue.items(), key=lambda pair: pair[1])
            best_day = {
                'day': day,
                'name': WEEKDAY_NAMES[day],
                'percentage': _percentage(revenue, sum(weekday_revenue.values())),
            }

        expenses = Expense.objects.filter(shop_id=shop_id, status=ExpenseStatus.APPROVED)
        if start_date:
            expenses = expenses.filter(expense_date__gte=start_date)
        if end_date:
            expenses = expenses.filter(expense_date__lte=end_date)
        total_expenses = expenses.aggregate(
            total=Coalesce(Sum('amount'), Decimal('0.00'))
        )['total']

        return {
            'period_start': start_date,
            'period_end': end_date,
            'total_revenue': total_revenue,
            'total_orders': total_orders,
            'average_order_value': average,
            'new_customers': new_customers,
            'returning_customers': returning_customers,
            'return_rate': _percentage(returning_customers, new_customers + returning_customers),
            'payment_methods': payment_methods,
            'best_day_of_week': best_day,
            'total_expenses': total_expenses,
            'net_revenue': total_revenue - total_expenses,
            'days_with_sales': len(records),
        }

    @staticmethod
    def peak_hours(shop_id, start_date=None, end_date=None):
        """
        Revenue per hour of day, busiest first.

        Returns:
            list[dict]: hour, revenue and percentage of the period's revenue.
        """
        hours = {}
        for record in RevenueQueries._records(shop_id, start_date, end_date):
            for hour, revenue in record.peak_hours.items():
                hours[int(hour)] = hours.get(int(hour), 0.0) + revenue

        total = sum(hours.values())
        return [
            {'hour': hour, 'revenue': revenue, 'percentage': _percentage(revenue, total)}
            for hour, revenue in sorted(hours.items(), key=lambda pair: (-pair[1], pair[0]))
        ]

    @staticmethod
    def top_items(shop_id, start_date=None, end_date=None, limit=10):
        """
        Best selling menu items by quantity.

        Items deleted from the menu keep their id as name.

        Returns:
            list[dict]: menu_item_id, name and quantity, at most ``limit``.
        """
        quantities = {}
        for record in RevenueQueries._records(shop_id, start_date, end_date):
            for key, quantity in record.top_selling_items.items():
                quantities[key] = quantities.get(key, 0) + quantity

        ranked = sorted(quantities.items(), key=lambda pair: (-pair[1], pair[0]))[:limit]

        ids = []
        for key, _ in ranked:
            try:
                ids.append(MenuItem._meta.pk.to_python(key))
            except ValidationError:
                continue
        names = {
            str(item_id): name
            for item_id, name in MenuItem.objects.filter(id__in=ids).values_list('id', 'name')
        }

        return [
            {
                'menu_item_id': key,
                'name': names.get(key, key),
                'quantity': quantity,
            }
            for key, quantity in ranked
        ]

    @staticmethod
    def revenue_timeseries(shop_id, start_date=None, end_date=None):
        """
        Revenue per day for charts.

        Returns:
            list[dict]: date, revenue and orders_count, oldest first. Days
            without sales are omitted.
        """
        return [
            {
                'date': record.date,
                'revenue': record.revenue,
                'orders_count': record.total_orders,
            }
            for record in RevenueQueries._records(shop_id, start_date, end_date)
        ]
