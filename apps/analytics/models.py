# ==========================================
# apps/analytics/models.py
# ==========================================

from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
import uuid

CENT = Decimal('0.01')


class DailyRevenueRecord(models.Model):
    """
    Per-shop, per-day rollup of committed orders.

    Histogram keys are strings (JSON object keys): ``peak_hours`` maps the
    hour 0-23 to revenue, ``day_of_week_revenue`` maps 0 (Sunday) to 6 to
    revenue, ``top_selling_items`` maps menu item id to quantity sold and
    ``payment_methods`` maps payment method to order count.

    The record does not remember which orders it absorbed; applying the
    same order twice counts it twice.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    shop = models.ForeignKey('shops.Shop', on_delete=models.CASCADE, related_name='revenue_records')
    date = models.DateField()
    revenue = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    total_orders = models.PositiveIntegerField(default=0)
    average_order_value = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    top_selling_items = models.JSONField(default=dict, blank=True)
    peak_hours = models.JSONField(default=dict, blank=True)
    day_of_week_revenue = models.JSONField(default=dict, blank=True)
    payment_methods = models.JSONField(default=dict, blank=True)
    new_customers = models.PositiveIntegerField(default=0)
    returning_customers = models.PositiveIntegerField(default=0)
    total_customers = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'daily_revenue_records'
        unique_together = [['shop', 'date']]
        ordering = ['-date']

    def __str__(self):
        return f"{self.shop} {self.date}: {self.revenue} ({self.total_orders} orders)"

    def apply_order(self, order, items, hour, weekday, is_returning):
        """Add one order's contribution to every sum and histogram in place."""
        total = order.total_amount
        self.revenue += total
        self.total_orders += 1
        self.average_order_value = (self.revenue / self.total_orders).quantize(CENT)

        for item in items:
            key = str(item.menu_item_id) if item.menu_item_id else item.name
            self.top_selling_items[key] = self.top_selling_items.get(key, 0) + item.quantity

        _bump(self.peak_hours, str(hour), float(total))
        _bump(self.day_of_week_revenue, str(weekday), float(total))
        _bump(self.payment_methods, str(order.payment_method), 1)

        if is_returning:
            self.returning_customers += 1
        else:
            self.new_customers += 1
        self.total_customers = self.new_customers + self.returning_customers


def _bump(histogram, key, amount):
    histogram[key] = histogram.get(key, 0) + amount


class ExpenseCategory(models.TextChoices):
    UTILITIES = 'utilities', 'Utilities'
    INVENTORY = 'inventory', 'Inventory'
    SALARY = 'salary', 'Salary'
    RENT = 'rent', 'Rent'
    EQUIPMENT = 'equipment', 'Equipment'
    MARKETING = 'marketing', 'Marketing'
    MAINTENANCE = 'maintenance', 'Maintenance'
    OTHER = 'other', 'Other'


class ExpenseStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'
    CANCELLED = 'cancelled', 'Cancelled'


class RecurringType(models.TextChoices):
    MONTHLY = 'monthly', 'Monthly'
    QUARTERLY = 'quarterly', 'Quarterly'
    YEARLY = 'yearly', 'Yearly'


class Expense(models.Model):
    """Money spent by a shop. Only approved expenses count in reports."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    shop = models.ForeignKey('shops.Shop', on_delete=models.CASCADE, related_name='expenses')
    amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    description = models.CharField(max_length=200)
    category = models.CharField(max_length=20, choices=ExpenseCategory.choices, default=ExpenseCategory.OTHER)
    expense_date = models.DateField()
    is_recurring = models.BooleanField(default=False)
    recurring_type = models.CharField(max_length=20, choices=RecurringType.choices, blank=True)
    status = models.CharField(max_length=20, choices=ExpenseStatus.choices, default=ExpenseStatus.PENDING)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='created_expenses'
    )
    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='approved_expenses'
    )
    approved_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'expenses'
        indexes = [
            models.Index(fields=['shop', 'expense_date'], name='expenses_shop_date_idx'),
        ]
        ordering = ['-expense_date']

    def __str__(self):
        return f"{self.description} - {self.amount} ({self.get_status_display()})"
