# ==========================================
# apps/analytics/admin.py
# ==========================================

import logging

from django.contrib import admin, messages
from django.utils import timezone
from django.utils.html import format_html
from .models import DailyRevenueRecord, Expense, ExpenseStatus

logger = logging.getLogger(__name__)


@admin.register(DailyRevenueRecord)
class DailyRevenueRecordAdmin(admin.ModelAdmin):
    """Read-only view of the daily rollups written after each committed order."""

    list_display = ['date', 'shop', 'revenue', 'total_orders', 'average_order_value', 'total_customers']
    list_filter = ['shop', 'date']
    date_hierarchy = 'date'
    readonly_fields = [
        'id',
        'shop',
        'date',
        'revenue',
        'total_orders',
        'average_order_value',
        'top_selling_items',
        'peak_hours',
        'day_of_week_revenue',
        'payment_methods',
        'new_customers',
        'returning_customers',
        'total_customers',
        'created_at',
        'updated_at',
    ]

    def has_add_permission(self, request):
        return False


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    """
    Admin interface for shop expenses.

    Only approved expenses are subtracted from revenue in the period
    summary; the ``approve_expenses`` action records who approved them.
    """

    list_display = [
        'description',
        'shop',
        'category',
        'amount',
        'expense_date',
        'status_badge',
        'created_by',
    ]

    list_filter = ['status', 'category', 'shop', 'is_recurring', 'expense_date']
    search_fields = ['description', 'shop__name']
    readonly_fields = ['id', 'approved_by', 'approved_at', 'created_at', 'updated_at']
    actions = ['approve_expenses', 'reject_expenses']

    def status_badge(self, obj):
        """Display expense status as colored badge."""
        colors = {
            ExpenseStatus.PENDING: ('#E5C49A', '#2C1810'),
            ExpenseStatus.APPROVED: ('#6B8E5E', 'white'),
            ExpenseStatus.REJECTED: ('#B85C5C', 'white'),
            ExpenseStatus.CANCELLED: ('#A47449', 'white'),
        }
        bg, fg = colors.get(obj.status, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_status_display()
        )
    status_badge.short_description = 'Status'

    def save_model(self, request, obj, form, change):
        if not change and obj.created_by_id is None:
            obj.created_by = request.user
        super().save_model(request, obj, form, change)

    @admin.action(description='Approve selected expenses')
    def approve_expenses(self, request, queryset):
        updated = queryset.filter(status=ExpenseStatus.PENDING).update(
            status=ExpenseStatus.APPROVED,
            approved_by=request.user,
            approved_at=timezone.now(),
        )
        logger.info("Expenses approved", extra={'count': updated, 'user_id': request.user.id})
        self.message_user(request, f'{updated} expense(s) approved.', messages.SUCCESS)

    @admin.action(description='Reject selected expenses')
    def reject_expenses(self, request, queryset):
        updated = queryset.filter(status=ExpenseStatus.PENDING).update(status=ExpenseStatus.REJECTED)
        self.message_user(request, f'{updated} expense(s) rejected.', messages.WARNING)
