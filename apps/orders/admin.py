# ==========================================
# apps/orders/admin.py
# ==========================================

from django.contrib import admin
from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    """Inline admin for the lines of an order."""
    model = OrderItem
    extra = 0
    fields = ['position', 'name', 'unit_price', 'quantity', 'temperature', 'consumption', 'note']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        """Disable adding lines manually - orders are immutable."""
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Read-only admin for committed orders.

    Orders are only created by the placement service, which also consumes
    stock, so they cannot be added or edited here.
    """

    list_display = [
        'short_code',
        'shop',
        'customer',
        'total_amount',
        'payment_method',
        'get_item_count',
        'created_by',
        'created_at',
    ]

    list_filter = [
        'shop',
        'payment_method',
        'created_at',
    ]

    search_fields = [
        'id',
        'customer__name',
        'customer__phone_number',
        'created_by__username',
    ]

    readonly_fields = [
        'id',
        'shop',
        'customer',
        'created_by',
        'subtotal',
        'discount_percent',
        'discount_amount',
        'total_amount',
        'payment_method',
        'created_at',
    ]

    inlines = [OrderItemInline]
    date_hierarchy = 'created_at'

    def get_item_count(self, obj):
        return obj.item_count
    get_item_count.short_description = 'Items'

    def has_add_permission(self, request):
        return False
