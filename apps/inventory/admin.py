# ==========================================
# apps/inventory/admin.py
# ==========================================

from django.contrib import admin, messages
from django.utils.html import format_html
from apps.menu.services import refresh_menu_availability
from .models import Ingredient, StockStatus
from .services.exceptions import InventoryServiceError
from .services.ledger import reset_ingredient_usage

# Written only by the ledger services once the ingredient exists
STOCK_FIELDS = ('shop', 'quantity', 'unit_value', 'unit', 'used')
DETAIL_FIELDS = ['name', 'cost_price', 'expiry_date', 'min_quantity', 'updated_at']


@admin.register(Ingredient)
class IngredientAdmin(admin.ModelAdmin):
    """
    Admin interface for the stock ledger.

    Existing stock is read-only here. Consumption goes through order
    placement and corrections through the reset usage action, so every
    change to ``used`` is a versioned ledger write.
    """

    list_display = [
        'name',
        'shop',
        'get_available_display',
        'get_threshold_display',
        'stock_status_badge',
        'expiry_date',
        'updated_at',
    ]

    list_filter = [
        'shop',
        'unit',
        'expiry_date',
    ]

    search_fields = [
        'name',
        'shop__name',
    ]

    readonly_fields = [
        'id',
        'version',
        'get_available_display',
        'created_at',
        'updated_at',
    ]

    fieldsets = (
        ('Ingredient', {
            'fields': ('id', 'shop', 'name', 'cost_price', 'expiry_date')
        }),
        ('Stock', {
            'fields': ('quantity', 'unit_value', 'unit', 'used', 'min_quantity', 'get_available_display')
        }),
        ('Metadata', {
            'fields': ('version', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['reset_usage']

    def get_readonly_fields(self, request, obj=None):
        readonly = list(super().get_readonly_fields(request, obj))
        if obj is not None:
            readonly.extend(STOCK_FIELDS)
        return readonly

    def save_model(self, request, obj, form, change):
        if change:
            # Leaves used and version to concurrent ledger writes
            obj.save(update_fields=DETAIL_FIELDS)
        else:
            obj.save()
        refresh_menu_availability(obj.shop, [obj.pk])

    def delete_model(self, request, obj):
        shop = obj.shop
        super().delete_model(request, obj)
        refresh_menu_availability(shop)

    def delete_queryset(self, request, queryset):
        shops = {ingredient.shop for ingredient in queryset.select_related('shop')}
        super().delete_queryset(request, queryset)
        for shop in shops:
            refresh_menu_availability(shop)

    @admin.action(description='Reset usage of selected ingredients')
    def reset_usage(self, request, queryset):
        reset = 0
        for ingredient in queryset:
            try:
                reset_ingredient_usage(ingredient.pk)
            except InventoryServiceError as e:
                self.message_user(request, f"{ingredient.name}: {e}", level=messages.ERROR)
            else:
                reset += 1
        self.message_user(request, f"Reset usage of {reset} ingredient(s).")

    def get_available_display(self, obj):
        return obj.available_measurement.display
    get_available_display.short_description = 'Available'

    def get_threshold_display(self, obj):
        return obj.threshold_measurement.display
    get_threshold_display.short_description = 'Minimum'

    def stock_status_badge(self, obj):
        """Display stock status as colored badge."""
        colors = {
            StockStatus.IN_STOCK: ('#6B8E5E', 'white'),
            StockStatus.LOW_STOCK: ('#E5C49A', '#2C1810'),
            StockStatus.OUT_OF_STOCK: ('#B85C5C', 'white'),
        }
        status = obj.stock_status
        bg, fg = colors.get(status, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, StockStatus(status).label
        )
    stock_status_badge.short_description = 'Status'
