from django.contrib import admin
from .models import Shop, ShopMembership, Customer


class ShopMembershipInline(admin.TabularInline):
    """Inline admin for staff within a shop."""
    model = ShopMembership
    extra = 0
    fields = ['user', 'role', 'joined_at']
    readonly_fields = ['joined_at']


@admin.register(Shop)
class ShopAdmin(admin.ModelAdmin):
    list_display = ['name', 'owner', 'point_rate', 'currency', 'is_active', 'created_at']
    list_filter = ['is_active', 'currency']
    search_fields = ['name', 'address', 'owner__username']
    readonly_fields = ['id', 'created_at', 'updated_at']
    inlines = [ShopMembershipInline]


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ['name', 'phone_number', 'shop', 'points', 'created_at']
    list_filter = ['shop', 'gender']
    search_fields = ['name', 'phone_number']
    readonly_fields = ['id', 'points', 'created_at', 'updated_at']
