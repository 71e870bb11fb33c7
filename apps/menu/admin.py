from django.contrib import admin
from .models import MenuItem, RecipeLine
from .services import refresh_menu_availability


class RecipeLineInline(admin.TabularInline):
    """Inline admin for recipe lines within a menu item."""
    model = RecipeLine
    extra = 0
    fields = ['ingredient', 'ingredient_name', 'required_value', 'required_unit']
    autocomplete_fields = ['ingredient']


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'shop', 'category', 'price', 'is_available', 'updated_at']
    list_filter = ['shop', 'category', 'is_available']
    search_fields = ['name', 'category', 'description']
    readonly_fields = ['id', 'is_available', 'created_at', 'updated_at']
    inlines = [RecipeLineInline]

    def save_related(self, request, form, formsets, change):
        super().save_related(request, form, formsets, change)
        # Recipe lines are saved after the item itself
        refresh_menu_availability(form.instance.shop)
