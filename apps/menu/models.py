# ==========================================
# apps/menu/models.py
# ==========================================

from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import models
import uuid

from apps.inventory.measurement import Measurement, MeasurementUnit


class MenuItem(models.Model):
    """
    Orderable product of a shop.

    ``is_available`` is derived from the recipe against current stock and
    is only written through :meth:`refresh_availability`.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    shop = models.ForeignKey('shops.Shop', on_delete=models.CASCADE, related_name='menu_items')
    name = models.CharField(max_length=100)
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    category = models.CharField(max_length=50, blank=True, db_index=True)
    description = models.TextField(blank=True)
    image_url = models.URLField(blank=True)
    is_available = models.BooleanField(default=True, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'menu_items'
        indexes = [
            models.Index(fields=['shop', 'category'], name='menu_items_shop_cat_idx'),
        ]
        ordering = ['category', 'name']

    def __str__(self):
        return self.name

    def compute_availability(self, ingredient_index):
        """True when every recipe line is satisfied; items without a recipe always are."""
        return all(
            line.is_satisfied_by(ingredient_index.get(line.ingredient_id))
            for line in self.recipe_lines.all()
        )

    def refresh_availability(self, ingredient_index):
        """
        Recompute ``is_available`` from ``ingredient_index`` (id -> Ingredient).

        Does not save. Returns True when the flag changed.
        """
        available = self.compute_availability(ingredient_index)
        changed = available != self.is_available
        self.is_available = available
        return changed


class RecipeLine(models.Model):
    """Amount of one ingredient needed for a single unit of a menu item."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    menu_item = models.ForeignKey(MenuItem, on_delete=models.CASCADE, related_name='recipe_lines')
    ingredient = models.ForeignKey(
        'inventory.Ingredient',
        on_delete=models.SET_NULL,
        null=True,
        related_name='recipe_lines'
    )
    # Kept so a line stays readable after its ingredient is deleted
    ingredient_name = models.CharField(max_length=100)
    required_value = models.FloatField(validators=[MinValueValidator(0)])
    required_unit = models.CharField(max_length=10, choices=MeasurementUnit.choices)

    class Meta:
        db_table = 'recipe_lines'
        ordering = ['ingredient_name']

    def __str__(self):
        return f"{self.required_amount} {self.ingredient_name}"

    @property
    def required_amount(self):
        return Measurement(self.required_value, self.required_unit)

    def requirement_in(self, ingredient):
        """Required amount expressed in the ingredient's unit, or None."""
        return self.required_amount.converted(ingredient.unit)

    def is_satisfied_by(self, ingredient, quantity=1):
        if ingredient is None or ingredient.pk != self.ingredient_id:
            return False
        required = self.requirement_in(ingredient)
        if required is None:
            return False
        return ingredient.available_measurement >= required.multiplied(quantity)
