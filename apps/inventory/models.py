# ==========================================
# apps/inventory/models.py
# ==========================================

from datetime import timedelta
from decimal import Decimal
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.utils import timezone
import uuid

from .measurement import Measurement, MeasurementUnit


MAX_INGREDIENT_QUANTITY = 1_000_000
MAX_COST_PRICE = Decimal('10000000')
EXPIRY_WARNING_DAYS = 7


class StockStatus(models.TextChoices):
    IN_STOCK = 'in_stock', 'In stock'
    LOW_STOCK = 'low_stock', 'Low stock'
    OUT_OF_STOCK = 'out_of_stock', 'Out of stock'


class Ingredient(models.Model):
    """
    Stocked ingredient of a shop (ledger entry).

    ``quantity`` counts stock units, each holding ``unit_value`` of ``unit``
    (e.g. 10 bags of 1000 g). ``used`` is the cumulative amount consumed,
    expressed in ``unit``. ``version`` increments on every ledger write and
    guards conditional updates in the consumption engine.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    shop = models.ForeignKey('shops.Shop', on_delete=models.CASCADE, related_name='ingredients')
    name = models.CharField(max_length=100)
    quantity = models.FloatField(
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(MAX_INGREDIENT_QUANTITY)]
    )
    unit_value = models.FloatField(default=1, validators=[MinValueValidator(0)])
    unit = models.CharField(max_length=10, choices=MeasurementUnit.choices, default=MeasurementUnit.GRAM)
    used = models.FloatField(default=0, validators=[MinValueValidator(0)])
    min_quantity = models.FloatField(default=0, validators=[MinValueValidator(0)])
    cost_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(MAX_COST_PRICE)]
    )
    expiry_date = models.DateField(null=True, blank=True)
    version = models.PositiveIntegerField(default=0, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'ingredients'
        indexes = [
            models.Index(fields=['shop', 'name'], name='ingredients_shop_name_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.available_measurement})"

    def clean(self):
        errors = {}
        name = (self.name or '').strip()
        if not 2 <= len(name) <= 100:
            errors['name'] = 'Name must be between 2 and 100 characters.'
        elif self.shop_id and Ingredient.objects.filter(
            shop_id=self.shop_id, name__iexact=name
        ).exclude(pk=self.pk).exists():
            errors['name'] = 'An ingredient with this name already exists in the shop.'

        if self.quantity is not None and self.min_quantity is not None:
            if self.min_quantity > self.quantity:
                errors['min_quantity'] = 'Minimum quantity cannot exceed quantity.'

        if errors:
            raise ValidationError(errors)

    # Measurements

    @property
    def measurement_per_unit(self):
        return Measurement(self.unit_value, self.unit)

    @property
    def total(self):
        return self.quantity * self.unit_value

    @property
    def total_measurement(self):
        return Measurement(self.total, self.unit)

    @property
    def available(self):
        """Amount left to consume, in ``unit``."""
        return max(0.0, self.total - self.used)

    @property
    def available_measurement(self):
        return Measurement(self.available, self.unit)

    @property
    def low_stock_threshold(self):
        return self.min_quantity * self.unit_value

    @property
    def threshold_measurement(self):
        return Measurement(self.low_stock_threshold, self.unit)

    # Stock state

    @property
    def is_low_stock(self):
        return self.total - self.used <= self.low_stock_threshold

    @property
    def stock_status(self):
        if self.quantity <= 0:
            return StockStatus.OUT_OF_STOCK
        if self.is_low_stock:
            return StockStatus.LOW_STOCK
        return StockStatus.IN_STOCK

    @property
    def stock_percentage(self):
        total = self.total
        if total <= 0:
            return 0.0
        return min(100.0, self.available / total * 100)

    # Expiry

    @property
    def is_expired(self):
        if not self.expiry_date:
            return False
        return self.expiry_date < timezone.localdate()

    @property
    def is_expiring_soon(self):
        if not self.expiry_date or self.is_expired:
            return False
        return self.expiry_date <= timezone.localdate() + timedelta(days=EXPIRY_WARNING_DAYS)
