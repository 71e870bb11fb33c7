# ==========================================
# apps/orders/models.py
# ==========================================

from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
import uuid


class PaymentMethod(models.TextChoices):
    CASH = 'cash', 'Cash'
    CARD = 'card', 'Card'
    BANK_TRANSFER = 'bank_transfer', 'Bank transfer'


class Temperature(models.TextChoices):
    HOT = 'hot', 'Hot'
    COLD = 'cold', 'Cold'


class ConsumptionMode(models.TextChoices):
    DINE_IN = 'dine_in', 'Dine in'
    TAKE_AWAY = 'take_away', 'Take away'


class Order(models.Model):
    """
    Committed sale.

    Created exactly once by the placement service, in the same database
    transaction that consumes its ingredients. Immutable afterwards.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    shop = models.ForeignKey('shops.Shop', on_delete=models.CASCADE, related_name='orders')
    customer = models.ForeignKey(
        'shops.Customer',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='orders'
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='created_orders'
    )
    subtotal = models.DecimalField(max_digits=12, decimal_places=2)
    discount_percent = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))]
    )
    discount_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    total_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))]
    )
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices, default=PaymentMethod.CASH)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'orders'
        indexes = [
            models.Index(fields=['shop', 'created_at'], name='orders_shop_created_idx'),
            models.Index(fields=['customer', 'created_at'], name='orders_customer_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"Order {self.short_code} - {self.total_amount} {self.shop.currency}"

    @property
    def short_code(self):
        """Receipt code: ``#`` plus the last six characters of the id."""
        return f"#{self.id.hex[-6:].upper()}"

    @property
    def item_count(self):
        return sum(item.quantity for item in self.items.all())


class OrderItem(models.Model):
    """Line of an order with the menu item's name and price captured at sale time."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    menu_item = models.ForeignKey(
        'menu.MenuItem',
        on_delete=models.SET_NULL,
        null=True,
        related_name='order_items'
    )
    name = models.CharField(max_length=100)
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    quantity = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(99)])
    note = models.CharField(max_length=200, blank=True)
    temperature = models.CharField(max_length=10, choices=Temperature.choices, default=Temperature.HOT)
    consumption = models.CharField(max_length=10, choices=ConsumptionMode.choices, default=ConsumptionMode.DINE_IN)
    position = models.PositiveSmallIntegerField(default=0)

    class Meta:
        db_table = 'order_items'
        ordering = ['position']

    def __str__(self):
        return f"{self.quantity}x {self.name}"

    @property
    def line_total(self):
        return self.unit_price * self.quantity
