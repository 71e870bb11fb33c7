# ==========================================
# apps/shops/models.py
# ==========================================

from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
import uuid


def default_point_rate():
    return Decimal(str(getattr(settings, 'POS_DEFAULT_POINT_RATE', '0.05')))


class ShopRole(models.TextChoices):
    OWNER = 'owner', 'Owner'
    MANAGER = 'manager', 'Manager'
    STAFF = 'staff', 'Staff'


class Shop(models.Model):
    """A cafe or store running the point of sale."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    address = models.CharField(max_length=200, blank=True)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='owned_shops'
    )
    # Loyalty points credited per unit of order total
    point_rate = models.DecimalField(
        max_digits=5,
        decimal_places=4,
        default=default_point_rate,
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('1'))]
    )
    currency = models.CharField(max_length=3, default='VND')
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'shops'
        indexes = [
            models.Index(fields=['owner', 'created_at'], name='shops_owner_i_7c1d2e_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return self.name

    def has_member(self, user):
        if not user or not user.is_authenticated:
            return False
        return self.memberships.filter(user=user).exists()

    def get_user_role(self, user):
        try:
            return self.memberships.get(user=user).role
        except ShopMembership.DoesNotExist:
            return None

    def is_manager(self, user):
        role = self.get_user_role(user)
        return role in [ShopRole.OWNER, ShopRole.MANAGER]


class ShopMembership(models.Model):
    """Staff member of a shop with role."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='shop_memberships'
    )
    shop = models.ForeignKey(Shop, on_delete=models.CASCADE, related_name='memberships')
    role = models.CharField(max_length=20, choices=ShopRole.choices, default=ShopRole.STAFF)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'shop_memberships'
        unique_together = [['user', 'shop']]
        indexes = [
            models.Index(fields=['shop', 'role'], name='shop_member_shop_id_9e02f3_idx'),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.user} @ {self.shop.name} ({self.role})"


class Gender(models.TextChoices):
    MALE = 'male', 'Male'
    FEMALE = 'female', 'Female'


class Customer(models.Model):
    """Loyalty customer of a shop."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    shop = models.ForeignKey(Shop, on_delete=models.CASCADE, related_name='customers')
    name = models.CharField(max_length=100)
    phone_number = models.CharField(max_length=20, blank=True)
    gender = models.CharField(max_length=10, choices=Gender.choices, blank=True)
    points = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'customers'
        indexes = [
            models.Index(fields=['shop', 'phone_number'], name='customers_shop_id_4b8a91_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return self.display_name

    @property
    def display_name(self):
        prefix = {Gender.MALE: 'Mr', Gender.FEMALE: 'Ms'}.get(self.gender)
        return f"{prefix}. {self.name}" if prefix else self.name
