import pytest
from decimal import Decimal
from django.contrib.auth import get_user_model
from apps.shops.models import Customer, Gender, Shop, ShopMembership, ShopRole

User = get_user_model()


@pytest.fixture
def shop_owner(db):
    return User.objects.create_user(username='owner', email='owner@example.com', password='testpass123')


@pytest.fixture
def shop_cashier(db):
    return User.objects.create_user(username='cashier', email='cashier@example.com', password='testpass123')


@pytest.fixture
def shop_stranger(db):
    return User.objects.create_user(username='stranger', email='stranger@example.com', password='testpass123')


@pytest.fixture
def cafe(shop_owner, shop_cashier):
    """Shop with an owner and one staff member, crediting 5% of totals as points."""
    shop = Shop.objects.create(name='Corner Cafe', owner=shop_owner, point_rate=Decimal('0.05'))
    ShopMembership.objects.create(user=shop_owner, shop=shop, role=ShopRole.OWNER)
    ShopMembership.objects.create(user=shop_cashier, shop=shop, role=ShopRole.STAFF)
    return shop


@pytest.fixture
def regular(cafe):
    return Customer.objects.create(shop=cafe, name='Hoa', gender=Gender.FEMALE)
