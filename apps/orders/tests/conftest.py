import pytest
from decimal import Decimal
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.inventory.measurement import MeasurementUnit
from apps.inventory.models import Ingredient
from apps.menu.models import MenuItem, RecipeLine
from apps.orders.cart import OrderDraft
from apps.shops.models import Customer, Shop, ShopMembership, ShopRole

User = get_user_model()


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


# =============================================================================
# Users and shop
# =============================================================================

@pytest.fixture
def cashier(db):
    """Create the barista taking orders."""
    return User.objects.create_user(username='cashier', password='TestPass123!')


@pytest.fixture
def order_outsider(db):
    """Create a user working at another shop."""
    return User.objects.create_user(username='order_outsider', password='TestPass123!')


@pytest.fixture
def order_shop(db, cashier):
    shop = Shop.objects.create(name='Order Test Cafe', owner=cashier, point_rate=Decimal('0.05'))
    ShopMembership.objects.create(user=cashier, shop=shop, role=ShopRole.OWNER)
    return shop


@pytest.fixture
def other_shop(db, order_outsider):
    shop = Shop.objects.create(name='Other Cafe', owner=order_outsider)
    ShopMembership.objects.create(user=order_outsider, shop=shop, role=ShopRole.OWNER)
    return shop


@pytest.fixture
def cashier_client(api_client, cashier):
    """Return API client authenticated as the cashier."""
    refresh = RefreshToken.for_user(cashier)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def outsider_client(api_client, order_outsider):
    """Return API client authenticated as an outsider."""
    refresh = RefreshToken.for_user(order_outsider)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def customer(order_shop):
    return Customer.objects.create(shop=order_shop, name='Lan', phone_number='0900000001', gender='female')


# =============================================================================
# Stock
# =============================================================================

@pytest.fixture
def sugar(order_shop):
    """10 bags of 1000 g, minimum one bag."""
    return Ingredient.objects.create(
        shop=order_shop,
        name='Sugar',
        quantity=10,
        unit_value=1000,
        unit=MeasurementUnit.GRAM,
        used=0,
        min_quantity=1,
    )


@pytest.fixture
def milk(order_shop):
    """3 cartons of 1 l."""
    return Ingredient.objects.create(
        shop=order_shop,
        name='Milk',
        quantity=3,
        unit_value=1,
        unit=MeasurementUnit.LITER,
        min_quantity=1,
    )


@pytest.fixture
def tea_bags(order_shop):
    return Ingredient.objects.create(
        shop=order_shop,
        name='Tea Bags',
        quantity=2,
        unit_value=50,
        unit=MeasurementUnit.PIECE,
    )


def _recipe_line(item, ingredient, value, unit):
    return RecipeLine.objects.create(
        menu_item=item,
        ingredient=ingredient,
        ingredient_name=ingredient.name,
        required_value=value,
        required_unit=unit,
    )


@pytest.fixture
def sweet_tea(order_shop, sugar, tea_bags):
    """50 g sugar and one tea bag per cup."""
    item = MenuItem.objects.create(shop=order_shop, name='Sweet Tea', price=Decimal('25000'), category='tea')
    _recipe_line(item, sugar, 50, MeasurementUnit.GRAM)
    _recipe_line(item, tea_bags, 1, MeasurementUnit.PIECE)
    return item


@pytest.fixture
def milk_coffee(order_shop, sugar, milk):
    """0.02 kg sugar and 150 ml milk per cup."""
    item = MenuItem.objects.create(shop=order_shop, name='Milk Coffee', price=Decimal('30000'), category='coffee')
    _recipe_line(item, sugar, 0.02, MeasurementUnit.KILOGRAM)
    _recipe_line(item, milk, 150, MeasurementUnit.MILLILITER)
    return item


@pytest.fixture
def water(order_shop):
    """Menu item without a recipe."""
    return MenuItem.objects.create(shop=order_shop, name='Water', price=Decimal('10000'), category='drinks')


@pytest.fixture
def recipe_line(db):
    """Return a helper creating recipe lines."""
    return _recipe_line


@pytest.fixture
def draft_for(order_shop):
    """Return a helper building a draft from (menu item, quantity) pairs."""
    def build(*lines, **kwargs):
        draft = OrderDraft(shop_id=order_shop.id, **kwargs)
        for item, quantity in lines:
            draft.add_item(item, quantity=quantity)
        return draft
    return build
