import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.inventory.measurement import MeasurementUnit
from apps.inventory.models import Ingredient
from apps.menu.models import MenuItem, RecipeLine
from apps.shops.models import Shop, ShopMembership, ShopRole

User = get_user_model()


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def menu_user(db):
    return User.objects.create_user(username='menu_user', password='TestPass123!')


@pytest.fixture
def menu_outsider(db):
    return User.objects.create_user(username='menu_outsider', password='TestPass123!')


@pytest.fixture
def menu_shop(db, menu_user):
    shop = Shop.objects.create(name='Menu Test Cafe', owner=menu_user)
    ShopMembership.objects.create(user=menu_user, shop=shop, role=ShopRole.OWNER)
    return shop


@pytest.fixture
def menu_user_client(api_client, menu_user):
    """Return API client authenticated as the shop owner."""
    refresh = RefreshToken.for_user(menu_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def menu_outsider_client(api_client, menu_outsider):
    """Return API client authenticated as an outsider."""
    refresh = RefreshToken.for_user(menu_outsider)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def sugar(menu_shop):
    """10 kg of sugar, tracked in grams."""
    return Ingredient.objects.create(
        shop=menu_shop, name='Sugar', quantity=10, unit_value=1000, unit=MeasurementUnit.GRAM, min_quantity=1,
    )


@pytest.fixture
def milk(menu_shop):
    """2 litres of milk, tracked in millilitres."""
    return Ingredient.objects.create(
        shop=menu_shop, name='Milk', quantity=2, unit_value=1000, unit=MeasurementUnit.MILLILITER,
    )


@pytest.fixture
def tea_bags(menu_shop):
    return Ingredient.objects.create(
        shop=menu_shop, name='Tea Bags', quantity=1, unit_value=20, unit=MeasurementUnit.PIECE,
    )


def _add_recipe_line(item, ingredient, value, unit):
    return RecipeLine.objects.create(
        menu_item=item,
        ingredient=ingredient,
        ingredient_name=ingredient.name,
        required_value=value,
        required_unit=unit,
    )


@pytest.fixture
def add_recipe_line(db):
    """Return a helper creating recipe lines."""
    return _add_recipe_line


@pytest.fixture
def milk_tea(menu_shop, sugar, milk, tea_bags):
    """20 g sugar, 0.2 l milk and one tea bag per cup."""
    item = MenuItem.objects.create(shop=menu_shop, name='Milk Tea', price='35000', category='tea')
    _add_recipe_line(item, sugar, 20, MeasurementUnit.GRAM)
    _add_recipe_line(item, milk, 0.2, MeasurementUnit.LITER)
    _add_recipe_line(item, tea_bags, 1, MeasurementUnit.PIECE)
    return item


@pytest.fixture
def water(menu_shop):
    """Menu item without a recipe."""
    return MenuItem.objects.create(shop=menu_shop, name='Water', price='10000', category='drinks')
