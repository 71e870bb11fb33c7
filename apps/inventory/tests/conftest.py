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
def stock_manager(db):
    """Create the shop owner."""
    return User.objects.create_user(username='stock_manager', password='TestPass123!')


@pytest.fixture
def stock_staff(db):
    """Create a barista working at the shop."""
    return User.objects.create_user(username='stock_staff', password='TestPass123!')


@pytest.fixture
def stock_outsider(db):
    """Create a user not working at the shop."""
    return User.objects.create_user(username='stock_outsider', password='TestPass123!')


@pytest.fixture
def stock_shop(db, stock_manager, stock_staff):
    shop = Shop.objects.create(name='Stock Test Cafe', owner=stock_manager)
    ShopMembership.objects.create(user=stock_manager, shop=shop, role=ShopRole.OWNER)
    ShopMembership.objects.create(user=stock_staff, shop=shop, role=ShopRole.STAFF)
    return shop


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def manager_client(stock_manager):
    """Return API client authenticated as the owner."""
    return _client_for(stock_manager)


@pytest.fixture
def staff_client(stock_staff):
    """Return API client authenticated as the barista."""
    return _client_for(stock_staff)


@pytest.fixture
def outsider_client(stock_outsider):
    """Return API client authenticated as an outsider."""
    return _client_for(stock_outsider)


# =============================================================================
# Ingredients
# =============================================================================

@pytest.fixture
def sugar(stock_shop):
    """10 bags of 1000 g, minimum one bag."""
    return Ingredient.objects.create(
        shop=stock_shop,
        name='Sugar',
        quantity=10,
        unit_value=1000,
        unit=MeasurementUnit.GRAM,
        used=0,
        min_quantity=1,
    )


@pytest.fixture
def milk(stock_shop):
    """4 cartons of 1 l, two of them already used."""
    return Ingredient.objects.create(
        shop=stock_shop,
        name='Milk',
        quantity=4,
        unit_value=1,
        unit=MeasurementUnit.LITER,
        used=2,
        min_quantity=2,
    )


@pytest.fixture
def sweet_tea(stock_shop, sugar):
    """Menu item using 50 g sugar per cup."""
    item = MenuItem.objects.create(shop=stock_shop, name='Sweet Tea', price='25000', category='tea')
    RecipeLine.objects.create(
        menu_item=item,
        ingredient=sugar,
        ingredient_name=sugar.name,
        required_value=50,
        required_unit=MeasurementUnit.GRAM,
    )
    return item
