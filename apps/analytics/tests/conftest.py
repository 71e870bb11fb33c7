import pytest
from decimal import Decimal
from datetime import date
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.analytics.models import DailyRevenueRecord, Expense, ExpenseStatus, ExpenseCategory
from apps.inventory.measurement import MeasurementUnit
from apps.inventory.models import Ingredient
from apps.menu.models import MenuItem, RecipeLine
from apps.shops.models import Customer, Shop, ShopMembership, ShopRole

User = get_user_model()

MONDAY = date(2025, 1, 6)
SATURDAY = date(2025, 1, 11)


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def analytics_user(db):
    """Create the shop owner reading reports."""
    return User.objects.create_user(username='analytics_user', password='TestPass123!')


@pytest.fixture
def analytics_staff(db):
    """Create a barista of the shop."""
    return User.objects.create_user(username='analytics_staff', password='TestPass123!')


@pytest.fixture
def analytics_outsider(db):
    """Create a user not working at the shop."""
    return User.objects.create_user(username='analytics_outsider', password='TestPass123!')


@pytest.fixture
def analytics_user_client(api_client, analytics_user):
    """Return API client authenticated as analytics user."""
    refresh = RefreshToken.for_user(analytics_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def analytics_outsider_client(api_client, analytics_outsider):
    """Return API client authenticated as outsider."""
    refresh = RefreshToken.for_user(analytics_outsider)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


# =============================================================================
# Shop
# =============================================================================

@pytest.fixture
def analytics_shop(db, analytics_user, analytics_staff):
    """Create a shop with an owner and one barista."""
    shop = Shop.objects.create(name='Analytics Cafe', owner=analytics_user)
    ShopMembership.objects.create(user=analytics_user, shop=shop, role=ShopRole.OWNER)
    ShopMembership.objects.create(user=analytics_staff, shop=shop, role=ShopRole.STAFF)
    return shop


@pytest.fixture
def analytics_customer(analytics_shop):
    return Customer.objects.create(shop=analytics_shop, name='Minh', gender='male')


@pytest.fixture
def tea(analytics_shop):
    return MenuItem.objects.create(shop=analytics_shop, name='Iced Tea', price=Decimal('20000'), category='tea')


@pytest.fixture
def coffee(analytics_shop):
    """Coffee using 18 g of beans per cup."""
    beans = Ingredient.objects.create(
        shop=analytics_shop, name='Coffee Beans', quantity=5, unit_value=1, unit=MeasurementUnit.KILOGRAM,
    )
    item = MenuItem.objects.create(shop=analytics_shop, name='Black Coffee', price=Decimal('30000'), category='coffee')
    RecipeLine.objects.create(
        menu_item=item,
        ingredient=beans,
        ingredient_name=beans.name,
        required_value=18,
        required_unit=MeasurementUnit.GRAM,
    )
    return item


# =============================================================================
# Revenue records
# =============================================================================

@pytest.fixture
def monday_record(analytics_shop, tea, coffee):
    """Four orders on a Monday: 3 cash, 1 card, one returning customer."""
    return DailyRevenueRecord.objects.create(
        shop=analytics_shop,
        date=MONDAY,
        revenue=Decimal('100000.00'),
        total_orders=4,
        average_order_value=Decimal('25000.00'),
        top_selling_items={str(tea.id): 5, str(coffee.id): 2},
        peak_hours={'8': 60000.0, '14': 40000.0},
        day_of_week_revenue={'1': 100000.0},
        payment_methods={'cash': 3, 'card': 1},
        new_customers=3,
        returning_customers=1,
        total_customers=4,
    )


@pytest.fixture
def saturday_record(analytics_shop, coffee):
    """One card order on a Saturday, including an item no longer on the menu."""
    return DailyRevenueRecord.objects.create(
        shop=analytics_shop,
        date=SATURDAY,
        revenue=Decimal('50000.00'),
        total_orders=1,
        average_order_value=Decimal('50000.00'),
        top_selling_items={str(coffee.id): 1, 'Old Cake': 1},
        peak_hours={'8': 50000.0},
        day_of_week_revenue={'6': 50000.0},
        payment_methods={'card': 1},
        new_customers=0,
        returning_customers=1,
        total_customers=1,
    )


@pytest.fixture
def january_records(monday_record, saturday_record):
    return [monday_record, saturday_record]


@pytest.fixture
def january_expenses(analytics_shop, analytics_user):
    """One approved expense in January, one pending, one approved in February."""
    return [
        Expense.objects.create(
            shop=analytics_shop,
            amount=Decimal('20000.00'),
            description='Electricity',
            category=ExpenseCategory.UTILITIES,
            expense_date=date(2025, 1, 10),
            status=ExpenseStatus.APPROVED,
            created_by=analytics_user,
        ),
        Expense.objects.create(
            shop=analytics_shop,
            amount=Decimal('5000.00'),
            description='Napkins',
            category=ExpenseCategory.OTHER,
            expense_date=date(2025, 1, 12),
            status=ExpenseStatus.PENDING,
            created_by=analytics_user,
        ),
        Expense.objects.create(
            shop=analytics_shop,
            amount=Decimal('1000.00'),
            description='Paper cups',
            category=ExpenseCategory.INVENTORY,
            expense_date=date(2025, 2, 1),
            status=ExpenseStatus.APPROVED,
            created_by=analytics_user,
        ),
    ]
