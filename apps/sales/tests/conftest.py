import pytest
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import Admin
from apps.customers.models import Customer
from apps.products.models import Product


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin(db):
    """Create and return an active admin."""
    return Admin.objects.create_user(mobile='9000000001', password='TestPass123!')


@pytest.fixture
def authenticated_client(api_client, admin):
    """Return API client authenticated as admin."""
    refresh = RefreshToken.for_user(admin)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def customer(db):
    """Customer owing 100 who has never bought anything."""
    return Customer.objects.create(
        name='Asha Traders',
        contact='9811111111',
        credit=Decimal('100.00'),
        last_purchase=None,
    )


@pytest.fixture
def customer_paid_up(db):
    """Customer with zero credit who last bought on 1 June 2024."""
    return Customer.objects.create(
        name='Bala Stores',
        contact='9822222222',
        credit=Decimal('0.00'),
        last_purchase=datetime(2024, 6, 1, 10, 0, tzinfo=dt_timezone.utc),
    )


@pytest.fixture
def rice(db):
    """A 25 kg rice pack priced at 500 (20 per kg)."""
    return Product.objects.create(
        product_name='Basmati Rice',
        price_per_pack=Decimal('500.00'),
        kgs_per_pack=Decimal('25.000'),
        price_per_kg=Decimal('20.00'),
    )


@pytest.fixture
def flour(db):
    """A 10 kg flour pack priced at 300 (30 per kg)."""
    return Product.objects.create(
        product_name='Wheat Flour',
        price_per_pack=Decimal('300.00'),
        kgs_per_pack=Decimal('10.000'),
        price_per_kg=Decimal('30.00'),
    )

