import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import Admin
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
def product(db):
    """A 25 kg rice pack priced at 500."""
    return Product.objects.create(
        product_name='Basmati Rice',
        price_per_pack=Decimal('500.00'),
        kgs_per_pack=Decimal('25.000'),
        price_per_kg=Decimal('20.00'),
    )


@pytest.fixture
def product_2(db):
    return Product.objects.create(
        product_name='Wheat Flour',
        price_per_pack=Decimal('300.00'),
        kgs_per_pack=Decimal('10.000'),
        price_per_kg=Decimal('30.00'),
    )
