import pytest
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import Admin
from apps.customers.models import Customer


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
    """Customer who last bought on 1 March 2024 and owes 100."""
    return Customer.objects.create(
        name='Asha Traders',
        contact='9811111111',
        credit=Decimal('100.00'),
        last_purchase=datetime(2024, 3, 1, 10, 0, tzinfo=dt_timezone.utc),
    )


@pytest.fixture
def customer_recent(db):
    """Customer who last bought on 1 June 2024 and owes 20."""
    return Customer.objects.create(
        name='Bala Stores',
        contact='9822222222',
        credit=Decimal('20.00'),
        last_purchase=datetime(2024, 6, 1, 10, 0, tzinfo=dt_timezone.utc),
    )


@pytest.fixture
def customer_new(db):
    """Customer who never bought anything and owes 500."""
    return Customer.objects.create(
        name='Chitra Mart',
        contact='9833333333',
        credit=Decimal('500.00'),
        last_purchase=None,
    )
