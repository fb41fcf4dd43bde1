import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import Admin


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin(db):
    """Create and return an active admin."""
    return Admin.objects.create_user(
        mobile='9000000001',
        password='TestPass123!',
        display_name='Shop Owner',
    )


@pytest.fixture
def admin_inactive(db):
    """Create and return a deactivated admin."""
    return Admin.objects.create_user(
        mobile='9000000002',
        password='TestPass123!',
        is_active=False,
    )


@pytest.fixture
def authenticated_client(api_client, admin):
    """Return API client authenticated as admin."""
    refresh = RefreshToken.for_user(admin)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
