"""Admin authentication and bootstrap services."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError

Admin = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def authenticate_admin(*, mobile: str, password: str) -> Admin:
    """
    Authenticate an admin with mobile number and password.

    Uses select_for_update() to prevent race conditions when updating last_login.

    Args:
        mobile: Admin's mobile number
        password: Admin's password

    Returns:
        Authenticated Admin instance

    Raises:
        InvalidCredentialsError: If credentials are invalid or the account
            is deactivated
    """
    try:
        admin = (
            Admin.objects
            .select_for_update()
            .get(mobile=mobile.strip())
        )
    except Admin.DoesNotExist:
        raise InvalidCredentialsError()

    if not admin.check_password(password):
        raise InvalidCredentialsError()

    if not admin.is_active:
        raise InvalidCredentialsError('Account is deactivated.')

    admin.last_login = timezone.now()
    admin.save(update_fields=['last_login'])

    return admin


@transaction.atomic
def ensure_default_admin(*, mobile: str, password: str):
    """
    Create the bootstrap admin if no admin with this mobile exists.

    Returns:
        tuple: (Admin, created)
    """
    existing = Admin.objects.filter(mobile=mobile.strip()).first()
    if existing:
        return existing, False

    admin = Admin.objects.create_superuser(mobile=mobile, password=password)
    logger.info('Default admin %s created', admin.mobile)
    return admin, True
