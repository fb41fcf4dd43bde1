"""Services for admin accounts."""

from .exceptions import InvalidCredentialsError
from .admin_authentication import authenticate_admin, ensure_default_admin

__all__ = [
    # Exceptions
    'InvalidCredentialsError',
    # Services
    'authenticate_admin',
    'ensure_default_admin',
]
