"""Domain-specific exceptions for accounts services."""
from apps.common.exceptions import AuthError


class InvalidCredentialsError(AuthError):
    """Raised when login credentials are invalid or the admin is inactive."""
    status_code = 401
    default_detail = 'Invalid mobile number or password.'
    default_code = 'invalid_credentials'
