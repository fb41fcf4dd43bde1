"""Domain-specific exceptions for customer services."""
from apps.common.exceptions import NotFoundError, ValidationError


class CustomerNotFoundError(NotFoundError):
    """Raised when customer does not exist."""
    default_detail = 'Customer not found.'
    default_code = 'customer_not_found'


class InvalidCustomerError(ValidationError):
    """Raised when customer fields are missing or malformed."""
    default_detail = 'Invalid customer.'
    default_code = 'invalid_customer'
