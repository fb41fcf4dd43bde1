"""Services for customer accounts."""

from .exceptions import (
    CustomerNotFoundError,
    InvalidCustomerError,
)
from .customer_management import (
    create_customer,
    get_customer,
    search_customers,
    adjust_credit,
)

__all__ = [
    # Exceptions
    'CustomerNotFoundError',
    'InvalidCustomerError',
    # Customer Management
    'create_customer',
    'get_customer',
    'search_customers',
    'adjust_credit',
]
