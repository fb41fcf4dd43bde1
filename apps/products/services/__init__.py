"""Services for product catalogue business logic."""

from .exceptions import (
    InvalidProductError,
    ProductNotFoundError,
)
from .pricing import (
    derive_price_per_kg,
    to_decimal,
)
from .product_management import (
    create_product,
    update_product,
    get_product,
    delete_product,
)

__all__ = [
    # Exceptions
    'InvalidProductError',
    'ProductNotFoundError',
    # Pricing
    'derive_price_per_kg',
    'to_decimal',
    # Product Management
    'create_product',
    'update_product',
    'get_product',
    'delete_product',
]
