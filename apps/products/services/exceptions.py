"""Domain-specific exceptions for product services."""
from apps.common.exceptions import NotFoundError, ValidationError


class InvalidProductError(ValidationError):
    """Raised when product pricing cannot be derived."""
    default_detail = 'Invalid product.'
    default_code = 'invalid_product'


class ProductNotFoundError(NotFoundError):
    """Raised when product does not exist."""
    default_detail = 'Product not found.'
    default_code = 'product_not_found'
