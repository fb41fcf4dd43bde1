"""
Domain exceptions for sales services.

This module defines the exception hierarchy for sale-recording errors.
Validation and lookup errors are raised before anything is written;
``SaleNotCommittedError`` reports a storage failure together with the
fact that nothing was committed.
"""
from apps.common.exceptions import NotFoundError, PersistenceFailure, ValidationError


class InvalidSaleError(ValidationError):
    """Raised when sale-level fields are missing or malformed."""
    default_detail = 'Invalid sale.'
    default_code = 'invalid_sale'


class InvalidLineItemError(ValidationError):
    """Raised when the product list is empty or a line item is invalid."""
    default_detail = 'Invalid line item.'
    default_code = 'invalid_line_item'


class IdempotencyConflictError(ValidationError):
    """Raised when an idempotency key is reused for another customer or a different sale."""
    default_detail = 'Idempotency key was already used for another sale.'
    default_code = 'idempotency_conflict'


class SaleNotFoundError(NotFoundError):
    """Sale record not found."""
    default_detail = 'Sale not found.'
    default_code = 'sale_not_found'


class SaleNotCommittedError(PersistenceFailure):
    """Storage failed while recording a sale; nothing was committed."""
    default_detail = 'The sale was not recorded because storage is unavailable. It is safe to retry.'
    default_code = 'sale_not_committed'
