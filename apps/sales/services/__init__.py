"""Services for recording sales and keeping customer history in step."""

from .exceptions import (
    InvalidSaleError,
    InvalidLineItemError,
    IdempotencyConflictError,
    SaleNotFoundError,
    SaleNotCommittedError,
)
from .ledger import (
    record_sale,
    compute_total,
    sale_summary,
)
from .reconciliation import (
    rebuild_sales_history,
    find_history_drift,
)
from .sale_queries import (
    get_sale,
    list_sales,
)

__all__ = [
    # Exceptions
    'InvalidSaleError',
    'InvalidLineItemError',
    'IdempotencyConflictError',
    'SaleNotFoundError',
    'SaleNotCommittedError',
    # Ledger
    'record_sale',
    'compute_total',
    'sale_summary',
    # Reconciliation
    'rebuild_sales_history',
    'find_history_drift',
    # Queries
    'get_sale',
    'list_sales',
]
