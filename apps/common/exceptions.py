"""
Error taxonomy shared by all bookkeeping apps.

Every domain error is a DRF ``APIException`` so views can let it propagate
and ``apps.common.handlers.api_exception_handler`` renders it. Each class
carries a machine-readable ``kind`` alongside DRF's ``default_code``:

- ``validation_error``: malformed or missing input, rejected before any write
- ``not_found``: unknown customer/product/sale id, rejected before any write
- ``auth_error``: missing or invalid credentials, rejected at the boundary
- ``persistence_failure``: storage unavailable or timed out
"""
from rest_framework.exceptions import APIException


class ServiceError(APIException):
    """Base exception for bookkeeping service errors."""
    status_code = 400
    default_detail = 'Request could not be processed.'
    default_code = 'service_error'
    kind = 'service_error'

    def __init__(self, detail=None, code=None, fields=None):
        super().__init__(detail=detail, code=code)
        self.fields = fields or {}


class ValidationError(ServiceError):
    """Malformed input, missing fields or bad enum values."""
    status_code = 400
    default_detail = 'Invalid input.'
    default_code = 'invalid'
    kind = 'validation_error'


class NotFoundError(ServiceError):
    """Referenced entity does not exist."""
    status_code = 404
    default_detail = 'Not found.'
    default_code = 'not_found'
    kind = 'not_found'


class AuthError(ServiceError):
    """Missing or invalid credential."""
    status_code = 403
    default_detail = 'Authentication credentials were not provided or are invalid.'
    default_code = 'auth_error'
    kind = 'auth_error'


class PersistenceFailure(ServiceError):
    """
    Storage was unavailable or timed out.

    ``committed`` tells the caller whether the write became durable; the
    failure is retryable, but retrying a committed write would apply it twice.
    """
    status_code = 503
    default_detail = 'Storage is temporarily unavailable.'
    default_code = 'persistence_failure'
    kind = 'persistence_failure'
    retryable = True

    def __init__(self, detail=None, code=None, committed=False):
        super().__init__(detail=detail, code=code)
        self.committed = committed
