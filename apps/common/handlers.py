"""DRF exception handler rendering every API error in one shape."""
import logging

from django.core.exceptions import PermissionDenied
from django.http import Http404
from rest_framework import exceptions
from rest_framework.views import exception_handler

from .exceptions import ServiceError

logger = logging.getLogger(__name__)


def _kind_for(exc):
    if isinstance(exc, ServiceError):
        return exc.kind
    if isinstance(exc, exceptions.ValidationError):
        return 'validation_error'
    if isinstance(exc, (
        exceptions.NotAuthenticated,
        exceptions.AuthenticationFailed,
        exceptions.PermissionDenied,
        PermissionDenied,
    )):
        return 'auth_error'
    if isinstance(exc, (exceptions.NotFound, Http404)):
        return 'not_found'
    return 'error'


def _message_for(exc, response):
    if isinstance(exc, exceptions.ValidationError):
        return 'Invalid input.'
    detail = getattr(exc, 'detail', None)
    if isinstance(detail, (list, dict)):
        return str(exc)
    if detail is not None:
        return str(detail)
    return str(response.data.get('detail', exc))


def _code_for(exc):
    if isinstance(exc, exceptions.APIException):
        codes = exc.get_codes()
        if isinstance(codes, str):
            return codes
        return exc.default_code
    if isinstance(exc, PermissionDenied):
        return 'permission_denied'
    return 'not_found'


def api_exception_handler(exc, context):
    """
    Render errors as ``{kind, code, message, fields?, committed?, retryable?}``.

    Exceptions DRF does not know about are left to propagate (Django's 500
    handler answers them), so nothing is swallowed here.
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    body = {
        'kind': _kind_for(exc),
        'code': _code_for(exc),
        'message': _message_for(exc, response),
    }

    if isinstance(exc, exceptions.ValidationError):
        body['fields'] = response.data
    elif isinstance(exc, ServiceError) and exc.fields:
        body['fields'] = exc.fields

    if hasattr(exc, 'committed'):
        body['committed'] = exc.committed
        body['retryable'] = exc.retryable

    if response.status_code >= 500:
        logger.warning('API error %s: %s', body['code'], body['message'])

    response.data = body
    return response
