from django.db import connection, DatabaseError
from django.http import JsonResponse
from rest_framework.decorators import api_view, permission_classes, authentication_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema


@extend_schema(responses={200: OpenApiTypes.OBJECT, 503: OpenApiTypes.OBJECT})
@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def health_check(request):
    """Liveness probe that also checks the database connection."""
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
    except DatabaseError:
        return Response({'status': 'unavailable', 'database': 'down'}, status=503)
    return Response({'status': 'ok', 'database': 'ok'})


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({
        'kind': 'not_found',
        'code': 'not_found',
        'message': 'Not found.',
    }, status=404)


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse({
        'kind': 'internal_error',
        'code': 'server_error',
        'message': 'Internal server error.',
    }, status=500)
