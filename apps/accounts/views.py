from rest_framework import serializers
from rest_framework.decorators import api_view, permission_classes, authentication_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema
from .serializers import AdminSerializer, AdminLoginSerializer
from .services import authenticate_admin


# Response serializers for API documentation
class LoginResponseSerializer(serializers.Serializer):
    token = serializers.CharField(help_text="Access token for the Authorization header")
    refresh = serializers.CharField()
    admin = AdminSerializer()


class ErrorResponseSerializer(serializers.Serializer):
    kind = serializers.CharField()
    code = serializers.CharField()
    message = serializers.CharField()


@extend_schema(
    request=AdminLoginSerializer,
    responses={
        200: LoginResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
    },
    description="Authenticate an admin with mobile number and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def login(request):
    """Login with mobile number and password."""
    serializer = AdminLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    admin = authenticate_admin(**serializer.validated_data)

    refresh = RefreshToken.for_user(admin)

    return Response({
        'token': str(refresh.access_token),
        'refresh': str(refresh),
        'admin': AdminSerializer(admin).data,
    })
