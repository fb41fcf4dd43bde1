from rest_framework import serializers
from .models import Admin


class AdminSerializer(serializers.ModelSerializer):
    """Admin profile returned after login."""

    displayName = serializers.CharField(source='display_name', read_only=True)
    lastLogin = serializers.DateTimeField(source='last_login', read_only=True)

    class Meta:
        model = Admin
        fields = ['id', 'mobile', 'displayName', 'lastLogin']
        read_only_fields = fields


class AdminLoginSerializer(serializers.Serializer):
    """Credentials for admin login."""

    mobile = serializers.CharField(required=True, max_length=20)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )
