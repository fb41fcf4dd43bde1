"""
Custom permission classes for admin-only access.

Every endpoint except login, health and API docs requires an active
admin principal identified by a bearer JWT.
"""
from rest_framework.permissions import BasePermission


class IsAdminPrincipal(BasePermission):
    """
    Allows access only to authenticated, active admins.

    Usage:
        class CustomerViewSet(viewsets.GenericViewSet):
            permission_classes = [IsAdminPrincipal]
    """

    message = 'Admin credentials are required.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_active)
