"""
Bearer JWT authentication for admin principals.

DRF answers a failed authentication with 401 only when the authenticator
advertises a ``WWW-Authenticate`` challenge. Returning no challenge makes
missing or invalid credentials come back as 403.
"""
from rest_framework_simplejwt.authentication import JWTAuthentication


class AdminJWTAuthentication(JWTAuthentication):
    """simplejwt authentication that rejects with 403 instead of 401."""

    def authenticate_header(self, request):
        return None
