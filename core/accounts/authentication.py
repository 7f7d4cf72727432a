from rest_framework import authentication, exceptions
from django.contrib.auth.models import User
from drf_spectacular.extensions import OpenApiAuthenticationExtension

from .utils import ACCESS_TOKEN_TYPE, decode_token


class JWTAuthentication(authentication.BaseAuthentication):
    """
    JWT bearer authentication for Django REST Framework.

    Configured once in ``REST_FRAMEWORK["DEFAULT_AUTHENTICATION_CLASSES"]`` so
    every API view shares the same identity check. Verifies the
    'Authorization: Bearer <token>' header, decodes the JWT, and ensures the
    associated user is valid and active.
    """

    keyword = "bearer"

    def authenticate(self, request):
        auth_header = request.headers.get("Authorization")
        if not auth_header:
            # No credentials: let the permission layer answer 401
            return None

        try:
            prefix, token = auth_header.split(" ")
        except ValueError:
            raise exceptions.AuthenticationFailed("Malformed Authorization header")

        if prefix.lower() != self.keyword:
            return None

        # Decode and validate the token signature and expiration
        payload = decode_token(token)
        if not payload:
            raise exceptions.AuthenticationFailed("Invalid or expired token")

        # Refresh tokens must not be usable as access tokens
        if payload.get("type") != ACCESS_TOKEN_TYPE:
            raise exceptions.AuthenticationFailed("Invalid token type")

        try:
            user = User.objects.select_related("profile").get(id=payload["user_id"])
        except (User.DoesNotExist, KeyError):
            raise exceptions.AuthenticationFailed("User not found")

        if not user.is_active:
            raise exceptions.AuthenticationFailed("User account is disabled.")

        return (user, token)

    def authenticate_header(self, request):
        return "Bearer"


class JWTAuthenticationScheme(OpenApiAuthenticationExtension):
    # OpenAPI schema adapter for the JWT authentication class

    target_class = "accounts.authentication.JWTAuthentication"
    name = "JWTAuth"  # Name shown in Swagger's Authorize dialog

    def get_security_definition(self, auto_schema):
        return {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }
