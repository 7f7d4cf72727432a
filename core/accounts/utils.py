import jwt

from datetime import datetime, timedelta, timezone
from django.conf import settings

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def _encode(payload):
    return jwt.encode(
        payload, settings.JWT_PRIVATE_KEY, algorithm=settings.JWT_ALGORITHM
    )


def generate_access_token(user):
    """
    Generate a short-lived JWT access token.
    Contains user identity (id, email) but no sensitive data.
    """
    now = datetime.now(timezone.utc)
    payload = {
        "user_id": user.id,
        "email": user.email,
        "exp": now + timedelta(seconds=settings.JWT_ACCESS_TOKEN_LIFETIME),
        "iat": now,
        "type": ACCESS_TOKEN_TYPE,
    }
    return _encode(payload)


def generate_refresh_token(user):
    """
    Generate a long-lived JWT refresh token.
    Used to obtain new access tokens without re-login.
    """
    now = datetime.now(timezone.utc)
    payload = {
        "user_id": user.id,
        "exp": now + timedelta(seconds=settings.JWT_REFRESH_TOKEN_LIFETIME),
        "iat": now,
        "type": REFRESH_TOKEN_TYPE,
    }
    return _encode(payload)


def decode_token(token):
    """
    Decode and validate a JWT token.
    Returns the payload dict if valid, or None if expired/invalid.
    """
    try:
        return jwt.decode(
            token, settings.JWT_PUBLIC_KEY, algorithms=[settings.JWT_ALGORITHM]
        )
    except jwt.InvalidTokenError:
        return None


def generate_tokens(user):
    """Helper to generate both access and refresh tokens for a user."""
    return {
        "access_token": generate_access_token(user),
        "refresh_token": generate_refresh_token(user),
    }
