"""
Custom throttle classes for rate limiting different types of operations.

Rates are configured in settings.REST_FRAMEWORK['DEFAULT_THROTTLE_RATES'].
"""

from rest_framework.throttling import SimpleRateThrottle


class AuthRateThrottle(SimpleRateThrottle):
    """
    Strict throttle for authentication endpoints (login, register).
    Keyed by client IP since the caller is not authenticated yet.
    """
    scope = "auth"

    def get_cache_key(self, request, view):
        return self.cache_format % {
            "scope": self.scope,
            "ident": self.get_ident(request)
        }


class _UserScopedThrottle(SimpleRateThrottle):
    def get_cache_key(self, request, view):
        if request.user.is_authenticated:
            ident = request.user.pk
        else:
            ident = self.get_ident(request)

        return self.cache_format % {
            "scope": self.scope,
            "ident": ident
        }


class PaymentRateThrottle(_UserScopedThrottle):
    """Throttle for order creation and verification."""
    scope = "payments"


class CertificateRateThrottle(_UserScopedThrottle):
    """Throttle for certificate PDF rendering, which is CPU bound."""
    scope = "certificates"
