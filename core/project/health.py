import logging

from django.conf import settings
from django.core.cache import cache
from django.db import DatabaseError, connection
from redis.exceptions import RedisError
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

logger = logging.getLogger(__name__)

CACHE_CHECK_KEY = "careercycle:health"


def check_database():
    with connection.cursor() as cursor:
        cursor.execute("SELECT 1")


def check_cache():
    # Throttling state lives in the cache, so a broken cache breaks every view
    cache.set(CACHE_CHECK_KEY, "ok", 10)
    if cache.get(CACHE_CHECK_KEY) != "ok":
        raise RuntimeError("cache read/write mismatch")


def payment_gateway_status():
    """Course checkout needs both Razorpay keys; progress and certificates do not."""
    if settings.RAZORPAY_KEY_ID and settings.RAZORPAY_KEY_SECRET:
        return "configured"
    return "not configured"


class HealthCheckView(APIView):
    """
    Liveness for the load balancer.

    Database and cache failures make the service unhealthy (503). A missing
    payment configuration is reported but only disables checkout.
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        checks = {}
        healthy = True

        for name, check, errors in (
            ("database", check_database, (DatabaseError,)),
            ("cache", check_cache, (RuntimeError, RedisError, OSError)),
        ):
            try:
                check()
                checks[name] = "ok"
            except errors as exc:
                healthy = False
                checks[name] = f"error: {exc.__class__.__name__}"
                logger.error("Health check %s failed: %s", name, exc)

        checks["payments"] = payment_gateway_status()

        return Response(
            {
                "status": "healthy" if healthy else "unhealthy",
                "service": "careercycle-core",
                "checks": checks,
            },
            status=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        )
