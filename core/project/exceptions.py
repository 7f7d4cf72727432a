"""
API error taxonomy and the project-wide DRF exception handler.

Every error response carries a short human readable ``error`` string.
Validation failures add ``details`` with per-field messages; unexpected
failures are logged with a reference id that is echoed to the caller instead
of any internal detail.
"""

import logging
import uuid

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class _ExtraPayloadMixin:
    """Lets an error carry additional top-level fields into the response body."""

    def __init__(self, detail=None, code=None, **extra):
        super().__init__(detail=detail, code=code)
        self.extra = extra


class BadRequest(_ExtraPayloadMixin, exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request."
    default_code = "bad_request"


class Forbidden(_ExtraPayloadMixin, exceptions.PermissionDenied):
    default_detail = "You do not have access to this resource."


class NotFound(_ExtraPayloadMixin, exceptions.NotFound):
    pass


class Conflict(_ExtraPayloadMixin, exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "The resource was modified concurrently."
    default_code = "conflict"


class ServiceUnavailable(_ExtraPayloadMixin, exceptions.APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Service temporarily unavailable."
    default_code = "service_unavailable"


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)

    if response is None:
        reference = uuid.uuid4().hex[:12]
        view = context.get("view")
        logger.error(
            "Unhandled error [ref=%s] in %s",
            reference,
            view.__class__.__name__ if view else "unknown view",
            exc_info=exc,
        )
        return Response(
            {"error": "Internal server error", "reference": reference},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, exceptions.ValidationError):
        response.data = {"error": "Invalid request data", "details": response.data}
        return response

    data = response.data
    if isinstance(data, dict) and "detail" in data:
        message = str(data["detail"])
    else:
        message = str(data)
    body = {"error": message}
    body.update(getattr(exc, "extra", {}))
    response.data = body
    return response
