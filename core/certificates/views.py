import logging

from django.http import HttpResponse
from drf_spectacular.utils import OpenApiResponse, OpenApiTypes, extend_schema
from rest_framework import decorators, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.throttles import CertificateRateThrottle
from courses.utils import resolve_course_id
from .renderer import render_certificate_pdf
from .serializers import (
    CertificatePreviewSerializer,
    CertificateStatsSerializer,
    EligibilitySerializer,
    EligibleCertificateSerializer,
)
from .services import CertificateService

logger = logging.getLogger(__name__)

COURSE_ID_PATTERN = r"(?P<course_id>\d+)"


class CertificateViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: EligibilitySerializer})
    @decorators.action(detail=False, methods=["get"], url_path=f"eligibility/{COURSE_ID_PATTERN}")
    def eligibility(self, request, course_id=None):
        return Response(
            CertificateService.get_eligibility_status(request.user, resolve_course_id(course_id))
        )

    @extend_schema(responses={200: EligibleCertificateSerializer(many=True)})
    @decorators.action(detail=False, methods=["get"])
    def eligible(self, request):
        certificates = CertificateService.get_eligible_certificates(request.user)
        return Response(EligibleCertificateSerializer(certificates, many=True).data)

    @extend_schema(
        responses={
            200: CertificatePreviewSerializer,
            400: OpenApiTypes.OBJECT,
            404: OpenApiTypes.OBJECT,
        }
    )
    @decorators.action(detail=False, methods=["get"], url_path=f"preview/{COURSE_ID_PATTERN}")
    def preview(self, request, course_id=None):
        return Response(
            CertificateService.get_certificate_data(request.user, resolve_course_id(course_id))
        )

    @extend_schema(
        responses={
            (200, "application/pdf"): OpenApiResponse(response=OpenApiTypes.BINARY),
            400: OpenApiTypes.OBJECT,
            404: OpenApiTypes.OBJECT,
        }
    )
    @decorators.action(
        detail=False,
        methods=["get"],
        url_path=f"generate/{COURSE_ID_PATTERN}",
        throttle_classes=[CertificateRateThrottle],
    )
    def generate(self, request, course_id=None):
        # Eligibility is checked here, in the same request, before rendering.
        certificate = CertificateService.get_certificate_data(
            request.user, resolve_course_id(course_id)
        )
        pdf = render_certificate_pdf(certificate)
        logger.info(
            "Rendered certificate %s (%d bytes) for user %s",
            certificate["certificateId"],
            len(pdf),
            request.user.id,
        )

        response = HttpResponse(pdf, content_type="application/pdf")
        response["Content-Disposition"] = f'attachment; filename="certificate_{course_id}.pdf"'
        return response

    @extend_schema(responses={200: CertificateStatsSerializer})
    @decorators.action(detail=False, methods=["get"])
    def stats(self, request):
        return Response(CertificateService.get_stats(request.user))
