from drf_spectacular.utils import OpenApiTypes, extend_schema, inline_serializer
from rest_framework import decorators, serializers, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from project.ids import resolve_id
from .serializers import (
    JobApplicationSerializer,
    JobSummarySerializer,
    StartupDetailSerializer,
    StartupOverviewSerializer,
    StartupSummarySerializer,
    StartupWithJobsSerializer,
)
from .services import StartupService


class StartupViewSet(viewsets.GenericViewSet):
    """
    Jobs board. Browsing is public; applying and listing your own
    applications require a signed-in user, who is always the applicant.
    """

    permission_classes = [AllowAny]
    serializer_class = StartupDetailSerializer
    lookup_value_regex = r"\d+"

    @extend_schema(responses={200: StartupDetailSerializer, 404: OpenApiTypes.OBJECT})
    def retrieve(self, request, pk=None):
        startup = StartupService.get(resolve_id(pk, "Startup not found"))
        return Response(StartupDetailSerializer(startup).data)

    @extend_schema(responses={200: StartupSummarySerializer(many=True)})
    @decorators.action(detail=False, methods=["get"])
    def partnered(self, request):
        return Response(StartupSummarySerializer(StartupService.partnered(), many=True).data)

    @extend_schema(responses={200: StartupWithJobsSerializer(many=True)})
    @decorators.action(detail=False, methods=["get"], url_path="with-jobs")
    def with_jobs(self, request):
        startups = StartupService.with_active_jobs()
        return Response(StartupWithJobsSerializer(startups, many=True).data)

    @extend_schema(responses={200: JobSummarySerializer(many=True)})
    @decorators.action(
        detail=False, methods=["get"], url_path=r"jobs/category/(?P<category>[^/]+)"
    )
    def jobs_by_category(self, request, category=None):
        jobs = StartupService.jobs_by_type(category)
        return Response(JobSummarySerializer(jobs, many=True).data)

    @extend_schema(responses={200: JobSummarySerializer(many=True)})
    @decorators.action(detail=False, methods=["get"], url_path=r"jobs/search/(?P<query>[^/]+)")
    def search_jobs(self, request, query=None):
        jobs = StartupService.search_jobs(query.strip())
        return Response(JobSummarySerializer(jobs, many=True).data)

    @extend_schema(
        request=None,
        responses={
            200: inline_serializer(
                name="JobApplyResponse",
                fields={"message": serializers.CharField()},
            ),
            400: OpenApiTypes.OBJECT,
            404: OpenApiTypes.OBJECT,
        },
    )
    @decorators.action(
        detail=False,
        methods=["post"],
        url_path=r"jobs/(?P<startup_id>\d+)/(?P<job_id>\d+)/apply",
        permission_classes=[IsAuthenticated],
    )
    def apply(self, request, startup_id=None, job_id=None):
        StartupService.apply(
            request.user,
            resolve_id(startup_id, "Startup not found"),
            resolve_id(job_id, "Job not found"),
        )
        return Response({"message": "Application submitted successfully"})

    @extend_schema(responses={200: JobApplicationSerializer(many=True)})
    @decorators.action(detail=False, methods=["get"], permission_classes=[IsAuthenticated])
    def applications(self, request):
        applications = StartupService.applications_for_user(request.user)
        return Response(JobApplicationSerializer(applications, many=True).data)

    @extend_schema(responses={200: StartupOverviewSerializer})
    @decorators.action(detail=False, methods=["get"], url_path="stats/overview")
    def overview(self, request):
        return Response(StartupService.overview())
