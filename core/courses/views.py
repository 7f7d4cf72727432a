from django.db.models import Q
from drf_spectacular.utils import OpenApiParameter, extend_schema, inline_serializer
from rest_framework import decorators, serializers, viewsets
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from .models import Course
from .utils import resolve_course_id
from .serializers import CourseSerializer, CourseSummarySerializer

FEATURED_DEFAULT_LIMIT = 6
FEATURED_MAX_LIMIT = 50


class CourseViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Public course catalog. Only active courses are listed or retrievable.
    """

    permission_classes = [AllowAny]
    lookup_value_regex = r"\d+"

    def get_queryset(self):
        queryset = Course.objects.filter(is_active=True)
        if self.action != "list":
            return queryset

        search = self.request.query_params.get("search", "").strip()
        if search:
            queryset = queryset.filter(
                Q(title__icontains=search)
                | Q(description__icontains=search)
                | Q(category__icontains=search)
                | Q(instructor__icontains=search)
            )

        category = self.request.query_params.get("category", "").strip()
        if category:
            queryset = queryset.filter(category__icontains=category)
        return queryset

    def get_object(self):
        resolve_course_id(self.kwargs[self.lookup_field])
        return super().get_object()

    def get_serializer_class(self):
        if self.action == "retrieve":
            return CourseSerializer
        return CourseSummarySerializer

    @extend_schema(
        parameters=[
            OpenApiParameter("search", str, description="Match title, description, category or instructor"),
            OpenApiParameter("category", str),
        ]
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(
        parameters=[OpenApiParameter("limit", int, description="Number of courses (default 6)")],
        responses={200: CourseSummarySerializer(many=True)},
    )
    @decorators.action(detail=False, methods=["get"])
    def featured(self, request):
        try:
            limit = int(request.query_params.get("limit", FEATURED_DEFAULT_LIMIT))
        except ValueError:
            limit = FEATURED_DEFAULT_LIMIT
        limit = max(1, min(limit, FEATURED_MAX_LIMIT))

        courses = self.get_queryset().order_by("-created_at")[:limit]
        return Response(CourseSummarySerializer(courses, many=True).data)

    @extend_schema(
        responses={
            200: inline_serializer(
                name="CourseDurationResponse",
                fields={
                    "duration": serializers.CharField(),
                    "minutes": serializers.IntegerField(),
                },
            )
        }
    )
    @decorators.action(detail=True, methods=["get"])
    def duration(self, request, pk=None):
        course = self.get_object()
        return Response({"duration": course.duration_display, "minutes": course.duration})
