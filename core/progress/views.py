from drf_spectacular.utils import OpenApiTypes, extend_schema, inline_serializer
from rest_framework import serializers, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from courses.utils import resolve_course_id
from .serializers import (
    CourseProgressSerializer,
    ProgressStatsSerializer,
    ProgressUpdateSerializer,
)
from .services import ProgressService


class ProgressListView(APIView):
    """All of the caller's progress records, most recently watched first."""

    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: CourseProgressSerializer(many=True)})
    def get(self, request):
        records = ProgressService.list_for_user(request.user)
        return Response(CourseProgressSerializer(records, many=True).data)


class ProgressStatsView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: ProgressStatsSerializer})
    def get(self, request):
        return Response(ProgressService.stats(request.user))


class CourseProgressView(APIView):
    """
    GET creates the record on first access (purchase required),
    PUT records a playback checkpoint, DELETE resets the record.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        responses={200: CourseProgressSerializer, 403: OpenApiTypes.OBJECT},
    )
    def get(self, request, course_id):
        progress = ProgressService.get_or_create(request.user, resolve_course_id(course_id))
        return Response(CourseProgressSerializer(progress).data)

    @extend_schema(
        request=ProgressUpdateSerializer,
        responses={
            200: CourseProgressSerializer,
            400: OpenApiTypes.OBJECT,
            403: OpenApiTypes.OBJECT,
            404: OpenApiTypes.OBJECT,
        },
    )
    def put(self, request, course_id):
        serializer = ProgressUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        progress = ProgressService.update(
            request.user,
            resolve_course_id(course_id),
            position=serializer.validated_data["position"],
            completion_percentage=serializer.validated_data["completionPercentage"],
        )
        return Response(CourseProgressSerializer(progress).data)

    @extend_schema(
        responses={
            200: inline_serializer(
                name="ProgressResetResponse",
                fields={"message": serializers.CharField()},
            ),
            404: OpenApiTypes.OBJECT,
        },
    )
    def delete(self, request, course_id):
        ProgressService.reset(request.user, resolve_course_id(course_id))
        return Response(
            {"message": "Progress reset successfully"}, status=status.HTTP_200_OK
        )
