from rest_framework import serializers

from .models import Course


class CourseSerializer(serializers.ModelSerializer):
    videoURL = serializers.CharField(source="video_url", read_only=True)
    isActive = serializers.BooleanField(source="is_active", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Course
        fields = [
            "id",
            "title",
            "price",
            "duration",
            "description",
            "category",
            "instructor",
            "thumbnail",
            "videoURL",
            "isActive",
            "createdAt",
        ]


class CourseSummarySerializer(serializers.ModelSerializer):
    """Catalog card: everything but the video itself."""

    class Meta:
        model = Course
        fields = [
            "id",
            "title",
            "price",
            "duration",
            "description",
            "category",
            "instructor",
            "thumbnail",
        ]


class CourseDisplaySerializer(serializers.ModelSerializer):
    """Fields used to enrich progress and certificate payloads."""

    class Meta:
        model = Course
        fields = ["id", "title", "thumbnail", "duration"]
