import math

from rest_framework import serializers

from courses.serializers import CourseDisplaySerializer
from .models import CourseProgress


class StrictNumberField(serializers.Field):
    """
    A JSON number and nothing else: strings, booleans and non-finite values
    are rejected instead of coerced.
    """

    default_error_messages = {
        "invalid": "Must be a number.",
        "not_finite": "Must be a finite number.",
        "min_value": "Must not be negative.",
    }

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            self.fail("invalid")
        try:
            finite = math.isfinite(data)
        except OverflowError:
            # Integers too large for a float
            finite = False
        if not finite:
            self.fail("not_finite")
        if data < 0:
            self.fail("min_value")
        return data

    def to_representation(self, value):
        return value


class ProgressUpdateSerializer(serializers.Serializer):
    position = StrictNumberField(help_text="Seconds into the course video")
    completionPercentage = StrictNumberField(
        help_text="Percentage watched; values above 100 are capped"
    )


class WatchEventSerializer(serializers.Serializer):
    timestamp = serializers.CharField()
    position = serializers.FloatField()


class CourseProgressSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source="user_id", read_only=True)
    course = CourseDisplaySerializer(read_only=True)
    completionPercentage = serializers.FloatField(source="completion_percentage")
    lastWatchedPosition = serializers.FloatField(source="last_watched_position")
    isCompleted = serializers.BooleanField(source="is_completed")
    completedAt = serializers.DateTimeField(source="completed_at", allow_null=True)
    watchHistory = WatchEventSerializer(source="watch_history", many=True)
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")

    class Meta:
        model = CourseProgress
        fields = [
            "id",
            "userId",
            "course",
            "completionPercentage",
            "lastWatchedPosition",
            "isCompleted",
            "completedAt",
            "watchHistory",
            "createdAt",
            "updatedAt",
        ]


class ProgressStatsSerializer(serializers.Serializer):
    totalCourses = serializers.IntegerField()
    completedCourses = serializers.IntegerField()
    inProgressCourses = serializers.IntegerField()
    averageProgress = serializers.IntegerField()
    completionRate = serializers.IntegerField()
