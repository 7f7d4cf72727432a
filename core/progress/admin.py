from django.contrib import admin

from .models import CourseProgress


@admin.register(CourseProgress)
class CourseProgressAdmin(admin.ModelAdmin):
    list_display = (
        "user",
        "course",
        "completion_percentage",
        "is_completed",
        "completed_at",
        "updated_at",
    )
    list_filter = ("is_completed",)
    search_fields = ("user__username", "user__email", "course__title")
    readonly_fields = ("watch_history", "created_at", "updated_at")
