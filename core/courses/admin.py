from django.contrib import admin

from .models import Course


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ("title", "category", "instructor", "price", "duration", "is_active")
    list_filter = ("is_active", "category")
    search_fields = ("title", "description", "instructor")
