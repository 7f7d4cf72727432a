from django.urls import path

from .views import CourseProgressView, ProgressListView, ProgressStatsView

urlpatterns = [
    path("", ProgressListView.as_view(), name="progress-list"),
    path("stats/", ProgressStatsView.as_view(), name="progress-stats"),
    path("course/<int:course_id>/", CourseProgressView.as_view(), name="progress-course"),
]
