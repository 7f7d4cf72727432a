from django.contrib.auth.models import User
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from courses.models import Course


class CourseProgress(models.Model):
    """
    Watch progress of one user on one course.

    At most one row exists per (user, course); the unique constraint is what
    makes lazy creation safe under concurrent requests.
    ``is_completed`` is a latch: set once the completion threshold is reached
    and only cleared by an explicit reset.
    """

    user = models.ForeignKey(
        User, related_name="course_progress", on_delete=models.CASCADE
    )
    course = models.ForeignKey(
        Course, related_name="progress_records", on_delete=models.CASCADE
    )
    completion_percentage = models.FloatField(
        default=0, validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    last_watched_position = models.FloatField(
        default=0,
        validators=[MinValueValidator(0)],
        help_text="Seconds into the course video",
    )
    is_completed = models.BooleanField(default=False)
    completed_at = models.DateTimeField(null=True, blank=True)
    watch_history = models.JSONField(
        default=list,
        blank=True,
        help_text="Most recent playback checkpoints: [{timestamp, position}]",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-updated_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "course"], name="unique_progress_per_user_course"
            ),
        ]

    def __str__(self):
        return f"Progress: {self.user.username} - {self.course.title} ({self.completion_percentage:g}%)"
