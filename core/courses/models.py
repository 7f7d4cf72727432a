from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


def _default_price():
    return settings.DEFAULT_COURSE_PRICE


class Course(models.Model):
    """
    A purchasable video course. Every course sells for a flat fee.
    """

    title = models.CharField(max_length=200)
    price = models.PositiveIntegerField(default=_default_price, help_text="Price in INR")
    video_url = models.URLField(max_length=500)
    duration = models.PositiveIntegerField(
        validators=[MinValueValidator(1)], help_text="Length of the course video in minutes"
    )
    description = models.TextField(blank=True)
    category = models.CharField(max_length=100, blank=True, db_index=True)
    instructor = models.CharField(max_length=150, blank=True)
    thumbnail = models.CharField(max_length=500, blank=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.title} (₹{self.price})"

    @property
    def duration_display(self):
        """Human readable duration, e.g. '1 hour 30 minutes'."""
        hours, minutes = divmod(self.duration, 60)
        parts = []
        if hours:
            parts.append(f"{hours} hour{'s' if hours > 1 else ''}")
        if minutes:
            parts.append(f"{minutes} minute{'s' if minutes > 1 else ''}")
        return " ".join(parts)
