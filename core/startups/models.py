from django.contrib.auth.models import User
from django.db import models


class Startup(models.Model):
    """A company on the jobs board. Partnered startups are featured on the landing page."""

    company_name = models.CharField(max_length=200)
    description = models.TextField()
    logo = models.CharField(max_length=500, blank=True)
    website = models.URLField(max_length=500, blank=True)
    industry = models.CharField(max_length=120, blank=True, db_index=True)
    founded_year = models.PositiveSmallIntegerField(null=True, blank=True)
    team_size = models.CharField(max_length=50, blank=True, help_text="e.g. '11-50'")
    location = models.CharField(max_length=150, blank=True)
    is_partnered = models.BooleanField(default=False, db_index=True)
    contact_email = models.EmailField(blank=True)
    contact_phone = models.CharField(max_length=20, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["company_name"]

    def __str__(self):
        return self.company_name


class JobListing(models.Model):
    class JobType(models.TextChoices):
        FULL_TIME = "full-time", "Full time"
        PART_TIME = "part-time", "Part time"
        INTERNSHIP = "internship", "Internship"

    startup = models.ForeignKey(Startup, related_name="job_listings", on_delete=models.CASCADE)
    title = models.CharField(max_length=200)
    description = models.TextField()
    job_type = models.CharField(max_length=20, choices=JobType.choices)
    location = models.CharField(max_length=150, blank=True)
    salary_min = models.PositiveIntegerField(null=True, blank=True)
    salary_max = models.PositiveIntegerField(null=True, blank=True)
    salary_currency = models.CharField(max_length=3, default="INR")
    requirements = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["startup__company_name", "title"]

    def __str__(self):
        return f"{self.title} @ {self.startup.company_name}"


class JobApplication(models.Model):
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        REVIEWED = "reviewed", "Reviewed"
        ACCEPTED = "accepted", "Accepted"
        REJECTED = "rejected", "Rejected"

    job = models.ForeignKey(JobListing, related_name="applications", on_delete=models.CASCADE)
    user = models.ForeignKey(User, related_name="job_applications", on_delete=models.CASCADE)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    applied_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-applied_at"]
        constraints = [
            models.UniqueConstraint(fields=["job", "user"], name="unique_application_per_user_job"),
        ]

    def __str__(self):
        return f"{self.user.username} -> {self.job.title} ({self.status})"
