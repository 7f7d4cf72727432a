"""
Startup Service
Read models for the jobs board and the one-application-per-job rule.
"""

import logging

from django.db import IntegrityError, transaction
from django.db.models import Count, Prefetch, Q

from project.exceptions import BadRequest, NotFound
from .models import JobApplication, JobListing, Startup

logger = logging.getLogger(__name__)


def _jobs_with_counts():
    return JobListing.objects.annotate(application_count=Count("applications"))


class StartupService:
    """Service for browsing startups and their job listings."""

    @staticmethod
    def partnered():
        return Startup.objects.filter(is_partnered=True).order_by("company_name")

    @staticmethod
    def with_active_jobs():
        return (
            Startup.objects.filter(job_listings__is_active=True)
            .distinct()
            .prefetch_related(Prefetch("job_listings", queryset=_jobs_with_counts()))
        )

    @staticmethod
    def get(startup_id):
        startup = (
            Startup.objects.filter(pk=startup_id)
            .prefetch_related(Prefetch("job_listings", queryset=_jobs_with_counts()))
            .first()
        )
        if startup is None:
            raise NotFound("Startup not found")
        return startup

    @staticmethod
    def jobs_by_type(job_type):
        return (
            _jobs_with_counts()
            .filter(job_type=job_type, is_active=True)
            .select_related("startup")
        )

    @staticmethod
    def search_jobs(query):
        """
        Active jobs whose own title or description matches, or whose
        startup's name or industry does. Case-insensitive substring match.
        """
        return (
            _jobs_with_counts()
            .filter(is_active=True)
            .filter(
                Q(title__icontains=query)
                | Q(description__icontains=query)
                | Q(startup__company_name__icontains=query)
                | Q(startup__industry__icontains=query)
            )
            .select_related("startup")
        )

    @staticmethod
    def apply(user, startup_id, job_id):
        startup = Startup.objects.filter(pk=startup_id).first()
        if startup is None:
            raise NotFound("Startup not found")

        job = startup.job_listings.filter(pk=job_id).first()
        if job is None:
            raise NotFound("Job not found")
        if not job.is_active:
            raise BadRequest("Job is not active")

        if JobApplication.objects.filter(job=job, user=user).exists():
            raise BadRequest("Already applied for this job")

        try:
            with transaction.atomic():
                application = JobApplication.objects.create(job=job, user=user)
        except IntegrityError as exc:
            raise BadRequest("Already applied for this job") from exc

        logger.info("User %s applied for job %s at startup %s", user.id, job.id, startup.id)
        return application

    @staticmethod
    def applications_for_user(user):
        return JobApplication.objects.filter(user=user).select_related("job__startup")

    @staticmethod
    def overview():
        return {
            "totalStartups": Startup.objects.count(),
            "partneredStartups": Startup.objects.filter(is_partnered=True).count(),
            "startupsWithJobs": Startup.objects.filter(job_listings__isnull=False)
            .distinct()
            .count(),
            "totalJobs": JobListing.objects.filter(is_active=True).count(),
            "totalApplications": JobApplication.objects.count(),
        }
