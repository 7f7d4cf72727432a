"""
Certificate Service
Eligibility and certificate data derived from course progress.

Nothing here is persisted: a certificate id is a fresh token on every
preview or download, not a registry entry.
"""

import logging
import uuid

from django.db.models import Avg, Count, Q
from django.utils import timezone

from progress.models import CourseProgress
from progress.services import ProgressService, round_half_up
from project.exceptions import BadRequest, NotFound

logger = logging.getLogger(__name__)


def format_completion_date(day):
    """'October 9, 2026' style, without a zero-padded day."""
    return f"{day:%B} {day.day}, {day.year}"


def student_name(user):
    profile = getattr(user, "profile", None)
    if profile is not None:
        return profile.display_name
    return user.get_full_name() or user.username


class CertificateService:
    """Service for certificate eligibility and certificate payloads."""

    REQUIRED_PROGRESS = ProgressService.COMPLETION_THRESHOLD

    @staticmethod
    def is_eligible(progress):
        return (
            progress is not None
            and progress.completion_percentage >= CertificateService.REQUIRED_PROGRESS
        )

    @staticmethod
    def _get_progress(user, course_id):
        return (
            CourseProgress.objects.select_related("course", "user__profile")
            .filter(user=user, course_id=course_id)
            .first()
        )

    @staticmethod
    def get_eligibility_status(user, course_id):
        progress = CertificateService._get_progress(user, course_id)
        required = CertificateService.REQUIRED_PROGRESS

        if progress is None:
            return {
                "eligible": False,
                "message": "No progress found for this course",
                "currentProgress": 0,
                "requiredProgress": required,
                "course": None,
            }

        eligible = CertificateService.is_eligible(progress)
        return {
            "eligible": eligible,
            "message": (
                "Certificate can be generated"
                if eligible
                else f"Course must be at least {required}% complete"
            ),
            "currentProgress": progress.completion_percentage,
            "requiredProgress": required,
            "course": {
                "title": progress.course.title,
                "duration": progress.course.duration,
            },
        }

    @staticmethod
    def get_certificate_data(user, course_id):
        """
        Certificate payload for an eligible course.

        Raises NotFound without a progress record and BadRequest below the
        completion threshold.
        """
        progress = CertificateService._get_progress(user, course_id)
        if progress is None:
            raise NotFound("Progress not found")

        if not CertificateService.is_eligible(progress):
            raise BadRequest(
                f"Course must be at least {CertificateService.REQUIRED_PROGRESS}% complete",
                currentProgress=progress.completion_percentage,
            )

        data = {
            "studentName": student_name(progress.user),
            "courseName": progress.course.title,
            "completionDate": format_completion_date(timezone.localdate()),
            "certificateId": str(uuid.uuid4()),
            "completionPercentage": progress.completion_percentage,
            "courseDuration": progress.course.duration,
        }
        logger.info(
            "Issued certificate %s for user %s course %s",
            data["certificateId"],
            user.id,
            course_id,
        )
        return data

    @staticmethod
    def get_eligible_certificates(user):
        eligible = (
            CourseProgress.objects.filter(
                user=user,
                completion_percentage__gte=CertificateService.REQUIRED_PROGRESS,
            )
            .select_related("course")
            .order_by("-completion_percentage", "-updated_at")
        )
        return [
            {
                "courseId": progress.course_id,
                "courseTitle": progress.course.title,
                "completionPercentage": progress.completion_percentage,
                "completedAt": progress.completed_at,
                "duration": progress.course.duration,
                "thumbnail": progress.course.thumbnail,
            }
            for progress in eligible
        ]

    @staticmethod
    def get_stats(user):
        totals = CourseProgress.objects.filter(user=user).aggregate(
            eligible=Count(
                "id",
                filter=Q(completion_percentage__gte=CertificateService.REQUIRED_PROGRESS),
            ),
            completed=Count("id", filter=Q(is_completed=True)),
            average=Avg("completion_percentage"),
        )
        average = totals["average"]
        return {
            "totalEligibleCertificates": totals["eligible"],
            "totalCompletedCourses": totals["completed"],
            "averageCompletionRate": round_half_up(average) if average is not None else 0,
        }
