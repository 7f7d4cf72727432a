"""
Progress Service
Owns every read and write of CourseProgress: entitlement checks, lazy
creation, the completion latch and the bounded watch history.
"""

import logging
import math

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Avg, Count, Q
from django.utils import timezone

from courses.models import Course
from payments.services import PaymentService
from project.exceptions import BadRequest, Conflict, Forbidden, NotFound
from .models import CourseProgress

logger = logging.getLogger(__name__)


def round_half_up(value):
    """Round a non-negative number to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


def append_watch_event(history, timestamp, position, limit):
    """
    Return ``history`` with a new checkpoint appended, keeping only the
    ``limit`` most recent entries (oldest dropped first).
    """
    entry = {"timestamp": timestamp.isoformat(), "position": position}
    return [*(history or []), entry][-limit:]


def _validate_number(name, value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise BadRequest(f"{name} must be a number")
    try:
        finite = math.isfinite(value)
    except OverflowError:
        finite = False
    if not finite:
        raise BadRequest(f"{name} must be a finite number")
    if value < 0:
        raise BadRequest(f"{name} must not be negative")


class ProgressService:
    """Service for reading and updating course watch progress."""

    COMPLETION_THRESHOLD = settings.COURSE_COMPLETION_THRESHOLD
    WATCH_HISTORY_LIMIT = settings.WATCH_HISTORY_LIMIT
    MAX_PERCENTAGE = 100

    @staticmethod
    def _fetch(user, course_id):
        return (
            CourseProgress.objects.select_related("course")
            .filter(user=user, course_id=course_id)
            .first()
        )

    @staticmethod
    def _ensure_entitled(user, course_id):
        if not PaymentService.has_purchased(user, course_id):
            logger.info("User %s denied access to course %s: not purchased", user.id, course_id)
            raise Forbidden("Course not purchased")

    @staticmethod
    def _create(user, course_id):
        """
        Insert a fresh record. The (user, course) unique constraint turns a
        racing second insert into Conflict.
        """
        try:
            with transaction.atomic():
                progress = CourseProgress.objects.create(
                    user=user,
                    course_id=course_id,
                    completion_percentage=0,
                    last_watched_position=0,
                    is_completed=False,
                    watch_history=[],
                )
        except IntegrityError as exc:
            raise Conflict("Progress record already exists for this course") from exc
        logger.info("Created progress record for user %s course %s", user.id, course_id)
        return progress

    @staticmethod
    def list_for_user(user):
        return (
            CourseProgress.objects.filter(user=user)
            .select_related("course")
            .order_by("-updated_at")
        )

    @staticmethod
    def get_or_create(user, course_id):
        """
        Return the user's record for the course, creating an empty one on
        first access. Creation requires a completed payment for the course.
        """
        progress = ProgressService._fetch(user, course_id)
        if progress is not None:
            return progress

        ProgressService._ensure_entitled(user, course_id)

        try:
            return ProgressService._create(user, course_id)
        except Conflict:
            # Another request created the record between our read and insert.
            progress = ProgressService._fetch(user, course_id)
            if progress is None:
                raise
            logger.info(
                "Concurrent progress creation for user %s course %s; using existing record",
                user.id,
                course_id,
            )
            return progress

    @staticmethod
    def update(user, course_id, position, completion_percentage):
        """
        Record a playback checkpoint.

        The stored percentage is the latest reported value capped at 100 (it
        can go down); ``is_completed`` latches the first time the percentage
        reaches the completion threshold.
        """
        _validate_number("position", position)
        _validate_number("completionPercentage", completion_percentage)

        ProgressService._ensure_entitled(user, course_id)
        course = Course.objects.filter(pk=course_id).first()
        if course is None:
            raise NotFound("Course not found")

        try:
            return ProgressService._apply_update(user, course, position, completion_percentage)
        except Conflict:
            logger.info(
                "Progress for user %s course %s created concurrently; retrying as update",
                user.id,
                course.id,
            )
            return ProgressService._apply_update(user, course, position, completion_percentage)

    @staticmethod
    def _apply_update(user, course, position, completion_percentage):
        now = timezone.now()
        try:
            with transaction.atomic():
                progress = (
                    CourseProgress.objects.select_for_update()
                    .filter(user=user, course=course)
                    .first()
                )
                if progress is None:
                    progress = CourseProgress(user=user, course=course)

                progress.last_watched_position = position
                progress.completion_percentage = min(
                    completion_percentage, ProgressService.MAX_PERCENTAGE
                )

                if (
                    progress.completion_percentage >= ProgressService.COMPLETION_THRESHOLD
                    and not progress.is_completed
                ):
                    progress.is_completed = True
                    progress.completed_at = now
                    logger.info(
                        "User %s completed course %s at %s%%",
                        user.id,
                        course.id,
                        progress.completion_percentage,
                    )

                progress.watch_history = append_watch_event(
                    progress.watch_history,
                    now,
                    position,
                    ProgressService.WATCH_HISTORY_LIMIT,
                )
                progress.save()
        except IntegrityError as exc:
            raise Conflict("Progress record already exists for this course") from exc

        return progress

    @staticmethod
    def reset(user, course_id):
        with transaction.atomic():
            progress = (
                CourseProgress.objects.select_for_update()
                .filter(user=user, course_id=course_id)
                .first()
            )
            if progress is None:
                raise NotFound("Progress not found")

            progress.completion_percentage = 0
            progress.last_watched_position = 0
            progress.is_completed = False
            progress.completed_at = None
            progress.watch_history = []
            progress.save()

        logger.info("Reset progress for user %s course %s", user.id, course_id)
        return progress

    @staticmethod
    def stats(user):
        totals = CourseProgress.objects.filter(user=user).aggregate(
            total=Count("id"),
            completed=Count("id", filter=Q(is_completed=True)),
            average=Avg("completion_percentage"),
        )
        total = totals["total"]
        completed = totals["completed"]
        average = totals["average"]

        return {
            "totalCourses": total,
            "completedCourses": completed,
            "inProgressCourses": total - completed,
            "averageProgress": round_half_up(average) if average is not None else 0,
            "completionRate": round_half_up(completed / total * 100) if total > 0 else 0,
        }
