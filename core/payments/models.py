from django.contrib.auth.models import User
from django.db import models

from courses.models import Course


class CoursePayment(models.Model):
    """
    One entry in a user's payment history.

    A user is entitled to a course once any of their payments for it has
    reached ``completed``.
    """

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        COMPLETED = "completed", "Completed"
        FAILED = "failed", "Failed"

    user = models.ForeignKey(User, related_name="course_payments", on_delete=models.CASCADE)
    course = models.ForeignKey(Course, related_name="payments", on_delete=models.PROTECT)
    amount = models.PositiveIntegerField(help_text="Amount charged in INR")
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.PENDING, db_index=True
    )
    razorpay_order_id = models.CharField(max_length=100, unique=True, null=True, blank=True)
    razorpay_payment_id = models.CharField(max_length=100, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "course", "status"], name="payment_user_course_status_idx"),
        ]

    def __str__(self):
        return f"{self.user.username} - {self.course.title} ({self.status})"
