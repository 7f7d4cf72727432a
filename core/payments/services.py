"""
Payment Service
Course purchases through Razorpay and the entitlement check built on them.
"""

import logging

from django.conf import settings
from django.db import transaction

from courses.models import Course
from project.exceptions import BadRequest, Forbidden, NotFound, ServiceUnavailable
from . import gateway
from .models import CoursePayment

logger = logging.getLogger(__name__)


class PaymentService:
    """Service for course orders, payment verification and entitlement."""

    @staticmethod
    def has_purchased(user, course_id):
        """True when the user holds a completed payment for the course."""
        return CoursePayment.objects.filter(
            user=user,
            course_id=course_id,
            status=CoursePayment.Status.COMPLETED,
        ).exists()

    @staticmethod
    def purchase_status(user, course_id):
        if PaymentService.has_purchased(user, course_id):
            return {"purchased": True, "status": CoursePayment.Status.COMPLETED.value}

        latest = (
            CoursePayment.objects.filter(user=user, course_id=course_id)
            .order_by("-created_at", "-id")
            .first()
        )
        return {
            "purchased": False,
            "status": latest.status if latest else "not_purchased",
        }

    @staticmethod
    def history(user):
        return CoursePayment.objects.filter(user=user).select_related("course")

    @staticmethod
    def create_order(user, course_id):
        course = Course.objects.filter(pk=course_id, is_active=True).first()
        if course is None:
            raise NotFound("Course not found")

        if PaymentService.has_purchased(user, course.id):
            raise BadRequest("Course already purchased")

        # Amount in Paise
        amount = course.price * 100
        try:
            order = gateway.create_order(
                amount=amount,
                currency=settings.PAYMENT_CURRENCY,
                receipt=f"course_{course.id}_{user.id}",
                # Razorpay expects notes values as strings.
                notes={
                    "course_id": str(course.id),
                    "user_id": str(user.id),
                    "course_title": course.title[:200],
                },
            )
        except gateway.GatewayNotConfigured as exc:
            raise ServiceUnavailable("Payment service is unavailable (Razorpay keys missing)") from exc
        except gateway.OrderRejected as exc:
            logger.warning("Razorpay rejected order for course %s: %s", course.id, exc)
            raise BadRequest("Payment provider rejected the order request") from exc
        except gateway.GatewayError as exc:
            logger.error("Razorpay order creation failed for course %s: %s", course.id, exc)
            raise ServiceUnavailable("Payment service is temporarily unavailable") from exc

        CoursePayment.objects.create(
            user=user,
            course=course,
            amount=course.price,
            razorpay_order_id=order["id"],
            status=CoursePayment.Status.PENDING,
        )
        logger.info("Created order %s for user %s course %s", order["id"], user.id, course.id)

        return {
            "orderId": order["id"],
            "amount": order.get("amount", amount),
            "currency": order.get("currency", settings.PAYMENT_CURRENCY),
            "key": settings.RAZORPAY_KEY_ID,
            "course": {"id": course.id, "title": course.title, "price": course.price},
        }

    @staticmethod
    def verify_payment(user, order_id, payment_id, signature, course_id):
        try:
            valid = gateway.verify_payment_signature(order_id, payment_id, signature)
        except gateway.GatewayNotConfigured as exc:
            raise ServiceUnavailable("Payment service is temporarily unavailable") from exc

        if not valid:
            logger.warning("Invalid payment signature for order %s (user %s)", order_id, user.id)
            CoursePayment.objects.filter(
                razorpay_order_id=order_id,
                user=user,
                status=CoursePayment.Status.PENDING,
            ).update(status=CoursePayment.Status.FAILED)
            raise BadRequest("Invalid payment signature")

        with transaction.atomic():
            payment = (
                CoursePayment.objects.select_for_update()
                .select_related("course")
                .filter(razorpay_order_id=order_id)
                .first()
            )
            if payment is None:
                raise NotFound("Order not found")
            if payment.user_id != user.id:
                raise Forbidden("Order does not belong to authenticated user")
            if payment.course_id != course_id:
                raise BadRequest("Order does not match the requested course")

            already_processed = payment.status == CoursePayment.Status.COMPLETED
            if not already_processed:
                payment.razorpay_payment_id = payment_id
                payment.status = CoursePayment.Status.COMPLETED
                payment.save(update_fields=["razorpay_payment_id", "status", "updated_at"])
                logger.info(
                    "Payment verified for order %s, user %s entitled to course %s",
                    order_id,
                    user.id,
                    payment.course_id,
                )

        course = payment.course
        return {
            "message": "Payment already processed" if already_processed else "Payment verified successfully",
            "course": {"id": course.id, "title": course.title, "price": course.price},
        }
