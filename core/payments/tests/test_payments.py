import hmac
from hashlib import sha256
from unittest.mock import patch

import razorpay
import requests
from django.contrib.auth.models import User
from django.core.cache import cache
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from courses.models import Course
from payments import gateway
from payments.models import CoursePayment
from payments.services import PaymentService
from project.exceptions import BadRequest, ServiceUnavailable

KEY_ID = "rzp_test_key"
KEY_SECRET = "rzp_test_secret"


def sign(order_id, payment_id, secret=KEY_SECRET):
    return hmac.new(
        secret.encode("utf-8"), f"{order_id}|{payment_id}".encode("utf-8"), sha256
    ).hexdigest()


@override_settings(RAZORPAY_KEY_ID=KEY_ID, RAZORPAY_KEY_SECRET=KEY_SECRET)
class CreateOrderTests(APITestCase):
    def setUp(self):
        cache.clear()
        self.user = User.objects.create_user(username="buyer", password="pw")
        self.client.force_authenticate(user=self.user)
        self.course = Course.objects.create(
            title="Intro to SQL", price=19, video_url="https://videos.example.com/sql.mp4", duration=90
        )
        self.url = reverse("payment-create-order")

    @patch("payments.gateway.razorpay.Client")
    def test_create_order_records_pending_payment(self, mock_client_cls):
        mock_client = mock_client_cls.return_value
        mock_client.order.create.return_value = {
            "id": "order_123",
            "amount": 1900,
            "currency": "INR",
        }

        response = self.client.post(self.url, {"courseId": self.course.id}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["orderId"], "order_123")
        self.assertEqual(response.data["amount"], 1900)
        self.assertEqual(response.data["key"], KEY_ID)
        self.assertEqual(response.data["course"]["id"], self.course.id)

        payment = CoursePayment.objects.get(razorpay_order_id="order_123")
        self.assertEqual(payment.status, CoursePayment.Status.PENDING)
        self.assertEqual(payment.amount, 19)

        mock_client_cls.assert_called_once_with(auth=(KEY_ID, KEY_SECRET))
        sent = mock_client.order.create.call_args.kwargs["data"]
        self.assertEqual(sent["amount"], 1900)
        self.assertEqual(sent["currency"], "INR")
        self.assertEqual(sent["notes"]["course_id"], str(self.course.id))

    def test_unknown_course_is_not_found(self):
        response = self.client.post(self.url, {"courseId": 999999}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_already_purchased_is_rejected(self):
        CoursePayment.objects.create(
            user=self.user, course=self.course, amount=19, status=CoursePayment.Status.COMPLETED
        )
        response = self.client.post(self.url, {"courseId": self.course.id}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Course already purchased")

    @override_settings(RAZORPAY_KEY_ID="", RAZORPAY_KEY_SECRET="")
    def test_missing_keys_is_service_unavailable(self):
        response = self.client.post(self.url, {"courseId": self.course.id}, format="json")

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertFalse(CoursePayment.objects.exists())

    @patch("payments.gateway.razorpay.Client")
    def test_gateway_outage_is_service_unavailable(self, mock_client_cls):
        mock_client_cls.return_value.order.create.side_effect = requests.ConnectionError("boom")

        response = self.client.post(self.url, {"courseId": self.course.id}, format="json")

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertFalse(CoursePayment.objects.exists())

    @patch("payments.gateway.razorpay.Client")
    def test_gateway_server_error_is_service_unavailable(self, mock_client_cls):
        mock_client_cls.return_value.order.create.side_effect = razorpay.errors.ServerError(
            "upstream failure"
        )

        response = self.client.post(self.url, {"courseId": self.course.id}, format="json")

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)

    @patch("payments.gateway.razorpay.Client")
    def test_gateway_rejection_is_bad_request(self, mock_client_cls):
        mock_client_cls.return_value.order.create.side_effect = razorpay.errors.BadRequestError(
            "The amount must be at least INR 1.00"
        )

        response = self.client.post(self.url, {"courseId": self.course.id}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Payment provider rejected the order request")
        self.assertFalse(CoursePayment.objects.exists())


@override_settings(RAZORPAY_KEY_ID=KEY_ID, RAZORPAY_KEY_SECRET=KEY_SECRET)
class PaymentServiceErrorTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="buyer", password="pw")
        self.course = Course.objects.create(
            title="Intro to SQL", video_url="https://videos.example.com/sql.mp4", duration=90
        )

    @patch("payments.gateway.razorpay.Client")
    def test_rejection_keeps_gateway_error_as_cause(self, mock_client_cls):
        mock_client_cls.return_value.order.create.side_effect = razorpay.errors.BadRequestError(
            "bad receipt"
        )

        with self.assertRaises(BadRequest) as ctx:
            PaymentService.create_order(self.user, self.course.id)

        self.assertIsInstance(ctx.exception.__cause__, gateway.OrderRejected)
        self.assertIsInstance(
            ctx.exception.__cause__.__cause__, razorpay.errors.BadRequestError
        )

    @override_settings(RAZORPAY_KEY_ID="", RAZORPAY_KEY_SECRET="")
    def test_missing_keys_keeps_cause(self):
        with self.assertRaises(ServiceUnavailable) as ctx:
            PaymentService.verify_payment(self.user, "order_1", "pay_1", "sig", self.course.id)

        self.assertIsInstance(ctx.exception.__cause__, gateway.GatewayNotConfigured)

    def test_signature_checked_by_sdk(self):
        self.assertTrue(
            gateway.verify_payment_signature("order_1", "pay_1", sign("order_1", "pay_1"))
        )
        self.assertFalse(gateway.verify_payment_signature("order_1", "pay_1", "forged"))


@override_settings(RAZORPAY_KEY_ID=KEY_ID, RAZORPAY_KEY_SECRET=KEY_SECRET)
class VerifyPaymentTests(APITestCase):
    def setUp(self):
        cache.clear()
        self.user = User.objects.create_user(username="buyer", password="pw")
        self.client.force_authenticate(user=self.user)
        self.course = Course.objects.create(
            title="Intro to SQL", price=19, video_url="https://videos.example.com/sql.mp4", duration=90
        )
        self.payment = CoursePayment.objects.create(
            user=self.user,
            course=self.course,
            amount=19,
            razorpay_order_id="order_abc",
            status=CoursePayment.Status.PENDING,
        )
        self.url = reverse("payment-verify")

    def _payload(self, signature=None, course_id=None):
        return {
            "orderId": "order_abc",
            "paymentId": "pay_xyz",
            "signature": signature or sign("order_abc", "pay_xyz"),
            "courseId": course_id or self.course.id,
        }

    def test_valid_signature_grants_entitlement(self):
        self.assertFalse(PaymentService.has_purchased(self.user, self.course.id))

        response = self.client.post(self.url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Payment verified successfully")
        self.payment.refresh_from_db()
        self.assertEqual(self.payment.status, CoursePayment.Status.COMPLETED)
        self.assertEqual(self.payment.razorpay_payment_id, "pay_xyz")
        self.assertTrue(PaymentService.has_purchased(self.user, self.course.id))

    def test_verification_is_idempotent(self):
        self.client.post(self.url, self._payload(), format="json")
        response = self.client.post(self.url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Payment already processed")

    def test_invalid_signature_marks_failed(self):
        response = self.client.post(self.url, self._payload(signature="deadbeef"), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Invalid payment signature")
        self.payment.refresh_from_db()
        self.assertEqual(self.payment.status, CoursePayment.Status.FAILED)
        self.assertFalse(PaymentService.has_purchased(self.user, self.course.id))

    def test_other_users_order_is_forbidden(self):
        intruder = User.objects.create_user(username="intruder", password="pw")
        self.client.force_authenticate(user=intruder)

        response = self.client.post(self.url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.payment.refresh_from_db()
        self.assertEqual(self.payment.status, CoursePayment.Status.PENDING)

    def test_course_mismatch_is_rejected(self):
        other = Course.objects.create(
            title="Other", video_url="https://videos.example.com/o.mp4", duration=5
        )
        response = self.client.post(self.url, self._payload(course_id=other.id), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(PaymentService.has_purchased(self.user, other.id))

    def test_unknown_order_is_not_found(self):
        payload = self._payload(signature=sign("order_missing", "pay_xyz"))
        payload["orderId"] = "order_missing"

        response = self.client.post(self.url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class PurchaseStatusTests(APITestCase):
    def setUp(self):
        cache.clear()
        self.user = User.objects.create_user(username="buyer", password="pw")
        self.client.force_authenticate(user=self.user)
        self.course = Course.objects.create(
            title="Intro to SQL", video_url="https://videos.example.com/sql.mp4", duration=90
        )

    def test_not_purchased(self):
        response = self.client.get(reverse("payment-status", kwargs={"course_id": self.course.id}))
        self.assertEqual(response.data, {"purchased": False, "status": "not_purchased"})

    def test_latest_pending(self):
        CoursePayment.objects.create(
            user=self.user, course=self.course, amount=19, status=CoursePayment.Status.PENDING
        )
        response = self.client.get(reverse("payment-status", kwargs={"course_id": self.course.id}))
        self.assertEqual(response.data, {"purchased": False, "status": "pending"})

    def test_completed_wins_over_later_failures(self):
        CoursePayment.objects.create(
            user=self.user, course=self.course, amount=19, status=CoursePayment.Status.COMPLETED
        )
        CoursePayment.objects.create(
            user=self.user, course=self.course, amount=19, status=CoursePayment.Status.FAILED
        )
        response = self.client.get(reverse("payment-status", kwargs={"course_id": self.course.id}))
        self.assertEqual(response.data, {"purchased": True, "status": "completed"})

    def test_history_is_scoped_to_user(self):
        other = User.objects.create_user(username="other", password="pw")
        CoursePayment.objects.create(
            user=self.user, course=self.course, amount=19, status=CoursePayment.Status.COMPLETED
        )
        CoursePayment.objects.create(
            user=other, course=self.course, amount=19, status=CoursePayment.Status.COMPLETED
        )

        response = self.client.get(reverse("payment-history"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

    def test_status_for_course_id_beyond_integer_range_is_not_found(self):
        response = self.client.get(
            reverse("payment-status", kwargs={"course_id": 99999999999999999999999})
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
