from unittest.mock import patch

from django.core.cache import cache
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIRequestFactory

from project.exceptions import BadRequest, api_exception_handler


class HealthCheckTests(TestCase):
    def setUp(self):
        cache.clear()

    @override_settings(RAZORPAY_KEY_ID="rzp_test_key", RAZORPAY_KEY_SECRET="secret")
    def test_health_reports_database_cache_and_payments(self):
        response = self.client.get(reverse("health-check"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertEqual(body["status"], "healthy")
        self.assertEqual(
            body["checks"],
            {"database": "ok", "cache": "ok", "payments": "configured"},
        )

    @override_settings(RAZORPAY_KEY_ID="", RAZORPAY_KEY_SECRET="")
    def test_missing_payment_keys_do_not_fail_health(self):
        response = self.client.get(reverse("health-check"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["checks"]["payments"], "not configured")

    def test_cache_failure_is_unhealthy(self):
        with patch("project.health.check_cache", side_effect=RuntimeError("mismatch")):
            response = self.client.get(reverse("health-check"))

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        body = response.json()
        self.assertEqual(body["status"], "unhealthy")
        self.assertEqual(body["checks"]["cache"], "error: RuntimeError")


class ExceptionHandlerTests(TestCase):
    def setUp(self):
        self.context = {"request": APIRequestFactory().get("/"), "view": None}

    def test_extra_payload_is_merged(self):
        response = api_exception_handler(
            BadRequest("Course must be at least 30% complete", currentProgress=12),
            self.context,
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data,
            {"error": "Course must be at least 30% complete", "currentProgress": 12},
        )

    def test_unexpected_error_is_logged_with_reference(self):
        with patch("project.exceptions.logger") as mock_logger:
            response = api_exception_handler(RuntimeError("boom"), self.context)

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertIn("reference", response.data)
        mock_logger.error.assert_called_once()
