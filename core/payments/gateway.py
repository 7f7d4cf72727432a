"""
Razorpay gateway.

Thin wrapper over the Razorpay SDK for the two calls the course checkout
needs: creating an order and checking the signature the browser sends back
after payment.
"""

import logging

import razorpay
import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Razorpay could not be reached or answered with a server error."""


class GatewayNotConfigured(GatewayError):
    pass


class OrderRejected(GatewayError):
    """Razorpay refused the order request."""


def get_client():
    if not settings.RAZORPAY_KEY_ID or not settings.RAZORPAY_KEY_SECRET:
        raise GatewayNotConfigured("Razorpay keys are not configured on the server")
    return razorpay.Client(
        auth=(settings.RAZORPAY_KEY_ID, settings.RAZORPAY_KEY_SECRET)
    )


def create_order(amount, currency, receipt, notes=None):
    """
    Create a Razorpay order. ``amount`` is in the smallest currency unit (paise).
    Returns the order dict from Razorpay (``id``, ``amount``, ``currency``...).
    """
    client = get_client()
    try:
        return client.order.create(
            data={
                "amount": amount,
                "currency": currency,
                "receipt": receipt,
                "notes": notes or {},
            }
        )
    except razorpay.errors.BadRequestError as exc:
        raise OrderRejected(str(exc)) from exc
    except (
        razorpay.errors.ServerError,
        razorpay.errors.GatewayError,
        requests.RequestException,
    ) as exc:
        raise GatewayError(f"Razorpay order creation failed: {exc}") from exc


def verify_payment_signature(order_id, payment_id, signature):
    """True when the checkout signature matches the order and payment ids."""
    client = get_client()
    try:
        client.utility.verify_payment_signature(
            {
                "razorpay_order_id": order_id,
                "razorpay_payment_id": payment_id,
                "razorpay_signature": signature,
            }
        )
    except razorpay.errors.SignatureVerificationError:
        return False
    return True
