from django.urls import path

from .views import (
    CreateOrderView,
    PaymentHistoryView,
    PurchaseStatusView,
    VerifyPaymentView,
)

urlpatterns = [
    path("create-order/", CreateOrderView.as_view(), name="payment-create-order"),
    path("verify/", VerifyPaymentView.as_view(), name="payment-verify"),
    path("history/", PaymentHistoryView.as_view(), name="payment-history"),
    path("status/<int:course_id>/", PurchaseStatusView.as_view(), name="payment-status"),
]
