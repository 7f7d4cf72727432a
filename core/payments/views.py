from drf_spectacular.utils import OpenApiTypes, extend_schema, inline_serializer
from rest_framework import permissions, serializers, status, views
from rest_framework.response import Response

from accounts.throttles import PaymentRateThrottle
from courses.utils import resolve_course_id
from .serializers import (
    CreateOrderSerializer,
    PaymentHistorySerializer,
    VerifyPaymentSerializer,
)
from .services import PaymentService


class CreateOrderView(views.APIView):
    """
    API View to create a Razorpay order for purchasing a course.
    """

    permission_classes = [permissions.IsAuthenticated]
    throttle_classes = [PaymentRateThrottle]
    serializer_class = CreateOrderSerializer

    @extend_schema(
        request=CreateOrderSerializer,
        responses={
            201: inline_serializer(
                name="CourseOrderResponse",
                fields={
                    "orderId": serializers.CharField(),
                    "amount": serializers.IntegerField(),
                    "currency": serializers.CharField(),
                    "key": serializers.CharField(),
                    "course": serializers.DictField(),
                },
            ),
            400: OpenApiTypes.OBJECT,
            404: OpenApiTypes.OBJECT,
            503: OpenApiTypes.OBJECT,
        },
        description="Create a Razorpay order for a course purchase.",
    )
    def post(self, request):
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = PaymentService.create_order(
            request.user, serializer.validated_data["courseId"]
        )
        return Response(order, status=status.HTTP_201_CREATED)


class VerifyPaymentView(views.APIView):
    """
    API View to verify Razorpay payment signatures and grant course access.
    """

    permission_classes = [permissions.IsAuthenticated]
    throttle_classes = [PaymentRateThrottle]
    serializer_class = VerifyPaymentSerializer

    @extend_schema(
        request=VerifyPaymentSerializer,
        responses={
            200: inline_serializer(
                name="VerifyCoursePaymentResponse",
                fields={
                    "message": serializers.CharField(),
                    "course": serializers.DictField(),
                },
            ),
            400: OpenApiTypes.OBJECT,
            403: OpenApiTypes.OBJECT,
            404: OpenApiTypes.OBJECT,
        },
        description="Verify a completed Razorpay payment and record the purchase.",
    )
    def post(self, request):
        serializer = VerifyPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = PaymentService.verify_payment(
            request.user,
            order_id=data["orderId"],
            payment_id=data["paymentId"],
            signature=data["signature"],
            course_id=data["courseId"],
        )
        return Response(result, status=status.HTTP_200_OK)


class PaymentHistoryView(views.APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(responses={200: PaymentHistorySerializer(many=True)})
    def get(self, request):
        payments = PaymentService.history(request.user)
        return Response(PaymentHistorySerializer(payments, many=True).data)


class PurchaseStatusView(views.APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        responses={
            200: inline_serializer(
                name="PurchaseStatusResponse",
                fields={
                    "purchased": serializers.BooleanField(),
                    "status": serializers.CharField(),
                },
            )
        }
    )
    def get(self, request, course_id):
        return Response(PaymentService.purchase_status(request.user, resolve_course_id(course_id)))
