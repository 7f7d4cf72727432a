from rest_framework import serializers

from courses.utils import MAX_COURSE_ID
from .models import CoursePayment


class CreateOrderSerializer(serializers.Serializer):
    courseId = serializers.IntegerField(min_value=1, max_value=MAX_COURSE_ID)


class VerifyPaymentSerializer(serializers.Serializer):
    orderId = serializers.CharField(max_length=100)
    paymentId = serializers.CharField(max_length=100)
    signature = serializers.CharField(max_length=256)
    courseId = serializers.IntegerField(min_value=1, max_value=MAX_COURSE_ID)


class PaymentHistorySerializer(serializers.ModelSerializer):
    courseId = serializers.IntegerField(source="course.id", read_only=True)
    courseTitle = serializers.CharField(source="course.title", read_only=True)
    date = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = CoursePayment
        fields = ["id", "courseId", "courseTitle", "amount", "status", "date"]
