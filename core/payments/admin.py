from django.contrib import admin

from .models import CoursePayment


@admin.register(CoursePayment)
class CoursePaymentAdmin(admin.ModelAdmin):
    list_display = ("user", "course", "amount", "status", "razorpay_order_id", "created_at")
    list_filter = ("status", "created_at")
    search_fields = ("user__username", "user__email", "razorpay_order_id", "razorpay_payment_id")
