from django.contrib import admin

from .models import JobApplication, JobListing, Startup


class JobListingInline(admin.TabularInline):
    model = JobListing
    extra = 0
    fields = ("title", "job_type", "location", "is_active")


@admin.register(Startup)
class StartupAdmin(admin.ModelAdmin):
    list_display = ("company_name", "industry", "location", "is_partnered", "created_at")
    list_filter = ("is_partnered", "industry")
    search_fields = ("company_name", "industry", "description")
    inlines = [JobListingInline]


@admin.register(JobApplication)
class JobApplicationAdmin(admin.ModelAdmin):
    list_display = ("user", "job", "status", "applied_at")
    list_filter = ("status",)
    search_fields = ("user__username", "job__title", "job__startup__company_name")
