from rest_framework import serializers

from .models import JobApplication, JobListing, Startup


class SalarySerializer(serializers.Serializer):
    min = serializers.IntegerField(source="salary_min", allow_null=True)
    max = serializers.IntegerField(source="salary_max", allow_null=True)
    currency = serializers.CharField(source="salary_currency")


class JobListingSerializer(serializers.ModelSerializer):
    """A listing nested under its startup. Applicants are reported as a count only."""

    type = serializers.CharField(source="job_type", read_only=True)
    salary = SalarySerializer(source="*", read_only=True)
    isActive = serializers.BooleanField(source="is_active", read_only=True)
    applications = serializers.IntegerField(source="application_count", read_only=True)

    class Meta:
        model = JobListing
        fields = [
            "id",
            "title",
            "description",
            "type",
            "location",
            "salary",
            "requirements",
            "isActive",
            "applications",
        ]


class JobSummarySerializer(JobListingSerializer):
    """Flat job card used by category and search results."""

    companyName = serializers.CharField(source="startup.company_name", read_only=True)
    companyLogo = serializers.CharField(source="startup.logo", read_only=True)

    class Meta(JobListingSerializer.Meta):
        fields = [
            "id",
            "title",
            "companyName",
            "companyLogo",
            "type",
            "location",
            "salary",
            "requirements",
            "applications",
        ]


class StartupSummarySerializer(serializers.ModelSerializer):
    companyName = serializers.CharField(source="company_name", read_only=True)
    foundedYear = serializers.IntegerField(source="founded_year", read_only=True)
    teamSize = serializers.CharField(source="team_size", read_only=True)

    class Meta:
        model = Startup
        fields = [
            "id",
            "companyName",
            "description",
            "logo",
            "website",
            "industry",
            "foundedYear",
            "teamSize",
            "location",
        ]


class StartupWithJobsSerializer(serializers.ModelSerializer):
    companyName = serializers.CharField(source="company_name", read_only=True)
    jobListings = JobListingSerializer(source="job_listings", many=True, read_only=True)

    class Meta:
        model = Startup
        fields = ["id", "companyName", "description", "logo", "website", "industry", "jobListings"]


class StartupDetailSerializer(StartupSummarySerializer):
    isPartnered = serializers.BooleanField(source="is_partnered", read_only=True)
    contactEmail = serializers.EmailField(source="contact_email", read_only=True)
    contactPhone = serializers.CharField(source="contact_phone", read_only=True)
    jobListings = JobListingSerializer(source="job_listings", many=True, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta(StartupSummarySerializer.Meta):
        fields = StartupSummarySerializer.Meta.fields + [
            "isPartnered",
            "contactEmail",
            "contactPhone",
            "jobListings",
            "createdAt",
            "updatedAt",
        ]


class JobApplicationSerializer(serializers.ModelSerializer):
    jobId = serializers.IntegerField(source="job.id", read_only=True)
    jobTitle = serializers.CharField(source="job.title", read_only=True)
    companyName = serializers.CharField(source="job.startup.company_name", read_only=True)
    companyLogo = serializers.CharField(source="job.startup.logo", read_only=True)
    appliedAt = serializers.DateTimeField(source="applied_at", read_only=True)

    class Meta:
        model = JobApplication
        fields = ["jobId", "jobTitle", "companyName", "companyLogo", "appliedAt", "status"]


class StartupOverviewSerializer(serializers.Serializer):
    totalStartups = serializers.IntegerField()
    partneredStartups = serializers.IntegerField()
    startupsWithJobs = serializers.IntegerField()
    totalJobs = serializers.IntegerField()
    totalApplications = serializers.IntegerField()
