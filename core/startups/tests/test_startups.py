from unittest.mock import patch

from django.contrib.auth.models import User
from django.core.cache import cache
from django.db import IntegrityError
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from startups.models import JobApplication, JobListing, Startup


class StartupApiTests(APITestCase):
    def setUp(self):
        cache.clear()
        self.user = User.objects.create_user(
            username="ada@example.com", email="ada@example.com", password="pw"
        )

        self.acme = Startup.objects.create(
            company_name="Acme Analytics",
            description="Dashboards for small shops",
            logo="/logos/acme.png",
            industry="Fintech",
            founded_year=2021,
            team_size="11-50",
            location="Bengaluru",
            is_partnered=True,
            contact_email="jobs@acme.example.com",
        )
        self.zeta = Startup.objects.create(
            company_name="Zeta Robotics",
            description="Warehouse robots",
            industry="Hardware",
        )
        self.quiet = Startup.objects.create(
            company_name="Quiet Labs",
            description="Still in stealth",
            is_partnered=True,
        )

        self.analyst = JobListing.objects.create(
            startup=self.acme,
            title="Data Analyst Intern",
            description="SQL and dashboards",
            job_type=JobListing.JobType.INTERNSHIP,
            location="Remote",
            salary_min=15000,
            salary_max=20000,
            requirements=["SQL", "Excel"],
        )
        self.backend = JobListing.objects.create(
            startup=self.acme,
            title="Backend Engineer",
            description="Python services",
            job_type=JobListing.JobType.FULL_TIME,
        )
        self.closed = JobListing.objects.create(
            startup=self.zeta,
            title="Firmware Intern",
            description="C on microcontrollers",
            job_type=JobListing.JobType.INTERNSHIP,
            is_active=False,
        )

    def _apply_url(self, startup_id, job_id):
        return reverse("startup-apply", kwargs={"startup_id": startup_id, "job_id": job_id})

    def test_partnered_sorted_by_name(self):
        response = self.client.get(reverse("startup-partnered"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [s["companyName"] for s in response.data], ["Acme Analytics", "Quiet Labs"]
        )
        self.assertEqual(response.data[0]["teamSize"], "11-50")
        self.assertNotIn("contactEmail", response.data[0])

    def test_with_jobs_only_lists_startups_with_active_listings(self):
        response = self.client.get(reverse("startup-with-jobs"))

        self.assertEqual([s["companyName"] for s in response.data], ["Acme Analytics"])
        self.assertEqual(len(response.data[0]["jobListings"]), 2)

    def test_detail_reports_application_counts_only(self):
        JobApplication.objects.create(job=self.analyst, user=self.user)

        response = self.client.get(reverse("startup-detail", kwargs={"pk": self.acme.id}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["contactEmail"], "jobs@acme.example.com")
        listings = {job["title"]: job for job in response.data["jobListings"]}
        self.assertEqual(listings["Data Analyst Intern"]["applications"], 1)
        self.assertEqual(
            listings["Data Analyst Intern"]["salary"],
            {"min": 15000, "max": 20000, "currency": "INR"},
        )

    def test_unknown_startup_is_not_found(self):
        for pk in (999999, "99999999999999999999999"):
            response = self.client.get(reverse("startup-detail", kwargs={"pk": pk}))
            self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
            self.assertEqual(response.data["error"], "Startup not found")

    def test_jobs_by_category_skips_inactive(self):
        response = self.client.get(
            reverse("startup-jobs-by-category", kwargs={"category": "internship"})
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        job = response.data[0]
        self.assertEqual(job["title"], "Data Analyst Intern")
        self.assertEqual(job["companyName"], "Acme Analytics")
        self.assertEqual(job["companyLogo"], "/logos/acme.png")
        self.assertEqual(job["type"], "internship")
        self.assertEqual(job["requirements"], ["SQL", "Excel"])
        self.assertEqual(job["applications"], 0)

    def test_unknown_category_is_empty(self):
        response = self.client.get(
            reverse("startup-jobs-by-category", kwargs={"category": "contract"})
        )
        self.assertEqual(response.data, [])

    def test_search_matches_job_and_company_fields(self):
        by_title = self.client.get(reverse("startup-search-jobs", kwargs={"query": "backend"}))
        self.assertEqual([j["title"] for j in by_title.data], ["Backend Engineer"])

        by_industry = self.client.get(
            reverse("startup-search-jobs", kwargs={"query": "fintech"})
        )
        self.assertEqual(
            {j["title"] for j in by_industry.data},
            {"Data Analyst Intern", "Backend Engineer"},
        )

        inactive_only = self.client.get(
            reverse("startup-search-jobs", kwargs={"query": "firmware"})
        )
        self.assertEqual(inactive_only.data, [])

    def test_apply_records_pending_application(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.post(self._apply_url(self.acme.id, self.analyst.id))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"message": "Application submitted successfully"})
        application = JobApplication.objects.get(job=self.analyst, user=self.user)
        self.assertEqual(application.status, JobApplication.Status.PENDING)

    def test_apply_twice_is_rejected(self):
        self.client.force_authenticate(user=self.user)
        self.client.post(self._apply_url(self.acme.id, self.analyst.id))

        response = self.client.post(self._apply_url(self.acme.id, self.analyst.id))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Already applied for this job")
        self.assertEqual(JobApplication.objects.count(), 1)

    def test_racing_duplicate_application_is_rejected(self):
        self.client.force_authenticate(user=self.user)

        with patch(
            "startups.services.JobApplication.objects.create",
            side_effect=IntegrityError("duplicate key"),
        ):
            response = self.client.post(self._apply_url(self.acme.id, self.analyst.id))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Already applied for this job")

    def test_apply_to_inactive_job(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.post(self._apply_url(self.zeta.id, self.closed.id))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Job is not active")

    def test_apply_job_must_belong_to_startup(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.post(self._apply_url(self.zeta.id, self.analyst.id))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "Job not found")

    def test_apply_unknown_startup(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.post(self._apply_url(999999, self.analyst.id))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "Startup not found")

    def test_apply_requires_authentication(self):
        response = self.client.post(self._apply_url(self.acme.id, self.analyst.id))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(JobApplication.objects.exists())

    def test_applications_are_scoped_to_caller(self):
        other = User.objects.create_user(username="grace@example.com", password="pw")
        JobApplication.objects.create(job=self.backend, user=other)
        JobApplication.objects.create(job=self.analyst, user=self.user)
        self.client.force_authenticate(user=self.user)

        response = self.client.get(reverse("startup-applications"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        application = response.data[0]
        self.assertEqual(application["jobId"], self.analyst.id)
        self.assertEqual(application["jobTitle"], "Data Analyst Intern")
        self.assertEqual(application["companyName"], "Acme Analytics")
        self.assertEqual(application["status"], "pending")

    def test_overview(self):
        JobApplication.objects.create(job=self.analyst, user=self.user)

        response = self.client.get(reverse("startup-overview"))

        self.assertEqual(
            response.data,
            {
                "totalStartups": 3,
                "partneredStartups": 2,
                "startupsWithJobs": 2,
                "totalJobs": 2,
                "totalApplications": 1,
            },
        )
