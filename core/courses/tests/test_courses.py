from django.core.cache import cache
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from courses.models import Course


class CourseCatalogTests(APITestCase):
    def setUp(self):
        cache.clear()
        self.sql = Course.objects.create(
            title="Intro to SQL",
            video_url="https://videos.example.com/sql.mp4",
            duration=90,
            category="Databases",
            instructor="Grace",
        )
        self.python = Course.objects.create(
            title="Intro to Python",
            video_url="https://videos.example.com/py.mp4",
            duration=45,
            category="Programming",
            description="Variables, loops and functions",
        )
        self.retired = Course.objects.create(
            title="Flash for Beginners",
            video_url="https://videos.example.com/flash.mp4",
            duration=60,
            is_active=False,
        )

    def test_list_is_public_and_hides_inactive(self):
        response = self.client.get(reverse("course-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        titles = {course["title"] for course in response.data}
        self.assertEqual(titles, {"Intro to SQL", "Intro to Python"})
        self.assertNotIn("videoURL", response.data[0])

    def test_new_courses_use_flat_price(self):
        self.assertEqual(self.sql.price, 19)

    def test_search_matches_description(self):
        response = self.client.get(reverse("course-list"), {"search": "loops"})
        self.assertEqual([c["title"] for c in response.data], ["Intro to Python"])

    def test_category_filter(self):
        response = self.client.get(reverse("course-list"), {"category": "databases"})
        self.assertEqual([c["title"] for c in response.data], ["Intro to SQL"])

    def test_retrieve_includes_video(self):
        response = self.client.get(reverse("course-detail", kwargs={"pk": self.sql.id}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["videoURL"], "https://videos.example.com/sql.mp4")

    def test_inactive_course_is_not_found(self):
        response = self.client.get(reverse("course-detail", kwargs={"pk": self.retired.id}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_featured_respects_limit(self):
        response = self.client.get(reverse("course-featured"), {"limit": 1})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

    def test_featured_ignores_bad_limit(self):
        response = self.client.get(reverse("course-featured"), {"limit": "many"})
        self.assertEqual(len(response.data), 2)

    def test_duration(self):
        response = self.client.get(reverse("course-duration", kwargs={"pk": self.sql.id}))
        self.assertEqual(response.data, {"duration": "1 hour 30 minutes", "minutes": 90})

    def test_course_id_beyond_integer_range_is_not_found(self):
        response = self.client.get(
            reverse("course-detail", kwargs={"pk": "99999999999999999999999"})
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
