from django.urls import path, include
from rest_framework.routers import SimpleRouter

from .views import StartupViewSet

router = SimpleRouter()
router.register(r"", StartupViewSet, basename="startup")

urlpatterns = [
    path("", include(router.urls)),
]
