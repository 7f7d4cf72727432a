from django.urls import path
from .views import LoginView, MeView, RefreshTokenView, RegisterView

urlpatterns = [
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    path("refresh/", RefreshTokenView.as_view(), name="refresh_token"),
    path("me/", MeView.as_view(), name="me"),
]
