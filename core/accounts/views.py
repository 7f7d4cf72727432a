import logging

from django.contrib.auth.models import User
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from project.exceptions import Forbidden
from .serializers import (
    AuthTokenSerializer,
    LoginSerializer,
    RefreshTokenSerializer,
    RegisterSerializer,
    UserSerializer,
)
from .throttles import AuthRateThrottle
from .utils import REFRESH_TOKEN_TYPE, decode_token, generate_access_token, generate_tokens

logger = logging.getLogger(__name__)


def _auth_success_response(request, user, status_code=status.HTTP_200_OK):
    tokens = generate_tokens(user)
    payload = {
        "access_token": tokens["access_token"],
        "refresh_token": tokens["refresh_token"],
        "user": UserSerializer(user, context={"request": request}).data,
    }
    return Response(payload, status=status_code)


class RegisterView(APIView):
    """Create a learner account and return a token pair."""

    permission_classes = [AllowAny]
    throttle_classes = [AuthRateThrottle]

    @extend_schema(request=RegisterSerializer, responses={201: AuthTokenSerializer})
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info("Registered new user id=%s", user.id)
        return _auth_success_response(request, user, status.HTTP_201_CREATED)


class LoginView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [AuthRateThrottle]

    @extend_schema(request=LoginSerializer, responses={200: AuthTokenSerializer})
    def post(self, request):
        serializer = LoginSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        return _auth_success_response(request, serializer.validated_data["user"])


class RefreshTokenView(APIView):
    """Refresh the access token using a refresh token."""

    permission_classes = [AllowAny]
    throttle_classes = [AuthRateThrottle]

    @extend_schema(request=RefreshTokenSerializer, responses={200: AuthTokenSerializer})
    def post(self, request):
        serializer = RefreshTokenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        payload = decode_token(serializer.validated_data["refresh_token"])
        if not payload or payload.get("type") != REFRESH_TOKEN_TYPE:
            return Response(
                {"error": "Invalid or expired refresh token"},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        try:
            user = User.objects.get(id=payload["user_id"])
        except (User.DoesNotExist, KeyError):
            return Response(
                {"error": "Invalid or expired refresh token"},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        if not user.is_active:
            raise Forbidden("User account is disabled.")

        return Response(
            {
                "access_token": generate_access_token(user),
                "user": UserSerializer(user, context={"request": request}).data,
            },
            status=status.HTTP_200_OK,
        )


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: UserSerializer})
    def get(self, request):
        return Response(UserSerializer(request.user).data)
