from django.contrib.auth import authenticate
from django.contrib.auth.models import User
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers


class UserSerializer(serializers.ModelSerializer):
    name = serializers.CharField(source="profile.display_name", read_only=True)
    college = serializers.CharField(source="profile.college", read_only=True)
    place = serializers.CharField(source="profile.place", read_only=True)
    phoneNumber = serializers.CharField(source="profile.phone_number", read_only=True)

    class Meta:
        model = User
        fields = ["id", "email", "name", "college", "place", "phoneNumber"]


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6)
    college = serializers.CharField(max_length=200)
    place = serializers.CharField(max_length=120, required=False, allow_blank=True)
    phoneNumber = serializers.CharField(max_length=20, required=False, allow_blank=True)

    def validate_email(self, value):
        email = value.lower().strip()
        if User.objects.filter(username=email).exists():
            raise serializers.ValidationError("An account with this email already exists.")
        return email

    def validate_password(self, value):
        validate_password(value)
        return value

    def create(self, validated_data):
        email = validated_data["email"]
        user = User.objects.create_user(
            username=email, email=email, password=validated_data["password"]
        )
        # Profile row is created by the post_save signal
        profile = user.profile
        profile.full_name = validated_data["name"].strip()
        profile.college = validated_data["college"].strip()
        profile.place = validated_data.get("place", "").strip()
        profile.phone_number = validated_data.get("phoneNumber", "").strip()
        profile.save()
        return user


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, data):
        user = authenticate(
            request=self.context.get("request"),
            username=data["email"].lower().strip(),
            password=data["password"],
        )
        if not user:
            raise serializers.ValidationError("Unable to log in with provided credentials.")
        data["user"] = user
        return data


class RefreshTokenSerializer(serializers.Serializer):
    refresh_token = serializers.CharField()


class AuthTokenSerializer(serializers.Serializer):
    """Response serializer bundling tokens with the user payload."""

    access_token = serializers.CharField(help_text="JWT access token")
    refresh_token = serializers.CharField(help_text="JWT refresh token")
    user = UserSerializer(read_only=True)
