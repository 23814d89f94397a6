"""Serializers for user profile, user management, and sign-in.

- UserMeSerializer: read-only profile data for the authenticated user.
- UserAdminSerializer: create/update users with a role (manage-users).
- SignOutSerializer: refresh token body for sign-out.
- EmailOrUsernameTokenObtainPairSerializer: obtain JWTs using email or username.
"""

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers
from rest_framework_simplejwt.tokens import RefreshToken

from .models import User


class UserMeSerializer(serializers.ModelSerializer):
    """Serializer returning basic profile fields for the current user."""

    capabilities = serializers.ListField(child=serializers.CharField(), read_only=True)

    class Meta:
        model = User
        fields = ["id", "username", "email", "first_name", "last_name", "role", "capabilities"]
        read_only_fields = fields


class UserAdminSerializer(serializers.ModelSerializer):
    """Create and update users with a role.

    `password` is write-only; on create it is required and run through
    Django's password validators, on update it is optional.
    """

    password = serializers.CharField(write_only=True, required=False)

    class Meta:
        model = User
        fields = ["id", "username", "email", "first_name", "last_name", "role", "is_active", "password"]

    def validate_email(self, value: str) -> str:
        """Normalize and ensure the email is unique (case-insensitive)."""
        value = value.strip().lower()
        qs = User.objects.filter(email=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Email is already registered.")
        return value

    def validate(self, attrs):
        password = attrs.get("password")
        if self.instance is None and not password:
            raise serializers.ValidationError({"password": ["This field is required."]})
        if password:
            candidate = User(
                username=attrs.get("username", getattr(self.instance, "username", "")),
                email=attrs.get("email", getattr(self.instance, "email", "")),
            )
            try:
                validate_password(password, user=candidate)
            except DjangoValidationError as exc:
                raise serializers.ValidationError({"password": list(exc.messages)})
        return attrs

    def create(self, validated_data):
        password = validated_data.pop("password")
        user = User(**validated_data)
        user.set_password(password)
        user.save()
        return user

    def update(self, instance, validated_data):
        password = validated_data.pop("password", None)
        for name, value in validated_data.items():
            setattr(instance, name, value)
        if password:
            instance.set_password(password)
        instance.save()
        return instance


class SignOutSerializer(serializers.Serializer):
    """Request body for signing out (blacklisting refresh token).

    Accepts a single field `refresh` containing the JWT refresh token
    to invalidate via the blacklist mechanism.
    """

    refresh = serializers.CharField()


class EmailOrUsernameTokenObtainPairSerializer(serializers.Serializer):
    """Obtain JWTs by authenticating with either email or username.

    Accepts a single `identifier` field which may be an email address
    (case-insensitive) or a username, and a `password`.
    Returns `access` and `refresh` tokens on success.
    """

    identifier = serializers.CharField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        identifier = (attrs.get("identifier") or "").strip()
        password = attrs.get("password") or ""

        if not identifier or not password:
            raise serializers.ValidationError({"detail": "identifier and password are required."})

        user = None
        if "@" in identifier:
            try:
                user = User.objects.get(email=identifier.lower())
            except User.DoesNotExist:
                pass
        else:
            try:
                user = User.objects.get(username=identifier)
            except User.DoesNotExist:
                pass

        if not user or not user.check_password(password) or not user.is_active:
            raise serializers.ValidationError({"detail": "Invalid credentials."})

        refresh = RefreshToken.for_user(user)
        refresh["role"] = user.role
        return {"access": str(refresh.access_token), "refresh": str(refresh)}
