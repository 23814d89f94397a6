"""Users app API views.

Endpoints include:
- profile: returns the current authenticated user's profile, role and capabilities.
- signin/refresh/verify: JWT issuance and validation.
- signout: blacklists refresh tokens for JWT logout.
- users: user management for holders of the manage-users capability.
"""

from common.capabilities import MANAGE_USERS
from common.permissions import HasCapability
from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken, TokenError
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView, TokenVerifyView

from .logging import log_auth_event
from .models import User
from .serializers import EmailOrUsernameTokenObtainPairSerializer, SignOutSerializer, UserAdminSerializer, UserMeSerializer


@extend_schema(
    operation_id="users_current_user",
    summary="Get current user profile",
    description=(
        "Returns the current authenticated user's profile.\n\n"
        "Auth: Requires JWT (Authorization: Bearer <token>) or session auth.\n\n"
        "Response fields: id, username, email, first_name, last_name, role, capabilities.\n\n"
        "Errors: 401 if authentication credentials are missing or invalid."
    ),
    tags=["User Endpoints"],
    responses={
        200: OpenApiResponse(description="User profile", response=UserMeSerializer),
        401: OpenApiResponse(description="Unauthorized"),
    },
)
@api_view(["GET"])
@permission_classes([IsAuthenticated])
@throttle_classes([ScopedRateThrottle])
def current_user(request):
    """Return the authenticated user's profile fields."""
    log_auth_event("profile", request, user=request.user)
    serializer = UserMeSerializer(request.user)
    return Response(serializer.data)


# Throttle scope for profile endpoint
current_user.throttle_scope = "profile"


class SignOutView(APIView):
    """Class-based view wrapper for sign-out to align auth view styles."""

    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "signout"
    permission_classes = [AllowAny]

    @extend_schema(tags=["User Endpoints"], request=SignOutSerializer)
    def post(self, request):
        refresh = request.data.get("refresh")
        if not refresh:
            return Response({"detail": "Refresh token is required."}, status=status.HTTP_400_BAD_REQUEST)
        try:
            token = RefreshToken(refresh)
            token.blacklist()
        except TokenError:
            log_auth_event("signout", request, status="invalid_token")
            return Response({"detail": "Invalid token."}, status=status.HTTP_400_BAD_REQUEST)
        log_auth_event("signout", request, status="success")
        return Response({"detail": "Signed out."}, status=status.HTTP_205_RESET_CONTENT)


class SignInView(TokenObtainPairView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "signin"
    serializer_class = EmailOrUsernameTokenObtainPairSerializer

    @extend_schema(tags=["User Endpoints"])
    def post(self, request, *args, **kwargs):
        resp = super().post(request, *args, **kwargs)
        status_label = "success" if resp.status_code == 200 else "failed"
        log_auth_event("signin", request, status=status_label)
        return resp


class RefreshView(TokenRefreshView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "token_refresh"

    @extend_schema(tags=["User Endpoints"])
    def post(self, request, *args, **kwargs):
        resp = super().post(request, *args, **kwargs)
        status_label = "success" if resp.status_code == 200 else "failed"
        log_auth_event("token_refresh", request, status=status_label)
        return resp


class VerifyView(TokenVerifyView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "token_verify"

    @extend_schema(tags=["User Endpoints"])
    def post(self, request, *args, **kwargs):
        resp = super().post(request, *args, **kwargs)
        status_label = "success" if resp.status_code == 200 else "failed"
        log_auth_event("token_verify", request, status=status_label)
        return resp


@extend_schema_view(
    list=extend_schema(tags=["User Endpoints"], summary="List users"),
    retrieve=extend_schema(tags=["User Endpoints"], summary="Get user"),
    create=extend_schema(tags=["User Endpoints"], summary="Create user with a role"),
    update=extend_schema(tags=["User Endpoints"], summary="Update user"),
    partial_update=extend_schema(tags=["User Endpoints"], summary="Partial update user"),
    destroy=extend_schema(tags=["User Endpoints"], summary="Delete user"),
)
class UserAdminViewSet(viewsets.ModelViewSet):
    """User management restricted to the manage-users capability.

    Supports `?role=` filtering. Users referenced by stock movements cannot be
    deleted (409); deactivate them instead.
    """

    permission_classes = [IsAuthenticated, HasCapability(MANAGE_USERS)]
    serializer_class = UserAdminSerializer
    queryset = User.objects.all().order_by("id")
    filterset_fields = ["role", "is_active"]
    search_fields = ["username", "email", "first_name", "last_name"]

    def perform_create(self, serializer):
        user = serializer.save()
        log_auth_event("user_created", self.request, user=user)

    def perform_update(self, serializer):
        user = serializer.save()
        log_auth_event("user_updated", self.request, user=user)

    def perform_destroy(self, instance):
        user_id = instance.id
        instance.delete()
        log_auth_event("user_deleted", self.request, extra={"user_id": user_id})
