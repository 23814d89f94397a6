"""Aggregate user namespaces under /api/v1/.

This module re-exports the "auth" and "account" URLconfs and registers the
user management routes so the project can include a single users URL entry
point without duplicating route definitions.
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import UserAdminViewSet

router = SimpleRouter()
router.register(r"users", UserAdminViewSet, basename="user")

urlpatterns = [
    path("auth/", include("users.auth_urls")),
    path("account/", include("users.account_urls")),
    path("", include(router.urls)),
]
