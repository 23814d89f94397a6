import pytest
from django.core.cache import cache


@pytest.fixture(autouse=True)
def _clear_throttle_cache():
    # Throttle history lives in the cache and would otherwise leak between tests
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client_for(db):
    """Return a factory building an APIClient authenticated as a user with ``role``."""

    from rest_framework.test import APIClient
    from users.tests.factories import UserFactory

    def make(role, **user_kwargs):
        user = UserFactory(role=role, **user_kwargs)
        client = APIClient()
        client.force_authenticate(user=user)
        client.user = user
        return client

    return make
