import pytest
from common.capabilities import (
    ADJUST_STOCK,
    ALL_CAPABILITIES,
    MANAGE_CATEGORIES,
    MANAGE_PRODUCTS,
    MANAGE_USERS,
    VIEW_PRODUCTS,
    VIEW_REPORTS,
    can_perform,
    capabilities_for,
)
from django.contrib.auth.models import AnonymousUser
from users.tests.factories import AdminFactory, ManagerFactory, StockWorkerFactory, UserFactory


@pytest.mark.django_db
def test_admin_holds_everything():
    assert capabilities_for(AdminFactory()) == ALL_CAPABILITIES


@pytest.mark.django_db
def test_manager_holds_everything_but_user_management():
    manager = ManagerFactory()
    assert capabilities_for(manager) == ALL_CAPABILITIES - {MANAGE_USERS}
    assert manager.can(VIEW_REPORTS)
    assert not manager.can(MANAGE_USERS)


@pytest.mark.django_db
def test_stock_worker_adjusts_and_views_only():
    worker = StockWorkerFactory()
    assert capabilities_for(worker) == {ADJUST_STOCK, VIEW_PRODUCTS}
    for capability in (MANAGE_PRODUCTS, MANAGE_CATEGORIES, MANAGE_USERS, VIEW_REPORTS):
        assert not can_perform(worker, capability)


@pytest.mark.django_db
def test_unknown_role_keeps_only_authenticated_capabilities():
    assert capabilities_for(UserFactory(role="auditor")) == {VIEW_PRODUCTS}


def test_anonymous_holds_nothing():
    anonymous = AnonymousUser()
    assert capabilities_for(anonymous) == frozenset()
    assert capabilities_for(None) == frozenset()
    assert not can_perform(anonymous, VIEW_PRODUCTS)


def test_unknown_capability_is_an_error():
    with pytest.raises(ValueError):
        can_perform(AnonymousUser(), "launch-rockets")


@pytest.mark.django_db
def test_capabilities_property_is_sorted():
    assert StockWorkerFactory().capabilities == ["adjust-stock", "view-products"]
