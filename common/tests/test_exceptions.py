from types import SimpleNamespace

from common.exceptions import ConstraintViolation, InsufficientStock, api_exception_handler
from django.core.exceptions import ValidationError
from django.db.models import ProtectedError
from rest_framework.exceptions import NotFound

CONTEXT = {"view": SimpleNamespace()}


def test_insufficient_stock_is_quantity_field_error():
    resp = api_exception_handler(InsufficientStock(requested=5, available=2), CONTEXT)
    assert resp.status_code == 400
    assert resp.data == {"quantity": ["Not enough stock available."]}


def test_plain_validation_error_goes_under_non_field_errors():
    resp = api_exception_handler(ValidationError("Broken."), CONTEXT)
    assert resp.status_code == 400
    assert resp.data == {"non_field_errors": ["Broken."]}


def test_constraint_violation_is_conflict():
    resp = api_exception_handler(ConstraintViolation("Cannot delete category with products."), CONTEXT)
    assert resp.status_code == 409
    assert resp.data == {"detail": "Cannot delete category with products."}


def test_protected_error_is_conflict():
    resp = api_exception_handler(ProtectedError("in use", set()), CONTEXT)
    assert resp.status_code == 409


def test_other_errors_fall_through_to_drf():
    resp = api_exception_handler(NotFound(), CONTEXT)
    assert resp.status_code == 404
    assert api_exception_handler(RuntimeError("boom"), CONTEXT) is None
