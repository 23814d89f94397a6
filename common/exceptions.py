"""Domain errors and their translation to API responses.

Services raise these; ``api_exception_handler`` (wired through
``REST_FRAMEWORK["EXCEPTION_HANDLER"]``) maps them onto HTTP responses so views
stay thin.
"""

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import ProtectedError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger("stockkeeper.errors")


class InsufficientStock(DjangoValidationError):
    """An outbound movement asked for more than the product holds.

    Always reported against the ``quantity`` field.
    """

    def __init__(self, requested: int, available: int, message: str = "Not enough stock available."):
        self.requested = requested
        self.available = available
        super().__init__({"quantity": [message]})


class ConstraintViolation(Exception):
    """A business constraint blocked the operation (duplicate sku, non-empty category, ...)."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def _validation_payload(exc: DjangoValidationError):
    if hasattr(exc, "error_dict"):
        return exc.message_dict
    return {"non_field_errors": exc.messages}


def api_exception_handler(exc, context):
    """Extend DRF's handler with the domain errors above."""

    if isinstance(exc, DjangoValidationError):
        return Response(_validation_payload(exc), status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, ConstraintViolation):
        return Response({"detail": exc.message}, status=status.HTTP_409_CONFLICT)

    if isinstance(exc, ProtectedError):
        logger.warning("protected_delete_blocked", extra={"view": context["view"].__class__.__name__})
        return Response(
            {"detail": "Cannot delete: other records still reference this item."},
            status=status.HTTP_409_CONFLICT,
        )

    # DRF handles APIException, Http404 and django PermissionDenied; anything else propagates.
    return exception_handler(exc, context)
