"""Shared enumerations and choices used across apps."""

from django.db import models


class Role(models.TextChoices):
    """Closed set of user roles; capabilities are resolved in ``common.capabilities``."""

    ADMIN = "admin", "Admin"
    MANAGER = "manager", "Manager"
    STOCK_WORKER = "stock_worker", "Stock Worker"


class MovementType(models.TextChoices):
    INBOUND = "in", "In"
    OUTBOUND = "out", "Out"


class MovementReason(models.TextChoices):
    RECEIVED = "received", "Received"
    SOLD = "sold", "Sold"
    DAMAGED = "damaged", "Damaged"
    ADJUSTMENT = "adjustment", "Adjustment"
