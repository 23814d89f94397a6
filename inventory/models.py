"""Inventory models.

`StockMovement` is the append-only ledger behind `catalog.Product.quantity`:
every quantity change writes exactly one movement, and movements are never
edited or removed by the application.
"""

from common.choices import MovementReason, MovementType
from django.conf import settings
from django.db import models


class ImmutableRecordError(Exception):
    pass


class StockMovement(models.Model):
    TYPE_IN = MovementType.INBOUND
    TYPE_OUT = MovementType.OUTBOUND
    TYPE_CHOICES = MovementType.choices

    REASON_RECEIVED = MovementReason.RECEIVED
    REASON_SOLD = MovementReason.SOLD
    REASON_DAMAGED = MovementReason.DAMAGED
    REASON_ADJUSTMENT = MovementReason.ADJUSTMENT
    REASON_CHOICES = MovementReason.choices

    product = models.ForeignKey("catalog.Product", on_delete=models.PROTECT, related_name="movements")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="stock_movements")
    movement_type = models.CharField(max_length=8, choices=TYPE_CHOICES)
    quantity = models.PositiveIntegerField()  # always positive; direction comes from movement_type
    reason = models.CharField(max_length=16, choices=REASON_CHOICES, default=REASON_ADJUSTMENT)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(name="movement_quantity_positive", condition=models.Q(quantity__gt=0)),
            models.CheckConstraint(name="movement_type_valid", condition=models.Q(movement_type__in=["in", "out"])),
            models.CheckConstraint(
                name="movement_reason_valid",
                condition=models.Q(reason__in=["received", "sold", "damaged", "adjustment"]),
            ),
        ]
        indexes = [
            models.Index(fields=["product", "created_at"], name="inventory_s_product_4c1e7b_idx"),
            models.Index(fields=["movement_type", "created_at"], name="inventory_s_movemen_a82f10_idx"),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ImmutableRecordError("Stock movements are append-only")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ImmutableRecordError("Stock movements are append-only")

    @property
    def signed_quantity(self) -> int:
        return self.quantity if self.movement_type == self.TYPE_IN else -self.quantity

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.movement_type} {self.quantity} for {self.product_id}"
