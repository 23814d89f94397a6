"""Inventory services: the stock ledger.

`adjust_stock` is the only code path that changes `Product.quantity` after a
product exists. It updates the running balance and appends the matching
`StockMovement` in one transaction, so the balance always equals the opening
quantity plus inbound minus outbound movements.
"""

import logging

from catalog.models import MAX_QUANTITY, Product
from common.capabilities import ADJUST_STOCK, can_perform
from common.choices import MovementReason, MovementType
from common.exceptions import InsufficientStock
from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from .models import StockMovement

logger = logging.getLogger("stockkeeper.inventory")


def validate_adjustment(*, movement_type, quantity, reason) -> None:
    """Raise ValidationError keyed by field for malformed adjustment input."""

    errors = {}
    if movement_type not in MovementType.values:
        errors["movement_type"] = [f'"{movement_type}" is not a valid choice.']
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        errors["quantity"] = ["A valid integer is required."]
    elif quantity < 1:
        errors["quantity"] = ["Ensure this value is greater than or equal to 1."]
    elif quantity > MAX_QUANTITY:
        errors["quantity"] = [f"Ensure this value is less than or equal to {MAX_QUANTITY}."]
    if reason not in MovementReason.values:
        errors["reason"] = [f'"{reason}" is not a valid choice.']
    if errors:
        raise ValidationError(errors)


@transaction.atomic
def adjust_stock(
    *,
    product: Product,
    movement_type: str,
    quantity: int,
    user,
    reason: str = MovementReason.ADJUSTMENT,
) -> StockMovement:
    """Apply an inbound or outbound quantity change to a product and record it.

    The product row is locked for the duration of the transaction. Outbound
    movements larger than the current quantity raise InsufficientStock before
    anything is written; inbound movements that would push the balance past
    ``MAX_QUANTITY`` raise ValidationError on ``quantity``. On success
    ``product.quantity`` is refreshed in place and the new movement is returned.
    """

    validate_adjustment(movement_type=movement_type, quantity=quantity, reason=reason)
    if not can_perform(user, ADJUST_STOCK):
        raise PermissionDenied("Adjusting stock requires the adjust-stock capability.")

    locked = Product.objects.select_for_update().get(pk=product.pk)
    if movement_type == MovementType.OUTBOUND and quantity > locked.quantity:
        logger.warning(
            "stock_adjust_rejected",
            extra={
                "product_id": locked.id,
                "user_id": user.id,
                "requested": quantity,
                "available": locked.quantity,
            },
        )
        raise InsufficientStock(requested=quantity, available=locked.quantity)
    if movement_type == MovementType.INBOUND and locked.quantity + quantity > MAX_QUANTITY:
        raise ValidationError({"quantity": [f"Stock on hand cannot exceed {MAX_QUANTITY}."]})

    delta = quantity if movement_type == MovementType.INBOUND else -quantity
    Product.objects.filter(pk=locked.pk).update(quantity=F("quantity") + delta, updated_at=timezone.now())
    movement = StockMovement.objects.create(
        product=locked,
        user=user,
        movement_type=movement_type,
        quantity=quantity,
        reason=reason,
    )

    locked.refresh_from_db(fields=["quantity", "updated_at"])
    product.quantity = locked.quantity
    product.updated_at = locked.updated_at

    logger.info(
        "stock_adjusted",
        extra={
            "product_id": locked.id,
            "movement_id": movement.id,
            "user_id": user.id,
            "movement_type": movement_type,
            "quantity": quantity,
            "reason": reason,
            "quantity_after": locked.quantity,
        },
    )
    return movement
