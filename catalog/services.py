"""Catalog domain services for mutations.

Keep business rules here and keep views thin. Product quantity is owned by
the inventory ledger: it is set once on create and never touched by edits.
"""

import logging

from common.exceptions import ConstraintViolation
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from .models import MAX_QUANTITY, Category, Product

logger = logging.getLogger("stockkeeper.catalog")

DUPLICATE_SKU_MESSAGE = "A product with this SKU already exists."


def _require_text(errors: dict, field: str, value) -> str:
    value = value.strip() if isinstance(value, str) else ""
    max_length = Product._meta.get_field(field).max_length
    if not value:
        errors[field] = ["This field is required."]
    elif len(value) > max_length:
        errors[field] = [f"Ensure this field has no more than {max_length} characters."]
    return value


def _ensure_sku_available(sku: str, exclude_id=None) -> None:
    qs = Product.objects.filter(sku=sku)
    if exclude_id is not None:
        qs = qs.exclude(id=exclude_id)
    if qs.exists():
        raise ConstraintViolation(DUPLICATE_SKU_MESSAGE)


def create_category(*, name: str) -> Category:
    name = (name or "").strip()
    if not name:
        raise ValidationError({"name": ["This field is required."]})
    category = Category.objects.create(name=name)
    logger.info("category_created", extra={"category_id": category.id})
    return category


def update_category(category: Category, *, name: str) -> Category:
    name = (name or "").strip()
    if not name:
        raise ValidationError({"name": ["This field is required."]})
    category.name = name
    category.save(update_fields=["name", "updated_at"])
    return category


@transaction.atomic
def delete_category(category: Category) -> None:
    """Delete an empty category.

    Raises ConstraintViolation when any product still belongs to it; the
    category and its products are left untouched.
    """

    if Product.objects.filter(category_id=category.id).exists():
        logger.info("category_delete_blocked", extra={"category_id": category.id})
        raise ConstraintViolation("Cannot delete category with products.")
    category_id = category.id
    category.delete()
    logger.info("category_deleted", extra={"category_id": category_id})


def create_product(*, name: str, sku: str, quantity: int, category: Category) -> Product:
    """Create a product with its opening quantity.

    Field problems raise ValidationError (per field); a taken SKU raises
    ConstraintViolation.
    """

    errors: dict = {}
    name = _require_text(errors, "name", name)
    sku = _require_text(errors, "sku", sku)
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        errors["quantity"] = ["A valid integer is required."]
    elif quantity < 0:
        errors["quantity"] = ["Ensure this value is greater than or equal to 0."]
    elif quantity > MAX_QUANTITY:
        errors["quantity"] = [f"Ensure this value is less than or equal to {MAX_QUANTITY}."]
    if category is None:
        errors["category"] = ["This field is required."]
    if errors:
        raise ValidationError(errors)

    _ensure_sku_available(sku)
    try:
        with transaction.atomic():
            product = Product.objects.create(name=name, sku=sku, quantity=quantity, category=category)
    except IntegrityError:
        # Lost a race against a concurrent insert with the same SKU
        raise ConstraintViolation(DUPLICATE_SKU_MESSAGE)
    logger.info("product_created", extra={"product_id": product.id, "sku": product.sku, "quantity": quantity})
    return product


def update_product(product: Product, *, name=None, sku=None, category: Category | None = None) -> Product:
    """Edit name, sku and/or category. Quantity is never changed here."""

    errors: dict = {}
    fields = []
    if name is not None:
        product.name = _require_text(errors, "name", name)
        fields.append("name")
    if sku is not None:
        product.sku = _require_text(errors, "sku", sku)
        fields.append("sku")
    if category is not None:
        product.category = category
        fields.append("category")
    if errors:
        raise ValidationError(errors)
    if not fields:
        return product

    if "sku" in fields:
        _ensure_sku_available(product.sku, exclude_id=product.id)
    try:
        with transaction.atomic():
            product.save(update_fields=[*fields, "updated_at"])
    except IntegrityError:
        raise ConstraintViolation(DUPLICATE_SKU_MESSAGE)
    logger.info("product_updated", extra={"product_id": product.id, "fields": fields})
    return product


@transaction.atomic
def delete_product(product: Product) -> None:
    """Delete a product that has no stock movement history.

    Movements are permanent audit records, so a product with history raises
    ConstraintViolation instead of cascading.
    """

    if product.movements.exists():
        logger.info("product_delete_blocked", extra={"product_id": product.id})
        raise ConstraintViolation("Cannot delete product with stock movement history.")
    product_id = product.id
    product.delete()
    logger.info("product_deleted", extra={"product_id": product_id})
