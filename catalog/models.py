"""Catalog app models.

Defines the core entities for the catalog domain: categories and products.
`Product.quantity` is a running balance maintained by the inventory ledger
(see ``inventory.services.adjust_stock``); catalog edits never change it.
"""

from django.db import models

# Upper bound of the integer quantity columns on every supported backend
MAX_QUANTITY = 2147483647


class TimeStampedModel(models.Model):
    """Abstract base model adding created/updated timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Category(TimeStampedModel):
    """Flat product categorization."""

    name = models.CharField(max_length=255)

    class Meta:
        ordering = ["id"]
        verbose_name_plural = "categories"
        constraints = [
            models.CheckConstraint(name="category_name_not_blank", condition=~models.Q(name="")),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return self.name


class Product(TimeStampedModel):
    """Stocked product with a denormalized on-hand quantity."""

    name = models.CharField(max_length=255)
    sku = models.CharField(max_length=64, unique=True)
    quantity = models.IntegerField(default=0)
    category = models.ForeignKey(Category, related_name="products", on_delete=models.PROTECT)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(name="product_quantity_non_negative", condition=models.Q(quantity__gte=0)),
            models.CheckConstraint(name="product_name_not_blank", condition=~models.Q(name="")),
            models.CheckConstraint(name="product_sku_not_blank", condition=~models.Q(sku="")),
        ]
        indexes = [
            models.Index(fields=["category", "id"], name="catalog_pro_categor_6f1d2a_idx"),
            models.Index(fields=["quantity"], name="catalog_pro_quantit_9b3c41_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.name} [{self.sku}]"
