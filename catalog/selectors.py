"""Selectors for the catalog domain.

Expose read-only query helpers to keep views thin and allow reuse across
APIs and services. Selectors return querysets or ``Page`` values and avoid
side effects; calling one twice with the same arguments and no intervening
writes yields the same result.
"""

from dataclasses import dataclass
from typing import Optional

from common.pagination import Page, paginate
from django.conf import settings
from django.db.models import Count, Q, QuerySet

from .models import Category, Product

PRODUCT_PAGE_SIZE = 10
CATEGORY_PAGE_SIZE = 10


@dataclass(frozen=True)
class ProductFilters:
    """Filter state for the product list."""

    search: str = ""
    category_id: Optional[int] = None


def filter_products(filters: ProductFilters) -> QuerySet[Product]:
    """Compose the product queryset for ``filters``.

    ``search`` matches name OR sku (case-insensitive substring) as one group.
    Surrounding whitespace is stripped first, so a blank or whitespace-only
    search applies no filter instead of matching a literal space;
    ``category_id`` restricts to one category. Present filters are ANDed.
    """

    qs = Product.objects.select_related("category")

    search = (filters.search or "").strip()
    if search:
        qs = qs.filter(Q(name__icontains=search) | Q(sku__icontains=search))
    if filters.category_id:
        qs = qs.filter(category_id=filters.category_id)

    return qs.order_by("id")


def query_products(filters: ProductFilters, page=1) -> Page:
    """Return one page (10 rows) of products matching ``filters``, category resolved."""

    return paginate(filter_products(filters), page, PRODUCT_PAGE_SIZE)


def list_categories() -> QuerySet[Category]:
    """Return all categories annotated with ``products_count``."""

    return Category.objects.annotate(products_count=Count("products")).order_by("id")


def query_categories(page=1) -> Page:
    return paginate(list_categories(), page, CATEGORY_PAGE_SIZE)


def low_stock_threshold() -> int:
    return int(getattr(settings, "LOW_STOCK_THRESHOLD", 10))


def low_stock_products(threshold: Optional[int] = None) -> QuerySet[Product]:
    """Products whose quantity is below ``threshold``, lowest stock first."""

    limit = low_stock_threshold() if threshold is None else threshold
    return Product.objects.select_related("category").filter(quantity__lt=limit).order_by("quantity", "id")


def query_low_stock_products(page=1, threshold: Optional[int] = None) -> Page:
    return paginate(low_stock_products(threshold), page, PRODUCT_PAGE_SIZE)
