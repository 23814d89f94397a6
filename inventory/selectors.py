"""Selectors for the inventory domain (read-only)."""

import datetime as dt
from dataclasses import dataclass
from typing import Optional

from catalog.models import Category, Product
from catalog.selectors import low_stock_threshold
from common.pagination import Page, paginate
from django.db.models import Count, QuerySet
from django.utils import timezone

from .models import StockMovement

MOVEMENT_PAGE_SIZE = 15
RECENT_MOVEMENTS_LIMIT = 5


@dataclass(frozen=True)
class MovementFilters:
    """Filter state for the movement list. Date bounds are inclusive calendar dates."""

    product_id: Optional[int] = None
    movement_type: Optional[str] = None
    date_from: Optional[dt.date] = None
    date_to: Optional[dt.date] = None


def filter_movements(filters: MovementFilters) -> QuerySet[StockMovement]:
    """Compose the movement queryset for ``filters``, newest first.

    Each filter is optional; present filters are ANDed. Product and user are
    fetched in the same query.
    """

    qs = StockMovement.objects.select_related("product", "user")

    if filters.product_id:
        qs = qs.filter(product_id=filters.product_id)
    if filters.movement_type:
        qs = qs.filter(movement_type=filters.movement_type)
    if filters.date_from:
        qs = qs.filter(created_at__date__gte=filters.date_from)
    if filters.date_to:
        qs = qs.filter(created_at__date__lte=filters.date_to)

    return qs.order_by("-created_at", "-id")


def query_movements(filters: MovementFilters, page=1) -> Page:
    """Return one page (15 rows) of movements matching ``filters``."""

    return paginate(filter_movements(filters), page, MOVEMENT_PAGE_SIZE)


def recent_movements(limit: int = RECENT_MOVEMENTS_LIMIT) -> list[StockMovement]:
    return list(StockMovement.objects.select_related("product", "user").order_by("-created_at", "-id")[:limit])


def dashboard_stats() -> dict:
    """Headline counts for the dashboard plus the latest movements and category sizes."""

    threshold = low_stock_threshold()
    today = timezone.localdate()
    return {
        "total_products": Product.objects.count(),
        "low_stock_count": Product.objects.filter(quantity__lt=threshold).count(),
        "low_stock_threshold": threshold,
        "categories_count": Category.objects.count(),
        "today_movements": StockMovement.objects.filter(created_at__date=today).count(),
        "recent_movements": recent_movements(),
        "categories": list(Category.objects.annotate(products_count=Count("products")).order_by("id")),
    }
