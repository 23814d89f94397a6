"""Immutable list state, page values and the list response envelope.

A list view is a pure function ``(filters, page) -> Page``. The API is
stateless: clients send their filter state and page number on each request.
``ListState`` is the reducer such a client applies to that state; changing
any filter resets the page to 1.

Every list endpoint renders its body through ``page_payload``, either directly
from a selector ``Page`` or via ``EnvelopePagination`` for generic DRF views.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Generic, List, Optional, TypeVar

from django.core.paginator import Paginator
from django.db.models import QuerySet
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

F = TypeVar("F")


@dataclass(frozen=True)
class Page:
    rows: List[Any]
    page: int
    page_size: int
    total: int
    total_pages: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def next_page(self) -> Optional[int]:
        return self.page + 1 if self.has_next else None

    @property
    def previous_page(self) -> Optional[int]:
        return self.page - 1 if self.has_previous else None


def _page_from_django(current) -> Page:
    paginator = current.paginator
    return Page(
        rows=list(current.object_list),
        page=current.number,
        page_size=paginator.per_page,
        total=paginator.count,
        total_pages=paginator.num_pages,
    )


def paginate(qs: QuerySet, page, page_size: int) -> Page:
    """Slice ``qs`` into a page; out-of-range or malformed page numbers are clamped."""

    return _page_from_django(Paginator(qs, page_size).get_page(page))


@dataclass(frozen=True)
class ListState(Generic[F]):
    """Filter state plus page number for one list view."""

    filters: F
    page: int = field(default=1)

    def with_filters(self, **changes) -> "ListState[F]":
        new_filters = replace(self.filters, **changes)
        if new_filters == self.filters:
            return self
        return ListState(filters=new_filters, page=1)

    def with_page(self, page: int) -> "ListState[F]":
        return ListState(filters=self.filters, page=max(1, int(page)))


def page_payload(page: Page, results) -> dict:
    """Render a page as the list response body shared by every list endpoint."""

    return {
        "count": page.total,
        "page": page.page,
        "page_size": page.page_size,
        "total_pages": page.total_pages,
        "next_page": page.next_page,
        "previous_page": page.previous_page,
        "results": results,
    }


class EnvelopePagination(PageNumberPagination):
    """PageNumberPagination emitting the ``page_payload`` envelope.

    Out-of-range page numbers are clamped like the selector lists instead of
    raising 404.
    """

    page_size = 20

    def paginate_queryset(self, queryset, request, view=None):
        self.request = request
        paginator = self.django_paginator_class(queryset, self.get_page_size(request))
        self.page = paginator.get_page(request.query_params.get(self.page_query_param, 1))
        self.current = _page_from_django(self.page)
        return self.current.rows

    def get_paginated_response(self, data):
        return Response(page_payload(self.current, data))

    def get_paginated_response_schema(self, schema):
        nullable_int = {"type": "integer", "nullable": True}
        return {
            "type": "object",
            "required": ["count", "page", "page_size", "total_pages", "results"],
            "properties": {
                "count": {"type": "integer", "example": 42},
                "page": {"type": "integer", "example": 1},
                "page_size": {"type": "integer", "example": self.page_size},
                "total_pages": {"type": "integer", "example": 3},
                "next_page": {**nullable_int, "example": 2},
                "previous_page": {**nullable_int, "example": None},
                "results": schema,
            },
        }
