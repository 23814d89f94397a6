import pytest
from catalog.models import Category, Product
from catalog.selectors import (
    ProductFilters,
    filter_products,
    low_stock_products,
    query_categories,
    query_low_stock_products,
    query_products,
)
from catalog.tests.factories import CategoryFactory, ProductFactory
from common.pagination import ListState
from django.core.management import call_command


@pytest.fixture
def seeded(db):
    call_command("seed_catalog")


def test_search_matches_name_case_insensitively(seeded):
    page = query_products(ProductFilters(search="iphone"))
    assert [p.name for p in page.rows] == ["iPhone 14 Pro"]


def test_search_matches_sku(seeded):
    page = query_products(ProductFilters(search="book-"))
    assert {p.sku for p in page.rows} == {"BOOK-LAR-001", "BOOK-PHP-001"}


def test_search_is_trimmed(seeded):
    page = query_products(ProductFilters(search="  iphone  "))
    assert [p.sku for p in page.rows] == ["APPL-IP14-001"]


def test_category_filter(seeded):
    electronics = Category.objects.get(name="Electronics")
    page = query_products(ProductFilters(category_id=electronics.id))
    assert page.total == 3
    assert all(p.category_id == electronics.id for p in page.rows)


def test_search_and_category_are_anded(seeded):
    books = Category.objects.get(name="Books")
    assert query_products(ProductFilters(search="iphone", category_id=books.id)).total == 0
    page = query_products(ProductFilters(search="php", category_id=books.id))
    assert [p.sku for p in page.rows] == ["BOOK-PHP-001"]


def test_empty_filters_return_everything_in_insertion_order(seeded):
    page = query_products(ProductFilters())
    assert page.total == 10
    assert [p.id for p in page.rows] == sorted(p.id for p in page.rows)


def test_query_is_repeatable(seeded):
    filters = ProductFilters(search="e")
    first = query_products(filters, 1)
    second = query_products(filters, 1)
    assert [p.id for p in first.rows] == [p.id for p in second.rows]
    assert first.total == second.total


def test_category_is_resolved_without_extra_queries(seeded, django_assert_num_queries):
    qs = filter_products(ProductFilters())
    with django_assert_num_queries(1):
        names = [p.category.name for p in qs]
    assert len(names) == 10


@pytest.mark.django_db
def test_product_pages_hold_ten_rows():
    category = CategoryFactory()
    ProductFactory.create_batch(23, category=category)

    first = query_products(ProductFilters(), 1)
    third = query_products(ProductFilters(), 3)

    assert (first.page_size, len(first.rows), first.total_pages) == (10, 10, 3)
    assert len(third.rows) == 3
    assert first.next_page == 2 and first.previous_page is None
    assert third.next_page is None


@pytest.mark.django_db
def test_out_of_range_page_is_clamped():
    ProductFactory.create_batch(12)

    page = query_products(ProductFilters(), 9)

    assert page.page == 2
    assert len(page.rows) == 2


@pytest.mark.django_db
def test_no_matches_yields_single_empty_page():
    page = query_products(ProductFilters(search="nothing matches this"))
    assert page.rows == []
    assert (page.page, page.total, page.total_pages) == (1, 0, 1)


def test_filter_change_resets_page(seeded):
    state = ListState(filters=ProductFilters()).with_page(3)
    assert state.page == 3

    searched = state.with_filters(search="iphone")

    assert searched.page == 1
    assert searched.filters == ProductFilters(search="iphone")
    assert [p.name for p in query_products(searched.filters, searched.page).rows] == ["iPhone 14 Pro"]


@pytest.mark.django_db
def test_categories_carry_product_counts():
    full = CategoryFactory()
    empty = CategoryFactory()
    ProductFactory.create_batch(2, category=full)

    page = query_categories(1)

    counts = {c.id: c.products_count for c in page.rows}
    assert counts == {full.id: 2, empty.id: 0}
    assert page.page_size == 10


@pytest.mark.django_db
def test_low_stock_is_strictly_below_threshold():
    zero = ProductFactory(quantity=0)
    nine = ProductFactory(quantity=9)
    ProductFactory(quantity=10)

    assert list(low_stock_products(10)) == [zero, nine]
    assert list(low_stock_products(1)) == [zero]


@pytest.mark.django_db
def test_low_stock_threshold_comes_from_settings(settings):
    settings.LOW_STOCK_THRESHOLD = 3
    two = ProductFactory(quantity=2)
    ProductFactory(quantity=5)

    page = query_low_stock_products()

    assert page.rows == [two]
    assert Product.objects.count() == 2


def test_searching_from_second_page_returns_to_first(seeded):
    ProductFactory.create_batch(5, category=Category.objects.first())
    state = ListState(filters=ProductFilters()).with_page(2)
    assert query_products(state.filters, state.page).page == 2

    state = state.with_filters(search="laptop")

    assert state.page == 1
    assert [p.sku for p in query_products(state.filters, state.page).rows] == ["DELL-XPS-001"]


def test_whitespace_only_search_applies_no_filter(seeded):
    assert query_products(ProductFilters(search="   ")).total == 10
