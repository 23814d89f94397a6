import pytest
from catalog.models import Category, Product
from catalog.tests.factories import CategoryFactory, ProductFactory
from django.core.management import call_command
from django.test import override_settings
from inventory.tests.factories import StockMovementFactory
from rest_framework.test import APIClient

PRODUCTS_URL = "/api/v1/catalog/products/"
CATEGORIES_URL = "/api/v1/catalog/categories/"


@pytest.mark.django_db
def test_product_list_search_and_pagination_payload(api_client_for):
    call_command("seed_catalog")
    client = api_client_for("stock_worker")

    resp = client.get(PRODUCTS_URL, {"search": "iphone"})

    assert resp.status_code == 200
    assert resp.data["count"] == 1
    assert resp.data["page"] == 1
    assert resp.data["page_size"] == 10
    assert resp.data["next_page"] is None
    row = resp.data["results"][0]
    assert row["name"] == "iPhone 14 Pro"
    assert row["category"]["name"] == "Electronics"
    assert {"id", "sku", "quantity", "created_at", "updated_at"} <= set(row)


@pytest.mark.django_db
def test_product_list_category_filter(api_client_for):
    call_command("seed_catalog")
    client = api_client_for("stock_worker")
    electronics = Category.objects.get(name="Electronics")

    resp = client.get(PRODUCTS_URL, {"category": electronics.id})

    assert resp.data["count"] == 3


@pytest.mark.django_db
def test_product_list_rejects_bad_page(api_client_for):
    client = api_client_for("stock_worker")
    resp = client.get(PRODUCTS_URL, {"page": 0})
    assert resp.status_code == 400
    assert "page" in resp.data


@pytest.mark.django_db
def test_product_list_requires_authentication():
    resp = APIClient().get(PRODUCTS_URL)
    assert resp.status_code == 401


@pytest.mark.django_db
def test_manager_creates_product(api_client_for):
    client = api_client_for("manager")
    category = CategoryFactory()

    resp = client.post(
        PRODUCTS_URL,
        {"name": "Desk", "sku": "DESK-1", "quantity": 3, "category": category.id},
        format="json",
    )

    assert resp.status_code == 201
    assert resp.data["quantity"] == 3
    assert resp.data["category"]["id"] == category.id


@pytest.mark.django_db
def test_duplicate_sku_is_409(api_client_for):
    client = api_client_for("admin")
    existing = ProductFactory(sku="DUP-9")

    resp = client.post(
        PRODUCTS_URL,
        {"name": "Clone", "sku": "DUP-9", "quantity": 1, "category": existing.category_id},
        format="json",
    )

    assert resp.status_code == 409
    assert resp.data == {"detail": "A product with this SKU already exists."}


@pytest.mark.django_db
def test_stock_worker_cannot_create_product(api_client_for):
    client = api_client_for("stock_worker")
    category = CategoryFactory()

    resp = client.post(
        PRODUCTS_URL,
        {"name": "Desk", "sku": "DESK-2", "quantity": 3, "category": category.id},
        format="json",
    )

    assert resp.status_code == 403
    assert not Product.objects.exists()


@pytest.mark.django_db
def test_product_update_ignores_quantity(api_client_for):
    client = api_client_for("manager")
    product = ProductFactory(quantity=6)

    resp = client.patch(f"{PRODUCTS_URL}{product.id}/", {"name": "Renamed", "quantity": 999}, format="json")

    assert resp.status_code == 200
    assert resp.data["name"] == "Renamed"
    assert resp.data["quantity"] == 6
    product.refresh_from_db()
    assert product.quantity == 6


@pytest.mark.django_db
def test_product_with_history_cannot_be_deleted(api_client_for):
    client = api_client_for("admin")
    movement = StockMovementFactory()

    resp = client.delete(f"{PRODUCTS_URL}{movement.product_id}/")

    assert resp.status_code == 409
    assert Product.objects.filter(id=movement.product_id).exists()


@pytest.mark.django_db
def test_product_without_history_is_deleted(api_client_for):
    client = api_client_for("manager")
    product = ProductFactory()

    resp = client.delete(f"{PRODUCTS_URL}{product.id}/")

    assert resp.status_code == 204
    assert not Product.objects.filter(id=product.id).exists()


@pytest.mark.django_db
def test_category_list_visible_to_every_role(api_client_for):
    category = CategoryFactory()
    ProductFactory(category=category)
    client = api_client_for("stock_worker")

    resp = client.get(CATEGORIES_URL)

    assert resp.status_code == 200
    assert resp.data["results"][0]["products_count"] == 1


@pytest.mark.django_db
def test_category_crud_for_manager(api_client_for):
    client = api_client_for("manager")

    created = client.post(CATEGORIES_URL, {"name": "Toys"}, format="json")
    assert created.status_code == 201
    category_id = created.data["id"]

    renamed = client.put(f"{CATEGORIES_URL}{category_id}/", {"name": "Games"}, format="json")
    assert renamed.status_code == 200
    assert renamed.data["name"] == "Games"

    deleted = client.delete(f"{CATEGORIES_URL}{category_id}/")
    assert deleted.status_code == 204
    assert not Category.objects.filter(id=category_id).exists()


@pytest.mark.django_db
def test_category_in_use_cannot_be_deleted(api_client_for):
    client = api_client_for("admin")
    product = ProductFactory()

    resp = client.delete(f"{CATEGORIES_URL}{product.category_id}/")

    assert resp.status_code == 409
    assert resp.data == {"detail": "Cannot delete category with products."}
    assert Category.objects.filter(id=product.category_id).exists()


@pytest.mark.django_db
def test_stock_worker_cannot_manage_categories(api_client_for):
    client = api_client_for("stock_worker")
    resp = client.post(CATEGORIES_URL, {"name": "Toys"}, format="json")
    assert resp.status_code == 403


@pytest.mark.django_db
def test_catalog_write_throttle(api_client_for):
    client = api_client_for("manager")
    rates = {"catalog_write": "2/min", "user": "1000/min", "anon": "1000/min"}
    with override_settings(REST_FRAMEWORK={"DEFAULT_THROTTLE_RATES": rates}):
        codes = [client.post(CATEGORIES_URL, {"name": f"C{i}"}, format="json").status_code for i in range(3)]
    assert codes == [201, 201, 429]
