import pytest
from catalog import services
from catalog.models import MAX_QUANTITY, Category, Product
from catalog.tests.factories import CategoryFactory, ProductFactory
from common.exceptions import ConstraintViolation
from django.core.exceptions import ValidationError
from inventory.services import adjust_stock
from users.tests.factories import StockWorkerFactory


@pytest.mark.django_db
def test_create_product_sets_opening_quantity():
    category = CategoryFactory()

    product = services.create_product(name=" Desk Lamp ", sku="LAMP-001", quantity=7, category=category)

    assert (product.name, product.sku, product.quantity) == ("Desk Lamp", "LAMP-001", 7)
    assert product.movements.count() == 0


@pytest.mark.django_db
def test_create_product_duplicate_sku_conflicts():
    existing = ProductFactory(sku="DUP-1")

    with pytest.raises(ConstraintViolation):
        services.create_product(name="Other", sku="DUP-1", quantity=1, category=existing.category)

    assert Product.objects.count() == 1


@pytest.mark.django_db
def test_create_product_reports_each_bad_field():
    with pytest.raises(ValidationError) as exc_info:
        services.create_product(name="  ", sku="", quantity=-1, category=None)

    assert set(exc_info.value.message_dict) == {"name", "sku", "quantity", "category"}


@pytest.mark.django_db
def test_update_product_leaves_quantity_alone():
    product = ProductFactory(quantity=4)
    new_category = CategoryFactory()

    services.update_product(product, name="Renamed", sku="NEW-SKU", category=new_category)

    product.refresh_from_db()
    assert (product.name, product.sku, product.category_id, product.quantity) == (
        "Renamed",
        "NEW-SKU",
        new_category.id,
        4,
    )


@pytest.mark.django_db
def test_update_product_to_taken_sku_conflicts():
    ProductFactory(sku="TAKEN")
    product = ProductFactory(sku="MINE")

    with pytest.raises(ConstraintViolation):
        services.update_product(product, sku="TAKEN")

    product.refresh_from_db()
    assert product.sku == "MINE"


@pytest.mark.django_db
def test_update_product_keeping_own_sku_is_fine():
    product = ProductFactory(sku="SAME")
    services.update_product(product, sku="SAME", name="Still same")
    product.refresh_from_db()
    assert product.name == "Still same"


@pytest.mark.django_db
def test_delete_empty_category():
    category = CategoryFactory()
    category_id = category.id
    services.delete_category(category)
    assert not Category.objects.filter(id=category_id).exists()


@pytest.mark.django_db
def test_delete_category_with_products_is_blocked():
    product = ProductFactory()

    with pytest.raises(ConstraintViolation) as exc_info:
        services.delete_category(product.category)

    assert exc_info.value.message == "Cannot delete category with products."
    assert Category.objects.filter(id=product.category_id).exists()
    assert Product.objects.filter(id=product.id).exists()


@pytest.mark.django_db
def test_delete_product_without_history():
    product = ProductFactory()
    services.delete_product(product)
    assert not Product.objects.exists()


@pytest.mark.django_db
def test_delete_product_with_history_is_blocked():
    product = ProductFactory(quantity=3)
    adjust_stock(product=product, movement_type="out", quantity=1, user=StockWorkerFactory())

    with pytest.raises(ConstraintViolation):
        services.delete_product(product)

    assert Product.objects.filter(id=product.id).exists()
    assert product.movements.count() == 1


@pytest.mark.django_db
def test_category_name_required():
    with pytest.raises(ValidationError) as exc_info:
        services.create_category(name="   ")
    assert "name" in exc_info.value.message_dict


@pytest.mark.django_db
def test_create_product_rejects_quantity_beyond_column_range():
    with pytest.raises(ValidationError) as exc_info:
        services.create_product(name="Bulk", sku="BULK-1", quantity=MAX_QUANTITY + 1, category=CategoryFactory())

    assert list(exc_info.value.message_dict) == ["quantity"]
    assert not Product.objects.exists()
