"""Serializers for the catalog app.

Read serializers render categories and products; write serializers only
validate input shape and hand off to ``catalog.services``.
"""

from rest_framework import serializers

from .models import MAX_QUANTITY, Category, Product


class CategorySerializer(serializers.ModelSerializer):
    products_count = serializers.IntegerField(read_only=True, default=0)

    class Meta:
        model = Category
        fields = ["id", "name", "products_count", "created_at", "updated_at"]
        read_only_fields = ["id", "products_count", "created_at", "updated_at"]


class CategoryRefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name"]


class ProductSerializer(serializers.ModelSerializer):
    """Read-only product row with its category resolved."""

    category = CategoryRefSerializer(read_only=True)

    class Meta:
        model = Product
        fields = ["id", "name", "sku", "quantity", "category", "created_at", "updated_at"]
        read_only_fields = fields


class ProductCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    sku = serializers.CharField(max_length=64)
    quantity = serializers.IntegerField(min_value=0, max_value=MAX_QUANTITY)
    category = serializers.PrimaryKeyRelatedField(queryset=Category.objects.all())


class ProductUpdateSerializer(serializers.Serializer):
    """Editable product fields; quantity is not accepted here."""

    name = serializers.CharField(max_length=255, required=False)
    sku = serializers.CharField(max_length=64, required=False)
    category = serializers.PrimaryKeyRelatedField(queryset=Category.objects.all(), required=False)


class ProductListQuerySerializer(serializers.Serializer):
    """Query parameters for the product list."""

    search = serializers.CharField(required=False, allow_blank=True, default="")
    category = serializers.IntegerField(required=False, min_value=1, allow_null=True, default=None)
    page = serializers.IntegerField(required=False, min_value=1, default=1)


class PageQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(required=False, min_value=1, default=1)
