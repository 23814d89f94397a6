"""Catalog API: categories and products.

List endpoints run the list selectors with the filter state sent by the
client; write endpoints delegate to ``catalog.services``.
"""

from common.capabilities import MANAGE_CATEGORIES, MANAGE_PRODUCTS, VIEW_PRODUCTS
from common.pagination import page_payload
from common.permissions import HasCapability
from common.throttling import SettingsScopedRateThrottle
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.generics import get_object_or_404
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from . import selectors, services
from .models import Category, Product
from .serializers import (
    CategorySerializer,
    PageQuerySerializer,
    ProductCreateSerializer,
    ProductListQuerySerializer,
    ProductSerializer,
    ProductUpdateSerializer,
)

PAGE_PARAM = OpenApiParameter(name="page", description="Page number (1-based)", required=False, type=int)


class CatalogBaseViewSet(viewsets.ViewSet):
    """Shared permission and throttle wiring.

    Reads require ``read_capability``; writes require ``write_capability``.
    """

    read_capability = VIEW_PRODUCTS
    write_capability = MANAGE_PRODUCTS
    throttle_classes = [SettingsScopedRateThrottle]

    def get_permissions(self):
        capability = self.read_capability if self.action in ("list", "retrieve") else self.write_capability
        return [IsAuthenticated(), HasCapability(capability)()]

    def get_throttles(self):
        self.throttle_scope = "catalog" if self.action in ("list", "retrieve") else "catalog_write"
        return super().get_throttles()


class CategoryViewSet(CatalogBaseViewSet):
    # Category options feed the product list filter for every role
    read_capability = VIEW_PRODUCTS
    write_capability = MANAGE_CATEGORIES

    @extend_schema(
        tags=["Catalog Endpoints"],
        summary="List categories",
        description="Categories with their product counts, 10 per page.",
        parameters=[PAGE_PARAM],
        responses=CategorySerializer(many=True),
    )
    def list(self, request):
        query = PageQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        page = selectors.query_categories(query.validated_data["page"])
        return Response(page_payload(page, CategorySerializer(page.rows, many=True).data))

    @extend_schema(tags=["Catalog Endpoints"], summary="Get category", responses=CategorySerializer)
    def retrieve(self, request, pk=None):
        category = get_object_or_404(selectors.list_categories(), pk=pk)
        return Response(CategorySerializer(category).data)

    @extend_schema(tags=["Catalog Endpoints"], summary="Create category", request=CategorySerializer)
    def create(self, request):
        serializer = CategorySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        category = services.create_category(name=serializer.validated_data["name"])
        return Response(CategorySerializer(category).data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Catalog Endpoints"], summary="Update category", request=CategorySerializer)
    def update(self, request, pk=None):
        category = get_object_or_404(Category, pk=pk)
        serializer = CategorySerializer(category, data=request.data)
        serializer.is_valid(raise_exception=True)
        services.update_category(category, name=serializer.validated_data["name"])
        return Response(CategorySerializer(get_object_or_404(selectors.list_categories(), pk=pk)).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    @extend_schema(
        tags=["Catalog Endpoints"],
        summary="Delete category",
        description="Deletes an empty category. Returns 409 when products still belong to it.",
        examples=[
            OpenApiExample(
                "Category in use",
                value={"detail": "Cannot delete category with products."},
                response_only=True,
                status_codes=["409"],
            )
        ],
    )
    def destroy(self, request, pk=None):
        category = get_object_or_404(Category, pk=pk)
        services.delete_category(category)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProductViewSet(CatalogBaseViewSet):
    read_capability = VIEW_PRODUCTS
    write_capability = MANAGE_PRODUCTS

    @extend_schema(
        tags=["Catalog Endpoints"],
        summary="List products",
        description=(
            "Products with their category, 10 per page.\n\n"
            "Filters: `search` matches name or SKU (case-insensitive substring), "
            "`category` restricts to one category id. Clients reset `page` to 1 "
            "whenever a filter changes."
        ),
        parameters=[
            OpenApiParameter(name="search", description="Name or SKU contains", required=False, type=str),
            OpenApiParameter(name="category", description="Category id", required=False, type=int),
            PAGE_PARAM,
        ],
        responses=ProductSerializer(many=True),
        examples=[
            OpenApiExample(
                "Product page",
                value={
                    "count": 1,
                    "page": 1,
                    "page_size": 10,
                    "total_pages": 1,
                    "next_page": None,
                    "previous_page": None,
                    "results": [
                        {
                            "id": 2,
                            "name": "iPhone 14 Pro",
                            "sku": "APPL-IP14-001",
                            "quantity": 8,
                            "category": {"id": 1, "name": "Electronics"},
                            "created_at": "2025-07-14T15:04:26Z",
                            "updated_at": "2025-07-14T15:04:26Z",
                        }
                    ],
                },
                response_only=True,
            )
        ],
    )
    def list(self, request):
        query = ProductListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        data = query.validated_data
        filters = selectors.ProductFilters(search=data["search"], category_id=data["category"])
        page = selectors.query_products(filters, data["page"])
        return Response(page_payload(page, ProductSerializer(page.rows, many=True).data))

    @extend_schema(tags=["Catalog Endpoints"], summary="Get product", responses=ProductSerializer)
    def retrieve(self, request, pk=None):
        product = get_object_or_404(Product.objects.select_related("category"), pk=pk)
        return Response(ProductSerializer(product).data)

    @extend_schema(
        tags=["Catalog Endpoints"],
        summary="Create product",
        description="Creates a product with its opening quantity. Returns 409 when the SKU is taken.",
        request=ProductCreateSerializer,
        responses={201: ProductSerializer},
    )
    def create(self, request):
        serializer = ProductCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = services.create_product(**serializer.validated_data)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        tags=["Catalog Endpoints"],
        summary="Update product",
        description="Edits name, SKU or category. Quantity changes go through stock adjustments.",
        request=ProductUpdateSerializer,
        responses=ProductSerializer,
    )
    def update(self, request, pk=None):
        product = get_object_or_404(Product.objects.select_related("category"), pk=pk)
        serializer = ProductUpdateSerializer(data=request.data, partial=self.action == "partial_update")
        serializer.is_valid(raise_exception=True)
        product = services.update_product(product, **serializer.validated_data)
        return Response(ProductSerializer(product).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    @extend_schema(
        tags=["Catalog Endpoints"],
        summary="Delete product",
        description="Deletes a product without movement history. Returns 409 otherwise.",
    )
    def destroy(self, request, pk=None):
        product = get_object_or_404(Product, pk=pk)
        services.delete_product(product)
        return Response(status=status.HTTP_204_NO_CONTENT)
