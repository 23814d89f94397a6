"""Inventory API: stock adjustments, movement history, dashboard and reports."""

from catalog.models import Product
from catalog.selectors import query_low_stock_products
from catalog.serializers import PageQuerySerializer, ProductSerializer
from common.capabilities import ADJUST_STOCK, VIEW_PRODUCTS, VIEW_REPORTS
from common.pagination import page_payload
from common.permissions import HasCapability
from common.throttling import SettingsScopedRateThrottle
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.generics import get_object_or_404
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from . import selectors
from .serializers import (
    DashboardSerializer,
    MovementListQuerySerializer,
    StockAdjustmentResultSerializer,
    StockAdjustmentSerializer,
    StockMovementSerializer,
)
from .services import adjust_stock


class StockAdjustmentView(APIView):
    """Apply an in/out adjustment to one product and record the movement."""

    permission_classes = [IsAuthenticated, HasCapability(ADJUST_STOCK)]
    throttle_classes = [SettingsScopedRateThrottle]
    throttle_scope = "inventory_write"

    @extend_schema(
        tags=["Inventory Endpoints"],
        summary="Adjust stock",
        description=(
            "Increments (`in`) or decrements (`out`) the product quantity and appends a stock movement "
            "in one transaction.\n\n"
            "Errors: 400 with field errors; an outbound quantity above the current stock is reported "
            "on `quantity`."
        ),
        request=StockAdjustmentSerializer,
        responses={201: StockAdjustmentResultSerializer},
        examples=[
            OpenApiExample(
                "Sell five",
                value={"movement_type": "out", "quantity": 5, "reason": "sold"},
                request_only=True,
            ),
            OpenApiExample(
                "Insufficient stock",
                value={"quantity": ["Not enough stock available."]},
                response_only=True,
                status_codes=["400"],
            ),
        ],
    )
    def post(self, request, product_id: int):
        product = get_object_or_404(Product.objects.select_related("category"), pk=product_id)
        serializer = StockAdjustmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        movement = adjust_stock(product=product, user=request.user, **serializer.validated_data)
        body = StockAdjustmentResultSerializer({"movement": movement, "product": product}).data
        return Response(body, status=status.HTTP_201_CREATED)


class MovementListView(APIView):
    permission_classes = [IsAuthenticated, HasCapability(ADJUST_STOCK)]
    throttle_classes = []

    @extend_schema(
        tags=["Inventory Endpoints"],
        summary="List stock movements",
        description=(
            "Movements newest first, 15 per page, with product and user.\n\n"
            "Filters: `product` (id), `type` (in/out), `date_from` and `date_to` "
            "(inclusive calendar dates, YYYY-MM-DD). Clients reset `page` to 1 whenever any filter changes."
        ),
        parameters=[
            OpenApiParameter(name="product", description="Product id", required=False, type=int),
            OpenApiParameter(name="type", description="Movement type (in/out)", required=False, type=str),
            OpenApiParameter(name="date_from", description="Created on or after (date)", required=False, type=str),
            OpenApiParameter(name="date_to", description="Created on or before (date)", required=False, type=str),
            OpenApiParameter(name="page", description="Page number (1-based)", required=False, type=int),
        ],
        responses=StockMovementSerializer(many=True),
    )
    def get(self, request):
        query = MovementListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        data = query.validated_data
        filters = selectors.MovementFilters(
            product_id=data["product"],
            movement_type=data["type"] or None,
            date_from=data["date_from"],
            date_to=data["date_to"],
        )
        page = selectors.query_movements(filters, data["page"])
        return Response(page_payload(page, StockMovementSerializer(page.rows, many=True).data))


class DashboardView(APIView):
    permission_classes = [IsAuthenticated, HasCapability(VIEW_PRODUCTS)]
    throttle_classes = []

    @extend_schema(
        tags=["Inventory Endpoints"],
        summary="Dashboard statistics",
        description=(
            "Total products, products below the low-stock threshold, categories, movements recorded today, "
            "the five latest movements and every category with its product count."
        ),
        responses=DashboardSerializer,
    )
    def get(self, request):
        return Response(DashboardSerializer(selectors.dashboard_stats()).data)


class LowStockReportView(APIView):
    permission_classes = [IsAuthenticated, HasCapability(VIEW_REPORTS)]
    throttle_classes = []

    @extend_schema(
        tags=["Inventory Endpoints"],
        summary="Low stock report",
        description="Products below the low-stock threshold, lowest quantity first, 10 per page.",
        parameters=[OpenApiParameter(name="page", description="Page number (1-based)", required=False, type=int)],
        responses=ProductSerializer(many=True),
    )
    def get(self, request):
        query = PageQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        page = query_low_stock_products(query.validated_data["page"])
        return Response(page_payload(page, ProductSerializer(page.rows, many=True).data))
