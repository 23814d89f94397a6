"""Serializers for the inventory domain.

Movement rows embed the product and acting user they reference; the
adjustment serializer validates the stock adjustment form.
"""

from catalog.models import MAX_QUANTITY
from catalog.serializers import CategorySerializer, ProductSerializer
from common.choices import MovementReason, MovementType
from rest_framework import serializers

from .models import StockMovement


class MovementProductSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(read_only=True)
    sku = serializers.CharField(read_only=True)


class MovementUserSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    username = serializers.CharField(read_only=True)
    role = serializers.CharField(read_only=True)


class StockMovementSerializer(serializers.ModelSerializer):
    """Read-only representation of stock movements."""

    product = MovementProductSerializer(read_only=True)
    user = MovementUserSerializer(read_only=True)

    class Meta:
        model = StockMovement
        fields = [
            "id",
            "product",
            "user",
            "movement_type",
            "quantity",
            "reason",
            "created_at",
        ]
        read_only_fields = fields


class StockAdjustmentSerializer(serializers.Serializer):
    movement_type = serializers.ChoiceField(choices=MovementType.choices, default=MovementType.INBOUND)
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_QUANTITY, default=1)
    reason = serializers.ChoiceField(choices=MovementReason.choices, default=MovementReason.ADJUSTMENT)


class StockAdjustmentResultSerializer(serializers.Serializer):
    movement = StockMovementSerializer(read_only=True)
    product = ProductSerializer(read_only=True)


class MovementListQuerySerializer(serializers.Serializer):
    """Query parameters for the movement list."""

    product = serializers.IntegerField(required=False, min_value=1, allow_null=True, default=None)
    type = serializers.ChoiceField(
        choices=MovementType.choices, required=False, allow_blank=True, allow_null=True, default=None
    )
    date_from = serializers.DateField(required=False, allow_null=True, default=None)
    date_to = serializers.DateField(required=False, allow_null=True, default=None)
    page = serializers.IntegerField(required=False, min_value=1, default=1)


class DashboardSerializer(serializers.Serializer):
    total_products = serializers.IntegerField()
    low_stock_count = serializers.IntegerField()
    low_stock_threshold = serializers.IntegerField()
    categories_count = serializers.IntegerField()
    today_movements = serializers.IntegerField()
    recent_movements = StockMovementSerializer(many=True)
    categories = CategorySerializer(many=True)
