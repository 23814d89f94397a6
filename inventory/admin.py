"""Admin registrations for inventory app."""

from django.contrib import admin

from .models import StockMovement


@admin.register(StockMovement)
class StockMovementAdmin(admin.ModelAdmin):
    """Read-only ledger browser; adjustments go through the API."""

    list_display = ("id", "product", "movement_type", "quantity", "reason", "user", "created_at")
    list_filter = ("movement_type", "reason")
    search_fields = ("product__sku", "product__name", "user__username")
    list_select_related = ("product", "user")
    date_hierarchy = "created_at"

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
