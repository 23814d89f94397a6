"""Admin registrations for catalog app."""

from django.contrib import admin

from .models import Category, Product


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "created_at")
    search_fields = ("name",)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "sku", "category", "quantity", "updated_at")
    list_filter = ("category",)
    search_fields = ("name", "sku")
    list_select_related = ("category",)

    def get_readonly_fields(self, request, obj=None):
        # Quantity only moves through stock adjustments once the product exists
        if obj is not None:
            return ("quantity",)
        return ()
