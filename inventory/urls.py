from django.urls import path

from .views import DashboardView, LowStockReportView, MovementListView, StockAdjustmentView

urlpatterns = [
    path("products/<int:product_id>/adjust-stock/", StockAdjustmentView.as_view(), name="stock-adjust"),
    path("movements/", MovementListView.as_view(), name="movement-list"),
    path("dashboard/", DashboardView.as_view(), name="inventory-dashboard"),
    path("reports/low-stock/", LowStockReportView.as_view(), name="low-stock-report"),
]
