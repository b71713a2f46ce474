# inventory/urls.py

"""
INVENTORY URLS

Mounted under /api/inventory/:
- movements/        list (GET) + create (POST)
- movements/bulk/   bulk_create / stock_reset (PATCH)
- export/           CSV snapshot (GET)
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from inventory.views import InventoryExportView, InventoryMovementViewSet

router = DefaultRouter()

router.register(r"movements", InventoryMovementViewSet, basename="inventory-movements")

urlpatterns = [
    path("export/", InventoryExportView.as_view(), name="inventory-export"),
    path("", include(router.urls)),
]
