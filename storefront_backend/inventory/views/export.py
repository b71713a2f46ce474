# inventory/views/export.py

"""
INVENTORY CSV EXPORT

One row per variant (product name, then SKU) with its current stock,
stock status and ledger movement count.
"""

import csv

from django.db.models import Count
from django.http import HttpResponse
from django.utils import timezone
from drf_spectacular.utils import OpenApiTypes, extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from catalog.models import ProductVariant
from permissions.roles import CAP_INVENTORY_VIEW, HasCapability

CSV_HEADERS = [
    "SKU",
    "Product",
    "Size",
    "Color",
    "Material",
    "Stock",
    "Stock Status",
    "Price",
    "Base Price",
    "Active",
    "Movements",
]


def export_rows():
    variants = (
        ProductVariant.objects.select_related("product")
        .annotate(movement_count=Count("movements"))
        .order_by("product__name", "sku")
    )

    for variant in variants:
        yield [
            variant.sku,
            variant.product.name,
            variant.size,
            variant.color,
            variant.material,
            variant.stock,
            variant.stock_status.label,
            variant.effective_price,
            variant.product.base_price,
            "Yes" if variant.is_active else "No",
            variant.movement_count,
        ]


class InventoryExportView(APIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_INVENTORY_VIEW

    @extend_schema(
        description="Inventory snapshot as CSV (inventory-YYYY-MM-DD.csv).",
        responses={(200, "text/csv"): OpenApiTypes.STR},
    )
    def get(self, request):
        filename = f"inventory-{timezone.localdate().isoformat()}.csv"

        response = HttpResponse(content_type="text/csv")
        response["Content-Disposition"] = f'attachment; filename="{filename}"'

        writer = csv.writer(response)
        writer.writerow(CSV_HEADERS)
        writer.writerows(export_rows())
        return response
