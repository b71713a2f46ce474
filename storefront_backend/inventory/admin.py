"""
=====================================================
PATH: inventory/admin.py
=====================================================

Admin rules (audit-safe):

- InventoryMovement is the canonical stock ledger.
- Movements are view-only: no add, no change, no delete.
  Corrections are new movements recorded through the inventory API.
"""

from __future__ import annotations

from django.contrib import admin

from inventory.models import InventoryMovement


@admin.register(InventoryMovement)
class InventoryMovementAdmin(admin.ModelAdmin):
    list_display = (
        "created_at",
        "variant",
        "movement_type",
        "quantity",
        "previous_stock",
        "resulting_stock",
        "actor_id",
        "reason",
    )
    list_filter = ("movement_type", "created_at")
    search_fields = ("variant__sku", "variant__product__name", "actor_id", "reason")
    list_select_related = ("variant", "variant__product")
    ordering = ("-created_at",)
    date_hierarchy = "created_at"

    readonly_fields = [field.name for field in InventoryMovement._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
