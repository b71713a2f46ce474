"""
INVENTORY APP CONFIG

Stock-movement ledger:
- append-only InventoryMovement rows
- atomic (ledger append + variant stock write) coordinator
- bulk processor with per-item isolation
- filtered history + per-type summaries
"""

from django.apps import AppConfig


class InventoryConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "inventory"
    verbose_name = "Inventory Ledger"
