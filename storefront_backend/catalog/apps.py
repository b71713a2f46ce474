"""
CATALOG APP CONFIG

Product / ProductVariant records. The catalog owns variants; the inventory
ledger only reads and conditionally writes ProductVariant.stock.
"""

from django.apps import AppConfig


class CatalogConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "catalog"
    verbose_name = "Catalog"
