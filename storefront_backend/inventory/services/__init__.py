"""
PATH: inventory/services/__init__.py

Inventory service layer export surface.
"""

from .bulk import BULK_ACTIONS, BulkResult, SkippedItem, bulk_apply, reset_variant_stock
from .exceptions import (
    InsufficientStockError,
    InvalidMovementError,
    InventoryServiceError,
    InventoryStorageError,
    StockConflictError,
    VariantNotFoundError,
)
from .movements import MovementResult, create_movement
from .queries import MovementPage, list_movements

__all__ = [
    "BULK_ACTIONS",
    "BulkResult",
    "SkippedItem",
    "bulk_apply",
    "reset_variant_stock",
    "MovementResult",
    "create_movement",
    "MovementPage",
    "list_movements",
    "InventoryServiceError",
    "InvalidMovementError",
    "VariantNotFoundError",
    "InsufficientStockError",
    "StockConflictError",
    "InventoryStorageError",
]
