from .export import InventoryExportView
from .movements import InventoryMovementViewSet

__all__ = [
    "InventoryExportView",
    "InventoryMovementViewSet",
]
