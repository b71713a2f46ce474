"""
PATH: inventory/models/__init__.py

Inventory models export surface.
"""

from .movement import InventoryMovement, MovementType

__all__ = [
    "InventoryMovement",
    "MovementType",
]
