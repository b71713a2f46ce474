from .commands import (
    BulkMovementCommandSerializer,
    MovementCreateCommandSerializer,
    MovementListQuerySerializer,
)
from .movement import InventoryMovementSerializer

__all__ = [
    "InventoryMovementSerializer",
    "MovementCreateCommandSerializer",
    "BulkMovementCommandSerializer",
    "MovementListQuerySerializer",
]
