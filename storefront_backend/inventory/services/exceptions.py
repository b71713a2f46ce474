# inventory/services/exceptions.py

"""
INVENTORY SERVICE ERRORS

Centralized domain errors for the stock-movement ledger.

Each error carries a stable `code` so API callers (and the bulk processor's
skip records) can tell the five failure kinds apart.
"""


class InventoryServiceError(Exception):
    """Base exception for all inventory ledger failures."""

    code = "INTERNAL"


class InvalidMovementError(InventoryServiceError):
    """Malformed request: missing ids, bad quantity, unknown type, negative reset target."""

    code = "INVALID_ARGUMENT"


class VariantNotFoundError(InventoryServiceError):
    """Referenced variant does not exist."""

    code = "NOT_FOUND"


class InsufficientStockError(InventoryServiceError):
    """The movement would take stock below zero."""

    code = "INSUFFICIENT_STOCK"

    def __init__(self, message: str, *, available: int = 0, requested: int = 0):
        super().__init__(message)
        self.available = available
        self.requested = requested


class StockConflictError(InventoryServiceError):
    """A concurrent writer changed the variant's stock between read and write."""

    code = "CONFLICT"


class InventoryStorageError(InventoryServiceError):
    """Storage or transaction failure unrelated to the movement itself."""

    code = "INTERNAL"
