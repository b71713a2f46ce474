# inventory/services/stock_rules.py

"""
STOCK ARITHMETIC RULES

Pure mapping (movement_type, quantity, current_stock) -> new_stock.
No database access: the coordinator reads the locked stock, asks this module
for the resulting value, then writes it.

ADJUSTMENT semantics (kept for compatibility with existing clients):
- quantity is the new ABSOLUTE stock value, not a delta
- it is still gated like a decrement: current_stock must be >= quantity
  so an adjustment can only lower stock (or keep it), never raise it
"""

from __future__ import annotations

from inventory.models import MovementType
from inventory.services.exceptions import InsufficientStockError, InvalidMovementError


def _require_available(current_stock: int, quantity: int) -> None:
    if current_stock < quantity:
        raise InsufficientStockError(
            f"Insufficient stock. Available: {current_stock}, Requested: {quantity}",
            available=current_stock,
            requested=quantity,
        )


def _increase(current_stock: int, quantity: int) -> int:
    return current_stock + quantity


def _decrease(current_stock: int, quantity: int) -> int:
    _require_available(current_stock, quantity)
    return current_stock - quantity


def _set_absolute(current_stock: int, quantity: int) -> int:
    _require_available(current_stock, quantity)
    return quantity


STOCK_RULES = {
    MovementType.IN: _increase,
    MovementType.RETURN: _increase,
    MovementType.OUT: _decrease,
    MovementType.ADJUSTMENT: _set_absolute,
}


def apply_stock_rule(movement_type, quantity: int, current_stock: int) -> int:
    """
    Compute the stock value after applying one movement.

    Raises:
    - InvalidMovementError for an unknown type or non-positive quantity
    - InsufficientStockError when OUT/ADJUSTMENT exceed current stock
    """
    try:
        rule = STOCK_RULES[MovementType(movement_type)]
    except ValueError:
        raise InvalidMovementError(f"Unknown movement type: {movement_type}")

    if quantity <= 0:
        raise InvalidMovementError("quantity must be greater than zero")

    return rule(int(current_stock), int(quantity))
