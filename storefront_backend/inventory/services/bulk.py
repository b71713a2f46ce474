# inventory/services/bulk.py

"""
BULK OPERATION PROCESSOR

Two actions over a list of items:

- bulk_create: each item is a normal movement, run through create_movement()
- stock_reset: each item sets a variant's stock to an absolute value and
  records the difference as an ADJUSTMENT movement

Processing model:
- items are folded sequentially in input order
- every item is its own atomic unit; an applied item is never rolled back
  by a later failure
- per-item problems (bad input, unknown variant, insufficient stock,
  unchanged reset) become SkippedItem records and are logged
- StockConflictError / InventoryStorageError abort the remaining batch
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from inventory.models import MovementType
from inventory.services import variant_store
from inventory.services.exceptions import (
    InsufficientStockError,
    InvalidMovementError,
    InventoryServiceError,
    VariantNotFoundError,
)
from inventory.services.movements import (
    MovementResult,
    create_movement,
    normalize_actor_id,
    record_movement,
    run_stock_unit,
    to_non_negative_int,
)

logger = logging.getLogger(__name__)

BULK_CREATE = "bulk_create"
STOCK_RESET = "stock_reset"
BULK_ACTIONS = (BULK_CREATE, STOCK_RESET)

BULK_REASON_TEMPLATE = "Bulk movement of type {type}"

UNCHANGED = "UNCHANGED"

SKIPPABLE_ERRORS = (InvalidMovementError, VariantNotFoundError, InsufficientStockError)


@dataclass(frozen=True)
class SkippedItem:
    index: int
    variant_id: Optional[str]
    code: str
    detail: str


@dataclass
class BulkResult:
    action: str
    applied: list[MovementResult] = field(default_factory=list)
    skipped: list[SkippedItem] = field(default_factory=list)

    @property
    def applied_count(self) -> int:
        return len(self.applied)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


ItemOutcome = Union[MovementResult, SkippedItem]


def _pick(item: dict, *keys):
    """First present key wins (snake_case, then legacy camelCase)."""
    for key in keys:
        if key in item and item[key] is not None:
            return item[key]
    return None


# =========================================================
# SINGLE-VARIANT RESET
# =========================================================
def reset_variant_stock(*, variant_id, new_stock, actor_id) -> Optional[MovementResult]:
    """
    Set a variant's stock to an absolute value.

    Returns None (and writes nothing) when the stock already equals new_stock.
    Otherwise records an ADJUSTMENT with quantity = |new - old|.
    """
    vid = variant_store.normalize_variant_id(variant_id)
    target = to_non_negative_int(new_stock, field_name="new_stock")
    actor = normalize_actor_id(actor_id)

    def _apply() -> Optional[MovementResult]:
        before = variant_store.get_stock(vid, for_update=True)
        if before.stock == target:
            return None

        return record_movement(
            before=before,
            new_stock=target,
            movement_type=MovementType.ADJUSTMENT.value,
            quantity=abs(target - before.stock),
            reason=f"Bulk stock reset ({before.stock} → {target})",
            actor_id=actor,
        )

    result = run_stock_unit(_apply, variant_id=vid)

    if result is not None:
        logger.info(
            "Variant stock reset",
            extra={
                "movement_id": str(result.movement.pk),
                "variant_id": str(vid),
                "previous_stock": result.movement.previous_stock,
                "new_stock": result.new_stock,
                "actor_id": actor,
            },
        )
    return result


# =========================================================
# PER-ITEM HANDLERS
# =========================================================
def _apply_bulk_create_item(item: dict, *, actor_id: str) -> MovementResult:
    return create_movement(
        variant_id=_pick(item, "variant_id", "variantId"),
        movement_type=_pick(item, "type", "movement_type"),
        quantity=_pick(item, "quantity"),
        reason=_pick(item, "reason"),
        actor_id=actor_id,
        default_reason=BULK_REASON_TEMPLATE,
    )


def _apply_stock_reset_item(item: dict, *, actor_id: str) -> Optional[MovementResult]:
    return reset_variant_stock(
        variant_id=_pick(item, "variant_id", "variantId"),
        new_stock=_pick(item, "new_stock", "newStock"),
        actor_id=actor_id,
    )


ITEM_HANDLERS = {
    BULK_CREATE: _apply_bulk_create_item,
    STOCK_RESET: _apply_stock_reset_item,
}


def _evaluate_item(handler, index: int, item, *, actor_id: str) -> ItemOutcome:
    if not isinstance(item, dict):
        return SkippedItem(
            index=index,
            variant_id=None,
            code=InvalidMovementError.code,
            detail="item must be an object",
        )

    raw_variant = _pick(item, "variant_id", "variantId")
    variant_label = str(raw_variant) if raw_variant is not None else None

    try:
        outcome = handler(item, actor_id=actor_id)
    except SKIPPABLE_ERRORS as exc:
        return SkippedItem(index=index, variant_id=variant_label, code=exc.code, detail=str(exc))

    if outcome is None:
        return SkippedItem(
            index=index,
            variant_id=variant_label,
            code=UNCHANGED,
            detail="stock already at requested value",
        )
    return outcome


def _fold(result: BulkResult, index: int, outcome: ItemOutcome) -> BulkResult:
    if isinstance(outcome, SkippedItem):
        logger.info(
            "Bulk item skipped",
            extra={
                "action": result.action,
                "index": index,
                "variant_id": outcome.variant_id,
                "code": outcome.code,
                "detail": outcome.detail,
            },
        )
        result.skipped.append(outcome)
    else:
        result.applied.append(outcome)
    return result


# =========================================================
# PUBLIC API
# =========================================================
def bulk_apply(*, action, items, actor_id) -> BulkResult:
    """
    Apply a batch of stock operations, item by item.

    Raises:
    - InvalidMovementError   unknown action, items not a list, blank actor
    - StockConflictError     an item kept conflicting (batch aborted)
    - InventoryStorageError  database failure (batch aborted)
    """
    handler = ITEM_HANDLERS.get(action)
    if handler is None:
        raise InvalidMovementError(
            f"Invalid action. Must be one of: {', '.join(BULK_ACTIONS)}"
        )

    if not isinstance(items, list):
        raise InvalidMovementError("movements must be a list")

    actor = normalize_actor_id(actor_id)

    result = BulkResult(action=action)
    for index, item in enumerate(items):
        try:
            outcome = _evaluate_item(handler, index, item, actor_id=actor)
        except InventoryServiceError as exc:
            logger.error(
                "Bulk operation aborted",
                extra={
                    "action": action,
                    "index": index,
                    "applied_count": result.applied_count,
                    "code": exc.code,
                },
            )
            raise
        result = _fold(result, index, outcome)

    logger.info(
        "Bulk operation completed",
        extra={
            "action": action,
            "applied_count": result.applied_count,
            "skipped_count": result.skipped_count,
            "actor_id": actor,
        },
    )
    return result
