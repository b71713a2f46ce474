# inventory/services/movements.py

"""
INVENTORY MOVEMENT COORDINATOR

Purpose:
- Validate a single stock movement request.
- Apply it to ProductVariant.stock and append the ledger row in ONE atomic unit.

Rules:
- variant row is locked (select_for_update) before the stock is read
- the stock write is conditional on stock_version; a concurrent writer turns
  into StockConflictError and the whole unit is retried with a fresh read
- nothing is written when validation or the stock rule fails
- storage failures surface as InventoryStorageError (never half-applied)

Callers must NOT wrap create_movement() in their own transaction.atomic():
a retry needs to start from a clean read.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction

from inventory.models import InventoryMovement, MovementType
from inventory.services import variant_store
from inventory.services.exceptions import (
    InvalidMovementError,
    InventoryServiceError,
    InventoryStorageError,
    StockConflictError,
)
from inventory.services.stock_rules import apply_stock_rule

logger = logging.getLogger(__name__)

DEFAULT_REASON_TEMPLATE = "Movement of type {type}"

REASON_MAX_LENGTH = 255
ACTOR_MAX_LENGTH = 64


@dataclass(frozen=True)
class MovementResult:
    movement: InventoryMovement
    new_stock: int


# =========================================================
# INPUT NORMALIZATION
# =========================================================
def to_non_negative_int(value, *, field_name: str) -> int:
    if value is None or value == "":
        raise InvalidMovementError(f"{field_name} is required")

    if isinstance(value, bool):
        # bool is an int subclass in Python
        raise InvalidMovementError(f"{field_name} must be an integer")

    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidMovementError(f"{field_name} must be an integer")
        value = int(value)

    try:
        number = int(str(value).strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError):
        raise InvalidMovementError(f"{field_name} must be an integer")

    if number < 0:
        raise InvalidMovementError(f"{field_name} cannot be negative")

    return number


def _to_positive_int(value, *, field_name: str) -> int:
    number = to_non_negative_int(value, field_name=field_name)
    if number == 0:
        raise InvalidMovementError(f"{field_name} must be greater than zero")
    return number


def normalize_movement_type(value) -> str:
    if value is None or value == "":
        raise InvalidMovementError("type is required")

    try:
        return MovementType(str(value).strip()).value
    except ValueError:
        allowed = ", ".join(MovementType.values)
        raise InvalidMovementError(f"Invalid movement type. Must be one of: {allowed}")


def normalize_actor_id(value) -> str:
    actor = str(value or "").strip()
    if not actor:
        raise InvalidMovementError("actor_id is required")
    if len(actor) > ACTOR_MAX_LENGTH:
        raise InvalidMovementError(f"actor_id cannot exceed {ACTOR_MAX_LENGTH} characters")
    return actor


def normalize_reason(value, *, default: str) -> str:
    reason = str(value).strip() if value is not None else ""
    if not reason:
        return default
    if len(reason) > REASON_MAX_LENGTH:
        raise InvalidMovementError(f"reason cannot exceed {REASON_MAX_LENGTH} characters")
    return reason


# =========================================================
# ATOMIC UNIT + RETRY
# =========================================================
def _max_attempts() -> int:
    return max(1, int(getattr(settings, "INVENTORY_CONFLICT_MAX_ATTEMPTS", 3)))


def run_stock_unit(operation, *, variant_id):
    """
    Run `operation` inside its own transaction.atomic() block.

    StockConflictError rolls the block back and runs it again; after the
    configured number of attempts the conflict is raised to the caller.
    Database failures are reported as InventoryStorageError.
    """
    attempts = _max_attempts()

    for attempt in range(1, attempts + 1):
        try:
            with transaction.atomic():
                return operation()

        except StockConflictError:
            if attempt >= attempts:
                logger.warning(
                    "Stock conflict not resolved after retries",
                    extra={"variant_id": str(variant_id), "attempts": attempts},
                )
                raise
            logger.info(
                "Stock conflict, retrying",
                extra={"variant_id": str(variant_id), "attempt": attempt},
            )

        except InventoryServiceError:
            raise

        except ValidationError as exc:
            raise InvalidMovementError("; ".join(exc.messages)) from exc

        except DatabaseError as exc:
            logger.exception(
                "Inventory storage failure",
                extra={"variant_id": str(variant_id)},
            )
            raise InventoryStorageError("Failed to persist inventory movement") from exc


def record_movement(
    *,
    before: variant_store.StockSnapshot,
    new_stock: int,
    movement_type: str,
    quantity: int,
    reason: str,
    actor_id: str,
) -> MovementResult:
    """
    Write the new stock value and append the matching ledger row.

    Must run inside the atomic block that produced `before`.
    """
    written = variant_store.set_stock(before, new_stock)

    movement = InventoryMovement.objects.create(
        variant_id=before.variant_id,
        movement_type=movement_type,
        quantity=quantity,
        reason=reason,
        actor_id=actor_id,
        previous_stock=before.stock,
        resulting_stock=written.stock,
        stock_version=written.version,
    )

    return MovementResult(movement=movement, new_stock=written.stock)


# =========================================================
# PUBLIC API
# =========================================================
def create_movement(
    *,
    variant_id,
    movement_type,
    quantity,
    actor_id,
    reason=None,
    default_reason: str = DEFAULT_REASON_TEMPLATE,
) -> MovementResult:
    """
    Apply one stock movement and record it in the ledger.

    Raises:
    - InvalidMovementError      malformed input
    - VariantNotFoundError      unknown variant
    - InsufficientStockError    OUT/ADJUSTMENT above the available stock
    - StockConflictError        concurrent writers kept winning
    - InventoryStorageError     database failure
    """
    mtype = normalize_movement_type(movement_type)
    qty = _to_positive_int(quantity, field_name="quantity")
    vid = variant_store.normalize_variant_id(variant_id)
    actor = normalize_actor_id(actor_id)
    text = normalize_reason(reason, default=default_reason.format(type=mtype))

    def _apply() -> MovementResult:
        before = variant_store.get_stock(vid, for_update=True)
        new_stock = apply_stock_rule(mtype, qty, before.stock)
        return record_movement(
            before=before,
            new_stock=new_stock,
            movement_type=mtype,
            quantity=qty,
            reason=text,
            actor_id=actor,
        )

    result = run_stock_unit(_apply, variant_id=vid)

    logger.info(
        "Inventory movement recorded",
        extra={
            "movement_id": str(result.movement.pk),
            "variant_id": str(vid),
            "movement_type": mtype,
            "quantity": qty,
            "new_stock": result.new_stock,
            "actor_id": actor,
        },
    )
    return result
