# inventory/services/variant_store.py

"""
VARIANT STORE (stock read / conditional write)

The only code allowed to touch ProductVariant.stock.

- get_stock() reads the current value + version, optionally taking a row lock
  (SELECT ... FOR UPDATE) when called inside transaction.atomic().
- set_stock() is a compare-and-set on stock_version: it writes only if nobody
  changed the row since the snapshot was taken, and bumps the version.

Both are meant to be composed inside the caller's atomic block together with
the ledger insert.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from django.db.models import F
from django.utils import timezone

from catalog.models import ProductVariant
from inventory.services.exceptions import (
    InvalidMovementError,
    StockConflictError,
    VariantNotFoundError,
)


@dataclass(frozen=True)
class StockSnapshot:
    variant_id: uuid.UUID
    stock: int
    version: int


def normalize_variant_id(value) -> uuid.UUID:
    if value is None or value == "":
        raise InvalidMovementError("variant_id is required")

    if isinstance(value, uuid.UUID):
        return value

    try:
        return uuid.UUID(str(value).strip())
    except (TypeError, ValueError, AttributeError):
        raise InvalidMovementError(f"variant_id is not a valid identifier: {value}")


def get_stock(variant_id, *, for_update: bool = False) -> StockSnapshot:
    vid = normalize_variant_id(variant_id)

    qs = ProductVariant.objects.all()
    if for_update:
        qs = qs.select_for_update()

    row = qs.filter(pk=vid).values("stock", "stock_version").first()
    if row is None:
        raise VariantNotFoundError(f"Variant not found: {vid}")

    return StockSnapshot(variant_id=vid, stock=int(row["stock"]), version=int(row["stock_version"]))


def set_stock(snapshot: StockSnapshot, new_stock: int) -> StockSnapshot:
    if new_stock < 0:
        raise InvalidMovementError("stock cannot be negative")

    updated = ProductVariant.objects.filter(
        pk=snapshot.variant_id,
        stock_version=snapshot.version,
    ).update(
        stock=new_stock,
        stock_version=F("stock_version") + 1,
        updated_at=timezone.now(),
    )

    if updated == 0:
        if not ProductVariant.objects.filter(pk=snapshot.variant_id).exists():
            raise VariantNotFoundError(f"Variant not found: {snapshot.variant_id}")
        raise StockConflictError(
            f"Stock for variant {snapshot.variant_id} changed concurrently "
            f"(expected version {snapshot.version})"
        )

    return StockSnapshot(
        variant_id=snapshot.variant_id,
        stock=int(new_stock),
        version=snapshot.version + 1,
    )
