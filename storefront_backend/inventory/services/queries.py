# inventory/services/queries.py

"""
MOVEMENT HISTORY QUERIES (READ-ONLY)

- filtered, newest-first, paginated movement listing
- per-type summary over the WHOLE filtered set (not just the page)

No locks are taken; results reflect committed data at query time.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from django.conf import settings
from django.db.models import Count, Sum

from inventory.filters import InventoryMovementFilter
from inventory.models import InventoryMovement, MovementType
from inventory.services.exceptions import InvalidMovementError

FILTER_KEYS = ("variant_id", "type", "actor_id", "date_from", "date_to")


@dataclass(frozen=True)
class MovementPage:
    movements: list
    pagination: dict
    summary: dict


def _to_page_value(value, *, field_name: str, default: int) -> int:
    if value is None or value == "":
        return default

    if isinstance(value, bool):
        raise InvalidMovementError(f"{field_name} must be an integer")

    try:
        number = int(value)
    except (TypeError, ValueError):
        raise InvalidMovementError(f"{field_name} must be an integer")

    if number < 1:
        raise InvalidMovementError(f"{field_name} must be greater than zero")
    return number


def _filter_errors(form_errors) -> str:
    parts = []
    for name, messages in form_errors.items():
        parts.append(f"{name}: {' '.join(str(m) for m in messages)}")
    return "Invalid filter. " + "; ".join(parts)


def summarize(queryset) -> dict:
    """One GROUP BY over movement_type; only types present are reported."""
    rows = (
        queryset.order_by()
        .values("movement_type")
        .annotate(count=Count("id"), total_quantity=Sum("quantity"))
    )
    by_row = {row["movement_type"]: row for row in rows}

    by_type = {}
    total = 0
    for mtype in MovementType.values:
        row = by_row.get(mtype)
        if row is None:
            continue
        by_type[mtype] = {
            "count": int(row["count"]),
            "total_quantity": int(row["total_quantity"] or 0),
        }
        total += int(row["count"])

    return {"total_movements": total, "by_type": by_type}


def list_movements(*, filters=None, page=1, limit=None) -> MovementPage:
    """
    Return one page of movements matching `filters`, plus totals.

    filters keys: variant_id, type, actor_id, date_from, date_to
    """
    page = _to_page_value(page, field_name="page", default=1)
    limit = _to_page_value(
        limit,
        field_name="limit",
        default=int(getattr(settings, "INVENTORY_DEFAULT_PAGE_LIMIT", 20)),
    )

    data = {
        key: value
        for key, value in (filters or {}).items()
        if key in FILTER_KEYS and value not in (None, "")
    }

    filterset = InventoryMovementFilter(
        data=data,
        queryset=InventoryMovement.objects.all(),
    )
    if not filterset.is_valid():
        raise InvalidMovementError(_filter_errors(filterset.errors))

    matching = filterset.qs

    total = matching.count()
    offset = (page - 1) * limit
    movements = list(
        matching.select_related("variant", "variant__product")
        .order_by("-created_at", "-stock_version", "-id")[offset:offset + limit]
    )

    pagination = {
        "page": page,
        "limit": limit,
        "total": total,
        "pages": math.ceil(total / limit),
        "has_next": page * limit < total,
        "has_prev": page > 1,
    }

    return MovementPage(
        movements=movements,
        pagination=pagination,
        summary=summarize(matching),
    )
