# inventory/services/reconciliation.py

"""
LEDGER RECONCILIATION

The latest movement of a variant records the stock it left behind
(resulting_stock). If ProductVariant.stock differs from that value, the stock
was changed outside the ledger.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from django.db.models import OuterRef, Subquery

from catalog.models import ProductVariant
from inventory.models import InventoryMovement
from inventory.services.variant_store import normalize_variant_id


@dataclass(frozen=True)
class VariantDrift:
    variant_id: str
    sku: str
    stock: int
    ledger_stock: Optional[int]


@dataclass
class ReconciliationReport:
    checked: int = 0
    mismatches: list[VariantDrift] = field(default_factory=list)
    without_history: list[VariantDrift] = field(default_factory=list)

    @property
    def is_consistent(self) -> bool:
        return not self.mismatches


def reconcile_variants(variant_ids=None) -> ReconciliationReport:
    latest = (
        InventoryMovement.objects.filter(variant=OuterRef("pk"))
        .order_by("-stock_version")
        .values("resulting_stock")[:1]
    )

    qs = ProductVariant.objects.annotate(ledger_stock=Subquery(latest)).order_by("sku")
    if variant_ids:
        qs = qs.filter(pk__in=[normalize_variant_id(v) for v in variant_ids])

    report = ReconciliationReport()
    for variant in qs.only("id", "sku", "stock"):
        report.checked += 1
        drift = VariantDrift(
            variant_id=str(variant.pk),
            sku=variant.sku,
            stock=int(variant.stock),
            ledger_stock=variant.ledger_stock,
        )

        if variant.ledger_stock is None:
            report.without_history.append(drift)
        elif int(variant.ledger_stock) != int(variant.stock):
            report.mismatches.append(drift)

    return report
