# inventory/management/commands/reconcile_stock.py

from __future__ import annotations

from django.core.management.base import BaseCommand

from inventory.services.exceptions import InvalidMovementError
from inventory.services.reconciliation import reconcile_variants


class Command(BaseCommand):
    help = "Check that each variant's stock equals the resulting_stock of its latest ledger movement."

    def add_arguments(self, parser):
        parser.add_argument(
            "--variant",
            dest="variants",
            action="append",
            help="Variant id to check (repeatable). Defaults to all variants.",
        )
        parser.add_argument(
            "--strict",
            action="store_true",
            help="Fail (non-zero exit) if any mismatch is found.",
        )

    def handle(self, *args, **options):
        strict = bool(options.get("strict"))

        try:
            report = reconcile_variants(options.get("variants"))
        except InvalidMovementError as exc:
            self.stderr.write(self.style.ERROR(str(exc)))
            return self._exit(strict)

        self.stdout.write(self.style.MIGRATE_HEADING("Stock ↔ Ledger Reconciliation"))
        self.stdout.write(f"Variants checked: {report.checked}")
        self.stdout.write("")

        for drift in report.mismatches:
            self.stderr.write(
                self.style.ERROR(
                    f"[FAIL] {drift.sku} ({drift.variant_id}): "
                    f"stock={drift.stock} ledger={drift.ledger_stock}"
                )
            )

        for drift in report.without_history:
            self.stdout.write(
                self.style.WARNING(f"[INFO] {drift.sku} ({drift.variant_id}): no history, stock={drift.stock}")
            )

        if report.is_consistent:
            self.stdout.write(self.style.SUCCESS("[OK] Stock matches the ledger"))
        else:
            self.stderr.write(self.style.ERROR(f"Mismatched variants: {len(report.mismatches)}"))

        return self._exit(strict and not report.is_consistent)

    def _exit(self, fail: bool):
        if fail:
            raise SystemExit(1)
        return None
