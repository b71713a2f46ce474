# inventory/tests/test_queries.py

from __future__ import annotations

from datetime import timedelta

from django.test import TestCase, override_settings
from django.utils import timezone

from inventory.services.exceptions import InvalidMovementError
from inventory.services.movements import create_movement
from inventory.services.queries import list_movements

from .helpers import make_product, make_variant


class ListMovementsTests(TestCase):
    """
    History listing + per-type summary.

    GUARANTEES:
    - summary totals cover the whole filtered set, not just one page
    - newest movements come first
    """

    def setUp(self):
        product = make_product()
        self.variant_a = make_variant(product=product, sku="TEE-A", stock=20)
        self.variant_b = make_variant(product=product, sku="TEE-B", stock=20)

        self._move(self.variant_a, "IN", 5, actor="alice")
        self._move(self.variant_a, "IN", 3, actor="alice")
        self._move(self.variant_a, "OUT", 2, actor="bob")
        self._move(self.variant_b, "RETURN", 1, actor="bob")
        self._move(self.variant_b, "OUT", 4, actor="alice")

    def _move(self, variant, movement_type, quantity, *, actor):
        return create_movement(
            variant_id=variant.pk,
            movement_type=movement_type,
            quantity=quantity,
            actor_id=actor,
        )

    def test_type_filter_and_summary(self):
        page = list_movements(filters={"variant_id": str(self.variant_a.pk), "type": "IN"})

        self.assertEqual(len(page.movements), 2)
        self.assertEqual(
            page.summary,
            {"total_movements": 2, "by_type": {"IN": {"count": 2, "total_quantity": 8}}},
        )

    def test_summary_without_filters_covers_all_types_present(self):
        page = list_movements()

        self.assertEqual(page.summary["total_movements"], 5)
        self.assertEqual(
            page.summary["by_type"],
            {
                "IN": {"count": 2, "total_quantity": 8},
                "OUT": {"count": 2, "total_quantity": 6},
                "RETURN": {"count": 1, "total_quantity": 1},
            },
        )
        self.assertNotIn("ADJUSTMENT", page.summary["by_type"])

    def test_pagination_metadata(self):
        page = list_movements(page=2, limit=2)

        self.assertEqual(len(page.movements), 2)
        self.assertEqual(
            page.pagination,
            {"page": 2, "limit": 2, "total": 5, "pages": 3, "has_next": True, "has_prev": True},
        )

        last = list_movements(page=3, limit=2)
        self.assertEqual(len(last.movements), 1)
        self.assertFalse(last.pagination["has_next"])

    def test_summary_matches_every_page_combined(self):
        seen = []
        page_number = 1
        while True:
            page = list_movements(filters={"actor_id": "alice"}, page=page_number, limit=2)
            seen.extend(page.movements)
            if not page.pagination["has_next"]:
                break
            page_number += 1

        self.assertEqual(page.summary["total_movements"], len(seen))
        for mtype, bucket in page.summary["by_type"].items():
            rows = [m for m in seen if m.movement_type == mtype]
            self.assertEqual(bucket["count"], len(rows))
            self.assertEqual(bucket["total_quantity"], sum(m.quantity for m in rows))

    def test_newest_first(self):
        page = list_movements(limit=50)
        created = [m.created_at for m in page.movements]
        self.assertEqual(created, sorted(created, reverse=True))

    def test_date_bounds(self):
        now = timezone.now()

        future = list_movements(filters={"date_from": (now + timedelta(days=1)).isoformat()})
        self.assertEqual(future.pagination["total"], 0)
        self.assertEqual(future.pagination["pages"], 0)
        self.assertEqual(future.summary, {"total_movements": 0, "by_type": {}})

        window = list_movements(
            filters={
                "date_from": (now - timedelta(days=1)).isoformat(),
                "date_to": (now + timedelta(days=1)).isoformat(),
            }
        )
        self.assertEqual(window.pagination["total"], 5)

    @override_settings(INVENTORY_DEFAULT_PAGE_LIMIT=3)
    def test_default_limit_from_settings(self):
        page = list_movements()
        self.assertEqual(page.pagination["limit"], 3)
        self.assertEqual(len(page.movements), 3)

    def test_invalid_arguments(self):
        bad_calls = [
            {"page": 0},
            {"limit": 0},
            {"page": "abc"},
            {"filters": {"type": "TRANSFER"}},
            {"filters": {"variant_id": "not-a-uuid"}},
            {"filters": {"date_from": "yesterday"}},
        ]
        for kwargs in bad_calls:
            with self.subTest(**kwargs):
                with self.assertRaises(InvalidMovementError):
                    list_movements(**kwargs)
