# inventory/tests/test_movements.py

from __future__ import annotations

import uuid
from unittest import mock

from django.db import DatabaseError
from django.test import TestCase, override_settings

from inventory.models import InventoryMovement, MovementType
from inventory.services import variant_store
from inventory.services.exceptions import (
    InsufficientStockError,
    InvalidMovementError,
    InventoryStorageError,
    StockConflictError,
    VariantNotFoundError,
)
from inventory.services.movements import create_movement

from .helpers import make_variant

ACTOR = "user-1"


class CreateMovementTests(TestCase):
    """
    Single movement coordinator.

    GUARANTEES:
    - stock write and ledger row happen together or not at all
    - stock never goes below zero
    - the latest movement's resulting_stock equals the variant's stock
    """

    def setUp(self):
        self.variant = make_variant(stock=10)

    def _stock(self) -> int:
        self.variant.refresh_from_db()
        return self.variant.stock

    def test_out_movement_decrements_stock_and_records_row(self):
        result = create_movement(
            variant_id=self.variant.pk,
            movement_type="OUT",
            quantity=3,
            actor_id=ACTOR,
        )

        self.assertEqual(result.new_stock, 7)
        self.assertEqual(self._stock(), 7)

        movement = InventoryMovement.objects.get()
        self.assertEqual(movement.pk, result.movement.pk)
        self.assertEqual(movement.movement_type, MovementType.OUT)
        self.assertEqual(movement.quantity, 3)
        self.assertEqual(movement.previous_stock, 10)
        self.assertEqual(movement.resulting_stock, 7)
        self.assertEqual(movement.reason, "Movement of type OUT")
        self.assertEqual(movement.actor_id, ACTOR)

    def test_insufficient_stock_writes_nothing(self):
        variant = make_variant(sku="TEE-WHT-S", stock=2, product=self.variant.product)

        with self.assertRaises(InsufficientStockError) as ctx:
            create_movement(variant_id=variant.pk, movement_type="OUT", quantity=5, actor_id=ACTOR)

        self.assertIn("Available: 2, Requested: 5", str(ctx.exception))
        variant.refresh_from_db()
        self.assertEqual(variant.stock, 2)
        self.assertFalse(InventoryMovement.objects.exists())

    def test_in_and_return_increase_stock(self):
        create_movement(variant_id=self.variant.pk, movement_type="IN", quantity=5, actor_id=ACTOR)
        result = create_movement(variant_id=self.variant.pk, movement_type="RETURN", quantity=1, actor_id=ACTOR)

        self.assertEqual(result.new_stock, 16)
        self.assertEqual(self._stock(), 16)

    def test_adjustment_sets_absolute_stock(self):
        result = create_movement(
            variant_id=self.variant.pk,
            movement_type="ADJUSTMENT",
            quantity=4,
            reason="cycle count",
            actor_id=ACTOR,
        )

        self.assertEqual(result.new_stock, 4)
        self.assertEqual(result.movement.reason, "cycle count")
        self.assertEqual(result.movement.stock_delta, -6)

    def test_adjustment_above_current_stock_is_rejected(self):
        with self.assertRaises(InsufficientStockError):
            create_movement(variant_id=self.variant.pk, movement_type="ADJUSTMENT", quantity=11, actor_id=ACTOR)

        self.assertEqual(self._stock(), 10)

    def test_string_quantity_is_accepted(self):
        result = create_movement(variant_id=str(self.variant.pk), movement_type="IN", quantity="2", actor_id=ACTOR)
        self.assertEqual(result.new_stock, 12)

    def test_invalid_input_is_rejected_before_any_write(self):
        cases = [
            {"movement_type": "OUT", "quantity": 0},
            {"movement_type": "OUT", "quantity": -2},
            {"movement_type": "OUT", "quantity": True},
            {"movement_type": "OUT", "quantity": "abc"},
            {"movement_type": "OUT", "quantity": 1.5},
            {"movement_type": "OUT", "quantity": None},
            {"movement_type": "TRANSFER", "quantity": 1},
            {"movement_type": "", "quantity": 1},
        ]
        for kwargs in cases:
            with self.subTest(**kwargs):
                with self.assertRaises(InvalidMovementError):
                    create_movement(variant_id=self.variant.pk, actor_id=ACTOR, **kwargs)

        self.assertEqual(self._stock(), 10)
        self.assertFalse(InventoryMovement.objects.exists())

    def test_missing_or_malformed_variant_id_is_invalid(self):
        for variant_id in (None, "", "not-a-uuid"):
            with self.subTest(variant_id=variant_id):
                with self.assertRaises(InvalidMovementError):
                    create_movement(variant_id=variant_id, movement_type="IN", quantity=1, actor_id=ACTOR)

    def test_unknown_variant_is_not_found(self):
        with self.assertRaises(VariantNotFoundError):
            create_movement(variant_id=uuid.uuid4(), movement_type="IN", quantity=1, actor_id=ACTOR)

    def test_blank_actor_is_rejected(self):
        with self.assertRaises(InvalidMovementError):
            create_movement(variant_id=self.variant.pk, movement_type="IN", quantity=1, actor_id="  ")

    def test_reason_longer_than_limit_is_rejected(self):
        with self.assertRaises(InvalidMovementError):
            create_movement(
                variant_id=self.variant.pk,
                movement_type="IN",
                quantity=1,
                reason="x" * 256,
                actor_id=ACTOR,
            )

    def test_sequence_keeps_stock_equal_to_ledger(self):
        steps = [("IN", 5), ("OUT", 7), ("RETURN", 2), ("OUT", 10), ("IN", 1)]
        expected = 10
        for movement_type, quantity in steps:
            result = create_movement(
                variant_id=self.variant.pk,
                movement_type=movement_type,
                quantity=quantity,
                actor_id=ACTOR,
            )
            expected += quantity if movement_type in ("IN", "RETURN") else -quantity
            self.assertEqual(result.new_stock, expected)
            self.assertGreaterEqual(result.new_stock, 0)

        latest = InventoryMovement.objects.filter(variant=self.variant).order_by("-stock_version").first()
        self.assertEqual(latest.resulting_stock, self._stock())
        self.assertEqual(InventoryMovement.objects.count(), len(steps))

        deltas = sum(m.stock_delta for m in InventoryMovement.objects.filter(variant=self.variant))
        self.assertEqual(10 + deltas, self._stock())


class MovementAtomicityTests(TestCase):
    def setUp(self):
        self.variant = make_variant(stock=10)

    def test_ledger_insert_failure_rolls_back_stock_write(self):
        with mock.patch.object(
            InventoryMovement.objects,
            "create",
            side_effect=DatabaseError("disk full"),
        ):
            with self.assertRaises(InventoryStorageError):
                create_movement(variant_id=self.variant.pk, movement_type="OUT", quantity=3, actor_id=ACTOR)

        self.variant.refresh_from_db()
        self.assertEqual(self.variant.stock, 10)
        self.assertEqual(self.variant.stock_version, 0)
        self.assertFalse(InventoryMovement.objects.exists())


@override_settings(INVENTORY_CONFLICT_MAX_ATTEMPTS=3)
class MovementConflictTests(TestCase):
    def setUp(self):
        self.variant = make_variant(stock=10)

    def test_stale_snapshot_cannot_overwrite_newer_stock(self):
        stale = variant_store.get_stock(self.variant.pk)
        variant_store.set_stock(stale, 8)

        with self.assertRaises(StockConflictError):
            variant_store.set_stock(stale, 5)

        self.variant.refresh_from_db()
        self.assertEqual(self.variant.stock, 8)
        self.assertEqual(self.variant.stock_version, 1)

    def test_transient_conflict_is_retried(self):
        real_set_stock = variant_store.set_stock
        calls = {"count": 0}

        def flaky_set_stock(snapshot, new_stock):
            calls["count"] += 1
            if calls["count"] == 1:
                raise StockConflictError("concurrent write")
            return real_set_stock(snapshot, new_stock)

        with mock.patch("inventory.services.movements.variant_store.set_stock", side_effect=flaky_set_stock):
            result = create_movement(variant_id=self.variant.pk, movement_type="OUT", quantity=4, actor_id=ACTOR)

        self.assertEqual(calls["count"], 2)
        self.assertEqual(result.new_stock, 6)
        self.assertEqual(InventoryMovement.objects.count(), 1)

    def test_persistent_conflict_is_surfaced_without_writes(self):
        with mock.patch(
            "inventory.services.movements.variant_store.set_stock",
            side_effect=StockConflictError("concurrent write"),
        ) as patched:
            with self.assertRaises(StockConflictError):
                create_movement(variant_id=self.variant.pk, movement_type="OUT", quantity=4, actor_id=ACTOR)

        self.assertEqual(patched.call_count, 3)
        self.variant.refresh_from_db()
        self.assertEqual(self.variant.stock, 10)
        self.assertFalse(InventoryMovement.objects.exists())
