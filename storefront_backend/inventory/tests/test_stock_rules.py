# inventory/tests/test_stock_rules.py

from django.test import SimpleTestCase

from inventory.models import MovementType
from inventory.services.exceptions import InsufficientStockError, InvalidMovementError
from inventory.services.stock_rules import apply_stock_rule


class StockRuleTests(SimpleTestCase):
    """
    Pure stock arithmetic.

    GUARANTEES:
    - IN / RETURN add, OUT subtracts, ADJUSTMENT sets an absolute value
    - OUT and ADJUSTMENT never exceed the available stock
    """

    def test_in_and_return_increase_stock(self):
        self.assertEqual(apply_stock_rule(MovementType.IN, 5, 10), 15)
        self.assertEqual(apply_stock_rule(MovementType.RETURN, 2, 0), 2)

    def test_out_decreases_stock(self):
        self.assertEqual(apply_stock_rule(MovementType.OUT, 3, 10), 7)
        self.assertEqual(apply_stock_rule(MovementType.OUT, 10, 10), 0)

    def test_out_above_available_is_rejected(self):
        with self.assertRaises(InsufficientStockError) as ctx:
            apply_stock_rule(MovementType.OUT, 5, 2)

        self.assertEqual(str(ctx.exception), "Insufficient stock. Available: 2, Requested: 5")
        self.assertEqual(ctx.exception.available, 2)
        self.assertEqual(ctx.exception.requested, 5)

    def test_adjustment_sets_absolute_value(self):
        self.assertEqual(apply_stock_rule(MovementType.ADJUSTMENT, 4, 10), 4)
        self.assertEqual(apply_stock_rule(MovementType.ADJUSTMENT, 10, 10), 10)

    def test_adjustment_cannot_raise_stock(self):
        with self.assertRaises(InsufficientStockError):
            apply_stock_rule(MovementType.ADJUSTMENT, 12, 10)

    def test_unknown_type_is_rejected(self):
        with self.assertRaises(InvalidMovementError):
            apply_stock_rule("TRANSFER", 1, 10)

    def test_non_positive_quantity_is_rejected(self):
        for quantity in (0, -1):
            with self.subTest(quantity=quantity):
                with self.assertRaises(InvalidMovementError):
                    apply_stock_rule(MovementType.IN, quantity, 10)
