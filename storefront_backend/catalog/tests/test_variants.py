# catalog/tests/test_variants.py

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.test import TestCase

from catalog.models import Product, ProductVariant


class ProductVariantTests(TestCase):
    """
    GUARANTEES:
    - stock can never be stored below zero
    - stock status thresholds (out / low / ok)
    - variant price falls back to the product base price
    """

    def setUp(self):
        self.product = Product.objects.create(
            name="Classic Tee",
            slug="classic-tee",
            base_price=Decimal("19.90"),
        )
        self.variant = ProductVariant.objects.create(product=self.product, sku="TEE-M", stock=10)

    def test_negative_stock_is_rejected_by_database(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                ProductVariant.objects.filter(pk=self.variant.pk).update(stock=-1)

        self.variant.refresh_from_db()
        self.assertEqual(self.variant.stock, 10)

    def test_stock_status_thresholds(self):
        cases = [(0, "OUT_OF_STOCK"), (1, "LOW_STOCK"), (5, "LOW_STOCK"), (6, "OK")]
        for stock, expected in cases:
            with self.subTest(stock=stock):
                self.variant.stock = stock
                self.assertEqual(self.variant.stock_status, expected)
                self.assertEqual(self.variant.is_low_stock, expected != "OK")

    def test_custom_threshold(self):
        self.variant.low_stock_threshold = 20
        self.assertEqual(self.variant.stock_status, ProductVariant.StockStatus.LOW_STOCK)
        self.assertEqual(self.variant.stock_status.label, "Low stock")

    def test_effective_price(self):
        self.assertEqual(self.variant.effective_price, Decimal("19.90"))

        self.variant.price = Decimal("15.00")
        self.assertEqual(self.variant.effective_price, Decimal("15.00"))

    def test_product_requires_positive_base_price(self):
        product = Product(name="Free Sticker", slug="free-sticker", base_price=Decimal("0"))
        with self.assertRaises(ValidationError):
            product.full_clean()
