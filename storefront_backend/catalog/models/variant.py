# catalog/models/variant.py

"""
PRODUCT VARIANT (SKU-LEVEL STOCK HOLDER)

CANONICAL MODEL:
- stock is the authoritative current quantity for the SKU
- stock is NEVER negative (DB check constraint)
- stock is mutated ONLY through inventory services, together with a ledger row
- stock_version increments on every stock write; inventory uses it as a
  compare-and-set token so a stale read can never overwrite a newer value
"""

import uuid

from django.db import models
from django.db.models import Q

from .product import Product

DEFAULT_LOW_STOCK_THRESHOLD = 5


class ProductVariant(models.Model):
    class StockStatus(models.TextChoices):
        OUT_OF_STOCK = "OUT_OF_STOCK", "Out of stock"
        LOW_STOCK = "LOW_STOCK", "Low stock"
        OK = "OK", "OK"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="variants",
    )

    sku = models.CharField(max_length=128, unique=True, db_index=True)

    size = models.CharField(max_length=50, blank=True)
    color = models.CharField(max_length=50, blank=True)
    material = models.CharField(max_length=100, blank=True)

    # Overrides product.base_price when set
    price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)

    stock = models.PositiveIntegerField(
        default=0,
        help_text="Current stock (ledger-managed only)",
    )
    stock_version = models.PositiveIntegerField(
        default=0,
        editable=False,
        help_text="Bumped on every stock write (optimistic concurrency token)",
    )

    low_stock_threshold = models.PositiveIntegerField(default=DEFAULT_LOW_STOCK_THRESHOLD)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["product__name", "sku"]
        constraints = [
            models.CheckConstraint(
                condition=Q(stock__gte=0),
                name="chk_variant_stock_gte_zero",
            ),
        ]

    def __str__(self):
        product_name = getattr(self.product, "name", "Product")
        return f"{product_name} ({self.sku})"

    @property
    def effective_price(self):
        return self.price if self.price is not None else self.product.base_price

    @property
    def stock_status(self) -> str:
        stock = int(self.stock or 0)
        if stock == 0:
            return self.StockStatus.OUT_OF_STOCK
        if stock <= int(self.low_stock_threshold or 0):
            return self.StockStatus.LOW_STOCK
        return self.StockStatus.OK

    @property
    def is_low_stock(self) -> bool:
        return self.stock_status != self.StockStatus.OK
