# inventory/models/movement.py

"""
CANONICAL INVENTORY LEDGER

Immutable ledger entry: one row per successful change of ProductVariant.stock.

GUARANTEES:
- Append-only (no updates, no deletes; corrections are new movements)
- Created ONCE, in the same atomic unit as the variant stock write
- quantity is always a positive magnitude; its meaning depends on movement_type
- previous_stock / resulting_stock snapshot the variant around the write, so the
  current stock can always be traced back to the latest movement
- stock_version orders the movements of one variant exactly, even when
  created_at values tie
"""

import uuid

from django.core.exceptions import ValidationError
from django.db import models

from catalog.models import ProductVariant


class MovementType(models.TextChoices):
    IN = "IN", "Stock In"
    OUT = "OUT", "Stock Out"
    ADJUSTMENT = "ADJUSTMENT", "Adjustment"
    RETURN = "RETURN", "Return"


class InventoryMovementQuerySet(models.QuerySet):
    """Bulk writes would bypass the per-row immutability guard."""

    def update(self, **kwargs):
        raise ValidationError("InventoryMovement records are immutable")

    def delete(self):
        raise ValidationError("InventoryMovement records are immutable and cannot be deleted")


class InventoryMovement(models.Model):
    MovementType = MovementType

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    variant = models.ForeignKey(
        ProductVariant,
        on_delete=models.PROTECT,
        related_name="movements",
    )

    movement_type = models.CharField(max_length=10, choices=MovementType.choices)

    quantity = models.PositiveIntegerField()

    reason = models.CharField(max_length=255)

    # Opaque identifier of the user/process that initiated the movement.
    actor_id = models.CharField(max_length=64, db_index=True)

    previous_stock = models.PositiveIntegerField()
    resulting_stock = models.PositiveIntegerField()

    # ProductVariant.stock_version written together with this row.
    # Strictly increasing per variant: the ledger order of one variant.
    stock_version = models.PositiveIntegerField(editable=False)

    created_at = models.DateTimeField(auto_now_add=True)

    objects = InventoryMovementQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["created_at"], name="inventory_i_created_6f1c2a_idx"),
            models.Index(fields=["movement_type"], name="inventory_i_movemen_3b8e4d_idx"),
            models.Index(fields=["variant", "created_at"], name="inventory_i_variant_9a0d7e_idx"),
            models.Index(fields=["actor_id", "created_at"], name="inventory_i_actor_i_52c7f1_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["variant", "stock_version"],
                name="uniq_movement_variant_stock_version",
            ),
        ]

    def clean(self):
        if self.quantity is None or self.quantity <= 0:
            raise ValidationError({"quantity": "quantity must be greater than zero"})

        if self.movement_type not in MovementType.values:
            raise ValidationError({"movement_type": f"Unknown movement type: {self.movement_type}"})

        if not (self.actor_id or "").strip():
            raise ValidationError({"actor_id": "actor_id is required"})

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("InventoryMovement records are immutable")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("InventoryMovement records are immutable and cannot be deleted")

    @property
    def stock_delta(self) -> int:
        return int(self.resulting_stock) - int(self.previous_stock)

    def __str__(self):
        return f"{self.variant_id} | {self.movement_type} | {self.quantity}"
