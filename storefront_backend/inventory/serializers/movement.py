# inventory/serializers/movement.py

"""
INVENTORY MOVEMENT READ SERIALIZER

Ledger rows are never written through a serializer: creation goes through
inventory.services, so every field here is read-only.
"""

from rest_framework import serializers

from inventory.models import InventoryMovement


class InventoryMovementSerializer(serializers.ModelSerializer):
    variant_id = serializers.UUIDField(read_only=True)
    sku = serializers.CharField(source="variant.sku", read_only=True)
    product_id = serializers.UUIDField(source="variant.product_id", read_only=True)
    product_name = serializers.CharField(source="variant.product.name", read_only=True)

    type = serializers.CharField(source="movement_type", read_only=True)
    type_display = serializers.CharField(source="get_movement_type_display", read_only=True)

    class Meta:
        model = InventoryMovement
        fields = [
            "id",
            "variant_id",
            "sku",
            "product_id",
            "product_name",
            "type",
            "type_display",
            "quantity",
            "reason",
            "actor_id",
            "previous_stock",
            "resulting_stock",
            "created_at",
        ]
        read_only_fields = fields
