# inventory/serializers/commands.py

"""
INVENTORY COMMAND SERIALIZERS

Input shaping only (no database access). Domain validation (variant exists,
stock rules, quantity > 0 ...) happens in inventory.services so API and
service callers get identical errors.

Frontend compatibility:
- Accepts BOTH snake_case and the legacy camelCase keys
  (variantId, newStock, dateFrom, dateTo, userId).
"""

from __future__ import annotations

from rest_framework import serializers

from inventory.models import MovementType
from inventory.services.bulk import BULK_ACTIONS


def _merge_alias(attrs: dict, canonical: str, *aliases: str) -> dict:
    for alias in aliases:
        value = attrs.pop(alias, None)
        if attrs.get(canonical) in (None, "") and value not in (None, ""):
            attrs[canonical] = value
    return attrs


class MovementCreateCommandSerializer(serializers.Serializer):
    variant_id = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    variantId = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    type = serializers.ChoiceField(choices=MovementType.choices)
    quantity = serializers.IntegerField()

    reason = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        max_length=255,
    )

    def validate(self, attrs):
        attrs = _merge_alias(attrs, "variant_id", "variantId")
        if not attrs.get("variant_id"):
            raise serializers.ValidationError({"variant_id": "This field is required."})
        return attrs


class BulkMovementCommandSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=BULK_ACTIONS)

    # Items stay raw: a malformed item is skipped by the bulk processor,
    # it does not reject the whole request.
    movements = serializers.ListField(required=False)
    items = serializers.ListField(required=False)

    def validate(self, attrs):
        attrs = _merge_alias(attrs, "movements", "items")
        if "movements" not in attrs:
            raise serializers.ValidationError({"movements": "This field is required."})
        return attrs


class MovementListQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(required=False, min_value=1)
    limit = serializers.IntegerField(required=False, min_value=1)

    variant_id = serializers.CharField(required=False, allow_blank=True)
    variantId = serializers.CharField(required=False, allow_blank=True)

    type = serializers.CharField(required=False, allow_blank=True)

    actor_id = serializers.CharField(required=False, allow_blank=True)
    actorId = serializers.CharField(required=False, allow_blank=True)
    userId = serializers.CharField(required=False, allow_blank=True)

    date_from = serializers.CharField(required=False, allow_blank=True)
    dateFrom = serializers.CharField(required=False, allow_blank=True)
    date_to = serializers.CharField(required=False, allow_blank=True)
    dateTo = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        attrs = _merge_alias(attrs, "variant_id", "variantId")
        attrs = _merge_alias(attrs, "actor_id", "actorId", "userId")
        attrs = _merge_alias(attrs, "date_from", "dateFrom")
        attrs = _merge_alias(attrs, "date_to", "dateTo")
        return attrs
