# inventory/filters.py

import django_filters

from inventory.models import InventoryMovement, MovementType


class InventoryMovementFilter(django_filters.FilterSet):
    """
    Movement history filters (all combined with AND).

    date_from / date_to are inclusive bounds on created_at and accept
    ISO-8601 dates or datetimes.
    """

    variant_id = django_filters.UUIDFilter(field_name="variant_id")
    type = django_filters.ChoiceFilter(field_name="movement_type", choices=MovementType.choices)
    actor_id = django_filters.CharFilter(field_name="actor_id")
    date_from = django_filters.IsoDateTimeFilter(field_name="created_at", lookup_expr="gte")
    date_to = django_filters.IsoDateTimeFilter(field_name="created_at", lookup_expr="lte")

    class Meta:
        model = InventoryMovement
        fields = ["variant_id", "type", "actor_id", "date_from", "date_to"]
