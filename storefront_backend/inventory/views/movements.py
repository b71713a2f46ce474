"""
======================================================
PATH: inventory/views/movements.py
======================================================
INVENTORY MOVEMENT VIEWSET

Endpoints (under /api/inventory/):
- GET   movements/        filtered + paginated history with per-type summary
- POST  movements/        record one movement (IN / OUT / ADJUSTMENT / RETURN)
- PATCH movements/bulk/   bulk_create or stock_reset over a list of items

RULES:
- stock is changed ONLY by inventory.services (never by a serializer save)
- actor_id is the authenticated user, never read from the body
- these views do not open transactions; each service call owns its atomic
  unit (and its conflict retries)
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiParameter, OpenApiTypes, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from inventory.serializers import (
    BulkMovementCommandSerializer,
    InventoryMovementSerializer,
    MovementCreateCommandSerializer,
    MovementListQuerySerializer,
)
from inventory.services import (
    InventoryServiceError,
    bulk_apply,
    create_movement,
    list_movements,
)
from inventory.views.errors import service_error_response, validation_error_response
from permissions.roles import (
    CAP_INVENTORY_ADJUST,
    CAP_INVENTORY_VIEW,
    HasCapability,
)

logger = logging.getLogger(__name__)


def _actor_id(request) -> str:
    return str(request.user.pk)


class InventoryMovementViewSet(viewsets.GenericViewSet):
    serializer_class = InventoryMovementSerializer
    permission_classes = [IsAuthenticated]

    required_capability = None

    def get_permissions(self):
        # reset per request to avoid state leaking between actions
        self.required_capability = None

        if self.action == "list":
            self.required_capability = CAP_INVENTORY_VIEW
            return [IsAuthenticated(), HasCapability()]

        if self.action in {"create", "bulk"}:
            self.required_capability = CAP_INVENTORY_ADJUST
            return [IsAuthenticated(), HasCapability()]

        return [IsAuthenticated(), HasCapability()]

    def get_serializer_class(self):
        if self.action == "create":
            return MovementCreateCommandSerializer
        if self.action == "bulk":
            return BulkMovementCommandSerializer
        return InventoryMovementSerializer

    # -------------------------------------------------
    # LIST (history + summary)
    # -------------------------------------------------
    @extend_schema(
        parameters=[
            OpenApiParameter("variant_id", OpenApiTypes.UUID, required=False),
            OpenApiParameter("type", OpenApiTypes.STR, required=False, enum=["IN", "OUT", "ADJUSTMENT", "RETURN"]),
            OpenApiParameter("actor_id", OpenApiTypes.STR, required=False),
            OpenApiParameter("date_from", OpenApiTypes.DATETIME, required=False),
            OpenApiParameter("date_to", OpenApiTypes.DATETIME, required=False),
            OpenApiParameter("page", OpenApiTypes.INT, required=False),
            OpenApiParameter("limit", OpenApiTypes.INT, required=False),
        ],
        description="Movement history, newest first, with a per-type summary of the filtered set.",
        responses={200: OpenApiTypes.OBJECT},
    )
    def list(self, request):
        query = MovementListQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return validation_error_response(query.errors)

        params = dict(query.validated_data)
        page = params.pop("page", None)
        limit = params.pop("limit", None)

        try:
            result = list_movements(filters=params, page=page, limit=limit)
        except InventoryServiceError as exc:
            return service_error_response(exc)

        return Response(
            {
                "movements": InventoryMovementSerializer(result.movements, many=True).data,
                "pagination": result.pagination,
                "summary": result.summary,
            },
            status=status.HTTP_200_OK,
        )

    # -------------------------------------------------
    # CREATE (single movement)
    # -------------------------------------------------
    @extend_schema(
        request=MovementCreateCommandSerializer,
        responses={201: OpenApiTypes.OBJECT},
    )
    def create(self, request):
        command = MovementCreateCommandSerializer(data=request.data)
        if not command.is_valid():
            return validation_error_response(command.errors)

        data = command.validated_data
        try:
            result = create_movement(
                variant_id=data["variant_id"],
                movement_type=data["type"],
                quantity=data["quantity"],
                reason=data.get("reason"),
                actor_id=_actor_id(request),
            )
        except InventoryServiceError as exc:
            return service_error_response(exc)

        return Response(
            {
                "movement": InventoryMovementSerializer(result.movement).data,
                "new_stock": result.new_stock,
                "message": "Inventory movement created successfully",
            },
            status=status.HTTP_201_CREATED,
        )

    # -------------------------------------------------
    # BULK
    # -------------------------------------------------
    @extend_schema(
        request=BulkMovementCommandSerializer,
        responses={200: OpenApiTypes.OBJECT},
    )
    @action(detail=False, methods=["patch"], url_path="bulk")
    def bulk(self, request):
        command = BulkMovementCommandSerializer(data=request.data)
        if not command.is_valid():
            return validation_error_response(command.errors)

        data = command.validated_data
        try:
            result = bulk_apply(
                action=data["action"],
                items=data["movements"],
                actor_id=_actor_id(request),
            )
        except InventoryServiceError as exc:
            return service_error_response(exc)

        return Response(
            {
                "message": (
                    f"Bulk operation '{result.action}' completed. "
                    f"{result.applied_count} movements processed."
                ),
                "action": result.action,
                "applied_count": result.applied_count,
                "skipped_count": result.skipped_count,
                "results": [
                    {
                        "movement": InventoryMovementSerializer(applied.movement).data,
                        "new_stock": applied.new_stock,
                    }
                    for applied in result.applied
                ],
            },
            status=status.HTTP_200_OK,
        )
