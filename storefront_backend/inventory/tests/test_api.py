# inventory/tests/test_api.py

from __future__ import annotations

import uuid
from unittest import mock

from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from inventory.models import InventoryMovement
from inventory.services.exceptions import InventoryStorageError, StockConflictError
from inventory.services.movements import create_movement

from .helpers import make_product, make_user, make_variant

MOVEMENTS_URL = "/api/inventory/movements/"
BULK_URL = "/api/inventory/movements/bulk/"


class InventoryApiPermissionTests(TestCase):
    """
    GUARANTEES:
    - anonymous callers are rejected
    - customers can neither read nor write the ledger
    - every staff role can read and write
    """

    def setUp(self):
        self.client = APIClient()
        self.variant = make_variant(stock=5)

    def test_anonymous_is_rejected(self):
        response = self.client.get(MOVEMENTS_URL)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_customer_is_forbidden(self):
        self.client.force_authenticate(user=make_user(email="shopper@example.com", role="customer"))

        self.assertEqual(self.client.get(MOVEMENTS_URL).status_code, status.HTTP_403_FORBIDDEN)

        response = self.client.post(
            MOVEMENTS_URL,
            {"variant_id": str(self.variant.pk), "type": "IN", "quantity": 1},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(InventoryMovement.objects.exists())

    def test_staff_roles_can_operate(self):
        for role in ("admin", "manager", "staff"):
            with self.subTest(role=role):
                self.client.force_authenticate(user=make_user(email=f"{role}@example.com", role=role))

                response = self.client.post(
                    MOVEMENTS_URL,
                    {"variant_id": str(self.variant.pk), "type": "IN", "quantity": 1},
                    format="json",
                )
                self.assertEqual(response.status_code, status.HTTP_201_CREATED)
                self.assertEqual(self.client.get(MOVEMENTS_URL).status_code, status.HTTP_200_OK)


class InventoryMovementApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = make_user()
        self.client.force_authenticate(user=self.user)

        product = make_product()
        self.variant = make_variant(product=product, sku="TEE-A", stock=10)
        self.other = make_variant(product=product, sku="TEE-B", stock=2)

    def test_create_movement(self):
        response = self.client.post(
            MOVEMENTS_URL,
            {"variantId": str(self.variant.pk), "type": "OUT", "quantity": 3, "actor_id": "spoofed"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["new_stock"], 7)

        movement = response.data["movement"]
        self.assertEqual(movement["type"], "OUT")
        self.assertEqual(movement["quantity"], 3)
        self.assertEqual(movement["sku"], "TEE-A")
        self.assertEqual(movement["reason"], "Movement of type OUT")
        self.assertEqual(movement["actor_id"], str(self.user.pk))

        self.variant.refresh_from_db()
        self.assertEqual(self.variant.stock, 7)

    def test_create_error_codes(self):
        cases = [
            (
                {"variant_id": str(self.other.pk), "type": "OUT", "quantity": 5},
                status.HTTP_400_BAD_REQUEST,
                "INSUFFICIENT_STOCK",
            ),
            (
                {"variant_id": str(uuid.uuid4()), "type": "IN", "quantity": 1},
                status.HTTP_404_NOT_FOUND,
                "NOT_FOUND",
            ),
            (
                {"variant_id": str(self.variant.pk), "type": "TRANSFER", "quantity": 1},
                status.HTTP_400_BAD_REQUEST,
                "INVALID_ARGUMENT",
            ),
            (
                {"variant_id": str(self.variant.pk), "type": "IN", "quantity": 0},
                status.HTTP_400_BAD_REQUEST,
                "INVALID_ARGUMENT",
            ),
            (
                {"type": "IN", "quantity": 1},
                status.HTTP_400_BAD_REQUEST,
                "INVALID_ARGUMENT",
            ),
        ]
        for payload, expected_status, expected_code in cases:
            with self.subTest(payload=payload):
                response = self.client.post(MOVEMENTS_URL, payload, format="json")
                self.assertEqual(response.status_code, expected_status)
                self.assertEqual(response.data["error"]["code"], expected_code)

        self.assertFalse(InventoryMovement.objects.exists())

    def test_conflict_maps_to_409(self):
        with mock.patch(
            "inventory.views.movements.create_movement",
            side_effect=StockConflictError("busy"),
        ):
            response = self.client.post(
                MOVEMENTS_URL,
                {"variant_id": str(self.variant.pk), "type": "IN", "quantity": 1},
                format="json",
            )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["error"]["code"], "CONFLICT")

    def test_storage_failure_maps_to_500_without_details(self):
        with mock.patch(
            "inventory.views.movements.create_movement",
            side_effect=InventoryStorageError("db host 10.0.0.3 unreachable"),
        ):
            response = self.client.post(
                MOVEMENTS_URL,
                {"variant_id": str(self.variant.pk), "type": "IN", "quantity": 1},
                format="json",
            )

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["error"], {"code": "INTERNAL", "message": "Internal server error"})

    def test_list_movements(self):
        for quantity in (1, 2, 3):
            create_movement(variant_id=self.variant.pk, movement_type="IN", quantity=quantity, actor_id="a")
        create_movement(variant_id=self.other.pk, movement_type="OUT", quantity=1, actor_id="b")

        response = self.client.get(
            MOVEMENTS_URL,
            {"variantId": str(self.variant.pk), "page": 1, "limit": 2},
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["movements"]), 2)
        self.assertEqual(response.data["pagination"]["total"], 3)
        self.assertTrue(response.data["pagination"]["has_next"])
        self.assertEqual(
            response.data["summary"],
            {"total_movements": 3, "by_type": {"IN": {"count": 3, "total_quantity": 6}}},
        )

    def test_list_rejects_bad_filters(self):
        response = self.client.get(MOVEMENTS_URL, {"type": "TRANSFER"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "INVALID_ARGUMENT")

        response = self.client.get(MOVEMENTS_URL, {"page": 0})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_bulk_create(self):
        response = self.client.patch(
            BULK_URL,
            {
                "action": "bulk_create",
                "movements": [
                    {"variantId": str(self.variant.pk), "type": "IN", "quantity": 5},
                    {"variantId": str(self.other.pk), "type": "OUT", "quantity": 100},
                ],
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["action"], "bulk_create")
        self.assertEqual(response.data["applied_count"], 1)
        self.assertEqual(response.data["skipped_count"], 1)
        self.assertEqual(len(response.data["results"]), 1)
        self.assertEqual(response.data["results"][0]["new_stock"], 15)
        self.assertIn("1 movements processed", response.data["message"])

    def test_bulk_stock_reset(self):
        response = self.client.patch(
            BULK_URL,
            {
                "action": "stock_reset",
                "movements": [
                    {"variantId": str(self.variant.pk), "newStock": 10},
                    {"variantId": str(self.other.pk), "newStock": 6},
                ],
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["applied_count"], 1)
        self.assertEqual(response.data["results"][0]["movement"]["reason"], "Bulk stock reset (2 → 6)")

    def test_bulk_rejects_unknown_action(self):
        response = self.client.patch(BULK_URL, {"action": "wipe", "movements": []}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "INVALID_ARGUMENT")

    def test_bulk_conflict_maps_to_409(self):
        with mock.patch(
            "inventory.views.movements.bulk_apply",
            side_effect=StockConflictError("busy"),
        ):
            response = self.client.patch(
                BULK_URL,
                {"action": "bulk_create", "movements": []},
                format="json",
            )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
