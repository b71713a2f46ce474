# catalog/management/commands/seed_catalog.py

from __future__ import annotations

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from catalog.models import Product, ProductVariant

DEMO_CATALOG = [
    {
        "name": "Classic Tee",
        "slug": "classic-tee",
        "base_price": Decimal("19.90"),
        "variants": [
            {"sku": "TEE-BLK-S", "size": "S", "color": "Black"},
            {"sku": "TEE-BLK-M", "size": "M", "color": "Black"},
            {"sku": "TEE-WHT-M", "size": "M", "color": "White"},
        ],
    },
    {
        "name": "Canvas Tote",
        "slug": "canvas-tote",
        "base_price": Decimal("24.00"),
        "variants": [
            {"sku": "TOTE-NAT", "color": "Natural", "material": "Canvas"},
        ],
    },
]


class Command(BaseCommand):
    help = "Seed demo products and variants for local development (idempotent, zero stock)."

    @transaction.atomic
    def handle(self, *args, **options):
        created_variants = 0

        for entry in DEMO_CATALOG:
            product, _ = Product.objects.get_or_create(
                slug=entry["slug"],
                defaults={"name": entry["name"], "base_price": entry["base_price"]},
            )

            for variant_data in entry["variants"]:
                # Stock starts at zero: receive it through the ledger, not here.
                _, created = ProductVariant.objects.get_or_create(
                    sku=variant_data["sku"],
                    defaults={
                        "product": product,
                        "size": variant_data.get("size", ""),
                        "color": variant_data.get("color", ""),
                        "material": variant_data.get("material", ""),
                    },
                )
                if created:
                    created_variants += 1
                    self.stdout.write(f"created: {variant_data['sku']}")

        self.stdout.write(self.style.SUCCESS(f"Variants created: {created_variants}"))
