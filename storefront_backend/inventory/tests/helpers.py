# inventory/tests/helpers.py

from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model

from catalog.models import Product, ProductVariant

User = get_user_model()


def make_product(*, name="Classic Tee", slug="classic-tee", base_price="19.90") -> Product:
    return Product.objects.create(name=name, slug=slug, base_price=Decimal(base_price))


def make_variant(*, product=None, sku="TEE-BLK-M", stock=0, **extra) -> ProductVariant:
    """
    Variant with an initial stock value written directly (test setup only).
    """
    if product is None:
        product = make_product()
    return ProductVariant.objects.create(product=product, sku=sku, stock=stock, **extra)


def make_user(*, email="stock@example.com", role=User.ROLE_STAFF):
    return User.objects.create_user(email=email, password="password123", role=role)
