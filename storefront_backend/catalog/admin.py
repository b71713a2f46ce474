"""
=====================================================
PATH: catalog/admin.py
=====================================================

Admin rules (ledger-safe):

- Products and variants are regular catalog records.
- ProductVariant.stock is read-only here: stock only changes through the
  inventory ledger (single movements, bulk operations), so the admin can
  never produce a stock value without a matching movement.
"""

from __future__ import annotations

from django.contrib import admin

from catalog.models import Product, ProductVariant


class ProductVariantInline(admin.TabularInline):
    model = ProductVariant
    extra = 0
    fields = ("sku", "size", "color", "material", "price", "stock", "low_stock_threshold", "is_active")
    readonly_fields = ("stock",)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "base_price", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name", "slug")
    prepopulated_fields = {"slug": ("name",)}
    inlines = [ProductVariantInline]


@admin.register(ProductVariant)
class ProductVariantAdmin(admin.ModelAdmin):
    list_display = ("sku", "product", "stock", "stock_status", "is_active", "updated_at")
    list_filter = ("is_active",)
    search_fields = ("sku", "product__name")
    readonly_fields = ("stock", "stock_version", "created_at", "updated_at")

    @admin.display(description="Stock Status")
    def stock_status(self, obj):
        return ProductVariant.StockStatus(obj.stock_status).label
