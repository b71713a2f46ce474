import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="InventoryMovement",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "movement_type",
                    models.CharField(
                        choices=[
                            ("IN", "Stock In"),
                            ("OUT", "Stock Out"),
                            ("ADJUSTMENT", "Adjustment"),
                            ("RETURN", "Return"),
                        ],
                        max_length=10,
                    ),
                ),
                ("quantity", models.PositiveIntegerField()),
                ("reason", models.CharField(max_length=255)),
                ("actor_id", models.CharField(db_index=True, max_length=64)),
                ("previous_stock", models.PositiveIntegerField()),
                ("resulting_stock", models.PositiveIntegerField()),
                ("stock_version", models.PositiveIntegerField(editable=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "variant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="movements",
                        to="catalog.productvariant",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["created_at"], name="inventory_i_created_6f1c2a_idx"),
                    models.Index(fields=["movement_type"], name="inventory_i_movemen_3b8e4d_idx"),
                    models.Index(fields=["variant", "created_at"], name="inventory_i_variant_9a0d7e_idx"),
                    models.Index(fields=["actor_id", "created_at"], name="inventory_i_actor_i_52c7f1_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("variant", "stock_version"),
                        name="uniq_movement_variant_stock_version",
                    ),
                ],
            },
        ),
    ]
