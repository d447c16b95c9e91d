import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Organization",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("training_fund_balance", models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ("program_ticket_balances", models.JSONField(blank=True, default=dict)),
                ("contacts_synced_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Program",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("program_tag", models.CharField(max_length=100, unique=True)),
                ("program_ticket_price", models.DecimalField(decimal_places=2, max_digits=10)),
                (
                    "offer_type",
                    models.CharField(
                        choices=[("none", "None"), ("bogo", "Buy X get Y free"), ("bulk_discount", "Bulk discount")],
                        default="none",
                        max_length=20,
                    ),
                ),
                ("bogo_buy_quantity", models.PositiveIntegerField(blank=True, null=True)),
                ("bogo_get_free_quantity", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "bogo_logic_type",
                    models.CharField(
                        choices=[
                            ("buy_x_get_y_free", "Pay for entered quantity, free on top"),
                            ("enter_total_pay_less", "Enter total, pay for fewer"),
                        ],
                        default="buy_x_get_y_free",
                        max_length=30,
                    ),
                ),
                ("bulk_discount_threshold", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "bulk_discount_percentage",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        max_digits=5,
                        null=True,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0.01")),
                            django.core.validators.MaxValueValidator(Decimal("100")),
                        ],
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
                "indexes": [models.Index(fields=["is_active", "name"], name="program_active_name_idx")],
            },
        ),
        migrations.CreateModel(
            name="Voucher",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("code", models.CharField(max_length=50)),
                ("value", models.DecimalField(decimal_places=2, max_digits=10)),
                ("expires_at", models.DateTimeField()),
                ("status", models.CharField(default="active", max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "organization",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="vouchers",
                        to="tickets.organization",
                    ),
                ),
            ],
            options={
                "ordering": ["expires_at", "value"],
                "indexes": [models.Index(fields=["organization", "status"], name="voucher_org_status_idx")],
            },
        ),
    ]
