"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in tickets/domain/.
"""

import uuid
from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Program(models.Model):
    """Persistence model for ticket programs."""

    class OfferType(models.TextChoices):
        NONE = "none", "None"
        BOGO = "bogo", "Buy X get Y free"
        BULK_DISCOUNT = "bulk_discount", "Bulk discount"

    class BogoLogic(models.TextChoices):
        BUY_X_GET_Y_FREE = "buy_x_get_y_free", "Pay for entered quantity, free on top"
        ENTER_TOTAL_PAY_LESS = "enter_total_pay_less", "Enter total, pay for fewer"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    program_tag = models.CharField(max_length=100, unique=True)
    program_ticket_price = models.DecimalField(max_digits=10, decimal_places=2)
    offer_type = models.CharField(
        max_length=20, choices=OfferType.choices, default=OfferType.NONE
    )
    bogo_buy_quantity = models.PositiveIntegerField(blank=True, null=True)
    bogo_get_free_quantity = models.PositiveIntegerField(blank=True, null=True)
    bogo_logic_type = models.CharField(
        max_length=30, choices=BogoLogic.choices, default=BogoLogic.BUY_X_GET_Y_FREE
    )
    bulk_discount_threshold = models.PositiveIntegerField(blank=True, null=True)
    bulk_discount_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        blank=True,
        null=True,
        validators=[MinValueValidator(Decimal("0.01")), MaxValueValidator(Decimal("100"))],
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["is_active", "name"], name="program_active_name_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class Organization(models.Model):
    """Persistence model for member organizations."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    training_fund_balance = models.DecimalField(
        max_digits=10, decimal_places=2, default=0
    )
    program_ticket_balances = models.JSONField(default=dict, blank=True)
    contacts_synced_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Voucher(models.Model):
    """Persistence model for organization vouchers."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    organization = models.ForeignKey(
        Organization, on_delete=models.CASCADE, related_name="vouchers"
    )
    code = models.CharField(max_length=50)
    value = models.DecimalField(max_digits=10, decimal_places=2)
    expires_at = models.DateTimeField()
    status = models.CharField(max_length=20, default="active")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["expires_at", "value"]
        indexes = [
            models.Index(fields=["organization", "status"], name="voucher_org_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.code} - {self.value}"
