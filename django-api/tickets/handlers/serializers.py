"""Serializers for transforming domain models to API responses and parsing requests."""

from rest_framework import serializers


class ProgramSerializer(serializers.Serializer):
    """Serializer for Program domain model."""

    id = serializers.UUIDField(source="id.value")
    name = serializers.CharField()
    program_tag = serializers.CharField()
    unit_price = serializers.DecimalField(source="unit_price.amount", max_digits=10, decimal_places=2)
    offer_type = serializers.CharField(source="offer_type.value")
    bogo_buy_quantity = serializers.IntegerField(allow_null=True)
    bogo_get_free_quantity = serializers.IntegerField(allow_null=True)
    bogo_logic_type = serializers.CharField(source="bogo_logic_type.value")
    bulk_discount_threshold = serializers.IntegerField(allow_null=True)
    bulk_discount_percentage = serializers.DecimalField(max_digits=5, decimal_places=2, allow_null=True)


class VoucherSerializer(serializers.Serializer):
    """Serializer for Voucher domain model."""

    id = serializers.UUIDField(source="id.value")
    code = serializers.CharField()
    value = serializers.DecimalField(source="value.amount", max_digits=10, decimal_places=2)
    expires_at = serializers.DateTimeField()
    status = serializers.CharField()


class AllocationSerializer(serializers.Serializer):
    voucherAmount = serializers.DecimalField(source="voucher_amount", max_digits=12, decimal_places=2)
    trainingFundAmount = serializers.DecimalField(source="training_fund_amount", max_digits=12, decimal_places=2)
    remainingBalance = serializers.DecimalField(source="remaining_balance", max_digits=12, decimal_places=2)
    isFullyPaid = serializers.BooleanField(source="is_fully_paid")


class QuoteSerializer(serializers.Serializer):
    """Serializer for a purchase Quote."""

    costBeforeDiscount = serializers.DecimalField(source="cost_before_discount", max_digits=12, decimal_places=2)
    totalCost = serializers.DecimalField(source="total_cost", max_digits=12, decimal_places=2)
    freeTickets = serializers.IntegerField(source="free_tickets")
    totalTickets = serializers.IntegerField(source="total_tickets")
    maxTrainingFund = serializers.DecimalField(source="max_training_fund", max_digits=12, decimal_places=2)
    allocation = AllocationSerializer()


class QuoteRequestSerializer(serializers.Serializer):
    """Input for POST /api/programs/{id}/quote."""

    quantity = serializers.IntegerField(min_value=1)
    selectedVoucherIds = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    trainingFund = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False, default=0)
    paymentMethod = serializers.ChoiceField(choices=["account", "card"], required=False, default="account")
    po = serializers.CharField(required=False, allow_blank=True, default="")
    organizationId = serializers.CharField(required=False, allow_null=True, default=None)


class PurchaseDraftSerializer(serializers.Serializer):
    selectedVouchers = serializers.ListField(child=serializers.CharField(), source="selected_vouchers")
    trainingFund = serializers.DecimalField(source="training_fund", max_digits=12, decimal_places=2)
    paymentMethod = serializers.CharField(source="payment_method.value")
    po = serializers.CharField(allow_blank=True)
    qty = serializers.IntegerField()
