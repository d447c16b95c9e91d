from django.contrib import admin

from tickets.models import Organization, Program, Voucher


class VoucherInline(admin.TabularInline):
    model = Voucher
    extra = 1


@admin.register(Program)
class ProgramAdmin(admin.ModelAdmin):
    list_display = ["name", "program_tag", "program_ticket_price", "offer_type", "is_active"]
    list_filter = ["offer_type", "is_active"]
    search_fields = ["name", "program_tag"]


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = ["name", "training_fund_balance", "contacts_synced_at"]
    search_fields = ["name"]
    inlines = [VoucherInline]


@admin.register(Voucher)
class VoucherAdmin(admin.ModelAdmin):
    list_display = ["code", "organization", "value", "expires_at", "status"]
    list_filter = ["status", "organization"]
