from django.contrib import admin

from installments.models import Installment


class InstallmentAdmin(admin.ModelAdmin):
    list_display = (
        "identity",
        "member",
        "group",
        "installment_period",
        "due_date",
        "amount",
        "paid_amount",
        "pending_amount",
        "status",
    )
    list_filter = ("status", "payment_mode", "group")
    search_fields = ("identity", "member__identity", "member__mem_name")
    readonly_fields = ("pending_amount", "status", "late_fee")


admin.site.register(Installment, InstallmentAdmin)
