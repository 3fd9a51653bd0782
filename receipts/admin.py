from django.contrib import admin

from receipts.models import Receipt


class ReceiptAdmin(admin.ModelAdmin):
    list_display = (
        "receipt_no",
        "identity",
        "branch",
        "member",
        "receipt_amount",
        "payment_mode",
        "receipt_date",
        "status",
    )
    list_filter = ("status", "payment_mode", "branch")
    search_fields = ("receipt_no", "identity", "member__identity", "member__mem_name")


admin.site.register(Receipt, ReceiptAdmin)
