from django.contrib import admin

from transactions.models import Transaction


class TransactionAdmin(admin.ModelAdmin):
    list_display = (
        "identity",
        "transaction_type",
        "amount",
        "branch",
        "member",
        "transaction_date",
        "status",
    )
    list_filter = ("transaction_type", "status", "payment_mode", "branch")
    search_fields = ("identity", "reference_id", "member__identity")
    readonly_fields = ("related_transaction",)


admin.site.register(Transaction, TransactionAdmin)
