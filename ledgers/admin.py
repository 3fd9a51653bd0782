from django.contrib import admin

from ledgers.models import LedgerEntry


class LedgerEntryAdmin(admin.ModelAdmin):
    list_display = ("identity", "member", "date", "debit", "credit", "balance", "transaction")
    list_filter = ("branch",)
    search_fields = ("identity", "member__identity", "reference")
    readonly_fields = ("balance",)


admin.site.register(LedgerEntry, LedgerEntryAdmin)
