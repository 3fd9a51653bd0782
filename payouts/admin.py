from django.contrib import admin

from payouts.models import Payout


class PayoutAdmin(admin.ModelAdmin):
    list_display = ("identity", "group", "month_number", "member", "payout_amount", "status")
    list_filter = ("status", "group")
    search_fields = ("identity", "member__identity", "member__mem_name")


admin.site.register(Payout, PayoutAdmin)
