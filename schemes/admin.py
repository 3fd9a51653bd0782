from django.contrib import admin

from schemes.models import Scheme


class SchemeAdmin(admin.ModelAdmin):
    list_display = (
        "identity",
        "scheme_name",
        "chit_amount",
        "duration_months",
        "installment_amount",
        "auction_frequency",
        "enabled",
    )
    list_filter = ("enabled", "auction_frequency")
    search_fields = ("identity", "scheme_name")


admin.site.register(Scheme, SchemeAdmin)
