from django.contrib import admin

from branches.models import Branch


class BranchAdmin(admin.ModelAdmin):
    list_display = ("identity", "bname", "parent_id", "start_date", "status")
    list_filter = ("status",)
    search_fields = ("identity", "bname")


admin.site.register(Branch, BranchAdmin)
