from django.contrib import admin

from members.models import Member


class MemberAdmin(admin.ModelAdmin):
    list_display = ("identity", "mem_name", "branch", "mobile", "uid", "age", "active")
    list_filter = ("active", "gender", "branch")
    search_fields = ("identity", "mem_name", "mobile", "uid")
    readonly_fields = ("age",)


admin.site.register(Member, MemberAdmin)
