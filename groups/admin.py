from django.contrib import admin

from groups.models import Group, GroupMember


class GroupMemberInline(admin.TabularInline):
    model = GroupMember
    extra = 0


class GroupAdmin(admin.ModelAdmin):
    list_display = ("identity", "branch", "scheme", "start_date", "status", "current_month")
    list_filter = ("status", "branch", "scheme")
    search_fields = ("identity",)
    inlines = [GroupMemberInline]


admin.site.register(Group, GroupAdmin)
