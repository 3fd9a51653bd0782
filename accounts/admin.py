from django.contrib import admin

from accounts.models import Employee


class EmployeeAdmin(admin.ModelAdmin):
    list_display = ("identity", "emp_name", "email", "role", "branch", "status")
    list_filter = ("role", "status", "branch")
    search_fields = ("identity", "emp_name", "email", "phone")
    exclude = ("password",)


admin.site.register(Employee, EmployeeAdmin)
