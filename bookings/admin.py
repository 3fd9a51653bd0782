from django.contrib import admin

from bookings.models import Booking


class BookingAdmin(admin.ModelAdmin):
    list_display = ("identity", "member", "group", "preferred_month", "confirmed_month", "status")
    list_filter = ("status", "group")
    search_fields = ("identity", "member__identity", "member__mem_name")


admin.site.register(Booking, BookingAdmin)
