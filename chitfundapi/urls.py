from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/v1/employees/", include("accounts.urls")),
    path("api/v1/branches/", include("branches.urls")),
    path("api/v1/members/", include("members.urls")),
    path("api/v1/schemes/", include("schemes.urls")),
    path("api/v1/groups/", include("groups.urls")),
    path("api/v1/bookings/", include("bookings.urls")),
    path("api/v1/installments/", include("installments.urls")),
    path("api/v1/payouts/", include("payouts.urls")),
    path("api/v1/transactions/", include("transactions.urls")),
    path("api/v1/receipts/", include("receipts.urls")),
    path("api/v1/ledgers/", include("ledgers.urls")),
    path("api/v1/notifications/", include("notifications.urls")),
]
