from django.urls import path

from installments.views import (
    InstallmentListCreateView,
    InstallmentDetailView,
    InstallmentPaymentView,
    InstallmentStatsView,
)

app_name = "installments"

urlpatterns = [
    path("", InstallmentListCreateView.as_view(), name="list-create"),
    path("stats/", InstallmentStatsView.as_view(), name="stats"),
    path("<str:id>/", InstallmentDetailView.as_view(), name="detail"),
    path("<str:id>/pay/", InstallmentPaymentView.as_view(), name="pay"),
]
