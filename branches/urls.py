from django.urls import path

from branches.views import BranchListCreateView, BranchDetailView, BranchSearchView

app_name = "branches"

urlpatterns = [
    path("", BranchListCreateView.as_view(), name="list-create"),
    path("search/", BranchSearchView.as_view(), name="search"),
    path("<str:id>/", BranchDetailView.as_view(), name="detail"),
]
