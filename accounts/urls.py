from django.urls import path

from accounts.views import (
    LoginView,
    ProfileView,
    EmployeeRegisterView,
    EmployeeListView,
    EmployeeSearchView,
    EmployeesByBranchView,
    EmployeeDetailView,
    EmployeeRoleView,
    EmployeePhotoView,
    EmployeeDeactivateView,
)

app_name = "accounts"

urlpatterns = [
    path("login/", LoginView.as_view(), name="login"),
    path("register/", EmployeeRegisterView.as_view(), name="register"),
    path("profile/", ProfileView.as_view(), name="profile"),
    path("", EmployeeListView.as_view(), name="list"),
    path("search/", EmployeeSearchView.as_view(), name="search"),
    path("branch/<str:branch_id>/", EmployeesByBranchView.as_view(), name="by-branch"),
    path("<str:id>/", EmployeeDetailView.as_view(), name="detail"),
    path("<str:id>/role/", EmployeeRoleView.as_view(), name="role"),
    path("<str:id>/photo/", EmployeePhotoView.as_view(), name="photo"),
    path("<str:id>/status/", EmployeeDeactivateView.as_view(), name="status"),
]
