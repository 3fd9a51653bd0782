import logging

from django.contrib.auth import get_user_model, authenticate
from django.contrib.auth.models import update_last_login
from django.db.models import Q
from rest_framework import generics, serializers
from rest_framework.views import APIView
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.authtoken.models import Token
from rest_framework.exceptions import PermissionDenied, NotFound, AuthenticationFailed

from accounts.mixins import EnvelopeMixin, EitherLookupMixin, envelope, either_lookup
from accounts.permissions import IsAdmin, IsManager
from accounts.serializers import (
    EmployeeSerializer,
    EmployeeProfileSerializer,
    EmployeeUpdateSerializer,
    EmployeeRoleSerializer,
    EmployeePhotoSerializer,
    LoginSerializer,
)
from branches.models import Branch

logger = logging.getLogger(__name__)

Employee = get_user_model()


def ensure_can_manage(actor, employee):
    """
    Managers only handle Employee accounts of their own branch.
    """
    if actor.is_admin:
        return
    if employee.branch_id != actor.branch_id:
        raise PermissionDenied("You can only manage employees of your own branch")
    if employee.role in ("Admin", "Manager") and employee.pk != actor.pk:
        raise PermissionDenied("Managers cannot modify other managers or admins")


"""
Authentication
"""


class LoginView(APIView):
    permission_classes = (AllowAny,)
    serializer_class = LoginSerializer

    def post(self, request, format=None):
        serializer = self.serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)

        employee = authenticate(
            request,
            email=serializer.validated_data["email"],
            password=serializer.validated_data["password"],
        )
        if employee is None:
            logger.warning(
                f"Failed login attempt for {serializer.validated_data['email']}"
            )
            raise AuthenticationFailed("Unable to log in with provided credentials.")

        token, created = Token.objects.get_or_create(user=employee)
        update_last_login(None, employee)
        return envelope(
            data={
                "token": token.key,
                "employee": EmployeeSerializer(employee, context={"request": request}).data,
            },
            message="Login successful",
        )


class ProfileView(EnvelopeMixin, generics.RetrieveUpdateAPIView):
    permission_classes = (IsAuthenticated,)
    serializer_class = EmployeeProfileSerializer

    def get_object(self):
        return self.request.user


"""
Employee management
- Admins manage everyone
- Managers manage employees of their own branch
"""


class EmployeeRegisterView(EnvelopeMixin, generics.CreateAPIView):
    permission_classes = (IsManager,)
    serializer_class = EmployeeSerializer
    queryset = Employee.objects.all()

    def perform_create(self, serializer):
        actor = self.request.user
        if not actor.is_admin:
            if serializer.validated_data.get("role") == "Admin":
                raise PermissionDenied("Managers cannot create admin accounts")
            if serializer.validated_data["branch"].pk != actor.branch_id:
                raise PermissionDenied("Managers can only register employees for their own branch")
        employee = serializer.save()
        logger.info(f"Employee {employee.identity} registered by {actor.identity}")


class EmployeeListView(EnvelopeMixin, generics.ListAPIView):
    permission_classes = (IsManager,)
    serializer_class = EmployeeSerializer
    queryset = Employee.objects.select_related("branch")

    def get_queryset(self):
        queryset = super().get_queryset()
        actor = self.request.user
        if not actor.is_admin:
            queryset = queryset.filter(branch_id=actor.branch_id)

        params = self.request.query_params
        if params.get("role"):
            queryset = queryset.filter(role=params["role"])
        if params.get("status"):
            queryset = queryset.filter(status=params["status"])
        if params.get("branch"):
            branch = either_lookup(Branch.objects.all(), params["branch"])
            queryset = queryset.filter(branch=branch) if branch else queryset.none()
        return queryset


class EmployeeSearchView(EmployeeListView):
    def get_queryset(self):
        query = self.request.query_params.get("q", "")
        return (
            super()
            .get_queryset()
            .filter(
                Q(emp_name__icontains=query)
                | Q(email__icontains=query)
                | Q(phone__icontains=query)
                | Q(identity__icontains=query)
            )
        )


class EmployeesByBranchView(EmployeeListView):
    def get_queryset(self):
        branch = either_lookup(Branch.objects.all(), self.kwargs["branch_id"])
        if branch is None:
            raise NotFound("Branch not found")
        actor = self.request.user
        if not actor.is_admin and branch.pk != actor.branch_id:
            raise PermissionDenied("You can only view employees of your own branch")
        return Employee.objects.filter(branch=branch).select_related("branch")


class EmployeeDetailView(EnvelopeMixin, EitherLookupMixin, generics.RetrieveUpdateDestroyAPIView):
    permission_classes = (IsManager,)
    serializer_class = EmployeeUpdateSerializer
    queryset = Employee.objects.select_related("branch")
    identity_fields = ("identity", "email")
    not_found_message = "Employee not found"

    def get_queryset(self):
        queryset = super().get_queryset()
        if not self.request.user.is_admin:
            queryset = queryset.filter(branch_id=self.request.user.branch_id)
        return queryset

    def perform_update(self, serializer):
        actor = self.request.user
        ensure_can_manage(actor, serializer.instance)
        if not actor.is_admin and serializer.validated_data.get("role") in ("Admin", "Manager"):
            raise PermissionDenied("Managers cannot assign manager or admin roles")
        serializer.save()

    def destroy(self, request, *args, **kwargs):
        if not request.user.is_admin:
            raise PermissionDenied("Only admins can delete employees")
        employee = self.get_object()
        if employee.pk == request.user.pk:
            raise serializers.ValidationError({"detail": "You cannot delete your own account"})
        identity = employee.identity
        employee.delete()
        logger.info(f"Employee {identity} deleted by {request.user.identity}")
        return envelope(message="Employee deleted successfully")


class EmployeeRoleView(EitherLookupMixin, generics.GenericAPIView):
    permission_classes = (IsManager,)
    serializer_class = EmployeeRoleSerializer
    queryset = Employee.objects.all()
    identity_fields = ("identity", "email")
    not_found_message = "Employee not found"

    def patch(self, request, *args, **kwargs):
        employee = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        role = serializer.validated_data["role"]

        actor = request.user
        if not actor.is_admin:
            ensure_can_manage(actor, employee)
            if role == "Admin":
                raise PermissionDenied("Managers cannot assign the Admin role")

        employee.role = role
        employee.save(update_fields=["role", "updated_at"])
        logger.info(f"Employee {employee.identity} role set to {role} by {actor.identity}")
        return envelope(
            data=EmployeeSerializer(employee, context={"request": request}).data,
            message="Employee role updated successfully",
        )


class EmployeePhotoView(EnvelopeMixin, EitherLookupMixin, generics.UpdateAPIView):
    permission_classes = (IsManager,)
    serializer_class = EmployeePhotoSerializer
    queryset = Employee.objects.all()
    not_found_message = "Employee not found"

    def perform_update(self, serializer):
        ensure_can_manage(self.request.user, serializer.instance)
        serializer.save()


class EmployeeDeactivateView(EitherLookupMixin, generics.GenericAPIView):
    permission_classes = (IsAdmin,)
    queryset = Employee.objects.all()
    not_found_message = "Employee not found"

    def patch(self, request, *args, **kwargs):
        employee = self.get_object()
        new_status = request.data.get("status")
        if new_status not in dict(Employee.STATUS_CHOICES):
            raise serializers.ValidationError({"status": "Invalid status"})
        employee.status = new_status
        employee.save(update_fields=["status", "updated_at"])
        return envelope(
            data=EmployeeSerializer(employee, context={"request": request}).data,
            message=f"Employee status set to {new_status}",
        )
