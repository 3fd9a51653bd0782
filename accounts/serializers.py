from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from accounts.fields import IdentityRelatedField, LockedFieldsMixin
from branches.models import Branch

Employee = get_user_model()


class EmployeeSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(
        validators=[
            UniqueValidator(
                queryset=Employee.objects.all(),
                message="Employee with this email already exists",
            )
        ]
    )
    password = serializers.CharField(
        max_length=128,
        min_length=6,
        write_only=True,
        validators=[validate_password],
    )
    branch = IdentityRelatedField(queryset=Branch.objects.all(), label_name="branch")
    photo = serializers.ImageField(use_url=True, required=False, allow_null=True)

    class Meta:
        model = Employee
        fields = (
            "id",
            "identity",
            "emp_name",
            "gender",
            "dob",
            "phone",
            "email",
            "password",
            "status",
            "address",
            "role",
            "photo",
            "branch",
            "joining_date",
            "last_login",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("id", "identity", "last_login", "created_at", "updated_at")

    def create(self, validated_data):
        password = validated_data.pop("password")
        email = validated_data.pop("email")
        return Employee.objects.create_user(email, password, **validated_data)

    def update(self, instance, validated_data):
        password = validated_data.pop("password", None)
        instance = super().update(instance, validated_data)
        if password:
            instance.set_password(password)
            instance.save()
        return instance


class EmployeeProfileSerializer(LockedFieldsMixin, EmployeeSerializer):
    """
    Self service profile: role, status and branch stay with management.
    """

    password = serializers.CharField(
        max_length=128,
        min_length=6,
        write_only=True,
        required=False,
        validators=[validate_password],
    )

    class Meta(EmployeeSerializer.Meta):
        locked_fields = (
            "role",
            "status",
            "branch",
            "joining_date",
        )


class EmployeeUpdateSerializer(EmployeeProfileSerializer):
    class Meta(EmployeeSerializer.Meta):
        pass


class EmployeeRoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=Employee.ROLE_CHOICES)


class EmployeePhotoSerializer(serializers.ModelSerializer):
    photo = serializers.ImageField(use_url=True)

    class Meta:
        model = Employee
        fields = ("identity", "photo")
        read_only_fields = ("identity",)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)
