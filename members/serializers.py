from django.db.models import Q
from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from accounts.fields import IdentityRelatedField
from branches.models import Branch
from members.models import Member


class MemberSerializer(serializers.ModelSerializer):
    branch = IdentityRelatedField(queryset=Branch.objects.all(), label_name="branch")
    uid = serializers.CharField(
        max_length=50,
        validators=[
            UniqueValidator(
                queryset=Member.objects.all(),
                message="Member with this UID already exists",
            )
        ],
    )
    registered_by = serializers.SlugRelatedField(slug_field="identity", read_only=True)
    photo = serializers.ImageField(use_url=True, required=False, allow_null=True)

    class Meta:
        model = Member
        fields = (
            "id",
            "identity",
            "branch",
            "mem_name",
            "gender",
            "dob",
            "age",
            "address",
            "pincode",
            "phone",
            "mobile",
            "nominee_name",
            "nominee_relation",
            "uid",
            "photo",
            "active",
            "registered_by",
            "registration_date",
            "created_at",
            "updated_at",
        )
        read_only_fields = (
            "id",
            "identity",
            "age",
            "registered_by",
            "created_at",
            "updated_at",
        )

    def validate(self, attrs):
        numbers = [
            number
            for number in (attrs.get("mobile"), attrs.get("phone"))
            if number
        ]
        if numbers:
            clashes = Member.objects.filter(
                Q(mobile__in=numbers) | Q(phone__in=numbers)
            )
            if self.instance is not None:
                clashes = clashes.exclude(pk=self.instance.pk)
            if clashes.exists():
                raise serializers.ValidationError(
                    "Member with this mobile or phone number already exists"
                )
        return attrs


class MemberPhotoSerializer(serializers.ModelSerializer):
    photo = serializers.ImageField(use_url=True)

    class Meta:
        model = Member
        fields = ("identity", "photo")
        read_only_fields = ("identity",)
