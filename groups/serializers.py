from rest_framework import serializers

from accounts.fields import IdentityRelatedField, LockedFieldsMixin
from branches.models import Branch
from groups.models import Group, GroupMember
from members.models import Member
from schemes.models import Scheme


class GroupMemberSerializer(serializers.ModelSerializer):
    member = IdentityRelatedField(
        queryset=Member.objects.all(), label_name="member", identity_fields=("identity", "uid")
    )
    member_name = serializers.CharField(source="member.mem_name", read_only=True)

    class Meta:
        model = GroupMember
        fields = (
            "member",
            "member_name",
            "payout_month",
            "join_date",
            "payout_received",
        )
        read_only_fields = ("join_date", "payout_received")


class GroupSerializer(serializers.ModelSerializer):
    branch = IdentityRelatedField(queryset=Branch.objects.all(), label_name="branch")
    scheme = IdentityRelatedField(queryset=Scheme.objects.all(), label_name="scheme")
    scheme_name = serializers.CharField(source="scheme.scheme_name", read_only=True)
    members = GroupMemberSerializer(many=True, read_only=True)
    initial_members = GroupMemberSerializer(many=True, write_only=True, required=False)
    member_count = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = (
            "id",
            "identity",
            "branch",
            "scheme",
            "scheme_name",
            "start_date",
            "status",
            "current_month",
            "members",
            "initial_members",
            "member_count",
            "created_at",
            "updated_at",
        )
        read_only_fields = (
            "id",
            "identity",
            "status",
            "current_month",
            "created_at",
            "updated_at",
        )

    def get_member_count(self, obj):
        return obj.members.count()

    def validate_scheme(self, value):
        if not value.enabled:
            raise serializers.ValidationError("Scheme is disabled")
        return value

    def validate_initial_members(self, value):
        members = [item["member"].pk for item in value]
        if len(members) != len(set(members)):
            raise serializers.ValidationError("A member can only be added once")
        months = [item["payout_month"] for item in value]
        if len(months) != len(set(months)):
            raise serializers.ValidationError("Payout months must be unique within a group")
        return value

    def create(self, validated_data):
        validated_data.pop("initial_members", None)
        return super().create(validated_data)


class GroupUpdateSerializer(LockedFieldsMixin, GroupSerializer):
    class Meta(GroupSerializer.Meta):
        locked_fields = ("branch", "scheme")


class AddGroupMemberSerializer(serializers.Serializer):
    member = IdentityRelatedField(
        queryset=Member.objects.all(), label_name="member", identity_fields=("identity", "uid")
    )
    payout_month = serializers.IntegerField(min_value=1)
