from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from branches.models import Branch


class BranchSerializer(serializers.ModelSerializer):
    bname = serializers.CharField(
        max_length=255,
        validators=[
            UniqueValidator(
                queryset=Branch.objects.all(),
                message="Branch with this name already exists",
            )
        ],
    )
    code = serializers.CharField(read_only=True)

    class Meta:
        model = Branch
        fields = (
            "id",
            "identity",
            "bname",
            "code",
            "parent_id",
            "start_date",
            "status",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("id", "identity", "created_at", "updated_at")
