import logging

from django.db import transaction
from rest_framework import serializers

from groups.models import GroupMember

logger = logging.getLogger(__name__)


def validate_payout_month(group, payout_month, exclude_member=None):
    duration = group.scheme.duration_months
    if payout_month < 1 or payout_month > duration:
        raise serializers.ValidationError(
            {
                "payout_month": f"Payout month {payout_month} is outside the scheme duration of {duration} months"
            }
        )
    taken = group.members.filter(payout_month=payout_month)
    if exclude_member is not None:
        taken = taken.exclude(member=exclude_member)
    if taken.exists():
        raise serializers.ValidationError(
            {"payout_month": f"Payout month {payout_month} is already assigned in this group"}
        )


def refresh_group_status(group):
    """
    Forming groups activate once they reach the scheme minimum and
    active groups fall back to Forming when they drop below it.
    """
    count = group.members.count()
    minimum = group.scheme.min_members
    if group.status == "Forming" and count >= minimum:
        group.status = "Active"
    elif group.status == "Active" and count < minimum:
        group.status = "Forming"
    else:
        return group
    group.save(update_fields=["status", "updated_at"])
    logger.info(f"Group {group.identity} is now {group.status} with {count} members")
    return group


def add_group_member(group, member, payout_month):
    with transaction.atomic():
        if group.status == "Completed":
            raise serializers.ValidationError(
                {"detail": "Members cannot be added to a completed group"}
            )
        if group.has_member(member):
            raise serializers.ValidationError(
                {"member": f"Member {member.identity} is already in this group"}
            )
        if group.members.count() >= group.scheme.max_members:
            raise serializers.ValidationError(
                {
                    "detail": f"Group already has the scheme maximum of {group.scheme.max_members} members"
                }
            )
        validate_payout_month(group, payout_month)

        group_member = GroupMember.objects.create(
            group=group, member=member, payout_month=payout_month
        )
        refresh_group_status(group)
    logger.info(
        f"Member {member.identity} joined group {group.identity} for payout month {payout_month}"
    )
    return group_member


def remove_group_member(group, member):
    with transaction.atomic():
        group_member = group.members.filter(member=member).first()
        if group_member is None:
            raise serializers.ValidationError(
                {"member": f"Member {member.identity} is not in this group"}
            )
        group_member.delete()
        refresh_group_status(group)
    logger.info(f"Member {member.identity} removed from group {group.identity}")
    return group


def advance_group_month(group):
    if group.status != "Active":
        raise serializers.ValidationError(
            {"detail": "Only active groups can advance to the next month"}
        )
    if group.current_month >= group.scheme.duration_months:
        group.status = "Completed"
    else:
        group.current_month += 1
    group.save(update_fields=["status", "current_month", "updated_at"])
    logger.info(
        f"Group {group.identity} advanced: month {group.current_month}, status {group.status}"
    )
    return group


def group_has_activity(group):
    return (
        group.installments.exists()
        or group.payouts.exists()
        or group.transactions.exists()
    )
