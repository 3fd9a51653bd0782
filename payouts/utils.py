import logging

from django.db import transaction
from django.utils import timezone
from rest_framework import serializers

logger = logging.getLogger(__name__)


def process_payout(payout, txn):
    """
    Mark a pending payout as paid against a recorded transaction.
    """
    with transaction.atomic():
        if payout.status != "Pending":
            raise serializers.ValidationError(
                {"detail": f"Only pending payouts can be processed; payout is {payout.status}"}
            )
        payout.status = "Paid"
        payout.payment_date = timezone.now()
        payout.transaction = txn
        payout.save(update_fields=["status", "payment_date", "transaction", "updated_at"])

        payout.group.members.filter(member=payout.member).update(payout_received=True)

    logger.info(
        f"Payout {payout.identity} paid to {payout.member.identity} via {txn.identity}"
    )
    return payout


def skip_payout(payout):
    if payout.status != "Pending":
        raise serializers.ValidationError(
            {"detail": f"Only pending payouts can be skipped; payout is {payout.status}"}
        )
    payout.status = "Skipped"
    payout.save(update_fields=["status", "updated_at"])
    logger.info(f"Payout {payout.identity} skipped")
    return payout
