import logging

from django.db import transaction
from django.utils import timezone
from rest_framework import serializers

from transactions.models import Transaction

logger = logging.getLogger(__name__)

MEMBERLESS_TYPES = ("Commission", "Other")
GROUP_REQUIRED_TYPES = ("Installment", "Auction")


def validate_transaction_rules(attrs):
    """
    Cross-field rules for a new transaction. Returns a dict of errors.
    """
    errors = {}
    transaction_type = attrs.get("transaction_type")

    if transaction_type not in MEMBERLESS_TYPES and not attrs.get("member"):
        errors["member"] = f"Member is required for {transaction_type} transactions"
    if transaction_type in GROUP_REQUIRED_TYPES and not attrs.get("group"):
        errors["group"] = f"Group is required for {transaction_type} transactions"
    if transaction_type == "Other" and not attrs.get("description"):
        errors["description"] = "Description is required for Other transactions"
    if attrs.get("payment_mode", "Cash") != "Cash" and not attrs.get("reference_id"):
        errors["reference_id"] = "Reference ID is required for non-cash payments"

    transaction_date = attrs.get("transaction_date")
    if transaction_date and transaction_date > timezone.now():
        errors["transaction_date"] = "Transaction date cannot be in the future"
    return errors


def reverse_transaction(original):
    """
    Book a negating copy of `original` and link the two records both ways.
    Ledger entries are left untouched.
    """
    with transaction.atomic():
        original = Transaction.objects.select_for_update().get(pk=original.pk)
        if original.status == "Reversed":
            raise serializers.ValidationError(
                {"detail": f"Transaction {original.identity} is already reversed"}
            )

        reversal = Transaction.objects.create(
            branch=original.branch,
            member=original.member,
            group=original.group,
            transaction_type=original.transaction_type,
            amount=-original.amount,
            transaction_date=original.transaction_date,
            description=f"Reversal of {original.identity}",
            payment_mode=original.payment_mode,
            reference_id=original.reference_id,
            recorded_by=original.recorded_by,
            status="Completed",
            related_transaction=original,
        )

        original.status = "Reversed"
        original.related_transaction = reversal
        original.save(update_fields=["status", "related_transaction", "updated_at"])

    logger.info(f"Transaction {original.identity} reversed by {reversal.identity}")
    return original, reversal
