import math
import logging
from datetime import datetime, time
from decimal import Decimal

from dateutil.relativedelta import relativedelta
from django.db import transaction
from django.utils import timezone
from rest_framework import serializers

from receipts.models import Receipt

logger = logging.getLogger(__name__)

# ---- Scheduling ----

FREQUENCY_DELTA = {
    "Monthly": relativedelta(months=1),
    "Weekly": relativedelta(weeks=1),
    "Biweekly": relativedelta(weeks=2),
}

PERIOD_LABEL = {
    "Monthly": "Month",
    "Weekly": "Week",
    "Biweekly": "Biweek",
}


def installment_period_label(frequency: str, number: int) -> str:
    return f"{PERIOD_LABEL.get(frequency, 'Month')} {number}"


def schedule_due_dates(start_date, frequency: str, periods: int) -> list:
    """
    Due datetimes stepped from the start date, the first falling on it.
    """
    delta = FREQUENCY_DELTA.get(frequency, FREQUENCY_DELTA["Monthly"])
    start = timezone.make_aware(datetime.combine(start_date, time(23, 59, 59)))
    return [start + delta * index for index in range(periods)]


# ---- Status and late fees ----


def derive_status(paid_amount: Decimal, pending_amount: Decimal, due_date, now=None) -> str:
    now = now or timezone.now()
    if due_date and now > due_date and pending_amount > 0:
        return "Late"
    if pending_amount <= 0:
        return "Paid"
    if paid_amount > 0:
        return "Partial"
    return "Pending"


def days_late(due_date, now=None) -> int:
    now = now or timezone.now()
    if not due_date or now <= due_date:
        return 0
    return math.ceil((now - due_date).total_seconds() / 86400)


def calculate_late_fee(amount: Decimal, late_fee_rate: Decimal, due_date, now=None) -> Decimal:
    days = days_late(due_date, now)
    if not days:
        return Decimal("0.00")
    return (amount * late_fee_rate * days).quantize(Decimal("0.01"))


def payment_progress(amount: Decimal, paid_amount: Decimal) -> Decimal:
    if not amount:
        return Decimal("0.00")
    progress = min(paid_amount / amount * 100, Decimal("100"))
    return progress.quantize(Decimal("0.01"))


# ---- Operations ----


def record_payment(installment, paid_amount, payment_mode, collected_by=None, remarks=None):
    """
    Apply a payment to an installment and issue the matching receipt.
    """
    from installments.models import Installment

    if paid_amount is None or paid_amount <= 0:
        raise serializers.ValidationError({"paid_amount": "Paid amount must be greater than 0"})

    with transaction.atomic():
        installment = Installment.objects.select_for_update().get(pk=installment.pk)
        if installment.status == "Paid" and installment.pending_amount <= 0:
            raise serializers.ValidationError(
                {"detail": f"Installment {installment.identity} is already fully paid"}
            )

        now = timezone.now()
        installment.paid_amount += paid_amount
        installment.paid_date = now
        installment.payment_mode = payment_mode
        if collected_by is not None:
            installment.collected_by = collected_by
        installment.late_fee = calculate_late_fee(
            installment.amount, installment.scheme.late_fee_rate, installment.due_date, now
        )
        installment.save()

        receipt = Receipt.objects.create(
            branch=installment.member.branch,
            member=installment.member,
            group=installment.group,
            receipt_amount=paid_amount,
            payment_mode=payment_mode,
            transaction_ref=installment.transaction_ref,
            received_by=collected_by,
            remarks=remarks or f"Payment for {installment.installment_period} installment",
        )

    logger.info(
        f"Installment {installment.identity} paid {paid_amount}: status {installment.status}, receipt {receipt.receipt_no}"
    )
    return installment, receipt


def generate_group_schedule(group, collected_by=None):
    """
    One installment per member per period of the scheme. Periods that a
    member already has are skipped so the call can be repeated.
    """
    from installments.models import Installment

    scheme = group.scheme
    due_dates = schedule_due_dates(
        group.start_date, scheme.auction_frequency, scheme.duration_months
    )
    created = []
    with transaction.atomic():
        for group_member in group.members.select_related("member"):
            existing = set(
                Installment.objects.filter(
                    group=group, member=group_member.member
                ).values_list("installment_number", flat=True)
            )
            for number, due_date in enumerate(due_dates, start=1):
                if number in existing:
                    continue
                created.append(
                    Installment.objects.create(
                        group=group,
                        member=group_member.member,
                        scheme=scheme,
                        installment_number=number,
                        due_date=due_date,
                        amount=scheme.installment_amount,
                        collected_by=collected_by,
                    )
                )
    logger.info(f"Generated {len(created)} installments for group {group.identity}")
    return created
