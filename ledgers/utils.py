from decimal import Decimal

from django.db.models.functions import Length

from ledgers.models import LedgerEntry


def member_statement(member, start_date=None, end_date=None):
    """
    Entries for a member within an optional inclusive date range, with
    opening and closing balances taken from the entries in range.
    """
    entries = LedgerEntry.objects.filter(member=member)
    if start_date:
        entries = entries.filter(date__date__gte=start_date)
    if end_date:
        entries = entries.filter(date__date__lte=end_date)
    entries = list(
        entries.select_related("transaction", "group").order_by("date", "created_at")
    )

    if not entries:
        return {
            "entries": [],
            "opening_balance": Decimal("0.00"),
            "closing_balance": Decimal("0.00"),
        }

    first, last = entries[0], entries[-1]
    return {
        "entries": entries,
        "opening_balance": first.balance - first.credit + first.debit,
        "closing_balance": last.balance,
    }


def chain_mismatches(member):
    """
    Entries whose stored balance no longer follows from the previous one.
    """
    mismatches = []
    running = Decimal("0.00")
    entries = LedgerEntry.objects.filter(member=member).order_by(
        "created_at", Length("identity"), "identity"
    )
    for entry in entries:
        expected = running + entry.credit - entry.debit
        if entry.balance != expected:
            mismatches.append((entry, expected))
        running = entry.balance
    return mismatches
