from django.core.management.base import BaseCommand

from ledgers.utils import chain_mismatches
from members.models import Member


class Command(BaseCommand):
    help = "Report ledger entries whose balance no longer follows the member's chain"

    def handle(self, *args, **options):
        self.stdout.write("Checking ledger balances...")

        total = 0
        for member in Member.objects.filter(ledger_entries__isnull=False).distinct():
            for entry, expected in chain_mismatches(member):
                total += 1
                self.stdout.write(
                    self.style.WARNING(
                        f"{member.identity} {entry.identity}: stored {entry.balance}, expected {expected}"
                    )
                )

        if total:
            self.stdout.write(self.style.ERROR(f"Found {total} mismatched ledger entries"))
        else:
            self.stdout.write(self.style.SUCCESS("All ledger balances are consistent"))
