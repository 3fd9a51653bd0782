from django.core.management.base import BaseCommand
from django.utils import timezone

from installments.models import Installment


class Command(BaseCommand):
    help = "Re-save open installments so overdue ones are marked Late"

    def handle(self, *args, **options):
        self.stdout.write("Refreshing installment statuses...")

        overdue = Installment.objects.filter(
            status__in=["Pending", "Partial"], due_date__lt=timezone.now()
        ).select_related("member", "group", "scheme")

        count = 0
        for installment in overdue:
            installment.save()
            if installment.status == "Late":
                count += 1

        self.stdout.write(self.style.SUCCESS(f"Marked {count} installments as Late"))
