from datetime import date

from dateutil.relativedelta import relativedelta
from django.utils import timezone


def calculate_age(dob, today=None):
    if not dob:
        return None
    if isinstance(dob, str):
        dob = date.fromisoformat(dob)
    today = today or timezone.localdate()
    return relativedelta(today, dob).years
