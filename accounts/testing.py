"""
Small factories shared by the app test suites.
"""
import itertools
from datetime import date
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.utils import timezone

from branches.models import Branch
from groups.models import Group
from members.models import Member
from schemes.models import Scheme
from transactions.models import Transaction

_sequence = itertools.count(1)


def create_branch(bname=None, **kwargs):
    return Branch.objects.create(bname=bname or f"Branch {next(_sequence)}", **kwargs)


def create_employee(branch, role="Admin", password="Chit@2024", **kwargs):
    number = next(_sequence)
    kwargs.setdefault("emp_name", f"Employee {number}")
    kwargs.setdefault("gender", "Female")
    kwargs.setdefault("phone", f"90000{number:05d}")
    email = kwargs.pop("email", f"employee{number}@example.com")
    return get_user_model().objects.create_user(
        email, password, branch=branch, role=role, **kwargs
    )


def create_member(branch, **kwargs):
    number = next(_sequence)
    kwargs.setdefault("mem_name", f"Member {number}")
    kwargs.setdefault("gender", "Male")
    kwargs.setdefault("dob", date(1990, 1, 15))
    kwargs.setdefault("address", "12 Market Road")
    kwargs.setdefault("pincode", "560001")
    kwargs.setdefault("mobile", f"98000{number:05d}")
    kwargs.setdefault("uid", f"UID{number:08d}")
    return Member.objects.create(branch=branch, **kwargs)


def create_scheme(**kwargs):
    kwargs.setdefault("scheme_name", "Gold 1L")
    kwargs.setdefault("chit_amount", Decimal("100000.00"))
    kwargs.setdefault("duration_months", 10)
    kwargs.setdefault("installment_amount", Decimal("10000.00"))
    kwargs.setdefault("min_members", 5)
    kwargs.setdefault("max_members", 10)
    return Scheme.objects.create(**kwargs)


def create_group(branch, scheme, **kwargs):
    kwargs.setdefault("start_date", timezone.localdate())
    return Group.objects.create(branch=branch, scheme=scheme, **kwargs)


def create_transaction(branch, **kwargs):
    kwargs.setdefault("transaction_type", "Deposit")
    kwargs.setdefault("amount", Decimal("1000.00"))
    return Transaction.objects.create(branch=branch, **kwargs)
