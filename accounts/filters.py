from decimal import Decimal, InvalidOperation

from django.utils.dateparse import parse_date, parse_datetime
from rest_framework import serializers


def parse_decimal_param(value, name):
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError):
        raise serializers.ValidationError({name: "Enter a valid number."})


def parse_date_param(value, name):
    parsed = parse_date(value) if len(value) <= 10 else None
    if parsed is None:
        moment = parse_datetime(value)
        parsed = moment.date() if moment else None
    if parsed is None:
        raise serializers.ValidationError({name: "Enter a valid date (YYYY-MM-DD)."})
    return parsed


def filter_date_range(queryset, params, field, start_param="start_date", end_param="end_date"):
    """
    Inclusive date range over a date or datetime field
    """
    lookup = f"{field}__date" if _is_datetime(queryset, field) else field
    if params.get(start_param):
        queryset = queryset.filter(
            **{f"{lookup}__gte": parse_date_param(params[start_param], start_param)}
        )
    if params.get(end_param):
        queryset = queryset.filter(
            **{f"{lookup}__lte": parse_date_param(params[end_param], end_param)}
        )
    return queryset


def filter_amount_range(queryset, params, field, min_param="min_amount", max_param="max_amount"):
    if params.get(min_param):
        queryset = queryset.filter(
            **{f"{field}__gte": parse_decimal_param(params[min_param], min_param)}
        )
    if params.get(max_param):
        queryset = queryset.filter(
            **{f"{field}__lte": parse_decimal_param(params[max_param], max_param)}
        )
    return queryset


def _is_datetime(queryset, field):
    return queryset.model._meta.get_field(field).get_internal_type() == "DateTimeField"
