import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import ProtectedError
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.serializers import as_serializer_error
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def first_error_message(detail):
    """
    Pick a readable message out of a DRF error payload
    """
    if isinstance(detail, dict):
        if "detail" in detail:
            return first_error_message(detail["detail"])
        for field, errors in detail.items():
            message = first_error_message(errors)
            if field == "non_field_errors":
                return message
            return f"{field}: {message}"
        return "Invalid request"
    if isinstance(detail, (list, tuple)):
        return first_error_message(detail[0]) if detail else "Invalid request"
    return str(detail)


def envelope_exception_handler(exc, context):
    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(detail=as_serializer_error(exc))
    elif isinstance(exc, ProtectedError):
        exc = ValidationError(
            {"detail": "Record is referenced by other records and cannot be deleted"}
        )

    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.exception(
            f"Unhandled error in {view.__class__.__name__ if view else 'view'}: {exc}"
        )
        return Response(
            {"success": False, "message": "Internal server error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    body = {"success": False, "message": first_error_message(response.data)}
    if isinstance(response.data, dict) and "detail" not in response.data:
        body["errors"] = response.data
    response.data = body
    return response
