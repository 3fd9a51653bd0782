import uuid

from django.db.models import Q
from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.response import Response


def envelope(data=None, message=None, status_code=status.HTTP_200_OK, count=None):
    body = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    if count is not None:
        body["count"] = count
    return Response(body, status=status_code)


def either_lookup(queryset, value, identity_fields=("identity",)):
    """
    Match a record by its UUID primary key or any of its identity fields.
    """
    query = Q()
    for field in identity_fields:
        query |= Q(**{field: value})
    try:
        query |= Q(pk=uuid.UUID(str(value)))
    except ValueError:
        pass
    return queryset.filter(query).first()


class EnvelopeMixin:
    """
    Wrap successful payloads as {"success": true, "data": ..., "count": ...}
    """

    def finalize_response(self, request, response, *args, **kwargs):
        if (
            isinstance(response, Response)
            and response.status_code < 400
            and response.status_code != status.HTTP_204_NO_CONTENT
            and not (isinstance(response.data, dict) and "success" in response.data)
        ):
            body = {"success": True, "data": response.data}
            if isinstance(response.data, list):
                body["count"] = len(response.data)
            response.data = body
        return super().finalize_response(request, response, *args, **kwargs)


class EitherLookupMixin:
    """
    Resolve `<id>` path values against the UUID or the human identity.
    """

    lookup_url_kwarg = "id"
    identity_fields = ("identity",)
    not_found_message = "Record not found"

    def get_object(self):
        queryset = self.filter_queryset(self.get_queryset())
        obj = either_lookup(
            queryset, self.kwargs[self.lookup_url_kwarg], self.identity_fields
        )
        if obj is None:
            raise NotFound(self.not_found_message)
        self.check_object_permissions(self.request, obj)
        return obj
