import logging

from django.db.models import Avg, Count, Q, Sum
from rest_framework import generics, serializers
from rest_framework.views import APIView

from accounts.mixins import EnvelopeMixin, EitherLookupMixin, envelope
from accounts.permissions import IsManagerOrReadOnly, IsManager, IsEmployee
from accounts.filters import filter_amount_range
from schemes.models import Scheme
from schemes.serializers import SchemeSerializer

logger = logging.getLogger(__name__)


class SchemeListCreateView(EnvelopeMixin, generics.ListCreateAPIView):
    queryset = Scheme.objects.all()
    serializer_class = SchemeSerializer
    permission_classes = [IsManagerOrReadOnly]

    def get_queryset(self):
        queryset = super().get_queryset()
        params = self.request.query_params

        if params.get("enabled") in ("true", "false"):
            queryset = queryset.filter(enabled=params["enabled"] == "true")
        if params.get("auction_frequency"):
            queryset = queryset.filter(auction_frequency=params["auction_frequency"])
        if params.get("duration_months"):
            queryset = queryset.filter(duration_months=params["duration_months"])
        queryset = filter_amount_range(queryset, params, "chit_amount")
        if params.get("q"):
            queryset = queryset.filter(
                Q(scheme_name__icontains=params["q"]) | Q(identity__icontains=params["q"])
            )
        return queryset

    def perform_create(self, serializer):
        scheme = serializer.save(created_by=self.request.user)
        logger.info(f"Scheme {scheme.identity} created by {self.request.user.identity}")


class SchemeDetailView(EnvelopeMixin, EitherLookupMixin, generics.RetrieveUpdateDestroyAPIView):
    queryset = Scheme.objects.all()
    serializer_class = SchemeSerializer
    permission_classes = [IsManagerOrReadOnly]
    not_found_message = "Scheme not found"

    def destroy(self, request, *args, **kwargs):
        scheme = self.get_object()
        if scheme.groups.exists():
            raise serializers.ValidationError(
                {"detail": "Scheme is used by existing groups and cannot be deleted"}
            )
        identity = scheme.identity
        scheme.delete()
        logger.info(f"Scheme {identity} deleted by {request.user.identity}")
        return envelope(message="Scheme deleted successfully")


class SchemeStatusView(EitherLookupMixin, generics.GenericAPIView):
    queryset = Scheme.objects.all()
    serializer_class = SchemeSerializer
    permission_classes = [IsManager]
    not_found_message = "Scheme not found"

    def patch(self, request, *args, **kwargs):
        scheme = self.get_object()
        scheme.enabled = not scheme.enabled
        scheme.save(update_fields=["enabled", "updated_at"])
        state = "enabled" if scheme.enabled else "disabled"
        return envelope(
            data=self.get_serializer(scheme).data,
            message=f"Scheme {state} successfully",
        )


class SchemeStatsView(APIView):
    permission_classes = [IsEmployee]

    def get(self, request):
        totals = Scheme.objects.aggregate(
            total=Count("id"),
            enabled=Count("id", filter=Q(enabled=True)),
            average_chit_amount=Avg("chit_amount"),
            total_chit_value=Sum("chit_amount"),
        )
        by_frequency = list(
            Scheme.objects.values("auction_frequency")
            .annotate(count=Count("id"), average_chit_amount=Avg("chit_amount"))
            .order_by("auction_frequency")
        )
        return envelope(data={**totals, "by_frequency": by_frequency})
