import logging

from django.db.models import Q
from rest_framework import generics

from accounts.mixins import EnvelopeMixin, EitherLookupMixin, envelope
from accounts.permissions import IsAdminOrReadOnly
from branches.models import Branch
from branches.serializers import BranchSerializer

logger = logging.getLogger(__name__)


class BranchListCreateView(EnvelopeMixin, generics.ListCreateAPIView):
    queryset = Branch.objects.all()
    serializer_class = BranchSerializer
    permission_classes = [IsAdminOrReadOnly]

    def get_queryset(self):
        queryset = super().get_queryset()
        status_param = self.request.query_params.get("status")
        if status_param:
            queryset = queryset.filter(status=status_param)
        return queryset

    def perform_create(self, serializer):
        branch = serializer.save()
        logger.info(f"Branch {branch.identity} ({branch.bname}) created")


class BranchDetailView(EnvelopeMixin, EitherLookupMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    Deleting a branch only deactivates it.
    """

    queryset = Branch.objects.all()
    serializer_class = BranchSerializer
    permission_classes = [IsAdminOrReadOnly]
    not_found_message = "Branch not found"

    def destroy(self, request, *args, **kwargs):
        branch = self.get_object()
        branch.status = "Inactive"
        branch.save(update_fields=["status", "updated_at"])
        logger.info(f"Branch {branch.identity} deactivated")
        return envelope(
            data=self.get_serializer(branch).data,
            message="Branch deactivated successfully",
        )


class BranchSearchView(EnvelopeMixin, generics.ListAPIView):
    serializer_class = BranchSerializer

    def get_queryset(self):
        query = self.request.query_params.get("q", "")
        return Branch.objects.filter(
            Q(bname__icontains=query) | Q(identity__icontains=query)
        )
