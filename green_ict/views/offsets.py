import logging

from rest_framework import mixins, viewsets
from rest_framework.permissions import IsAuthenticated

from accounts.permissions import PlatformAdmin
from ..models import OffsetRecord
from ..serializers import OffsetRecordSerializer
from .utils import MonthFilteredListMixin

logger = logging.getLogger(__name__)


class OffsetRecordViewSet(MonthFilteredListMixin, mixins.ListModelMixin,
                          mixins.CreateModelMixin, viewsets.GenericViewSet):
    """
    Admin access to the offset ledger. List and append only.
    """
    serializer_class = OffsetRecordSerializer
    permission_classes = [IsAuthenticated, PlatformAdmin]
    filterset_fields = {
        'status': ['exact'],
        'provider': ['exact', 'icontains'],
    }
    default_limit = 200
    max_limit = 500

    def get_queryset(self):
        return OffsetRecord.objects.select_related('created_by').order_by('-period_month', '-created_at')

    def perform_create(self, serializer):
        offset = serializer.save(created_by=self.request.user)
        logger.info(
            f"[LEDGER] Created OffsetRecord (ID: {offset.pk}) {offset.period_month:%Y-%m} "
            f"{offset.quantity_kg} kg ({offset.status})"
        )
