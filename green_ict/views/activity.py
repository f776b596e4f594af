
from rest_framework import mixins, status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import PlatformAdmin
from ..models import ActivityLogEntry, EntryOrigin
from ..serializers import ActivityLogEntrySerializer
from ..services.ledger import upsert_activity_entry
from .utils import MonthFilteredListMixin


class ActivityLogEntryViewSet(MonthFilteredListMixin, mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    Admin access to the activity ledger.

    - GET: entries, newest month first (?month=YYYY-MM, ?limit= up to 500)
    - POST: upsert an operator entry; 201 when created, 200 when it replaced one
    """
    serializer_class = ActivityLogEntrySerializer
    permission_classes = [IsAuthenticated, PlatformAdmin]
    filterset_fields = {
        'scope': ['exact'],
        'source_type': ['exact'],
        'data_quality': ['exact'],
        'entry_origin': ['exact'],
    }
    default_limit = 200
    max_limit = 500

    def get_queryset(self):
        return (
            ActivityLogEntry.objects.select_related('created_by')
            .order_by('-period_month', 'scope', 'source_type', 'source_name')
        )

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        entry, created = upsert_activity_entry(
            **serializer.validated_data,
            entry_origin=EntryOrigin.OPERATOR,
            created_by=request.user,
        )
        return Response(
            self.get_serializer(entry).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
        )
