import logging

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import PlatformAdmin
from ..models import MonthlyReport, ReportStatus
from ..serializers import (
    MonthlyReportSerializer, TransparencyReportListSerializer,
    TransparencyReportDetailSerializer
)
from ..services.reports import publish_report
from .utils import MonthFilteredListMixin, MonthLookupMixin

logger = logging.getLogger(__name__)


class MonthlyReportViewSet(MonthFilteredListMixin, MonthLookupMixin, viewsets.ReadOnlyModelViewSet):
    """
    Admin view of every report regardless of status.

    - GET: reports, newest first (?month=YYYY-MM, ?limit= up to 120)
    - GET <YYYY-MM>/: one report
    - POST <YYYY-MM>/publish/: publish a report awaiting review
    """
    serializer_class = MonthlyReportSerializer
    permission_classes = [IsAuthenticated, PlatformAdmin]
    filterset_fields = {
        'status': ['exact'],
        'methodology_version': ['exact'],
    }
    default_limit = 24
    max_limit = 120

    def get_queryset(self):
        return MonthlyReport.objects.order_by('-period_month')

    @action(detail=True, methods=['post'])
    def publish(self, request, month=None):
        report = self.get_object()
        publish_report(report)
        logger.info(f"[AUDIT] Report {report.month} published by {request.user}")
        return Response(self.get_serializer(report).data)


class TransparencyReportViewSet(MonthFilteredListMixin, MonthLookupMixin, viewsets.ReadOnlyModelViewSet):
    """
    Public transparency page data: published reports only.
    The detail view carries the Markdown archive and re-verifies its checksum.
    """
    permission_classes = [AllowAny]
    authentication_classes = []
    default_limit = 24
    max_limit = 120

    def get_queryset(self):
        return MonthlyReport.objects.filter(status=ReportStatus.PUBLISHED).order_by('-period_month')

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return TransparencyReportDetailSerializer
        return TransparencyReportListSerializer
