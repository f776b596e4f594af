from .activity import ActivityLogEntrySerializer
from .offsets import OffsetRecordSerializer
from .reports import (
    MonthlyReportSerializer, TransparencyReportListSerializer,
    TransparencyReportDetailSerializer, RunAuditSerializer
)

__all__ = [
    'ActivityLogEntrySerializer',
    'OffsetRecordSerializer',
    'MonthlyReportSerializer',
    'TransparencyReportListSerializer',
    'TransparencyReportDetailSerializer',
    'RunAuditSerializer',
]
