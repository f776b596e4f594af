from .activity import ActivityLogEntryViewSet
from .offsets import OffsetRecordViewSet
from .reports import MonthlyReportViewSet, TransparencyReportViewSet
from .audit import green_ict_audit_cron, run_audit_api

__all__ = [
    'ActivityLogEntryViewSet',
    'OffsetRecordViewSet',
    'MonthlyReportViewSet',
    'TransparencyReportViewSet',
    'green_ict_audit_cron',
    'run_audit_api',
]
