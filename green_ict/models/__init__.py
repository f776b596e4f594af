from .activity import (
    Scope, DataQuality, EntryOrigin, EstimateSource,
    ActivityLogEntry, is_reserved_source_name
)
from .offsets import OffsetStatus, OffsetRecord
from .reporting import ReportStatus, AuditTrigger, MonthlyReport, AuditRunLock

__all__ = [
    'Scope',
    'DataQuality',
    'EntryOrigin',
    'EstimateSource',
    'ActivityLogEntry',
    'is_reserved_source_name',
    'OffsetStatus',
    'OffsetRecord',
    'ReportStatus',
    'AuditTrigger',
    'MonthlyReport',
    'AuditRunLock',
]
