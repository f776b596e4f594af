"""
Persistence and publication of monthly reports.
"""

import datetime
import logging
from typing import Dict, Optional

from django.utils import timezone

from ..models import MonthlyReport, ReportStatus

logger = logging.getLogger(__name__)


def save_monthly_report(
    period_month: datetime.date,
    methodology_version: str,
    figures: Dict,
    assumptions: Dict,
    metrics: Dict,
    archive_markdown: str,
    archive_sha256: str,
    generated_at: datetime.datetime,
    trigger: str,
    auto_publish: bool = True,
) -> MonthlyReport:
    """
    Write the month's report, replacing any earlier run for the same month.

    With auto_publish the report is PUBLISHED immediately; otherwise it waits
    in PENDING_REVIEW until an admin publishes it.
    """
    status = ReportStatus.PUBLISHED if auto_publish else ReportStatus.PENDING_REVIEW
    defaults = {
        'methodology_version': methodology_version,
        'assumptions': assumptions,
        'metrics': metrics,
        'archive_markdown': archive_markdown,
        'archive_sha256': archive_sha256,
        'generated_at': generated_at,
        'status': status,
        'published_at': generated_at if auto_publish else None,
        'trigger': trigger,
    }
    defaults.update(figures)

    report, created = MonthlyReport.objects.update_or_create(
        period_month=period_month,
        defaults=defaults,
    )
    action = "Created" if created else "Replaced"
    logger.info(f"[AUDIT] {action} MonthlyReport {report.month} (status={report.status}, sha256={archive_sha256[:12]})")
    return report


def publish_report(report: MonthlyReport, published_at: Optional[datetime.datetime] = None) -> MonthlyReport:
    """Move a report to PUBLISHED. Publishing an already published report is a no-op."""
    if report.status == ReportStatus.PUBLISHED:
        return report
    report.status = ReportStatus.PUBLISHED
    report.published_at = published_at or timezone.now()
    report.save(update_fields=['status', 'published_at'])
    logger.info(f"[AUDIT] Published MonthlyReport {report.month}")
    return report
