"""
Monthly Green ICT audit.

Collects operational activity for a month, estimates digital energy use,
records the estimate in the activity ledger, computes Scope 1 / Scope 2
emissions net of retired offsets and stores a checksummed report. The whole
run is one database transaction, serialized per month.
"""

import datetime
import logging
from typing import Dict, Optional

from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone

from utils.db_config import missing_connection_params

from ..exceptions import AuditConfigurationError, AuditStorageError
from ..models import AuditRunLock, AuditTrigger
from .archive import build_archive_markdown, compute_archive_checksum
from .collector import collect_operational_metrics
from .emissions import calculate_emission_totals, compute_residuals
from .ledger import list_month_entries, sum_retired_offsets, write_system_estimates
from .methodology import MethodologyProfile, get_methodology_profile, quantize_4
from .periods import format_utc_iso, get_month_bounds, resolve_month
from .reports import save_monthly_report

logger = logging.getLogger(__name__)

SUMMARY_KEYS = (
    'scope1_kg', 'scope2_location_kg', 'scope2_market_kg',
    'offsets_kg', 'residual_location_kg', 'residual_market_kg',
)


def get_audit_settings() -> Dict:
    """
    Read and check the audit configuration.

    Raises:
        AuditConfigurationError: if the database connection is not configured
    """
    database = settings.DATABASES.get('default') or {}
    missing = missing_connection_params(database)
    if missing:
        logger.error(f"[AUDIT] Database configuration incomplete, missing: {', '.join(missing)}")
        raise AuditConfigurationError(f"Missing database configuration: {', '.join(missing)}")

    config = getattr(settings, 'GREEN_ICT_AUDIT', None) or {}
    return {
        'METHODOLOGY_PROFILE': config.get('METHODOLOGY_PROFILE'),
        'AUTO_PUBLISH': bool(config.get('AUTO_PUBLISH', True)),
    }


def _lock_month(period_month: datetime.date) -> AuditRunLock:
    """Row-lock the month so overlapping runs for it execute one after another."""
    AuditRunLock.objects.get_or_create(period_month=period_month)
    lock = AuditRunLock.objects.select_for_update().get(period_month=period_month)
    lock.last_started_at = timezone.now()
    lock.run_count += 1
    lock.save(update_fields=['last_started_at', 'run_count'])
    return lock


def build_metrics_snapshot(metrics: Dict, estimated: Dict) -> Dict:
    """Operational counters plus the kWh estimate, JSON-safe."""
    snapshot = dict(metrics)
    snapshot['estimated_kwh'] = {
        'total_kwh': float(estimated['total_kwh']),
        'swiss_ops_kwh': float(estimated['swiss_ops_kwh']),
        'eu_cloud_kwh': float(estimated['eu_cloud_kwh']),
        'components': {key: float(value) for key, value in estimated['components'].items()},
    }
    return snapshot


def run_monthly_audit(
    month: Optional[str] = None,
    *,
    trigger: str = AuditTrigger.COMMAND,
    generated_at: Optional[datetime.datetime] = None,
    profile: Optional[MethodologyProfile] = None,
) -> Dict:
    """
    Run the audit for a month and persist its report.

    Args:
        month: 'YYYY-MM'; invalid or missing values fall back to the previous month
        trigger: what started the run (cron, admin or command)
        generated_at: timestamp stamped on the report; now() when omitted
        profile: methodology profile; the configured one when omitted

    Returns:
        {"ok": True, "month", "summary": six kg figures, "metrics": counters and kWh}

    Raises:
        AuditConfigurationError: storage or methodology not configured
        AuditStorageError: any ledger or report write/read failed
    """
    config = get_audit_settings()
    profile = profile or get_methodology_profile(config['METHODOLOGY_PROFILE'])
    month = resolve_month(month)
    bounds = get_month_bounds(month)
    period_month = bounds['period_month']
    generated_at = generated_at or timezone.now()

    logger.info(f"[AUDIT] Starting Green ICT audit for {month} (trigger={trigger}, methodology={profile.version})")

    try:
        with transaction.atomic():
            _lock_month(period_month)

            metrics = collect_operational_metrics(bounds)
            estimated = profile.estimate_digital_kwh(metrics)
            write_system_estimates(period_month, estimated, profile)

            entries = list_month_entries(period_month)
            totals = calculate_emission_totals(entries, profile)
            offsets_kg = sum_retired_offsets(period_month)
            figures = {key: quantize_4(value) for key, value in compute_residuals(totals, offsets_kg).items()}

            assumptions = profile.build_assumptions(bounds)
            metrics_snapshot = build_metrics_snapshot(metrics, estimated)
            archive_markdown = build_archive_markdown(
                month=month,
                generated_at_iso=format_utc_iso(generated_at),
                profile=profile,
                figures=figures,
                activities=entries,
                assumptions=assumptions,
            )
            archive_sha256 = compute_archive_checksum(archive_markdown)

            save_monthly_report(
                period_month=period_month,
                methodology_version=profile.version,
                figures=figures,
                assumptions=assumptions,
                metrics=metrics_snapshot,
                archive_markdown=archive_markdown,
                archive_sha256=archive_sha256,
                generated_at=generated_at,
                trigger=trigger,
                auto_publish=config['AUTO_PUBLISH'],
            )
    except DatabaseError as e:
        logger.error(f"[AUDIT] Storage failure during audit for {month}: {e}", exc_info=True)
        raise AuditStorageError(str(e)) from e

    logger.info(
        f"[AUDIT] Completed {month}: scope1={figures['scope1_kg']} "
        f"scope2_location={figures['scope2_location_kg']} scope2_market={figures['scope2_market_kg']} "
        f"offsets={figures['offsets_kg']} kgCO2e, estimated {estimated['total_kwh']} kWh"
    )
    return {
        'ok': True,
        'month': month,
        'summary': {key: float(figures[key]) for key in SUMMARY_KEYS},
        'metrics': metrics_snapshot,
    }
