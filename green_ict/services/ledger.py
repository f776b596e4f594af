"""
Read/write access to the activity and offset ledgers.
"""

import datetime
import logging
from decimal import Decimal
from typing import Dict, List, Tuple

from django.db.models import Sum

from ..models import (
    ActivityLogEntry, DataQuality, EntryOrigin, EstimateSource,
    OffsetRecord, OffsetStatus, Scope
)
from ..models.activity import SOURCE_ELECTRICITY_CH, SOURCE_ELECTRICITY_EU_CLOUD
from .methodology import MethodologyProfile

logger = logging.getLogger(__name__)

# (source_name, source_type, key in the kWh estimate, notes)
SYSTEM_ESTIMATE_ROWS = (
    (
        EstimateSource.SWITZERLAND, SOURCE_ELECTRICITY_CH, 'swiss_ops_kwh',
        "Estimated from platform activity proxies for Swiss operations.",
    ),
    (
        EstimateSource.EU_CLOUD, SOURCE_ELECTRICITY_EU_CLOUD, 'eu_cloud_kwh',
        "Estimated from platform activity proxies for EU cloud hosting.",
    ),
)


def upsert_activity_entry(
    period_month: datetime.date,
    scope: int,
    source_type: str,
    source_name: str,
    activity_value,
    activity_unit: str,
    emission_factor_location=None,
    emission_factor_market=None,
    data_quality: str = DataQuality.MEASURED,
    entry_origin: str = EntryOrigin.OPERATOR,
    notes: str = "",
    created_by=None,
) -> Tuple[ActivityLogEntry, bool]:
    """
    Insert or overwrite the entry keyed by (period_month, scope, source_type, source_name).

    Returns:
        (entry, created)
    """
    entry, created = ActivityLogEntry.objects.update_or_create(
        period_month=period_month,
        scope=scope,
        source_type=source_type,
        source_name=source_name,
        defaults={
            'activity_value': activity_value,
            'activity_unit': activity_unit,
            'emission_factor_location': emission_factor_location,
            'emission_factor_market': emission_factor_market,
            'data_quality': data_quality,
            'entry_origin': entry_origin,
            'notes': notes or "",
            'created_by': created_by,
        }
    )
    action = "Created" if created else "Updated"
    logger.info(
        f"[LEDGER] {action} ActivityLogEntry (ID: {entry.pk}) {period_month:%Y-%m} "
        f"scope {scope} {source_type}/{source_name} = {activity_value} {activity_unit}"
    )
    return entry, created


def write_system_estimates(
    period_month: datetime.date,
    estimated: Dict,
    profile: MethodologyProfile,
) -> List[ActivityLogEntry]:
    """
    Upsert the two Scope 2 electricity rows derived from the kWh estimate.

    Re-running for the same month overwrites these rows, so reruns never
    double count.
    """
    entries = []
    for source_name, source_type, estimate_key, notes in SYSTEM_ESTIMATE_ROWS:
        factor = profile.default_factor(Scope.SCOPE_2, source_type)
        entry, _ = upsert_activity_entry(
            period_month=period_month,
            scope=Scope.SCOPE_2,
            source_type=source_type,
            source_name=source_name,
            activity_value=estimated[estimate_key],
            activity_unit="kWh",
            emission_factor_location=factor,
            emission_factor_market=factor,
            data_quality=DataQuality.ESTIMATED,
            entry_origin=EntryOrigin.SYSTEM_ESTIMATE,
            notes=notes,
        )
        entries.append(entry)
    return entries


def list_month_entries(period_month: datetime.date) -> List[ActivityLogEntry]:
    """All activity entries for the month in a stable order (scope, source_type, source_name)."""
    return list(
        ActivityLogEntry.objects
        .filter(period_month=period_month)
        .order_by('scope', 'source_type', 'source_name')
    )


def sum_retired_offsets(period_month: datetime.date) -> Decimal:
    """Total kg of retired offsets for the month; planned and purchased rows are ignored."""
    total = (
        OffsetRecord.objects
        .filter(period_month=period_month, status=OffsetStatus.RETIRED)
        .aggregate(total=Sum('quantity_kg'))['total']
    )
    return total or Decimal('0')
