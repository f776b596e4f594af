"""
Human-readable Markdown archive of a monthly audit, plus its SHA-256 checksum.

The archive text is a pure function of its inputs so that a report can be
re-verified at any time by hashing the stored Markdown.
"""

import hashlib
import json
from decimal import Decimal
from typing import Dict, Iterable

from ..models import ActivityLogEntry, MonthlyReport, Scope
from ..models.activity import SOURCE_ELECTRICITY_CH, SOURCE_ELECTRICITY_EU_CLOUD
from .methodology import MethodologyProfile, quantize_4, to_decimal

SUMMARY_LINES = (
    ("Scope 1", 'scope1_kg'),
    ("Scope 2 (location-based)", 'scope2_location_kg'),
    ("Scope 2 (market-based)", 'scope2_market_kg'),
    ("Offsets retired", 'offsets_kg'),
    ("Residual (location-based)", 'residual_location_kg'),
    ("Residual (market-based)", 'residual_market_kg'),
)


def format_figure(value) -> str:
    return f"{quantize_4(value):.4f}"


def _format_factor(value: Decimal) -> str:
    return f"{value.normalize():f}"


def _format_share(value: Decimal) -> str:
    return f"{(to_decimal(value) * 100).normalize():f}"


def build_archive_markdown(
    month: str,
    generated_at_iso: str,
    profile: MethodologyProfile,
    figures: Dict,
    activities: Iterable[ActivityLogEntry],
    assumptions: Dict,
) -> str:
    lines = [
        f"# Green ICT Audit Report ({month})",
        "",
        f"Generated at: {generated_at_iso}",
        f"Methodology version: {profile.version}",
        "",
        "## Summary",
    ]
    lines.extend(f"- {label}: {format_figure(figures[key])} kgCO2e" for label, key in SUMMARY_LINES)

    lines.extend(["", "## Activities"])
    activity_lines = [
        f"- Scope {entry.scope} · {entry.source_type} ({entry.source_name}) = "
        f"{format_figure(entry.activity_value)} {entry.activity_unit}"
        for entry in activities
    ]
    lines.extend(activity_lines)

    swiss_factor = profile.default_factor(Scope.SCOPE_2, SOURCE_ELECTRICITY_CH)
    eu_factor = profile.default_factor(Scope.SCOPE_2, SOURCE_ELECTRICITY_EU_CLOUD)
    lines.extend([
        "",
        "## Assumptions",
        f"- Swiss electricity default factor: {_format_factor(swiss_factor)} kgCO2e/kWh",
        f"- EU cloud electricity default factor: {_format_factor(eu_factor)} kgCO2e/kWh",
        f"- Scope 2 split for estimated digital load: {_format_share(profile.swiss_ops_share)}% "
        f"Switzerland operations / {_format_share(profile.eu_cloud_share)}% EU cloud",
        "",
        "```json",
        json.dumps(assumptions, indent=2, sort_keys=True),
        "```",
        "",
    ])
    return "\n".join(lines)


def compute_archive_checksum(markdown: str) -> str:
    return hashlib.sha256(markdown.encode('utf-8')).hexdigest()


def verify_archive(report: MonthlyReport) -> bool:
    """True when the stored checksum still matches the stored Markdown."""
    return compute_archive_checksum(report.archive_markdown) == report.archive_sha256
