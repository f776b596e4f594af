"""
Service functions for turning activity entries into Scope 1 / Scope 2 totals.

Location-based and market-based Scope 2 are tracked separately. An entry
without an explicit location factor uses the profile default; an entry
without an explicit market factor reuses its location factor.
"""

import logging
from decimal import Decimal
from typing import Dict, Iterable, Optional

from ..models import ActivityLogEntry, Scope
from .methodology import DEFAULT_PROFILE, MethodologyProfile, to_decimal

logger = logging.getLogger(__name__)

ZERO = Decimal('0')


def entry_factors(entry: ActivityLogEntry, profile: MethodologyProfile):
    """Return (location_factor, market_factor) for an entry."""
    if entry.emission_factor_location is not None:
        location_factor = to_decimal(entry.emission_factor_location)
    else:
        location_factor = profile.default_factor(entry.scope, entry.source_type)

    if entry.emission_factor_market is not None:
        market_factor = to_decimal(entry.emission_factor_market)
    else:
        market_factor = location_factor
    return location_factor, market_factor


def calculate_emission_totals(
    entries: Iterable[ActivityLogEntry],
    profile: Optional[MethodologyProfile] = None,
) -> Dict[str, Decimal]:
    """
    Sum the month's entries into scope totals (kgCO2e, unrounded).

    Entries outside Scope 1 and 2 are ignored.

    Returns:
        dict with scope1_kg, scope2_location_kg, scope2_market_kg
    """
    profile = profile or DEFAULT_PROFILE
    scope1 = ZERO
    scope2_location = ZERO
    scope2_market = ZERO

    for entry in entries:
        value = to_decimal(entry.activity_value)
        location_factor, market_factor = entry_factors(entry, profile)

        if entry.scope == Scope.SCOPE_1:
            scope1 += value * location_factor
        elif entry.scope == Scope.SCOPE_2:
            scope2_location += value * location_factor
            scope2_market += value * market_factor
        else:
            logger.debug(
                f"[EMISSIONS] Ignoring entry {entry.source_type}/{entry.source_name} "
                f"with unsupported scope {entry.scope}"
            )

    return {
        'scope1_kg': scope1,
        'scope2_location_kg': scope2_location,
        'scope2_market_kg': scope2_market,
    }


def compute_residuals(totals: Dict[str, Decimal], offsets_kg) -> Dict[str, Decimal]:
    """
    Net retired offsets against gross emissions, floored at zero.

    Returns:
        dict with the three scope totals plus gross_location_kg,
        gross_market_kg, offsets_kg, residual_location_kg, residual_market_kg
    """
    offsets_kg = to_decimal(offsets_kg)
    gross_location = totals['scope1_kg'] + totals['scope2_location_kg']
    gross_market = totals['scope1_kg'] + totals['scope2_market_kg']
    return {
        'scope1_kg': totals['scope1_kg'],
        'scope2_location_kg': totals['scope2_location_kg'],
        'scope2_market_kg': totals['scope2_market_kg'],
        'gross_location_kg': gross_location,
        'gross_market_kg': gross_market,
        'offsets_kg': offsets_kg,
        'residual_location_kg': max(ZERO, gross_location - offsets_kg),
        'residual_market_kg': max(ZERO, gross_market - offsets_kg),
    }
