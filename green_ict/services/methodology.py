"""
Versioned methodology profiles for the Green ICT audit.

A profile bundles the digital-energy estimator coefficients, the
Switzerland / EU-cloud split and the default emission factors used when an
activity entry carries no explicit factor. The version string is stamped on
every report so figures stay reproducible when coefficients change.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional

from django.conf import settings

from ..exceptions import AuditConfigurationError
from ..models.activity import (
    Scope, SOURCE_ELECTRICITY_CH, SOURCE_ELECTRICITY_EU_CLOUD,
    SOURCE_DIESEL_LITERS, SOURCE_PETROL_LITERS, SOURCE_NATURAL_GAS_KWH
)

logger = logging.getLogger(__name__)

DEFAULT_METHODOLOGY_VERSION = "v1-switzerland-eu-default"
FOUR_PLACES = Decimal('0.0001')
ZERO = Decimal('0')

COMPONENT_KEYS = (
    'base_kwh', 'check_in_kwh', 'grade_record_kwh',
    'graded_quantity_kwh', 'event_kwh', 'user_kwh',
)


def to_decimal(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize_4(value) -> Decimal:
    """Round half-up to four decimal places."""
    return to_decimal(value).quantize(FOUR_PLACES, rounding=ROUND_HALF_UP)


def _non_negative(metrics: Dict, key: str) -> Decimal:
    value = to_decimal(metrics.get(key) or 0)
    return value if value > 0 else ZERO


class MethodologyProfile:
    """
    Coefficients and default factors for one methodology version.

    Estimated kWh for a month is a linear model over the operational
    counters, split between Swiss operations and EU cloud hosting.
    """

    def __init__(self, version, base_kwh, kwh_per_check_in, kwh_per_grade_record,
                 kwh_per_graded_lanyard, kwh_per_event, kwh_per_active_user,
                 swiss_ops_share, eu_cloud_share, default_factors):
        self.version = version
        self.base_kwh = to_decimal(base_kwh)
        self.kwh_per_check_in = to_decimal(kwh_per_check_in)
        self.kwh_per_grade_record = to_decimal(kwh_per_grade_record)
        self.kwh_per_graded_lanyard = to_decimal(kwh_per_graded_lanyard)
        self.kwh_per_event = to_decimal(kwh_per_event)
        self.kwh_per_active_user = to_decimal(kwh_per_active_user)
        self.swiss_ops_share = to_decimal(swiss_ops_share)
        self.eu_cloud_share = to_decimal(eu_cloud_share)
        # {(scope, source_type): kgCO2e per unit}
        self.default_factors = {
            (int(scope), source_type): to_decimal(value)
            for (scope, source_type), value in default_factors.items()
        }

    def __repr__(self):
        return f"<MethodologyProfile {self.version}>"

    def default_factor(self, scope, source_type) -> Decimal:
        """Default factor for (scope, source_type); unknown pairs contribute zero."""
        try:
            key = (int(scope), source_type)
        except (TypeError, ValueError):
            return ZERO
        return self.default_factors.get(key, ZERO)

    def estimate_digital_kwh(self, metrics: Dict) -> Dict:
        """
        Estimate the month's digital energy use from operational counters.

        Args:
            metrics: dict with check_ins, grade_records, graded_quantity,
                events_created and active_users_proxy; missing or negative
                values count as zero

        Returns:
            dict with total_kwh, swiss_ops_kwh, eu_cloud_kwh and a components
            breakdown, every value rounded to four decimal places
        """
        components = {
            'base_kwh': self.base_kwh,
            'check_in_kwh': _non_negative(metrics, 'check_ins') * self.kwh_per_check_in,
            'grade_record_kwh': _non_negative(metrics, 'grade_records') * self.kwh_per_grade_record,
            'graded_quantity_kwh': _non_negative(metrics, 'graded_quantity') * self.kwh_per_graded_lanyard,
            'event_kwh': _non_negative(metrics, 'events_created') * self.kwh_per_event,
            'user_kwh': _non_negative(metrics, 'active_users_proxy') * self.kwh_per_active_user,
        }
        total = sum(components.values(), ZERO)
        return {
            'total_kwh': quantize_4(total),
            'swiss_ops_kwh': quantize_4(total * self.swiss_ops_share),
            'eu_cloud_kwh': quantize_4(total * self.eu_cloud_share),
            'components': {key: quantize_4(components[key]) for key in COMPONENT_KEYS},
        }

    def build_assumptions(self, bounds: Dict) -> Dict:
        """JSON-safe description of everything the month's figures depend on."""
        return {
            'methodology_version': self.version,
            'electricity_factor_switzerland_kg_per_kwh': float(
                self.default_factor(Scope.SCOPE_2, SOURCE_ELECTRICITY_CH)),
            'electricity_factor_eu_cloud_kg_per_kwh': float(
                self.default_factor(Scope.SCOPE_2, SOURCE_ELECTRICITY_EU_CLOUD)),
            'estimate_split': {
                'swiss_ops_share': float(self.swiss_ops_share),
                'eu_cloud_share': float(self.eu_cloud_share),
            },
            'kwh_model': {
                'base_kwh': float(self.base_kwh),
                'kwh_per_check_in': float(self.kwh_per_check_in),
                'kwh_per_grade_record': float(self.kwh_per_grade_record),
                'kwh_per_graded_lanyard': float(self.kwh_per_graded_lanyard),
                'kwh_per_event': float(self.kwh_per_event),
                'kwh_per_active_user': float(self.kwh_per_active_user),
            },
            'month_window_utc': {
                'start': bounds['start_iso'],
                'end': bounds['end_iso'],
            },
        }


METHODOLOGY_PROFILES: Dict[str, MethodologyProfile] = {}


def register_methodology_profile(profile: MethodologyProfile) -> MethodologyProfile:
    METHODOLOGY_PROFILES[profile.version] = profile
    return profile


DEFAULT_PROFILE = register_methodology_profile(MethodologyProfile(
    version=DEFAULT_METHODOLOGY_VERSION,
    base_kwh='12',
    kwh_per_check_in='0.02',
    kwh_per_grade_record='0.005',
    kwh_per_graded_lanyard='0.0005',
    kwh_per_event='0.03',
    kwh_per_active_user='0.01',
    swiss_ops_share='0.70',
    eu_cloud_share='0.30',
    default_factors={
        (Scope.SCOPE_2, SOURCE_ELECTRICITY_CH): '0.03',
        (Scope.SCOPE_2, SOURCE_ELECTRICITY_EU_CLOUD): '0.25',
        (Scope.SCOPE_1, SOURCE_DIESEL_LITERS): '2.68',
        (Scope.SCOPE_1, SOURCE_PETROL_LITERS): '2.31',
        (Scope.SCOPE_1, SOURCE_NATURAL_GAS_KWH): '0.202',
    },
))


def get_methodology_profile(version: Optional[str] = None) -> MethodologyProfile:
    """
    Look up a registered profile, defaulting to the configured one.

    Raises:
        AuditConfigurationError: if the version is not registered
    """
    if version is None:
        config = getattr(settings, 'GREEN_ICT_AUDIT', None) or {}
        version = config.get('METHODOLOGY_PROFILE') or DEFAULT_METHODOLOGY_VERSION
    try:
        return METHODOLOGY_PROFILES[version]
    except KeyError:
        logger.error(f"Unknown methodology profile '{version}'. Registered: {sorted(METHODOLOGY_PROFILES)}")
        raise AuditConfigurationError(f"Unknown methodology profile: {version}")


def estimate_digital_kwh(metrics: Dict, profile: Optional[MethodologyProfile] = None) -> Dict:
    return (profile or DEFAULT_PROFILE).estimate_digital_kwh(metrics)


def resolve_factor(scope, source_type, profile: Optional[MethodologyProfile] = None) -> Decimal:
    return (profile or DEFAULT_PROFILE).default_factor(scope, source_type)
