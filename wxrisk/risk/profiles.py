# wxrisk/risk/profiles.py
"""
Risk profile policy.

A profile scales every factor score before aggregation:
- standard: no adjustment
- conservative: marginal weather penalized more heavily
- aggressive: tolerates lower minimums when regulations allow

Severity is recomputed after scaling so the 40/70 contract holds.
"""

from typing import Any, Dict, Mapping, Optional

from ..logging import get_logger
from ..settings import settings
from .models import FactorResult, RiskProfile

logger = get_logger(__name__)


def default_multipliers() -> Dict[RiskProfile, float]:
    """Profile multipliers from settings."""
    return {
        RiskProfile.STANDARD: 1.0,
        RiskProfile.CONSERVATIVE: settings.conservative_multiplier,
        RiskProfile.AGGRESSIVE: settings.aggressive_multiplier,
    }


def parse_risk_profile(value: Any, default: Optional[RiskProfile] = None) -> RiskProfile:
    """
    Parse a profile identifier from untrusted input.

    Matching is case-insensitive. Unknown identifiers fall back to the
    default profile (settings.default_risk_profile unless given).
    """
    if default is None:
        default = _settings_default()
    if isinstance(value, RiskProfile):
        return value
    if value is None or str(value).strip() == "":
        return default
    try:
        return RiskProfile(str(value).strip().lower())
    except ValueError:
        logger.warning("unknown_risk_profile", value=str(value), fallback=default.value)
        return default


def _settings_default() -> RiskProfile:
    try:
        return RiskProfile(settings.default_risk_profile.strip().lower())
    except ValueError:
        logger.warning(
            "unknown_risk_profile",
            value=settings.default_risk_profile,
            fallback=RiskProfile.STANDARD.value,
        )
        return RiskProfile.STANDARD


def apply_risk_profile(
    result: FactorResult,
    profile: RiskProfile,
    multipliers: Optional[Mapping[RiskProfile, float]] = None,
) -> FactorResult:
    """
    Scale a factor score by the profile multiplier.

    Args:
        result: Unscaled factor result
        profile: Profile from the inputs
        multipliers: Optional override of the settings multipliers

    Returns:
        Factor result with score and severity adjusted
    """
    table = multipliers if multipliers is not None else default_multipliers()
    multiplier = table.get(profile, 1.0)
    if multiplier == 1.0 or result.score == 0:
        return result
    return result.with_score(min(100, result.score * multiplier))
