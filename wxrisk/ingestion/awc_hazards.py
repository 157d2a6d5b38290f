# wxrisk/ingestion/awc_hazards.py
"""
AviationWeather.gov hazard and PIREP feature adapters.

Features are GeoJSON features from the AWC SIGMET, G-AIRMET, CWA and PIREP
feeds. Severity codes are normalized onto the engine enums:

    hazards: EXT -> extreme, SEV/HIGH -> high, MOD/MDT -> moderate, LGT/LOW -> low
    pireps:  EXT -> extreme, SEV/SEV-MOD -> severe, MOD/MDT/MOD-LGT -> moderate,
             LGT/LGT-MOD -> low

Anything else maps to unknown.
"""

from typing import Any, Dict

from ..risk.models import HazardAdvisory, HazardSeverity, PilotReport, PirepSeverity
from .common import parse_time, require_mapping, to_int

HAZARD_SEVERITY_CODES = {
    "EXT": HazardSeverity.EXTREME,
    "EXTREME": HazardSeverity.EXTREME,
    "SEV": HazardSeverity.HIGH,
    "SEVERE": HazardSeverity.HIGH,
    "HIGH": HazardSeverity.HIGH,
    "MOD": HazardSeverity.MODERATE,
    "MDT": HazardSeverity.MODERATE,
    "MODERATE": HazardSeverity.MODERATE,
    "LGT": HazardSeverity.LOW,
    "LOW": HazardSeverity.LOW,
    "LIGHT": HazardSeverity.LOW,
    "INFO": HazardSeverity.INFO,
}

PIREP_SEVERITY_CODES = {
    "EXT": PirepSeverity.EXTREME,
    "EXTRM": PirepSeverity.EXTREME,
    "SEV": PirepSeverity.SEVERE,
    "SEV-MOD": PirepSeverity.SEVERE,
    "MOD-SEV": PirepSeverity.SEVERE,
    "MOD": PirepSeverity.MODERATE,
    "MDT": PirepSeverity.MODERATE,
    "MOD-LGT": PirepSeverity.MODERATE,
    "LGT-MOD": PirepSeverity.LOW,
    "LGT": PirepSeverity.LOW,
    "LIGHT": PirepSeverity.LOW,
}


def hazard_severity(value: Any) -> HazardSeverity:
    if value is None or str(value).strip() == "":
        return HazardSeverity.UNKNOWN
    return HAZARD_SEVERITY_CODES.get(str(value).strip().upper(), HazardSeverity.UNKNOWN)


def pirep_severity(value: Any) -> PirepSeverity:
    if value is None or str(value).strip() == "":
        return PirepSeverity.UNKNOWN
    return PIREP_SEVERITY_CODES.get(str(value).strip().upper(), PirepSeverity.UNKNOWN)


def _properties(feature: Dict[str, Any], what: str) -> Dict[str, Any]:
    feature = require_mapping(feature, what)
    props = feature.get("properties", feature)
    return props if isinstance(props, dict) else {}


def hazard_from_awc_feature(feature: Dict[str, Any], kind: str) -> HazardAdvisory:
    """
    Normalize an AWC hazard feature.

    The validity window prefers validTimeFrom/validTimeTo, then falls back
    to validTime/issueTime for the start and expireTime for the end.

    Args:
        feature: GeoJSON feature (or a bare properties object)
        kind: Feed kind, e.g. "sigmet", "gairmet", "cwa"

    Returns:
        HazardAdvisory
    """
    props = _properties(feature, "hazard")
    return HazardAdvisory(
        kind=kind,
        severity=hazard_severity(props.get("severity")),
        name=props.get("hazard") or props.get("phenomenon") or None,
        valid_from=(
            parse_time(props.get("validTimeFrom"))
            or parse_time(props.get("validTime"))
            or parse_time(props.get("issueTime"))
        ),
        valid_to=parse_time(props.get("validTimeTo")) or parse_time(props.get("expireTime")),
        raw_text=props.get("rawText") or props.get("rawAirSigmet") or None,
    )


def pirep_from_awc_feature(feature: Dict[str, Any]) -> PilotReport:
    """Normalize an AWC PIREP feature."""
    props = _properties(feature, "PIREP")
    return PilotReport(
        icing=pirep_severity(props.get("ice", props.get("icgInt1"))),
        turbulence=pirep_severity(props.get("turb", props.get("tbInt1"))),
        observed_at=parse_time(props.get("obs_time", props.get("obsTime"))),
        aircraft_ref=props.get("aircraft_ref", props.get("acType")) or None,
        altitude_ft_msl=to_int(props.get("altitude_ft_msl", props.get("fltLvl"))),
        raw_text=props.get("raw_text", props.get("rawOb")) or None,
    )
