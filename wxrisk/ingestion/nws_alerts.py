# wxrisk/ingestion/nws_alerts.py
"""
National Weather Service (NWS) alert adapter.

Maps the properties of one alert from
https://api.weather.gov/alerts/active?point={lat},{lon}
onto a HazardAdvisory:

- Severe thunderstorm warnings
- Winter storm warnings
- Dense fog advisories
- etc.

NWS severities are Extreme, Severe, Moderate, Minor and Unknown.
"""

from typing import Any, Dict

from ..risk.models import HazardAdvisory, HazardSeverity
from .common import parse_time, require_mapping

NWS_SEVERITY_MAP = {
    "EXTREME": HazardSeverity.EXTREME,
    "SEVERE": HazardSeverity.HIGH,
    "MODERATE": HazardSeverity.MODERATE,
    "MINOR": HazardSeverity.LOW,
}

NWS_KIND = "nws_alert"


def hazard_from_nws_alert(alert: Dict[str, Any]) -> HazardAdvisory:
    """
    Normalize an NWS alert.

    Accepts either a full GeoJSON feature or its properties object. The
    window runs from ``onset``/``effective`` to ``ends``/``expires``.

    Args:
        alert: NWS alert feature or properties

    Returns:
        HazardAdvisory
    """
    alert = require_mapping(alert, "NWS alert")
    props = alert.get("properties", alert)
    if not isinstance(props, dict):
        props = {}

    severity = str(props.get("severity") or "").strip().upper()
    return HazardAdvisory(
        kind=NWS_KIND,
        severity=NWS_SEVERITY_MAP.get(severity, HazardSeverity.UNKNOWN),
        name=props.get("event") or props.get("headline") or None,
        valid_from=parse_time(props.get("onset")) or parse_time(props.get("effective")),
        valid_to=parse_time(props.get("ends")) or parse_time(props.get("expires")),
        raw_text=props.get("headline") or props.get("description") or None,
    )
