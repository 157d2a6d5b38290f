# Ingestion module - adapters from decoded feed payloads to engine inputs
from .common import PayloadError, parse_time
from .aviationweather import metar_from_awc, taf_from_awc
from .awc_hazards import hazard_from_awc_feature, pirep_from_awc_feature
from .nws_alerts import hazard_from_nws_alert

__all__ = [
    "PayloadError",
    "parse_time",
    "metar_from_awc",
    "taf_from_awc",
    "hazard_from_awc_feature",
    "pirep_from_awc_feature",
    "hazard_from_nws_alert",
]
