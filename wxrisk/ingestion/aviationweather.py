# wxrisk/ingestion/aviationweather.py
"""
AviationWeather.gov METAR/TAF payload adapters.

Payloads are the decoded JSON documents returned by:
- METAR: https://aviationweather.gov/api/data/metar?ids={icao}&format=json
- TAF: https://aviationweather.gov/api/data/taf?ids={icao}&format=json

Fetching is the caller's job; these functions only map fields onto engine
inputs. Older snake_case field names (raw_text, station_id, ...) are
accepted as well.
"""

from typing import Any, Dict, List, Optional, Tuple

from ..risk.models import (
    CloudLayer,
    FlightCategory,
    MetarObservation,
    TafForecast,
    TafPeriod,
    Wind,
    derive_flight_category,
)
from .common import parse_time, require_mapping, to_float, to_int


def _parse_clouds(layers: Any) -> Tuple[CloudLayer, ...]:
    """Parse cloud layers; entries without a cover code are dropped."""
    if not isinstance(layers, list):
        return ()
    parsed = []
    for layer in layers:
        if not isinstance(layer, dict):
            continue
        cover = layer.get("cover", layer.get("code", layer.get("sky_cover")))
        if not cover:
            continue
        base = layer.get("base", layer.get("base_feet_agl", layer.get("cloud_base_ft_agl")))
        parsed.append(CloudLayer(code=str(cover).upper(), base_feet_agl=to_int(base)))
    return tuple(parsed)


def _lowest_ceiling(clouds: Tuple[CloudLayer, ...]) -> Optional[int]:
    bases = [c.base_feet_agl for c in clouds if c.is_ceiling and c.base_feet_agl is not None]
    return min(bases) if bases else None


def _category(
    reported: Any,
    clouds: Tuple[CloudLayer, ...],
    visibility: Optional[float],
) -> Optional[FlightCategory]:
    """Reported category, or one derived from ceiling/visibility."""
    category = FlightCategory.parse(reported)
    if category is not None:
        return category
    if not clouds and visibility is None:
        return None
    return derive_flight_category(_lowest_ceiling(clouds), visibility)


def _parse_wind(obs: Dict[str, Any]) -> Optional[Wind]:
    speed = to_int(obs.get("wspd", obs.get("wind_speed_kt")))
    gust = to_int(obs.get("wgst", obs.get("wind_gust_kt")))
    if speed is None and gust is None:
        return None
    # Variable direction comes through as "VRB"
    direction = to_int(obs.get("wdir", obs.get("wind_dir_degrees")))
    return Wind(speed_kt=speed, gust_kt=gust, direction_deg=direction)


def metar_from_awc(obs: Dict[str, Any]) -> MetarObservation:
    """
    Map an AviationWeather.gov METAR JSON object onto a MetarObservation.

    Args:
        obs: One element of the METAR JSON array

    Returns:
        MetarObservation
    """
    obs = require_mapping(obs, "METAR")

    clouds = _parse_clouds(obs.get("clouds", obs.get("sky_condition")))
    visibility = to_float(obs.get("visib", obs.get("visibility_statute_mi")))

    return MetarObservation(
        icao=str(obs.get("icaoId", obs.get("station_id", "")) or "").upper(),
        raw_text=obs.get("rawOb", obs.get("raw_text")) or None,
        wind=_parse_wind(obs),
        visibility_miles=visibility,
        clouds=clouds,
        flight_category=_category(obs.get("fltcat", obs.get("flight_category")), clouds, visibility),
        temp_c=to_float(obs.get("temp", obs.get("temp_c"))),
        dewpoint_c=to_float(obs.get("dewp", obs.get("dewpoint_c"))),
        observed_at=parse_time(obs.get("obsTime", obs.get("reportTime", obs.get("observation_time")))),
    )


def _parse_period(period: Dict[str, Any]) -> TafPeriod:
    clouds = _parse_clouds(period.get("clouds", period.get("sky_condition")))
    visibility = to_float(period.get("visib", period.get("visibility_statute_mi")))
    return TafPeriod(
        flight_category=_category(period.get("fltcat", period.get("flight_category")), clouds, visibility),
        valid_from=parse_time(period.get("timeFrom", period.get("fcst_time_from"))),
        valid_to=parse_time(period.get("timeTo", period.get("fcst_time_to"))),
        change_indicator=period.get("fcstChange", period.get("change_indicator")) or None,
    )


def taf_from_awc(taf: Dict[str, Any]) -> TafForecast:
    """
    Map an AviationWeather.gov TAF JSON object onto a TafForecast.

    Period order is preserved; the first period is the trend baseline.

    Args:
        taf: One element of the TAF JSON array

    Returns:
        TafForecast
    """
    taf = require_mapping(taf, "TAF")

    raw_periods = taf.get("fcsts", taf.get("forecast", []))
    if not isinstance(raw_periods, list):
        raw_periods = []
    periods: List[TafPeriod] = [
        _parse_period(period) for period in raw_periods if isinstance(period, dict)
    ]

    return TafForecast(
        icao=str(taf.get("icaoId", taf.get("station_id", "")) or "").upper(),
        periods=tuple(periods),
        issued_at=parse_time(taf.get("issueTime", taf.get("issue_time"))),
        valid_from=parse_time(taf.get("validTimeFrom", taf.get("valid_time_from"))),
        valid_to=parse_time(taf.get("validTimeTo", taf.get("valid_time_to"))),
        raw_text=taf.get("rawTAF", taf.get("raw_text")) or None,
    )
