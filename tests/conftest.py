# tests/conftest.py
"""
Pytest configuration and fixtures.

All engine tests are pure function tests: no network, no database.
Snapshots are built from small factories so each test states only the
fields it cares about.
"""

from datetime import datetime, timedelta, timezone

import pytest

from wxrisk.risk.models import (
    CloudLayer,
    FlightCategory,
    HazardAdvisory,
    HazardSeverity,
    MetarObservation,
    RiskInputs,
    TafForecast,
    TafPeriod,
    Wind,
)

NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    """Fixed reference time."""
    return NOW


@pytest.fixture
def make_metar():
    """Factory for METAR observations."""
    def _make(
        raw_text=None,
        wind=None,
        visibility_miles=None,
        clouds=(),
        flight_category=None,
        icao="KTEST",
    ):
        return MetarObservation(
            icao=icao,
            raw_text=raw_text,
            wind=wind,
            visibility_miles=visibility_miles,
            clouds=tuple(clouds),
            flight_category=flight_category,
        )
    return _make


@pytest.fixture
def make_taf():
    """Factory for a TAF whose periods have the given categories."""
    def _make(*categories):
        return TafForecast(
            icao="KTEST",
            periods=tuple(TafPeriod(flight_category=c) for c in categories),
        )
    return _make


@pytest.fixture
def make_hazard(now):
    """Factory for hazards active at NOW unless a window is given."""
    def _make(severity, name=None, valid_from=None, valid_to=None, kind="sigmet"):
        return HazardAdvisory(
            kind=kind,
            severity=severity,
            name=name,
            valid_from=valid_from if valid_from is not None else now - timedelta(hours=1),
            valid_to=valid_to if valid_to is not None else now + timedelta(hours=1),
        )
    return _make


@pytest.fixture
def clear_day_inputs(now):
    """Full VFR snapshot with every data source present."""
    metar = MetarObservation(
        icao="KTEST",
        raw_text="KTEST 151151Z 27008KT 10SM BKN250 15/05 A3001",
        wind=Wind(speed_kt=8, direction_deg=270),
        visibility_miles=10.0,
        clouds=(CloudLayer(code="BKN", base_feet_agl=25000),),
        flight_category=FlightCategory.VFR,
    )
    taf = TafForecast(icao="KTEST", periods=(TafPeriod(flight_category=FlightCategory.VFR),))
    hazard = HazardAdvisory(
        kind="sigmet",
        severity=HazardSeverity.LOW,
        name="Expired SIGMET",
        valid_from=now - timedelta(hours=6),
        valid_to=now - timedelta(hours=2),
    )
    return RiskInputs(metar=metar, taf=taf, hazards=(hazard,), now=now, icao="KTEST")
