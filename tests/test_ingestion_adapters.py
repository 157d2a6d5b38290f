# tests/test_ingestion_adapters.py
"""
Test the payload adapters for AviationWeather.gov METAR/TAF, AWC hazard
and PIREP features, and NWS alerts.
"""

from datetime import datetime, timezone

import pytest

from wxrisk.ingestion import (
    PayloadError,
    hazard_from_awc_feature,
    hazard_from_nws_alert,
    metar_from_awc,
    parse_time,
    pirep_from_awc_feature,
    taf_from_awc,
)
from wxrisk.ingestion.common import to_float, to_int
from wxrisk.risk.models import FlightCategory, HazardSeverity, PirepSeverity

METAR_JSON = {
    "icaoId": "kden",
    "rawOb": "KDEN 151153Z 31030G42KT 2SM -SN BR OVC008 M04/M06 A2990",
    "obsTime": 1736942000,
    "wdir": 310,
    "wspd": 30,
    "wgst": 42,
    "visib": "2",
    "temp": -4,
    "dewp": -6,
    "clouds": [{"cover": "OVC", "base": 800}],
    "fltcat": "IFR",
}

TAF_JSON = {
    "icaoId": "KDEN",
    "issueTime": "2025-01-15T11:20:00Z",
    "validTimeFrom": 1736942400,
    "validTimeTo": 1737050400,
    "rawTAF": "TAF KDEN 151120Z 1512/1618 31025G40KT 1SM -SN OVC005",
    "fcsts": [
        {
            "timeFrom": 1736942400,
            "timeTo": 1736960400,
            "fcstChange": None,
            "visib": 1,
            "clouds": [{"cover": "OVC", "base": 500}],
        },
        {
            "timeFrom": 1736960400,
            "timeTo": 1737050400,
            "fcstChange": "FM",
            "visib": "6+",
            "clouds": [{"cover": "SCT", "base": 4000}],
            "fltcat": "VFR",
        },
    ],
}


class TestCommonParsing:
    """Loose field parsing helpers."""

    @pytest.mark.parametrize("raw,expected", [
        ("10+", 10.0),
        ("P6SM", 6.0),
        ("M1/4SM", 0.25),
        ("1 1/2", 1.5),
        ("3/4", 0.75),
        (5, 5.0),
        ("", None),
        (None, None),
        ("VRB", None),
    ])
    def test_to_float(self, raw, expected):
        assert to_float(raw) == expected

    def test_to_int(self):
        assert to_int("12") == 12
        assert to_int(7.6) == 8
        assert to_int("VRB") is None
        assert to_int(True) is None
        assert to_int("inf") is None
        assert to_int(float("inf")) is None
        assert to_int("nan") is None

    def test_parse_time_forms(self):
        expected = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)

        assert parse_time("2025-01-15T12:00:00Z") == expected
        assert parse_time("2025-01-15T12:00:00") == expected
        assert parse_time(expected.timestamp()) == expected
        assert parse_time(datetime(2025, 1, 15, 12, 0)) == expected

    @pytest.mark.parametrize("raw", [None, "", "not a time"])
    def test_parse_time_invalid(self, raw):
        assert parse_time(raw) is None


class TestMetarAdapter:
    """AviationWeather.gov METAR JSON."""

    def test_full_observation(self):
        metar = metar_from_awc(METAR_JSON)

        assert metar.icao == "KDEN"
        assert metar.wind.speed_kt == 30
        assert metar.wind.gust_kt == 42
        assert metar.wind.direction_deg == 310
        assert metar.visibility_miles == 2.0
        assert metar.ceiling_feet == 800
        assert metar.flight_category == FlightCategory.IFR
        assert metar.temp_c == -4.0
        assert metar.observed_at.tzinfo is not None
        assert "-SN" in metar.raw_text

    def test_category_derived_when_missing(self):
        obs = dict(METAR_JSON)
        del obs["fltcat"]
        obs["clouds"] = [{"cover": "BKN", "base": 400}]
        obs["visib"] = "10+"

        assert metar_from_awc(obs).flight_category == FlightCategory.LIFR

    def test_variable_wind_direction(self):
        obs = dict(METAR_JSON, wdir="VRB", wspd=4, wgst=None)
        wind = metar_from_awc(obs).wind

        assert wind.direction_deg is None
        assert wind.speed_kt == 4
        assert wind.gust_kt is None

    def test_legacy_field_names(self):
        metar = metar_from_awc({
            "station_id": "KBOS",
            "raw_text": "KBOS 151154Z 27012KT 10SM FEW050 05/M05 A3001",
            "wind_speed_kt": 12,
            "visibility_statute_mi": 10,
            "sky_condition": [{"sky_cover": "FEW", "cloud_base_ft_agl": 5000}],
            "flight_category": "VFR",
        })

        assert metar.icao == "KBOS"
        assert metar.wind.speed_kt == 12
        assert metar.ceiling_feet is None
        assert metar.flight_category == FlightCategory.VFR

    def test_sparse_observation(self):
        metar = metar_from_awc({"icaoId": "KXYZ"})

        assert metar.wind is None
        assert metar.visibility_miles is None
        assert metar.clouds == ()
        assert metar.flight_category is None

    def test_rejects_non_object(self):
        with pytest.raises(PayloadError):
            metar_from_awc(["KDEN"])


class TestTafAdapter:
    """AviationWeather.gov TAF JSON."""

    def test_periods_in_order(self):
        taf = taf_from_awc(TAF_JSON)

        assert taf.icao == "KDEN"
        assert len(taf.periods) == 2
        # First period category derived from 500 ft / 1 SM
        assert taf.periods[0].flight_category == FlightCategory.IFR
        assert taf.periods[1].flight_category == FlightCategory.VFR
        assert taf.periods[1].change_indicator == "FM"
        assert taf.periods[0].valid_from < taf.periods[1].valid_from
        assert taf.issued_at == datetime(2025, 1, 15, 11, 20, tzinfo=timezone.utc)

    def test_no_periods(self):
        taf = taf_from_awc({"icaoId": "KDEN", "fcsts": "garbage"})
        assert taf.periods == ()

    def test_rejects_non_object(self):
        with pytest.raises(PayloadError):
            taf_from_awc("TAF KDEN")


class TestAwcHazards:
    """SIGMET / G-AIRMET / CWA and PIREP features."""

    def test_sigmet_feature(self):
        hazard = hazard_from_awc_feature({
            "type": "Feature",
            "properties": {
                "hazard": "CONVECTIVE",
                "severity": "SEV",
                "validTimeFrom": "2025-01-15T11:00:00Z",
                "validTimeTo": "2025-01-15T13:00:00Z",
                "rawAirSigmet": "CONVECTIVE SIGMET 12C",
            },
        }, kind="sigmet")

        assert hazard.kind == "sigmet"
        assert hazard.severity == HazardSeverity.HIGH
        assert hazard.name == "CONVECTIVE"
        assert hazard.raw_text == "CONVECTIVE SIGMET 12C"
        assert hazard.is_active(datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc))

    def test_window_fallbacks(self):
        hazard = hazard_from_awc_feature({
            "properties": {
                "phenomenon": "ICE",
                "severity": "MOD",
                "issueTime": "2025-01-15T09:00:00Z",
                "expireTime": "2025-01-15T15:00:00Z",
            },
        }, kind="gairmet")

        assert hazard.name == "ICE"
        assert hazard.severity == HazardSeverity.MODERATE
        assert hazard.valid_from == datetime(2025, 1, 15, 9, 0, tzinfo=timezone.utc)
        assert hazard.valid_to == datetime(2025, 1, 15, 15, 0, tzinfo=timezone.utc)

    def test_unknown_severity(self):
        hazard = hazard_from_awc_feature({"properties": {"severity": "??"}}, kind="cwa")
        assert hazard.severity == HazardSeverity.UNKNOWN

    @pytest.mark.parametrize("code,expected", [
        ("SEV", PirepSeverity.SEVERE),
        ("SEV-MOD", PirepSeverity.SEVERE),
        ("MOD-LGT", PirepSeverity.MODERATE),
        ("LGT-MOD", PirepSeverity.LOW),
        ("EXT", PirepSeverity.EXTREME),
        ("NEG", PirepSeverity.UNKNOWN),
        (None, PirepSeverity.UNKNOWN),
    ])
    def test_pirep_severity_codes(self, code, expected):
        report = pirep_from_awc_feature({"properties": {"turb": code}})
        assert report.turbulence == expected

    def test_pirep_feature(self):
        report = pirep_from_awc_feature({
            "properties": {
                "ice": "MOD",
                "turb": "SEV",
                "obs_time": "2025-01-15T11:45:00Z",
                "aircraft_ref": "B738",
                "altitude_ft_msl": 24000,
                "raw_text": "DEN UA /OV DEN /FL240 /TP B738 /TB SEV",
            },
        })

        assert report.icing == PirepSeverity.MODERATE
        assert report.worst_severity == PirepSeverity.SEVERE
        assert report.is_severe
        assert report.aircraft_ref == "B738"
        assert report.altitude_ft_msl == 24000


class TestNwsAlerts:
    """NWS active alerts."""

    @pytest.mark.parametrize("severity,expected", [
        ("Extreme", HazardSeverity.EXTREME),
        ("Severe", HazardSeverity.HIGH),
        ("Moderate", HazardSeverity.MODERATE),
        ("Minor", HazardSeverity.LOW),
        ("Unknown", HazardSeverity.UNKNOWN),
    ])
    def test_severity_mapping(self, severity, expected):
        assert hazard_from_nws_alert({"properties": {"severity": severity}}).severity == expected

    def test_alert_fields(self):
        hazard = hazard_from_nws_alert({
            "properties": {
                "event": "Winter Storm Warning",
                "headline": "Winter Storm Warning issued January 15",
                "severity": "Severe",
                "effective": "2025-01-15T10:00:00Z",
                "expires": "2025-01-16T06:00:00Z",
            },
        })

        assert hazard.kind == "nws_alert"
        assert hazard.name == "Winter Storm Warning"
        assert hazard.valid_from == datetime(2025, 1, 15, 10, 0, tzinfo=timezone.utc)
        assert hazard.valid_to == datetime(2025, 1, 16, 6, 0, tzinfo=timezone.utc)
        assert hazard.label == "Winter Storm Warning (HIGH)"

    def test_onset_and_ends_preferred(self):
        hazard = hazard_from_nws_alert({
            "event": "Dense Fog Advisory",
            "severity": "Minor",
            "effective": "2025-01-15T08:00:00Z",
            "onset": "2025-01-15T09:00:00Z",
            "expires": "2025-01-15T18:00:00Z",
            "ends": "2025-01-15T16:00:00Z",
        })

        assert hazard.valid_from == datetime(2025, 1, 15, 9, 0, tzinfo=timezone.utc)
        assert hazard.valid_to == datetime(2025, 1, 15, 16, 0, tzinfo=timezone.utc)

    def test_rejects_non_object(self):
        with pytest.raises(PayloadError):
            hazard_from_nws_alert(None)
