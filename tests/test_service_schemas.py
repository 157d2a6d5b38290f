# tests/test_service_schemas.py
"""
Test request validation and the service facade.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from wxrisk.ingestion import PayloadError
from wxrisk.risk.aggregation import AggregationPolicy
from wxrisk.risk.models import RiskProfile
from wxrisk.schemas import FlightRiskRequest, RiskAssessmentRequest
from wxrisk.service import assess_flight_request, assess_request, assess_weather_risk

POLICY = AggregationPolicy(
    profile_multipliers={
        RiskProfile.STANDARD: 1.0,
        RiskProfile.CONSERVATIVE: 1.15,
        RiskProfile.AGGRESSIVE: 0.85,
    },
)

FOGGY_REQUEST = {
    "icao": " ksfo ",
    "now": "2025-01-15T12:00:00Z",
    "risk_profile": "Conservative",
    "metar": {
        "icaoId": "KSFO",
        "rawOb": "KSFO 151156Z 00000KT 1/4SM FG VV001 10/10 A3012",
        "wspd": 0,
        "wdir": 0,
        "visib": "1/4",
        "clouds": [{"cover": "OVC", "base": 100}],
        "fltcat": "LIFR",
    },
    "taf": {
        "icaoId": "KSFO",
        "fcsts": [{"fltcat": "LIFR"}],
    },
    "hazards": [
        {
            "kind": "gairmet",
            "feature": {
                "properties": {
                    "hazard": "IFR",
                    "severity": "MOD",
                    "validTimeFrom": "2025-01-15T09:00:00Z",
                    "validTimeTo": "2025-01-15T15:00:00Z",
                },
            },
        },
    ],
    "nws_alerts": [
        {
            "properties": {
                "event": "Dense Fog Advisory",
                "severity": "Minor",
                "effective": "2025-01-15T06:00:00Z",
                "expires": "2025-01-15T18:00:00Z",
            },
        },
    ],
    "pireps": [],
}


class TestRiskAssessmentRequest:
    """Validation and conversion to engine inputs."""

    def test_normalizes_icao_and_profile(self):
        request = RiskAssessmentRequest.model_validate(FOGGY_REQUEST)

        assert request.icao == "KSFO"
        assert request.risk_profile == "conservative"

    def test_to_inputs(self):
        inputs = RiskAssessmentRequest.model_validate(FOGGY_REQUEST).to_inputs()

        assert inputs.icao == "KSFO"
        assert inputs.risk_profile == RiskProfile.CONSERVATIVE
        assert inputs.now == datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)
        assert inputs.metar.visibility_miles == 0.25
        assert len(inputs.hazards) == 2
        assert inputs.hazards[1].kind == "nws_alert"

    def test_rejects_unknown_profile(self):
        with pytest.raises(ValidationError):
            RiskAssessmentRequest.model_validate({"risk_profile": "reckless"})

    def test_empty_request_is_valid(self):
        inputs = RiskAssessmentRequest.model_validate({}).to_inputs()

        assert inputs.metar is None
        assert inputs.hazards == ()

    def test_icao_falls_back_to_metar(self):
        inputs = RiskAssessmentRequest.model_validate({"metar": {"icaoId": "kord"}}).to_inputs()
        assert inputs.icao == "KORD"


class TestAssessRequest:
    """Full JSON-in, JSON-out assessment."""

    def test_foggy_airport(self):
        response = assess_request(FOGGY_REQUEST, policy=POLICY)
        result = response["result"]
        messaging = response["messaging"]

        assert result["icao"] == "KSFO"
        assert result["riskProfile"] == "conservative"
        assert result["status"] == "ok"
        assert result["tier"] == "high_disruption"
        assert result["overallScore"] == 100
        assert [f["name"] for f in result["factorBreakdown"]] == [
            "ceiling_clouds",
            "surface_wind",
            "precipitation",
            "visibility",
            "hazard_advisories",
            "trend_stability",
        ]
        assert messaging["alerts"]
        assert messaging["opsActionables"][0].startswith("Initiate diversion")

    def test_empty_request_reports_insufficient_data(self):
        response = assess_request({}, policy=POLICY)

        assert response["result"]["status"] == "insufficient_data"
        assert response["result"]["overallScore"] == 0
        assert response["messaging"]["plainTextSummary"].startswith("Insufficient data")

    def test_accepts_validated_request(self):
        request = RiskAssessmentRequest.model_validate(FOGGY_REQUEST)
        assert assess_request(request, policy=POLICY) == assess_request(FOGGY_REQUEST, policy=POLICY)

    def test_bad_payload_shape(self):
        with pytest.raises(ValidationError):
            assess_request({"metar": "KSFO 151156Z ..."}, policy=POLICY)

    def test_bad_feature_shape(self):
        payload = {"hazards": [{"kind": "sigmet", "feature": {"properties": "nope"}}]}
        inputs = RiskAssessmentRequest.model_validate(payload).to_inputs()
        # Non-object properties degrade to an unknown hazard
        assert inputs.hazards[0].name is None

    def test_non_object_alert_rejected_before_engine(self):
        request = RiskAssessmentRequest.model_construct(nws_alerts=["alert"], hazards=[], pireps=[])
        with pytest.raises(PayloadError):
            request.to_inputs()


class TestAssessWeatherRisk:

    def test_returns_result_and_messaging(self, clear_day_inputs):
        assessment = assess_weather_risk(clear_day_inputs, policy=POLICY, parallel=False)
        data = assessment.to_dict()

        assert data["result"]["overallScore"] == 20
        assert data["messaging"]["plainTextSummary"] == "Weather normal."


class TestAssessFlightRequest:

    def test_flight_request(self):
        payload = {
            "origin": {"icao": "KSFO", "now": "2025-01-15T12:00:00Z", "metar": FOGGY_REQUEST["metar"]},
            "destination": {
                "icao": "KLAX",
                "metar": {
                    "icaoId": "KLAX",
                    "rawOb": "KLAX 151153Z 25008KT 10SM FEW020 18/10 A3000",
                    "wspd": 8,
                    "wdir": 250,
                    "visib": "10+",
                    "clouds": [{"cover": "FEW", "base": 2000}],
                    "fltcat": "VFR",
                },
            },
            "departure_utc": "2025-01-15T15:00:00Z",
            "arrival_utc": "2025-01-15T16:30:00Z",
        }
        response = assess_flight_request(payload, policy=POLICY)
        flight = response["flight"]

        assert flight["phase"] == "planning"
        assert flight["weights"] == {"origin": 0.6, "destination": 0.4}
        assert flight["alertLevel"] == "red"
        assert flight["origin"]["icao"] == "KSFO"
        assert flight["destination"]["icao"] == "KLAX"
        assert response["origin_messaging"]["alerts"]
        assert response["destination_messaging"]["alerts"] == []

    def test_schedule_parsing(self):
        request = FlightRiskRequest.model_validate({
            "origin": {},
            "destination": {},
            "departure_utc": "2025-01-15T15:00:00",
        })
        schedule = request.to_schedule()

        assert schedule.departure_utc.tzinfo is not None
        assert schedule.arrival_utc is None
