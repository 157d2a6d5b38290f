# wxrisk/schemas.py
"""
Request/response schemas for the engine boundary.

A request-handling layer validates JSON with these models and turns it
into engine inputs via ``to_inputs()``. Payload sub-documents are the
decoded AviationWeather.gov / NWS JSON the caller already fetched.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .ingestion import (
    hazard_from_awc_feature,
    hazard_from_nws_alert,
    metar_from_awc,
    parse_time,
    pirep_from_awc_feature,
    taf_from_awc,
)
from .risk.flight import FlightSchedule
from .risk.models import RiskInputs
from .risk.profiles import parse_risk_profile

RiskProfileName = Literal["standard", "conservative", "aggressive"]


class HazardFeatureInput(BaseModel):
    """AWC hazard feature tagged with its feed kind."""
    kind: str = "sigmet"  # sigmet, gairmet, cwa, ...
    feature: Dict[str, Any]


class RiskAssessmentRequest(BaseModel):
    """Request to assess weather risk at one airport."""
    icao: Optional[str] = None
    metar: Optional[Dict[str, Any]] = None  # AWC METAR JSON object
    taf: Optional[Dict[str, Any]] = None  # AWC TAF JSON object
    hazards: List[HazardFeatureInput] = Field(default_factory=list)
    nws_alerts: List[Dict[str, Any]] = Field(default_factory=list)
    pireps: List[Dict[str, Any]] = Field(default_factory=list)
    now: Optional[datetime] = None
    risk_profile: Optional[RiskProfileName] = None

    @field_validator("risk_profile", mode="before")
    @classmethod
    def normalize_profile(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower() or None
        return value

    @field_validator("icao", mode="before")
    @classmethod
    def normalize_icao(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper() or None
        return value

    def to_inputs(self) -> RiskInputs:
        """Build the engine snapshot from the validated request."""
        metar = metar_from_awc(self.metar) if self.metar else None
        taf = taf_from_awc(self.taf) if self.taf else None

        hazards = [hazard_from_awc_feature(h.feature, h.kind) for h in self.hazards]
        hazards.extend(hazard_from_nws_alert(alert) for alert in self.nws_alerts)

        return RiskInputs(
            metar=metar,
            taf=taf,
            hazards=tuple(hazards),
            pireps=tuple(pirep_from_awc_feature(p) for p in self.pireps),
            now=parse_time(self.now),
            risk_profile=parse_risk_profile(self.risk_profile),
            icao=self.icao or (metar.icao if metar and metar.icao else None),
        )


class FlightRiskRequest(BaseModel):
    """Request to assess weather risk for a flight."""
    origin: RiskAssessmentRequest
    destination: RiskAssessmentRequest
    departure_utc: Optional[datetime] = None
    arrival_utc: Optional[datetime] = None

    def to_schedule(self) -> FlightSchedule:
        return FlightSchedule(
            departure_utc=parse_time(self.departure_utc),
            arrival_utc=parse_time(self.arrival_utc),
        )


class RiskAssessmentResponse(BaseModel):
    """Assessment result with its messaging bundle."""
    result: Dict[str, Any]
    messaging: Dict[str, Any]


class FlightRiskResponse(BaseModel):
    """Flight-level result with messaging for each airport."""
    flight: Dict[str, Any]
    origin_messaging: Dict[str, Any]
    destination_messaging: Dict[str, Any]
