# wxrisk/risk/models.py
"""
Weather risk models.

Inputs (decoded observations, forecasts, advisories, pilot reports) and
outputs (factor results, aggregated result, messaging bundle) of the engine.

All models are frozen dataclasses with tuple collections. Outputs expose
``to_dict()`` producing plain JSON-serializable data with camelCase keys.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Tuple


# Single evaluator-wide severity contract. Tiers reuse the same breakpoints.
MODERATE_THRESHOLD = 40
HIGH_THRESHOLD = 70


class FlightCategory(Enum):
    """Coarse ceiling/visibility classification, best to worst: VFR > MVFR > IFR > LIFR."""
    VFR = "VFR"
    MVFR = "MVFR"
    IFR = "IFR"
    LIFR = "LIFR"

    @property
    def rank(self) -> int:
        """Ordinal where a lower value means worse conditions."""
        return _CATEGORY_RANK[self]

    @classmethod
    def parse(cls, value: Any) -> Optional["FlightCategory"]:
        if isinstance(value, cls):
            return value
        if not value:
            return None
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return None


_CATEGORY_RANK = {
    FlightCategory.LIFR: 0,
    FlightCategory.IFR: 1,
    FlightCategory.MVFR: 2,
    FlightCategory.VFR: 3,
}


class RiskProfile(Enum):
    """User risk preference applied as a score multiplier."""
    STANDARD = "standard"
    CONSERVATIVE = "conservative"
    AGGRESSIVE = "aggressive"


class Severity(Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class RiskTier(Enum):
    NORMAL = "normal"
    MONITOR = "monitor"
    HIGH_DISRUPTION = "high_disruption"


class AssessmentStatus(Enum):
    OK = "ok"
    INSUFFICIENT_DATA = "insufficient_data"


class HazardSeverity(Enum):
    EXTREME = "extreme"
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"
    INFO = "info"
    UNKNOWN = "unknown"


class PirepSeverity(Enum):
    LOW = "low"
    MODERATE = "moderate"
    SEVERE = "severe"
    EXTREME = "extreme"
    UNKNOWN = "unknown"


class AlertSeverity(Enum):
    WARNING = "warning"
    CRITICAL = "critical"


# ---------------------------------------------------------------------------
# Invariant helpers
# ---------------------------------------------------------------------------

def clamp_score(score: float) -> int:
    """Round and clamp a score into the 0-100 range."""
    return max(0, min(100, int(round(score))))


def clamp_penalty(penalty: float) -> float:
    return max(0.0, min(1.0, float(penalty)))


def severity_for_score(score: int) -> Severity:
    """Map a 0-100 score onto the 40/70 severity contract."""
    if score >= HIGH_THRESHOLD:
        return Severity.HIGH
    if score >= MODERATE_THRESHOLD:
        return Severity.MODERATE
    return Severity.LOW


def tier_for_score(score: int) -> RiskTier:
    """Map a 0-100 score onto a tier using the same 40/70 breakpoints."""
    if score >= HIGH_THRESHOLD:
        return RiskTier.HIGH_DISRUPTION
    if score >= MODERATE_THRESHOLD:
        return RiskTier.MONITOR
    return RiskTier.NORMAL


def derive_flight_category(
    ceiling_feet: Optional[float],
    visibility_miles: Optional[float],
) -> Optional[FlightCategory]:
    """
    Derive a flight category from ceiling and visibility.

    Uses the FAA definitions: LIFR below 500 ft or 1 SM, IFR below 1000 ft
    or 3 SM, MVFR up to 3000 ft or 5 SM. The worse of the two inputs wins.
    Without either input the category is unknown.

    A missing ceiling with a known visibility means no ceiling (unlimited).
    """
    if ceiling_feet is None and visibility_miles is None:
        return None

    def from_ceiling(feet: Optional[float]) -> FlightCategory:
        if feet is None:
            return FlightCategory.VFR
        if feet < 500:
            return FlightCategory.LIFR
        if feet < 1000:
            return FlightCategory.IFR
        if feet <= 3000:
            return FlightCategory.MVFR
        return FlightCategory.VFR

    def from_visibility(miles: Optional[float]) -> FlightCategory:
        if miles is None:
            return FlightCategory.VFR
        if miles < 1:
            return FlightCategory.LIFR
        if miles < 3:
            return FlightCategory.IFR
        if miles <= 5:
            return FlightCategory.MVFR
        return FlightCategory.VFR

    return min(from_ceiling(ceiling_feet), from_visibility(visibility_miles), key=lambda c: c.rank)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a naive datetime; aware values are returned unchanged."""
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Wind:
    """Surface wind."""
    speed_kt: Optional[int] = None
    gust_kt: Optional[int] = None
    direction_deg: Optional[int] = None  # None for variable


@dataclass(frozen=True)
class CloudLayer:
    """Reported cloud layer."""
    code: str  # FEW, SCT, BKN, OVC, VV, SKC, CLR
    base_feet_agl: Optional[int] = None

    @property
    def is_ceiling(self) -> bool:
        """Broken, overcast and vertical visibility (indefinite ceiling) layers."""
        return self.code.upper().startswith(("BKN", "OVC", "VV"))


@dataclass(frozen=True)
class MetarObservation:
    """Decoded METAR observation."""
    icao: str = ""
    raw_text: Optional[str] = None
    wind: Optional[Wind] = None
    visibility_miles: Optional[float] = None
    clouds: Tuple[CloudLayer, ...] = ()
    flight_category: Optional[FlightCategory] = None
    temp_c: Optional[float] = None
    dewpoint_c: Optional[float] = None
    observed_at: Optional[datetime] = None

    @property
    def ceiling_feet(self) -> Optional[int]:
        """Lowest BKN/OVC/VV base, None when no ceiling layer is reported."""
        bases = [
            layer.base_feet_agl
            for layer in self.clouds
            if layer.is_ceiling and layer.base_feet_agl is not None
        ]
        return min(bases) if bases else None


@dataclass(frozen=True)
class TafPeriod:
    """One forecast period of a TAF."""
    flight_category: Optional[FlightCategory] = None
    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None
    change_indicator: Optional[str] = None  # FM, TEMPO, BECMG, PROB


@dataclass(frozen=True)
class TafForecast:
    """Decoded TAF with its ordered forecast periods."""
    icao: str = ""
    periods: Tuple[TafPeriod, ...] = ()
    issued_at: Optional[datetime] = None
    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None
    raw_text: Optional[str] = None


@dataclass(frozen=True)
class HazardAdvisory:
    """Normalized hazard advisory (SIGMET, AIRMET, CWA, NWS alert)."""
    kind: str
    severity: HazardSeverity = HazardSeverity.UNKNOWN
    name: Optional[str] = None
    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None
    raw_text: Optional[str] = None

    def is_active(self, at_time: Optional[datetime]) -> bool:
        """
        Check if the advisory window covers the given time.

        Missing bounds are open. Naive datetimes are treated as UTC.
        """
        if at_time is None:
            return True
        at_time = as_utc(at_time)
        if self.valid_from and at_time < as_utc(self.valid_from):
            return False
        if self.valid_to and at_time > as_utc(self.valid_to):
            return False
        return True

    @property
    def label(self) -> str:
        name = self.name or self.kind.upper()
        return f"{name} ({self.severity.value.upper()})"


# Weights shared by the hazard evaluator; PIREPs count at half weight.
PIREP_SEVERITY_WEIGHTS = {
    PirepSeverity.EXTREME: 50,
    PirepSeverity.SEVERE: 40,
    PirepSeverity.MODERATE: 25,
    PirepSeverity.LOW: 10,
    PirepSeverity.UNKNOWN: 5,
}


@dataclass(frozen=True)
class PilotReport:
    """Pilot report of icing and turbulence."""
    icing: PirepSeverity = PirepSeverity.UNKNOWN
    turbulence: PirepSeverity = PirepSeverity.UNKNOWN
    observed_at: Optional[datetime] = None
    aircraft_ref: Optional[str] = None
    altitude_ft_msl: Optional[int] = None
    raw_text: Optional[str] = None

    @property
    def worst_severity(self) -> PirepSeverity:
        return max(
            (self.icing, self.turbulence),
            key=lambda s: PIREP_SEVERITY_WEIGHTS[s],
        )

    @property
    def is_severe(self) -> bool:
        return self.worst_severity in (PirepSeverity.SEVERE, PirepSeverity.EXTREME)


@dataclass(frozen=True)
class RiskInputs:
    """Read-only snapshot passed to every factor evaluator."""
    metar: Optional[MetarObservation] = None
    taf: Optional[TafForecast] = None
    hazards: Tuple[HazardAdvisory, ...] = ()
    pireps: Tuple[PilotReport, ...] = ()
    now: Optional[datetime] = None
    risk_profile: RiskProfile = RiskProfile.STANDARD
    icao: Optional[str] = None


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FactorDetails:
    """Display triple for briefings."""
    actual_value: str
    threshold: str
    impact: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "actualValue": self.actual_value,
            "threshold": self.threshold,
            "impact": self.impact,
        }


@dataclass(frozen=True)
class Timeframe:
    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"from": _iso(self.valid_from), "to": _iso(self.valid_to)}


@dataclass(frozen=True)
class FactorResult:
    """
    Output of one factor evaluator.

    Build through ``FactorResult.build`` so the score range, the penalty
    range, the severity contract and non-empty messages always hold.
    """
    name: str
    score: int
    severity: Severity
    confidence_penalty: float
    messages: Tuple[str, ...]
    details: Optional[FactorDetails] = None
    sources: Tuple[str, ...] = ()
    timeframe: Optional[Timeframe] = None

    @classmethod
    def build(
        cls,
        name: str,
        score: float,
        confidence_penalty: float,
        messages,
        details: Optional[FactorDetails] = None,
        sources=(),
        timeframe: Optional[Timeframe] = None,
    ) -> "FactorResult":
        clamped = clamp_score(score)
        messages = tuple(m for m in messages if m) or (f"{name.replace('_', ' ')} data unavailable",)
        return cls(
            name=name,
            score=clamped,
            severity=severity_for_score(clamped),
            confidence_penalty=clamp_penalty(confidence_penalty),
            messages=messages,
            details=details,
            sources=tuple(sources),
            timeframe=timeframe,
        )

    def with_score(self, score: float) -> "FactorResult":
        """Copy with a new score and the severity recomputed."""
        clamped = clamp_score(score)
        return replace(self, score=clamped, severity=severity_for_score(clamped))

    @property
    def has_data(self) -> bool:
        return bool(self.sources)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "score": self.score,
            "severity": self.severity.value,
            "confidencePenalty": self.confidence_penalty,
            "messages": list(self.messages),
            "details": self.details.to_dict() if self.details else None,
            "sources": list(self.sources),
            "timeframe": self.timeframe.to_dict() if self.timeframe else None,
        }


@dataclass(frozen=True)
class AggregatedRiskResult:
    """Composite verdict over all six factors."""
    overall_score: int
    tier: RiskTier
    status: AssessmentStatus
    factor_breakdown: Tuple[FactorResult, ...]
    risk_profile: RiskProfile = RiskProfile.STANDARD
    mean_confidence_penalty: float = 0.0
    icao: Optional[str] = None

    @property
    def confidence(self) -> float:
        return round(1.0 - self.mean_confidence_penalty, 4)

    def factor(self, name: str) -> FactorResult:
        for result in self.factor_breakdown:
            if result.name == name:
                return result
        raise KeyError(name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "icao": self.icao,
            "overallScore": self.overall_score,
            "tier": self.tier.value,
            "status": self.status.value,
            "riskProfile": self.risk_profile.value,
            "meanConfidencePenalty": self.mean_confidence_penalty,
            "confidence": self.confidence,
            "factorBreakdown": [f.to_dict() for f in self.factor_breakdown],
        }


@dataclass(frozen=True)
class Alert:
    title: str
    message: str
    severity: AlertSeverity
    factor: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "message": self.message,
            "severity": self.severity.value,
            "factor": self.factor,
        }


@dataclass(frozen=True)
class MessagingBundle:
    """Human-facing rendering of an aggregated result."""
    alerts: Tuple[Alert, ...]
    plain_text_summary: str
    guest_message_template: str
    ops_actionables: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "alerts": [a.to_dict() for a in self.alerts],
            "plainTextSummary": self.plain_text_summary,
            "guestMessageTemplate": self.guest_message_template,
            "opsActionables": list(self.ops_actionables),
        }
