# Risk module - factor evaluators, profile policy, aggregation and messaging
from .models import (
    AggregatedRiskResult,
    Alert,
    AlertSeverity,
    AssessmentStatus,
    CloudLayer,
    FactorDetails,
    FactorResult,
    FlightCategory,
    HazardAdvisory,
    HazardSeverity,
    MessagingBundle,
    MetarObservation,
    PilotReport,
    PirepSeverity,
    RiskInputs,
    RiskProfile,
    RiskTier,
    Severity,
    TafForecast,
    TafPeriod,
    Timeframe,
    Wind,
    derive_flight_category,
    severity_for_score,
    tier_for_score,
)
from .factors import FACTOR_EVALUATORS, FACTOR_NAMES
from .profiles import apply_risk_profile, parse_risk_profile
from .aggregation import AggregationPolicy, aggregate, combine_scores
from .messaging import build_messaging
from .flight import (
    AlertLevel,
    FlightPhase,
    FlightRiskResult,
    FlightSchedule,
    assess_flight,
    determine_flight_phase,
)

__all__ = [
    # Models
    "AggregatedRiskResult",
    "Alert",
    "AlertSeverity",
    "AssessmentStatus",
    "CloudLayer",
    "FactorDetails",
    "FactorResult",
    "FlightCategory",
    "HazardAdvisory",
    "HazardSeverity",
    "MessagingBundle",
    "MetarObservation",
    "PilotReport",
    "PirepSeverity",
    "RiskInputs",
    "RiskProfile",
    "RiskTier",
    "Severity",
    "TafForecast",
    "TafPeriod",
    "Timeframe",
    "Wind",
    "derive_flight_category",
    "severity_for_score",
    "tier_for_score",
    # Evaluators and policy
    "FACTOR_EVALUATORS",
    "FACTOR_NAMES",
    "apply_risk_profile",
    "parse_risk_profile",
    "AggregationPolicy",
    "aggregate",
    "combine_scores",
    "build_messaging",
    # Flight
    "AlertLevel",
    "FlightPhase",
    "FlightRiskResult",
    "FlightSchedule",
    "assess_flight",
    "determine_flight_phase",
]
