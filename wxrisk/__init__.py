"""
Weather risk assessment engine.

Scores already decoded weather inputs (METAR, TAF, hazard advisories,
pilot reports) into an explainable flight risk verdict.
"""

from .risk import (
    AggregatedRiskResult,
    AggregationPolicy,
    FactorResult,
    MessagingBundle,
    RiskInputs,
    RiskProfile,
    aggregate,
    assess_flight,
    build_messaging,
)
from .service import RiskAssessment, assess_weather_risk, assess_request, assess_flight_request

__version__ = "0.1.0"

__all__ = [
    "AggregatedRiskResult",
    "AggregationPolicy",
    "FactorResult",
    "MessagingBundle",
    "RiskInputs",
    "RiskProfile",
    "aggregate",
    "assess_flight",
    "build_messaging",
    "RiskAssessment",
    "assess_weather_risk",
    "assess_request",
    "assess_flight_request",
]
