# wxrisk/risk/factors/trend_stability.py
"""
Forecast trend stability factor.

Compares the current METAR flight category with the first TAF period.
"""

from typing import Optional

from ..models import FactorDetails, FactorResult, FlightCategory, RiskInputs

NAME = "trend_stability"

DETERIORATING_SCORE = 40
STABLE_SCORE = 20
IMPROVING_SCORE = 10
NO_DATA_PENALTY = 0.1


def first_forecast_category(inputs: RiskInputs) -> Optional[FlightCategory]:
    if not inputs.taf or not inputs.taf.periods:
        return None
    return inputs.taf.periods[0].flight_category


def evaluate_trend_stability(inputs: RiskInputs) -> FactorResult:
    current = inputs.metar.flight_category if inputs.metar else None
    forecast = first_forecast_category(inputs)

    if current is None or forecast is None:
        missing = []
        if current is None:
            missing.append("current")
        if forecast is None:
            missing.append("forecast")
        return FactorResult.build(
            name=NAME,
            score=0,
            confidence_penalty=NO_DATA_PENALTY,
            messages=[f"Trend unavailable: {' and '.join(missing)} flight category unknown"],
        )

    if forecast.rank < current.rank:
        score = DETERIORATING_SCORE
        message = f"Conditions forecast to deteriorate from {current.value} to {forecast.value}"
        impact = "Forecast deterioration - plan for reduced minimums and alternates"
    elif forecast.rank > current.rank:
        score = IMPROVING_SCORE
        message = f"Conditions forecast to improve from {current.value} to {forecast.value}"
        impact = "Improving trend - current restrictions expected to ease"
    else:
        score = STABLE_SCORE
        message = f"Conditions forecast to remain {current.value}"
        impact = "Stable trend - current conditions expected to persist"

    return FactorResult.build(
        name=NAME,
        score=score,
        confidence_penalty=0.0,
        messages=[message],
        details=FactorDetails(
            actual_value=f"{current.value} -> {forecast.value}",
            threshold="Deteriorating 40 | stable 20 | improving 10",
            impact=impact,
        ),
        sources=["metar.flight_category", "taf.periods"],
    )
