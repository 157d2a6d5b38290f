# wxrisk/risk/factors/visibility.py
"""
Visibility factor.

Scores statute-mile prevailing visibility, falling back to the METAR
flight category when visibility is not reported.
"""

from ..models import (
    FactorDetails,
    FactorResult,
    FlightCategory,
    RiskInputs,
)

NAME = "visibility"

# (upper bound exclusive in SM, score), evaluated in order
VISIBILITY_THRESHOLDS = [
    (1, 90),
    (3, 70),
    (5, 45),
    (7, 25),
]

CATEGORY_SCORES = {
    FlightCategory.LIFR: (85, "LIFR: Visibility severely restricted", "Very low visibility or ceiling - IFR operations required"),
    FlightCategory.IFR: (65, "IFR: Visibility reduced", "Reduced visibility or ceiling - instrument operations required"),
    FlightCategory.MVFR: (40, "MVFR: Marginal visibility", "Marginal visibility or ceiling - caution advised"),
    FlightCategory.VFR: (10, "VFR: Good visibility", "Visibility within acceptable limits"),
}

CATEGORY_FALLBACK_PENALTY = 0.05
NO_DATA_PENALTY = 0.2


def score_visibility(miles: float) -> int:
    for bound, score in VISIBILITY_THRESHOLDS:
        if miles < bound:
            return score
    return 0


def _visibility_impact(miles: float) -> str:
    if miles < 1:
        return "IFR operations required - significant visual restriction affecting all phases"
    if miles < 3:
        return "Marginal VFR/IFR conditions - visual navigation and pattern work restricted"
    if miles < 5:
        return "Reduced visibility affects visual navigation and approach procedures"
    return "Visibility within acceptable limits for visual operations"


def evaluate_visibility(inputs: RiskInputs) -> FactorResult:
    metar = inputs.metar
    miles = metar.visibility_miles if metar else None

    if miles is not None:
        score = score_visibility(miles)
        if miles < 1:
            message = f"Very low visibility {miles:.1f} SM"
        elif score > 0:
            message = f"Reduced visibility {miles:.1f} SM"
        else:
            message = f"Visibility {miles:.1f} SM"
        return FactorResult.build(
            name=NAME,
            score=score,
            confidence_penalty=0.0,
            messages=[message],
            details=FactorDetails(
                actual_value=f"{miles:.1f} SM",
                threshold="1 SM severe | 3 SM high | 5 SM moderate",
                impact=_visibility_impact(miles),
            ),
            sources=["metar.visibility"],
        )

    category = metar.flight_category if metar else None
    if category is not None:
        score, message, impact = CATEGORY_SCORES[category]
        return FactorResult.build(
            name=NAME,
            score=score,
            confidence_penalty=CATEGORY_FALLBACK_PENALTY,
            messages=[message],
            details=FactorDetails(
                actual_value=category.value,
                threshold="Based on flight category",
                impact=impact,
            ),
            sources=["metar.flight_category"],
        )

    return FactorResult.build(
        name=NAME,
        score=0,
        confidence_penalty=NO_DATA_PENALTY,
        messages=["Visibility not reported; data unavailable"],
    )
