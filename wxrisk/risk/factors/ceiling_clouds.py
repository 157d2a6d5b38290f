# wxrisk/risk/factors/ceiling_clouds.py
"""
Ceiling / cloud base factor.

Primary signal is the lowest BKN/OVC/VV layer base. When no such base is
reported the METAR flight category is used as a coarse fallback.
"""

from ..models import (
    FactorDetails,
    FactorResult,
    FlightCategory,
    RiskInputs,
)

NAME = "ceiling_clouds"

# (upper bound exclusive in ft AGL, score), evaluated in order
CEILING_THRESHOLDS = [
    (500, 90),
    (1000, 75),
    (2000, 55),
    (3000, 30),
]

CATEGORY_SCORES = {
    FlightCategory.LIFR: (85, "LIFR: Ceiling severely restricted", "Very low visibility or ceiling - IFR operations required"),
    FlightCategory.IFR: (70, "IFR: Ceiling reduced", "Reduced visibility or ceiling - instrument operations required"),
    FlightCategory.MVFR: (45, "MVFR: Marginal ceiling", "Marginal visibility or ceiling - caution advised"),
    FlightCategory.VFR: (10, "VFR: Good ceiling", "Ceiling adequate for normal operations"),
}

CATEGORY_FALLBACK_PENALTY = 0.05
NO_DATA_PENALTY = 0.2


def score_ceiling(feet: int) -> int:
    for bound, score in CEILING_THRESHOLDS:
        if feet < bound:
            return score
    return 0


def _ceiling_impact(feet: int) -> str:
    if feet < 500:
        return "Critical ceiling - severely restricts operations, IFR approach required"
    if feet < 1000:
        return "Low ceiling requires instrument approach and may prevent VFR traffic pattern work"
    if feet < 2000:
        return "Marginal ceiling affects VFR operations and traffic pattern altitude"
    return "Ceiling adequate for normal operations"


def evaluate_ceiling_clouds(inputs: RiskInputs) -> FactorResult:
    """Score the lowest broken/overcast layer."""
    metar = inputs.metar
    ceiling = metar.ceiling_feet if metar else None

    if ceiling is not None:
        score = score_ceiling(ceiling)
        if ceiling < 500:
            message = f"Very low ceiling {ceiling} ft AGL"
        elif score > 0:
            message = f"Low ceiling {ceiling} ft AGL"
        else:
            message = f"Ceiling {ceiling} ft AGL"
        return FactorResult.build(
            name=NAME,
            score=score,
            confidence_penalty=0.0,
            messages=[message],
            details=FactorDetails(
                actual_value=f"{ceiling} ft AGL",
                threshold="500ft severe | 1000ft high | 2000ft moderate",
                impact=_ceiling_impact(ceiling),
            ),
            sources=["metar.clouds"],
        )

    # No broken/overcast/obscured base reported: coarse category fallback
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
        messages=["Ceiling not reported; data unavailable"],
    )
