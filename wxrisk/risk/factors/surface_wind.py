# wxrisk/risk/factors/surface_wind.py
"""
Surface wind factor.

Scores the sustained wind speed and adds a gust bonus when gusts exceed
the sustained speed by 10 kt or more. A report with only a gust value is
scored on the gust.
"""

from ..models import FactorDetails, FactorResult, RiskInputs

NAME = "surface_wind"

# (lower bound inclusive in kt, score), evaluated in order
WIND_THRESHOLDS = [
    (35, 80),
    (25, 55),
    (15, 30),
]

GUST_SPREAD_KT = 10
GUST_BONUS = 15
NO_DATA_PENALTY = 0.2


def score_wind_speed(speed_kt: int) -> int:
    for bound, score in WIND_THRESHOLDS:
        if speed_kt >= bound:
            return score
    return 0


def _wind_impact(score: int) -> str:
    if score >= 70:
        return "Strong or gusty winds - crosswind limits and wind shear likely to restrict operations"
    if score >= 40:
        return "Moderate winds - check crosswind components against aircraft limits"
    if score > 0:
        return "Light to moderate winds - minor handling considerations"
    return "Winds within normal operating limits"


def evaluate_surface_wind(inputs: RiskInputs) -> FactorResult:
    """Score sustained wind and gust spread."""
    wind = inputs.metar.wind if inputs.metar else None
    sustained = wind.speed_kt if wind else None
    gust = wind.gust_kt if wind else None

    if sustained is None and gust is None:
        return FactorResult.build(
            name=NAME,
            score=0,
            confidence_penalty=NO_DATA_PENALTY,
            messages=["Wind not reported; data unavailable"],
        )

    speed = sustained if sustained is not None else gust
    score = score_wind_speed(speed)
    messages = []

    direction = wind.direction_deg
    heading = f"{int(direction):03d}°" if direction is not None else "VRB"
    if gust is not None and sustained is not None:
        messages.append(f"Wind {heading} {sustained} kt gusting {gust} kt")
    elif sustained == 0:
        messages.append("Calm wind")
    else:
        messages.append(f"Wind {heading} {speed} kt")

    spread = gust - sustained if gust is not None and sustained is not None else 0
    if spread >= GUST_SPREAD_KT:
        score = min(100, score + GUST_BONUS)
        messages.append(f"Gust spread {spread} kt")

    actual = f"{speed} kt" if gust is None or sustained is None else f"{sustained}G{gust} kt"
    return FactorResult.build(
        name=NAME,
        score=score,
        confidence_penalty=0.0,
        messages=messages,
        details=FactorDetails(
            actual_value=actual,
            threshold="35kt severe | 25kt high | 15kt moderate | gust spread 10kt",
            impact=_wind_impact(score),
        ),
        sources=["metar.wind"],
    )
