# wxrisk/risk/factors/precipitation.py
"""
Precipitation and hazardous weather codes factor.

Weather groups are read from the raw METAR text and matched against an
ordered rule table. Precedence is freezing > thunderstorm > snow > fog,
and the score is the maximum matched rule, never a sum.
"""

import re
from dataclasses import dataclass
from typing import Callable, FrozenSet, List, Optional

from ..models import FactorDetails, FactorResult, RiskInputs

NAME = "precipitation"

NO_DATA_PENALTY = 0.15

# Two-letter descriptor and phenomenon codes allowed in a present-weather group
_WX_CODES = (
    "MI|PR|BC|DR|BL|SH|TS|FZ|"
    "DZ|RA|SN|SG|IC|PL|GR|GS|UP|"
    "BR|FG|FU|VA|DU|SA|HZ|PY|"
    "PO|SQ|FC|SS|DS"
)
WX_GROUP_PATTERN = re.compile(rf"^(?P<intensity>[+-]|VC)?(?P<body>(?:{_WX_CODES})+)$")


@dataclass(frozen=True)
class WeatherGroup:
    """One present-weather group such as +TSRA or -FZDZ."""
    token: str
    intensity: Optional[str]
    codes: FrozenSet[str]


@dataclass(frozen=True)
class PrecipitationRule:
    label: str
    score: int
    message: str
    impact: str
    matches: Callable[[WeatherGroup], bool]


# Ordered by precedence
PRECIPITATION_RULES: List[PrecipitationRule] = [
    PrecipitationRule(
        label="Freezing Rain",
        score=80,
        message="Freezing precipitation reported",
        impact="Icing hazard - severe structural risk, may require immediate diversion",
        matches=lambda g: "PL" in g.codes or ("FZ" in g.codes and bool(g.codes & {"RA", "DZ"})),
    ),
    PrecipitationRule(
        label="Thunderstorms",
        score=70,
        message="Thunderstorms or heavy rain in vicinity",
        impact="Thunderstorm activity creates turbulence, wind shear, and lightning hazards",
        matches=lambda g: "TS" in g.codes or (g.intensity == "+" and "RA" in g.codes),
    ),
    PrecipitationRule(
        label="Snow",
        score=60,
        message="Snow in vicinity",
        impact="Snow accumulation affects runway braking action and visibility",
        matches=lambda g: "SN" in g.codes,
    ),
    PrecipitationRule(
        label="Fog/Mist",
        score=50,
        message="Fog/mist reducing visibility",
        impact="Fog and mist significantly reduce visibility for visual operations",
        matches=lambda g: bool(g.codes & {"FG", "BR"}),
    ),
]


def extract_weather_groups(raw_text: str) -> List[WeatherGroup]:
    """
    Pull present-weather groups out of a raw METAR.

    Everything from RMK onward is ignored, and tokens such as station
    identifiers or cloud groups never match the group pattern.
    """
    groups = []
    for token in raw_text.upper().split():
        if token == "RMK":
            break
        match = WX_GROUP_PATTERN.match(token)
        if not match:
            continue
        body = match.group("body")
        codes = frozenset(body[i:i + 2] for i in range(0, len(body), 2))
        groups.append(WeatherGroup(token=token, intensity=match.group("intensity"), codes=codes))
    return groups


def evaluate_precipitation(inputs: RiskInputs) -> FactorResult:
    """Score the worst hazardous weather code in the raw METAR."""
    raw = inputs.metar.raw_text if inputs.metar else None
    if not raw or not raw.strip():
        return FactorResult.build(
            name=NAME,
            score=0,
            confidence_penalty=NO_DATA_PENALTY,
            messages=["Precipitation data unavailable"],
        )

    groups = extract_weather_groups(raw)
    matched = [
        rule for rule in PRECIPITATION_RULES
        if any(rule.matches(group) for group in groups)
    ]

    if not matched:
        return FactorResult.build(
            name=NAME,
            score=0,
            confidence_penalty=0.0,
            messages=["No significant precipitation"],
            details=FactorDetails(
                actual_value=" ".join(g.token for g in groups) or "None",
                threshold="FZRA severe | TS high | SN/FG moderate",
                impact="No precipitation hazards affecting operations",
            ),
            sources=["metar.raw_text"],
        )

    worst = matched[0]
    return FactorResult.build(
        name=NAME,
        score=max(rule.score for rule in matched),
        confidence_penalty=0.0,
        messages=[rule.message for rule in matched],
        details=FactorDetails(
            actual_value=", ".join(rule.label for rule in matched),
            threshold="FZRA severe | TS high | SN/FG moderate",
            impact=worst.impact,
        ),
        sources=["metar.raw_text"],
    )
