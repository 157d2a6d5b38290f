# wxrisk/risk/factors/hazards.py
"""
Hazard advisories and pilot reports factor.

Active advisories contribute their severity weight (summed, capped at 100).
The worst pilot report adds half of its weight on top, with the combined
score capped at 100.
"""

from typing import List, Optional

from ..models import (
    FactorDetails,
    FactorResult,
    HazardAdvisory,
    HazardSeverity,
    PIREP_SEVERITY_WEIGHTS,
    PilotReport,
    RiskInputs,
    Severity,
    Timeframe,
    as_utc,
    severity_for_score,
)

NAME = "hazard_advisories"

HAZARD_SEVERITY_WEIGHTS = {
    HazardSeverity.EXTREME: 50,
    HazardSeverity.HIGH: 40,
    HazardSeverity.MODERATE: 25,
    HazardSeverity.LOW: 10,
    HazardSeverity.INFO: 5,
    HazardSeverity.UNKNOWN: 5,
}

MAX_LISTED_HAZARDS = 3
NO_DATA_PENALTY = 0.15


def active_hazards(inputs: RiskInputs) -> List[HazardAdvisory]:
    return [hazard for hazard in inputs.hazards if hazard.is_active(inputs.now)]


def advisory_score(hazards: List[HazardAdvisory]) -> int:
    return min(100, sum(HAZARD_SEVERITY_WEIGHTS[h.severity] for h in hazards))


def pirep_contribution(pireps) -> int:
    """Half the weight of the worst pilot report, 0 without reports."""
    if not pireps:
        return 0
    worst = max(PIREP_SEVERITY_WEIGHTS[report.worst_severity] for report in pireps)
    return worst // 2


def _timeframe(hazards: List[HazardAdvisory]) -> Optional[Timeframe]:
    if not hazards:
        return None
    starts = [as_utc(h.valid_from) for h in hazards if h.valid_from]
    ends = [as_utc(h.valid_to) for h in hazards if h.valid_to]
    return Timeframe(
        valid_from=min(starts) if starts else None,
        valid_to=max(ends) if ends else None,
    )


def _impact(severity: Severity) -> str:
    if severity == Severity.HIGH:
        return "Severe advisories in effect for planned operations"
    if severity == Severity.MODERATE:
        return "Advisories present; increased vigilance recommended"
    return "No significant advisories"


def evaluate_hazard_advisories(inputs: RiskInputs) -> FactorResult:
    """Score active advisories and nearby pilot reports."""
    pireps: List[PilotReport] = list(inputs.pireps)

    if not inputs.hazards and not pireps:
        return FactorResult.build(
            name=NAME,
            score=0,
            confidence_penalty=NO_DATA_PENALTY,
            messages=["No hazard advisories or pilot reports available"],
        )

    active = active_hazards(inputs)
    score = min(100, advisory_score(active) + pirep_contribution(pireps))

    messages = []
    sources = []
    if inputs.hazards:
        sources.append("hazards")
    if pireps:
        sources.append("pireps")

    if active:
        listed = ", ".join(h.label for h in active[:MAX_LISTED_HAZARDS])
        extra = len(active) - MAX_LISTED_HAZARDS
        suffix = f" (+{extra} more)" if extra > 0 else ""
        messages.append(f"Active advisories: {listed}{suffix}")
    else:
        messages.append("No active hazard advisories nearby")

    if pireps:
        severe = [report for report in pireps if report.is_severe]
        if severe:
            messages.append(f"{len(severe)} severe pilot reports in the vicinity")
        else:
            messages.append(f"{len(pireps)} pilot reports in the vicinity")

    return FactorResult.build(
        name=NAME,
        score=score,
        confidence_penalty=0.0,
        messages=messages,
        details=FactorDetails(
            actual_value=f"{len(active)} hazards, {len(pireps)} PIREPs",
            threshold="Active SIGMET/CWA/G-AIRMET or severe PIREPs",
            impact=_impact(severity_for_score(score)),
        ),
        sources=sources,
        timeframe=_timeframe(active),
    )
