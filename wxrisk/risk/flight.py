# wxrisk/risk/flight.py
"""
Flight-level risk: origin and destination assessments combined.

The flight phase decides how much each end of the flight matters. Before
departure the origin dominates, once airborne the destination does.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from ..logging import get_logger
from .aggregation import AggregationPolicy, aggregate
from .models import (
    AggregatedRiskResult,
    AssessmentStatus,
    RiskInputs,
    RiskTier,
    as_utc,
    clamp_score,
    tier_for_score,
)

logger = get_logger(__name__)

PLANNING_HORIZON_HOURS = 24
COMBINED_CONFIDENCE_FACTOR = 0.95


class FlightPhase(Enum):
    PREFLIGHT = "preflight"
    PLANNING = "planning"
    ENROUTE = "enroute"
    ARRIVAL = "arrival"


class AlertLevel(Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


# (origin weight, destination weight)
PHASE_WEIGHTS = {
    FlightPhase.PREFLIGHT: (0.50, 0.50),
    FlightPhase.PLANNING: (0.60, 0.40),
    FlightPhase.ENROUTE: (0.30, 0.70),
    FlightPhase.ARRIVAL: (0.25, 0.75),
}


@dataclass(frozen=True)
class FlightSchedule:
    departure_utc: Optional[datetime] = None
    arrival_utc: Optional[datetime] = None


@dataclass(frozen=True)
class FlightRiskResult:
    """Combined origin/destination verdict."""
    phase: FlightPhase
    origin: AggregatedRiskResult
    destination: AggregatedRiskResult
    combined_score: int
    combined_tier: RiskTier
    alert_level: AlertLevel
    combined_confidence: float
    status: AssessmentStatus
    origin_weight: float
    destination_weight: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phase": self.phase.value,
            "combinedScore": self.combined_score,
            "combinedTier": self.combined_tier.value,
            "alertLevel": self.alert_level.value,
            "combinedConfidence": self.combined_confidence,
            "status": self.status.value,
            "weights": {"origin": self.origin_weight, "destination": self.destination_weight},
            "origin": self.origin.to_dict(),
            "destination": self.destination.to_dict(),
        }


def determine_flight_phase(
    schedule: Optional[FlightSchedule],
    now: Optional[datetime],
) -> FlightPhase:
    """
    Determine the flight phase at the reference time.

    - No departure time (or no reference time): preflight
    - More than 24h before departure: preflight
    - Before departure: planning
    - After departure, before arrival (or no arrival known): enroute
    - After arrival: arrival
    """
    if schedule is None or schedule.departure_utc is None or now is None:
        return FlightPhase.PREFLIGHT

    now = as_utc(now)
    hours_to_departure = (as_utc(schedule.departure_utc) - now).total_seconds() / 3600
    if hours_to_departure > PLANNING_HORIZON_HOURS:
        return FlightPhase.PREFLIGHT
    if hours_to_departure > 0:
        return FlightPhase.PLANNING
    if schedule.arrival_utc is None or now <= as_utc(schedule.arrival_utc):
        return FlightPhase.ENROUTE
    return FlightPhase.ARRIVAL


def alert_level_for(origin: AggregatedRiskResult, destination: AggregatedRiskResult) -> AlertLevel:
    """Worst case of the two airports."""
    tiers = (origin.tier, destination.tier)
    if RiskTier.HIGH_DISRUPTION in tiers:
        return AlertLevel.RED
    if RiskTier.MONITOR in tiers:
        return AlertLevel.YELLOW
    return AlertLevel.GREEN


def combine_flight(
    origin: AggregatedRiskResult,
    destination: AggregatedRiskResult,
    phase: FlightPhase,
) -> FlightRiskResult:
    """Combine two airport assessments with phase weights."""
    origin_weight, destination_weight = PHASE_WEIGHTS[phase]
    combined = clamp_score(
        origin.overall_score * origin_weight + destination.overall_score * destination_weight
    )
    confidence = round(min(origin.confidence, destination.confidence) * COMBINED_CONFIDENCE_FACTOR, 4)

    insufficient = AssessmentStatus.INSUFFICIENT_DATA in (origin.status, destination.status)
    return FlightRiskResult(
        phase=phase,
        origin=origin,
        destination=destination,
        combined_score=combined,
        combined_tier=tier_for_score(combined),
        alert_level=alert_level_for(origin, destination),
        combined_confidence=confidence,
        status=AssessmentStatus.INSUFFICIENT_DATA if insufficient else AssessmentStatus.OK,
        origin_weight=origin_weight,
        destination_weight=destination_weight,
    )


def assess_flight(
    origin_inputs: RiskInputs,
    destination_inputs: RiskInputs,
    schedule: Optional[FlightSchedule] = None,
    policy: Optional[AggregationPolicy] = None,
) -> FlightRiskResult:
    """
    Assess weather risk for a whole flight.

    The reference time is taken from the origin snapshot.

    Args:
        origin_inputs: Snapshot for the departure airport
        destination_inputs: Snapshot for the arrival airport
        schedule: Optional departure/arrival times
        policy: Aggregation policy shared by both airports

    Returns:
        FlightRiskResult
    """
    phase = determine_flight_phase(schedule, origin_inputs.now)
    origin = aggregate(origin_inputs, policy=policy)
    destination = aggregate(destination_inputs, policy=policy)
    result = combine_flight(origin, destination, phase)

    logger.info(
        "flight_risk_assessed",
        origin=origin.icao,
        destination=destination.icao,
        phase=phase.value,
        combined_score=result.combined_score,
        alert_level=result.alert_level.value,
    )
    return result
