# wxrisk/risk/aggregation.py
"""
Risk aggregation.

Fans out to all six factor evaluators, applies the risk profile, and
combines the factor scores into an overall score, tier and status.

The combination rule and the insufficient-data ceiling are an explicit,
overridable policy (AggregationPolicy):

    overall = min(100, max(scores) + secondary_weight * second_highest(scores))

A single severe factor is never diluted by averaging, and a second
significant factor compounds it.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..logging import get_logger
from ..settings import settings
from .factors import FACTOR_EVALUATORS
from .models import (
    AggregatedRiskResult,
    AssessmentStatus,
    FactorResult,
    RiskInputs,
    RiskProfile,
    clamp_score,
    tier_for_score,
)
from .profiles import apply_risk_profile, default_multipliers

logger = get_logger(__name__)

# Factors whose absence means there is no current observation to assess.
MAJOR_FACTORS = ("ceiling_clouds", "surface_wind", "visibility")

# Sources that only carry the coarse flight category, not a measured value.
FALLBACK_SOURCES = frozenset({"metar.flight_category"})

# Penalty assigned to a factor whose evaluator failed unexpectedly.
FAILED_EVALUATION_PENALTY = 1.0

Evaluator = Callable[[RiskInputs], FactorResult]


@dataclass(frozen=True)
class AggregationPolicy:
    """Tunable aggregation parameters."""
    secondary_weight: float = 0.25
    insufficient_data_penalty_ceiling: float = 0.5
    profile_multipliers: Dict[RiskProfile, float] = field(default_factory=default_multipliers)

    @classmethod
    def from_settings(cls) -> "AggregationPolicy":
        return cls(
            secondary_weight=settings.secondary_factor_weight,
            insufficient_data_penalty_ceiling=settings.insufficient_data_penalty_ceiling,
            profile_multipliers=default_multipliers(),
        )


def combine_scores(scores: Sequence[int], secondary_weight: float = 0.25) -> int:
    """
    Combine factor scores into the overall score.

    Args:
        scores: Factor scores (0-100)
        secondary_weight: Share of the second-highest score added to the highest

    Returns:
        Overall score (0-100), never below the highest factor score
    """
    if not scores:
        return 0
    ordered = sorted(scores, reverse=True)
    top = ordered[0]
    second = ordered[1] if len(ordered) > 1 else 0
    return clamp_score(min(100, top + secondary_weight * second))


def has_primary_data(result: FactorResult) -> bool:
    """True when the factor used a measured value, not only the category fallback."""
    return bool(set(result.sources) - FALLBACK_SOURCES)


def determine_status(
    factors: Sequence[FactorResult],
    penalty_ceiling: float,
) -> Tuple[AssessmentStatus, float]:
    """
    Decide whether the assessment is reliable.

    Insufficient when the mean confidence penalty exceeds the ceiling, or
    when none of the major factors had primary (measured) data.

    Returns:
        (status, mean confidence penalty)
    """
    mean_penalty = (
        round(sum(f.confidence_penalty for f in factors) / len(factors), 4)
        if factors else 1.0
    )
    major = [f for f in factors if f.name in MAJOR_FACTORS]
    major_missing = bool(major) and not any(has_primary_data(f) for f in major)

    if mean_penalty > penalty_ceiling or major_missing:
        return AssessmentStatus.INSUFFICIENT_DATA, mean_penalty
    return AssessmentStatus.OK, mean_penalty


def _failed_result(name: str) -> FactorResult:
    return FactorResult.build(
        name=name,
        score=0,
        confidence_penalty=FAILED_EVALUATION_PENALTY,
        messages=[f"{name.replace('_', ' ').capitalize()} evaluation failed; data unavailable"],
    )


def _run_evaluator(name: str, evaluator: Evaluator, inputs: RiskInputs) -> FactorResult:
    """Run one evaluator; an unexpected error degrades to a no-data result."""
    try:
        return evaluator(inputs)
    except Exception:
        logger.exception("factor_evaluation_failed", factor=name, icao=inputs.icao)
        return _failed_result(name)


def evaluate_factors(
    inputs: RiskInputs,
    parallel: bool = False,
    evaluators: Sequence[Tuple[str, Evaluator]] = FACTOR_EVALUATORS,
) -> List[FactorResult]:
    """
    Invoke every evaluator against the same snapshot.

    Results are returned in evaluator order regardless of completion order.
    """
    if not parallel:
        return [_run_evaluator(name, fn, inputs) for name, fn in evaluators]

    # Evaluators are pure, so a thread pool is only a latency optimization.
    with ThreadPoolExecutor(max_workers=len(evaluators)) as executor:
        futures = [
            executor.submit(_run_evaluator, name, fn, inputs)
            for name, fn in evaluators
        ]
        return [future.result() for future in futures]


def aggregate(
    inputs: RiskInputs,
    policy: Optional[AggregationPolicy] = None,
    parallel: Optional[bool] = None,
    evaluators: Sequence[Tuple[str, Evaluator]] = FACTOR_EVALUATORS,
) -> AggregatedRiskResult:
    """
    Assess weather risk for one airport snapshot.

    Never raises: missing data lowers confidence instead.

    Args:
        inputs: Decoded weather snapshot
        policy: Aggregation policy (settings defaults if not provided)
        parallel: Run evaluators on a thread pool (settings default if None)
        evaluators: Ordered evaluator table

    Returns:
        AggregatedRiskResult with exactly one entry per evaluator
    """
    if policy is None:
        policy = AggregationPolicy.from_settings()
    if parallel is None:
        parallel = settings.parallel_evaluators

    raw = evaluate_factors(inputs, parallel=parallel, evaluators=evaluators)
    factors = tuple(
        apply_risk_profile(result, inputs.risk_profile, policy.profile_multipliers)
        for result in raw
    )

    overall = combine_scores([f.score for f in factors], policy.secondary_weight)
    tier = tier_for_score(overall)
    status, mean_penalty = determine_status(factors, policy.insufficient_data_penalty_ceiling)

    result = AggregatedRiskResult(
        overall_score=overall,
        tier=tier,
        status=status,
        factor_breakdown=factors,
        risk_profile=inputs.risk_profile,
        mean_confidence_penalty=mean_penalty,
        icao=inputs.icao or (inputs.metar.icao if inputs.metar and inputs.metar.icao else None),
    )

    logger.info(
        "risk_assessed",
        icao=result.icao,
        overall_score=overall,
        tier=tier.value,
        status=status.value,
        risk_profile=inputs.risk_profile.value,
        mean_confidence_penalty=mean_penalty,
        factor_scores={f.name: f.score for f in factors},
    )

    return result
