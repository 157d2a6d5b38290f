# wxrisk/service.py
"""
Service facade.

Runs the aggregator and messaging builder for one airport or one flight.
Request validation errors (pydantic.ValidationError) and payload shape
errors (PayloadError) surface to the caller before the engine runs; the
engine itself never raises.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .logging import get_logger
from .risk.aggregation import AggregationPolicy, aggregate
from .risk.flight import assess_flight
from .risk.messaging import build_messaging
from .risk.models import AggregatedRiskResult, MessagingBundle, RiskInputs
from .schemas import (
    FlightRiskRequest,
    FlightRiskResponse,
    RiskAssessmentRequest,
    RiskAssessmentResponse,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class RiskAssessment:
    """Aggregated result plus its rendering."""
    result: AggregatedRiskResult
    messaging: MessagingBundle

    def to_dict(self) -> Dict[str, Any]:
        return {
            "result": self.result.to_dict(),
            "messaging": self.messaging.to_dict(),
        }


def assess_weather_risk(
    inputs: RiskInputs,
    policy: Optional[AggregationPolicy] = None,
    parallel: Optional[bool] = None,
) -> RiskAssessment:
    """Aggregate and render one airport snapshot."""
    result = aggregate(inputs, policy=policy, parallel=parallel)
    return RiskAssessment(result=result, messaging=build_messaging(result))


def assess_request(
    payload: Union[Dict[str, Any], RiskAssessmentRequest],
    policy: Optional[AggregationPolicy] = None,
) -> Dict[str, Any]:
    """
    Validate a JSON request and return a JSON-serializable assessment.

    Args:
        payload: Request dict or an already validated request
        policy: Optional aggregation policy override

    Returns:
        {"result": {...}, "messaging": {...}}
    """
    request = (
        payload if isinstance(payload, RiskAssessmentRequest)
        else RiskAssessmentRequest.model_validate(payload)
    )
    assessment = assess_weather_risk(request.to_inputs(), policy=policy)
    response = RiskAssessmentResponse(**assessment.to_dict())
    return response.model_dump()


def assess_flight_request(
    payload: Union[Dict[str, Any], FlightRiskRequest],
    policy: Optional[AggregationPolicy] = None,
) -> Dict[str, Any]:
    """
    Validate a flight request and return a JSON-serializable flight assessment.

    Returns:
        {"flight": {...}, "origin_messaging": {...}, "destination_messaging": {...}}
    """
    request = (
        payload if isinstance(payload, FlightRiskRequest)
        else FlightRiskRequest.model_validate(payload)
    )
    flight = assess_flight(
        request.origin.to_inputs(),
        request.destination.to_inputs(),
        schedule=request.to_schedule(),
        policy=policy,
    )
    response = FlightRiskResponse(
        flight=flight.to_dict(),
        origin_messaging=build_messaging(flight.origin).to_dict(),
        destination_messaging=build_messaging(flight.destination).to_dict(),
    )
    return response.model_dump()
