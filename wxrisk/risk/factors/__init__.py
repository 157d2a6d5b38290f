# Factor evaluators - independent, pure scorers over a RiskInputs snapshot
from .ceiling_clouds import evaluate_ceiling_clouds
from .surface_wind import evaluate_surface_wind
from .precipitation import evaluate_precipitation, extract_weather_groups, PRECIPITATION_RULES
from .visibility import evaluate_visibility
from .hazards import evaluate_hazard_advisories
from .trend_stability import evaluate_trend_stability

# Fixed evaluation order; factor_breakdown follows it.
FACTOR_EVALUATORS = (
    ("ceiling_clouds", evaluate_ceiling_clouds),
    ("surface_wind", evaluate_surface_wind),
    ("precipitation", evaluate_precipitation),
    ("visibility", evaluate_visibility),
    ("hazard_advisories", evaluate_hazard_advisories),
    ("trend_stability", evaluate_trend_stability),
)

FACTOR_NAMES = tuple(name for name, _ in FACTOR_EVALUATORS)

__all__ = [
    "evaluate_ceiling_clouds",
    "evaluate_surface_wind",
    "evaluate_precipitation",
    "evaluate_visibility",
    "evaluate_hazard_advisories",
    "evaluate_trend_stability",
    "extract_weather_groups",
    "PRECIPITATION_RULES",
    "FACTOR_EVALUATORS",
    "FACTOR_NAMES",
]
