# wxrisk/settings.py
"""
Engine settings.

Only ambient concerns and the overridable aggregation policy live here.
Nothing in this module fetches data.
"""

import os
from dataclasses import dataclass

# Load .env file
from dotenv import load_dotenv
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Engine configuration."""

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_json: bool = _env_bool("LOG_JSON", "true")

    # Risk profile used when a request does not name one
    default_risk_profile: str = os.getenv("DEFAULT_RISK_PROFILE", "standard")

    # Profile multipliers
    conservative_multiplier: float = float(
        os.getenv("RISK_PROFILE_CONSERVATIVE_MULTIPLIER", "1.15")
    )
    aggressive_multiplier: float = float(
        os.getenv("RISK_PROFILE_AGGRESSIVE_MULTIPLIER", "0.85")
    )

    # Aggregation policy
    secondary_factor_weight: float = float(os.getenv("AGGREGATION_SECONDARY_WEIGHT", "0.25"))
    insufficient_data_penalty_ceiling: float = float(
        os.getenv("INSUFFICIENT_DATA_PENALTY_CEILING", "0.5")
    )

    # Run factor evaluators on a thread pool
    parallel_evaluators: bool = _env_bool("PARALLEL_EVALUATORS", "false")


# Global settings instance
settings = Settings()
