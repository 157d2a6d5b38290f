# wxrisk/ingestion/common.py
"""
Shared parsing helpers for decoded weather payloads.

Upstream feeds are loose about types (epoch seconds vs ISO strings,
"10+" visibilities, numbers as strings), so individual fields degrade to
None instead of failing the whole payload.
"""

from datetime import datetime, timezone
from fractions import Fraction
from typing import Any, Dict, Optional


class PayloadError(ValueError):
    """Raised when a payload does not have the expected shape."""
    pass


def require_mapping(payload: Any, what: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise PayloadError(f"{what} payload must be an object, got {type(payload).__name__}")
    return payload


def parse_time(value: Any) -> Optional[datetime]:
    """Parse ISO 8601 strings or epoch seconds into an aware UTC datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    try:
        parsed = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def to_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(round(float(value)))
    except (OverflowError, TypeError, ValueError):
        return None


def to_float(value: Any) -> Optional[float]:
    """Parse a number, accepting forms such as "10+", "P6SM" or "1 1/2"."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip().upper().rstrip("+").removesuffix("SM").lstrip("PM")
    if not text:
        return None
    try:
        return float(sum(Fraction(part) for part in text.split()))
    except (ValueError, ZeroDivisionError):
        return None
