"""
Formatting helpers.

Rounding, timestamp parsing and label formatting shared by the
normalization and aggregation stages.
"""

import math
import sys
from typing import Optional

import pandas as pd

import config.settings as settings

# Relative words pandas resolves against the wall clock
RELATIVE_DATE_WORDS = frozenset({"now", "today"})


def round_to(value: float, precision: int = settings.RATING_PRECISION) -> float:
    """
    Round half-up to a fixed number of decimals.

    The epsilon nudge keeps values like 1.005 (stored as 1.00499...) rounding
    up, so rounding an already-rounded value is a no-op. Values too large
    to scale are returned unchanged.
    """
    factor = 10 ** precision
    scaled = (value + sys.float_info.epsilon) * factor + 0.5
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled) / factor


def parse_timestamp(value: Optional[str]) -> Optional[pd.Timestamp]:
    """
    Parse a date/time string into a UTC timestamp.

    Timezone-less inputs are taken as UTC. Returns None when the value is
    missing, relative ("now") or not parseable.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    if value.strip().lower() in RELATIVE_DATE_WORDS:
        return None

    try:
        parsed = pd.to_datetime(value, utc=True, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None

    if parsed is None or pd.isna(parsed):
        return None
    return parsed


def to_iso_string(value: str) -> str:
    """
    Canonical timestamp string (UTC, millisecond precision, Z suffix).

    Unparseable input is returned unchanged.
    """
    parsed = parse_timestamp(value)
    if parsed is None:
        return value
    return format_timestamp(parsed)


def format_timestamp(timestamp: pd.Timestamp) -> str:
    """Format a UTC timestamp as e.g. 2024-08-21T22:45:14.000Z."""
    return (
        timestamp.strftime("%Y-%m-%dT%H:%M:%S")
        + f".{timestamp.microsecond // 1000:03d}Z"
    )


def month_period(timestamp: pd.Timestamp) -> str:
    """Calendar month of a UTC timestamp as YYYY-MM."""
    return f"{timestamp.year:04d}-{timestamp.month:02d}"


def to_title_case(text: str) -> str:
    """Capitalize the first letter of each space-separated word."""
    words = [word for word in text.split(" ") if word]
    return " ".join(word[0].upper() + word[1:] for word in words)


def category_label(key: str) -> str:
    """Display label for a category key (check_in -> Check In)."""
    return to_title_case(key.replace("_", " "))
