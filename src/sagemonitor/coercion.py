"""
Loose value coercion for CSV-sourced telemetry.

CSV cells arrive as strings (or None for empty cells). The helpers here turn
them into numbers and instants using the same rules as the browser dashboard
that produced the original uploads: numbers are read from their leading
numeric prefix, and anything unreadable becomes zero rather than NaN.
"""

import logging
import math
import re
from datetime import datetime, timezone
from typing import Any, Optional

logger = logging.getLogger(__name__)

# Leading decimal literal, as accepted by JavaScript's parseFloat.
_NUMERIC_PREFIX = re.compile(r"^\s*([+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")

# Bare integers or decimals are epoch milliseconds (the LLM exporter format).
_EPOCH_PATTERN = re.compile(r"^\s*[+-]?[0-9]+(?:\.[0-9]+)?\s*$")


def parse_number(value: Any) -> Optional[float]:
    """
    Parse a loosely typed value into a finite float.

    Args:
        value: Raw cell value (str, int, float or None)

    Returns:
        The parsed float, or None when no finite number can be read.

    Examples:
        >>> parse_number("12.5")
        12.5
        >>> parse_number("42ms")
        42.0
        >>> parse_number("n/a") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None

    match = _NUMERIC_PREFIX.match(str(value))
    if not match:
        return None
    number = float(match.group(1))
    return number if math.isfinite(number) else None


def coerce_float(value: Any, default: float = 0.0) -> float:
    """Parse ``value`` or fall back to ``default``."""
    number = parse_number(value)
    return default if number is None else number


def coerce_int(value: Any, default: int = 0) -> int:
    """Parse ``value`` and truncate toward zero, falling back to ``default``."""
    number = parse_number(value)
    return default if number is None else int(number)


def coerce_str(value: Any, default: str = "") -> str:
    """Stringify ``value``; None and empty strings take ``default``."""
    if value is None:
        return default
    text = str(value)
    return text if text else default


def utc_now_iso() -> str:
    """Current UTC wall clock in ``2025-01-31T12:00:00.000Z`` form."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def parse_timestamp(value: Any) -> Optional[float]:
    """
    Parse a timestamp into epoch milliseconds.

    Accepts datetimes, numbers and numeric strings (epoch milliseconds) and
    ISO-8601 strings. Naive ISO strings are read as UTC.

    Returns:
        Epoch milliseconds, or None when the value is not a readable instant.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        moment = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
        return moment.timestamp() * 1000.0
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None

    text = str(value).strip()
    if not text:
        return None
    if _EPOCH_PATTERN.match(text):
        return float(text)

    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        logger.debug(f"Unreadable timestamp: {value!r}")
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.timestamp() * 1000.0


def timestamp_or_zero(value: Any) -> float:
    """Epoch milliseconds for ordering; unreadable instants sort as the epoch."""
    parsed = parse_timestamp(value)
    return 0.0 if parsed is None else parsed
