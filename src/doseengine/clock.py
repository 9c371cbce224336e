# src/doseengine/clock.py
"""
Clock values are plain ints: minutes since local midnight (0 = 00:00, 1439 = 23:59).
Callers localize before building them; the engine never converts timezones.
"""
import math
import numbers
import re

from .config import ENGINE_CONFIG
from .errors import InvalidRule

_HHMM = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_clock(text: str) -> int:
    """Convert "HH:MM" into minutes since midnight."""
    m = _HHMM.match(str(text).strip())
    if m is None:
        raise ValueError(f"clock time must look like HH:MM (got {text!r}).")
    h, mins = int(m.group(1)), int(m.group(2))
    if h > 23 or mins > 59:
        raise ValueError(f"clock time out of range (got {text!r}).")
    return h * 60 + mins


def format_clock(minutes: int) -> str:
    """Inverse of parse_clock: 570 -> "09:30"."""
    if not is_valid_clock(minutes):
        raise ValueError(f"clock minutes must be within [0, 1439] (got {minutes}).")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def is_valid_clock(minutes) -> bool:
    return (isinstance(minutes, numbers.Integral) and not isinstance(minutes, bool)
            and ENGINE_CONFIG['clock_min'] <= minutes <= ENGINE_CONFIG['clock_max'])


def hours_to_minutes(hours: float) -> int:
    """
    Turn a caregiver-entered interval in hours into whole minutes.
    Fractions are allowed: 0.1 h -> 6 min, 1.5 h -> 90 min.
    """
    try:
        value = float(hours)
    except (TypeError, ValueError) as e:
        raise InvalidRule(f"interval in hours must be a number (got {hours!r}).") from e
    if not math.isfinite(value) or not (value > 0):
        raise InvalidRule(f"interval in hours must be a finite number > 0 (got {hours!r}).")
    try:
        minutes = int(round(value * 60))
    except OverflowError as e:
        raise InvalidRule(f"interval of {hours!r} h is too large.") from e
    if minutes <= 0:
        raise InvalidRule(f"interval of {hours} h rounds to 0 minutes.")
    return minutes
