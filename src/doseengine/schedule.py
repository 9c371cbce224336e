# src/doseengine/schedule.py
from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from .clock import format_clock, is_valid_clock
from .errors import InvalidRule
from .types import DoseSlot, DosingRule, Explicit, Interval

log = logging.getLogger(__name__)


def compile_rule(rule: DosingRule) -> DoseSlot:
    """
    Turn a dosing rule into the day's dose slots.

    The result is always ascending, free of duplicates and non-empty, whatever
    the rule shape, so callers can treat every DoseSlot the same way.
    Examples:
      - Explicit((540, 480, 540))        -> (480, 540)
      - Interval(90, 480, 840)           -> (480, 570, 660, 750, 840)
    """
    if isinstance(rule, Explicit):
        slots = _compile_explicit(rule.times)
    elif isinstance(rule, Interval):
        slots = _compile_interval(rule.every_minutes, rule.window_start, rule.window_end)
    else:
        raise InvalidRule(f"unknown dosing rule type: {type(rule).__name__}.")
    log.debug("compiled %r into %d slot(s)", rule, len(slots))
    return slots


def explicit(times: Sequence[int]) -> Explicit:
    """Build and validate an Explicit rule."""
    rule = Explicit(times=tuple(times))
    _compile_explicit(rule.times)
    return rule


def every_n_minutes(every_minutes: int, window_start: int, window_end: int) -> Interval:
    """
    Build and validate an Interval rule, e.g. every 6 h from 08:00 until 22:00:
      every_n_minutes(360, 480, 1320)
    """
    rule = Interval(every_minutes=every_minutes, window_start=window_start, window_end=window_end)
    _compile_interval(every_minutes, window_start, window_end)
    return rule


def daily_dose_count(rule: DosingRule) -> int:
    return len(compile_rule(rule))


def schedule_summary(slots: DoseSlot) -> str:
    """Short card text: "1 dose (08:00)" or "3 doses (08:00, 20:00)" with first and last slot."""
    if len(slots) == 0:
        return "No schedule defined"
    if len(slots) == 1:
        return f"1 dose ({format_clock(slots[0])})"
    return f"{len(slots)} doses ({format_clock(slots[0])}, {format_clock(slots[-1])})"


def _compile_explicit(times: Sequence[int]) -> DoseSlot:
    if len(times) == 0:
        raise InvalidRule("explicit schedule needs at least one time.")
    for t in times:
        _validate_clock("time", t)
    # np.unique sorts and drops exact duplicates in one go
    return tuple(int(t) for t in np.unique(np.asarray(times, dtype=np.int64)))


def _compile_interval(every_minutes: int, window_start: int, window_end: int) -> DoseSlot:
    _validate_positive_int("every_minutes", every_minutes)
    _validate_clock("window_start", window_start)
    _validate_clock("window_end", window_end)
    if window_end < window_start:
        raise InvalidRule(
            f"window_end must be >= window_start "
            f"(got {format_clock(window_end)} < {format_clock(window_start)})."
        )
    # window_start, +every, +2*every, ... <= window_end (window_start is always kept)
    slots = np.arange(window_start, window_end + 1, every_minutes, dtype=np.int64)
    return tuple(int(t) for t in slots)


# --------------------------
# Small input validators
# --------------------------
def _validate_clock(name: str, x: int) -> None:
    if not is_valid_clock(x):
        raise InvalidRule(f"{name} must be a whole minute within [0, 1439] (got {x}).")

def _validate_positive_int(name: str, x: int) -> None:
    if isinstance(x, bool) or not (isinstance(x, int) and x > 0):
        raise InvalidRule(f"{name} must be a positive integer (got {x}).")
