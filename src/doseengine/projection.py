# src/doseengine/projection.py
from __future__ import annotations

import logging
from datetime import date

import numpy as np

from .config import ENGINE_CONFIG
from .errors import InvalidRange, OccurrenceCeilingExceeded
from .schedule import compile_rule
from .types import Medication, Occurrence, effective_end

log = logging.getLogger(__name__)


def project(medication: Medication, range_start: date, range_end: date) -> list[Occurrence]:
    """
    Expand a medication's daily slots over a calendar range.

    The requested range is clamped to [start_date, effective_end(medication)];
    a range that misses it entirely gives an empty list. Output is ordered by
    date, then by slot, and depends only on the arguments.

    Raises
    ------
    InvalidRange
        range_end is before range_start.
    OccurrenceCeilingExceeded
        the clamped range would produce more occurrences than the engine allows.
    """
    if range_end < range_start:
        raise InvalidRange(f"range_end {range_end} is before range_start {range_start}.")

    lo = max(range_start, medication.start_date)
    hi = min(range_end, effective_end(medication))
    if hi < lo:
        log.debug("range %s..%s misses medication %s entirely", range_start, range_end, medication.id)
        return []

    # Slots don't depend on the date, compile once for the whole range
    slots = compile_rule(medication.rule)
    # Ceiling is checked on the day count before any dates are materialized
    n_days = (hi - lo).days + 1
    total = n_days * len(slots)
    ceiling = ENGINE_CONFIG['occurrence_ceiling']
    if total > ceiling:
        log.warning("medication %s would project %d occurrences (ceiling %d)", medication.id, total, ceiling)
        raise OccurrenceCeilingExceeded(
            f"{n_days} day(s) x {len(slots)} slot(s) = {total} occurrences exceeds {ceiling}."
        )

    log.debug("projecting medication %s over %s..%s (%d occurrences)", medication.id, lo, hi, total)
    days = _calendar_days(lo, hi)
    return [Occurrence(date=d, slot=s) for d in days for s in slots]


def project_schedule(medication: Medication) -> list[Occurrence]:
    """Every occurrence from start_date through the effective end date."""
    end = effective_end(medication)
    if end < medication.start_date:
        return []
    return project(medication, medication.start_date, end)


def _calendar_days(first: date, last: date) -> list[date]:
    """Inclusive list of dates first..last."""
    span = np.arange(np.datetime64(first, 'D'), np.datetime64(last, 'D') + 1, dtype='datetime64[D]')
    return [d.item() for d in span]
