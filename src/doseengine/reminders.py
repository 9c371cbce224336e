# src/doseengine/reminders.py
from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from .projection import project
from .types import ClockTime, Medication, Occurrence, effective_end


def upcoming_reminders(medication: Medication, today: date, now: ClockTime,
                       horizon_days: Optional[int] = None) -> list[Occurrence]:
    """
    Occurrences still ahead of (today, now), for scheduling local reminders.

    horizon_days : limit to today .. today + horizon_days - 1; None means up to
                   the end of the medication's schedule
    A slot equal to `now` is already taken and is not returned.
    """
    if horizon_days is not None and horizon_days < 1:
        raise ValueError(f"horizon_days must be >= 1 (got {horizon_days}).")

    last = effective_end(medication)
    if horizon_days is not None:
        last = min(last, today + timedelta(days=horizon_days - 1))
    if last < today:
        return []

    return [
        occ for occ in project(medication, today, last)
        if occ.date > today or occ.slot > now
    ]
