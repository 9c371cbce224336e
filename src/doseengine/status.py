# src/doseengine/status.py
from __future__ import annotations

from datetime import date, timedelta

import numpy as np

from .schedule import compile_rule
from .types import ClockTime, DoseSlot, DoseStatus, DoseSummary, Medication, is_active


def classify(slots: DoseSlot, now: ClockTime) -> DoseStatus:
    """
    Split one day's slots around `now`.

    last_taken : greatest slot <= now (None before the first dose)
    next_due   : smallest slot > now (None once the day's doses are done)

    A slot equal to `now` counts as taken. `slots` must come from compile_rule
    (ascending, unique); it is not re-checked here.
    """
    arr = np.asarray(slots, dtype=np.int64)
    # side="right" puts a slot equal to now on the taken side
    idx = int(np.searchsorted(arr, now, side="right"))
    last_taken = int(arr[idx - 1]) if idx > 0 else None
    next_due = int(arr[idx]) if idx < len(arr) else None
    return DoseStatus(last_taken=last_taken, next_due=next_due)


def slot_checklist(slots: DoseSlot, now: ClockTime) -> list[tuple[ClockTime, bool]]:
    """Per-slot (slot, taken) pairs for a day's checklist, same inclusive rule as classify."""
    return [(s, s <= now) for s in slots]


def summarize(medication: Medication, today: date, now: ClockTime) -> DoseSummary:
    """
    Card data for `medication` on `today` at `now`.

    When there is no dose left today and the course is still running tomorrow,
    next_due becomes tomorrow's first slot and next_due_tomorrow is set.
    """
    slots = compile_rule(medication.rule)
    active = is_active(medication, today)
    status = classify(slots, now) if active else DoseStatus(last_taken=None, next_due=None)

    if status.next_due is None and is_active(medication, today + timedelta(days=1)):
        return DoseSummary(active=active, slots=slots, last_taken=status.last_taken,
                           next_due=slots[0], next_due_tomorrow=True)
    return DoseSummary(active=active, slots=slots, last_taken=status.last_taken,
                       next_due=status.next_due)
