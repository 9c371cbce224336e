# src/doseengine/types.py
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Tuple, Union

# All clock values are MINUTES since local midnight (0..1439).
ClockTime = int
DoseSlot = Tuple[ClockTime, ...]


@dataclass(frozen=True)
class Explicit:
    """
    Dose at a fixed list of clock times every day.

    times : clock times in minutes; order and duplicates don't matter,
            the compiler sorts and deduplicates them.
    """
    times: Tuple[ClockTime, ...]


@dataclass(frozen=True)
class Interval:
    """
    Dose every `every_minutes` starting at `window_start`, never after `window_end`.

    every_minutes : spacing between doses, whole minutes (> 0)
    window_start  : first dose of the day (minutes)
    window_end    : latest allowed dose of the day (minutes, >= window_start)
    """
    every_minutes: int
    window_start: ClockTime
    window_end: ClockTime


DosingRule = Union[Explicit, Interval]


@dataclass(frozen=True)
class Medication:
    """
    A medication record as handed over by the persistence layer.

    rule          : Explicit or Interval dosing rule
    start_date    : first calendar day (inclusive)
    end_date      : last calendar day (inclusive); None means open-ended
    schedule_days : how many days from start_date to materialize when
                    there is no end_date (1..60)
    timezone      : IANA zone the clock times were entered in; kept for the
                    reminder surface, never used for conversion here
    """
    id: str
    child_id: str
    name: str
    dose: float
    dose_unit: str
    rule: DosingRule
    start_date: date
    end_date: Optional[date] = None
    notes: str = ""
    schedule_days: int = 14
    timezone: Optional[str] = None


@dataclass(frozen=True)
class Occurrence:
    """One concrete dose: a calendar day and a clock time on it."""
    date: date
    slot: ClockTime


@dataclass(frozen=True)
class DoseStatus:
    last_taken: Optional[ClockTime]
    next_due: Optional[ClockTime]


def is_active(medication: Medication, today: date) -> bool:
    """Active while today is inside [start_date, end_date]; never stored."""
    if today < medication.start_date:
        return False
    return medication.end_date is None or today <= medication.end_date


def effective_end(medication: Medication) -> date:
    """Last day covered by the schedule: end_date, else start_date + schedule_days - 1."""
    if medication.end_date is not None:
        return medication.end_date
    return medication.start_date + timedelta(days=medication.schedule_days - 1)


@dataclass(frozen=True)
class DoseSummary:
    """
    What a medication card shows for one day.

    next_due_tomorrow : True when today's doses are used up (or the course
                        starts tomorrow) and next_due is tomorrow's first slot
    """
    active: bool
    slots: DoseSlot
    last_taken: Optional[ClockTime]
    next_due: Optional[ClockTime]
    next_due_tomorrow: bool = False
