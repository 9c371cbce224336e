# src/doseengine/records.py
"""
Conversion between medications API records (camelCase JSON dicts) and engine types.
"""
from datetime import date
from typing import Any, Dict, Optional

from .clock import format_clock, hours_to_minutes, parse_clock
from .config import ENGINE_CONFIG, RECORD_FIELDS as F
from .errors import InvalidRule
from .schedule import every_n_minutes, explicit
from .types import DosingRule, Explicit, Medication

REQUIRED = {"id", F['child_id'], "name", "dose", F['dose_unit'], F['start_date']}


def rule_from_record(record: Dict[str, Any]) -> DosingRule:
    """
    A non-empty `times` list selects an explicit schedule; otherwise the record
    must carry an interval (repeatEveryMinutes, or everyHours) plus startTime/endTime.
    """
    times = record.get(F['times'])
    if times:
        return explicit([_clock_field(F['times'], t) for t in times])

    if record.get(F['every_minutes']) is not None:
        every = record[F['every_minutes']]
    elif record.get(F['every_hours']) is not None:
        every = hours_to_minutes(record[F['every_hours']])
    else:
        raise InvalidRule("record has neither dose times nor a repeat interval.")

    for key in (F['window_start'], F['window_end']):
        if not record.get(key):
            raise InvalidRule(f"interval schedule is missing {key}.")
    return every_n_minutes(
        every,
        _clock_field(F['window_start'], record[F['window_start']]),
        _clock_field(F['window_end'], record[F['window_end']]),
    )


def medication_from_record(record: Dict[str, Any]) -> Medication:
    missing = REQUIRED.difference(record)
    if missing:
        raise ValueError(f"{record.get('name', '?')}: missing fields: {sorted(missing)}")

    schedule_days = record.get(F['schedule_days'])
    if schedule_days is None:
        schedule_days = ENGINE_CONFIG['default_schedule_days']
    lo, hi = ENGINE_CONFIG['schedule_days_min'], ENGINE_CONFIG['schedule_days_max']
    if isinstance(schedule_days, bool) or not isinstance(schedule_days, int) or not (lo <= schedule_days <= hi):
        raise ValueError(f"{F['schedule_days']} must be an integer in [{lo}, {hi}] (got {schedule_days!r}).")

    return Medication(
        id=str(record["id"]),
        child_id=str(record[F['child_id']]),
        name=record["name"],
        dose=float(record["dose"]),
        dose_unit=record[F['dose_unit']],
        rule=rule_from_record(record),
        start_date=date.fromisoformat(record[F['start_date']]),
        end_date=_optional_date(record.get(F['end_date'])),
        notes=record.get("notes") or "",
        schedule_days=schedule_days,
        timezone=record.get("timezone") or None,
    )


def medication_to_record(medication: Medication) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "id": medication.id,
        F['child_id']: medication.child_id,
        "name": medication.name,
        "dose": medication.dose,
        F['dose_unit']: medication.dose_unit,
        F['start_date']: medication.start_date.isoformat(),
        F['end_date']: medication.end_date.isoformat() if medication.end_date else None,
        "notes": medication.notes,
        F['schedule_days']: medication.schedule_days,
        "timezone": medication.timezone,
    }
    rule = medication.rule
    if isinstance(rule, Explicit):
        out[F['times']] = [format_clock(t) for t in rule.times]
    else:
        out[F['every_minutes']] = rule.every_minutes
        out[F['window_start']] = format_clock(rule.window_start)
        out[F['window_end']] = format_clock(rule.window_end)
    return out


def _clock_field(name: str, value: Any) -> int:
    try:
        return parse_clock(value)
    except ValueError as e:
        raise InvalidRule(f"{name}: {e}") from e


def _optional_date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None
