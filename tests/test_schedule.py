

import pytest

from doseengine.types import Explicit, Interval
from doseengine.clock import parse_clock, format_clock, hours_to_minutes
from doseengine.errors import InvalidRule
from doseengine.schedule import (
    compile_rule, explicit, every_n_minutes, daily_dose_count, schedule_summary,
)


def hhmm(*times):
    return tuple(parse_clock(t) for t in times)


def test_explicit_sorted_and_deduplicated():
    """09:00, 08:00, 09:00 compiles to 08:00, 09:00."""
    slots = compile_rule(Explicit(times=hhmm("09:00", "08:00", "09:00")))
    assert slots == hhmm("08:00", "09:00")


def test_interval_90_minutes():
    """Every 90 min from 08:00 to 14:00 lands exactly on the window end."""
    rule = Interval(every_minutes=90, window_start=parse_clock("08:00"), window_end=parse_clock("14:00"))
    slots = compile_rule(rule)
    assert [format_clock(s) for s in slots] == ["08:00", "09:30", "11:00", "12:30", "14:00"]


def test_interval_slots_stay_inside_window():
    """Window end not on the grid: the last slot is the largest one <= window_end."""
    rule = Interval(every_minutes=100, window_start=parse_clock("07:15"), window_end=parse_clock("21:40"))
    slots = compile_rule(rule)

    assert slots[0] == rule.window_start
    assert all(rule.window_start <= s <= rule.window_end for s in slots)
    assert all(b - a == 100 for a, b in zip(slots, slots[1:]))
    assert slots[-1] + 100 > rule.window_end


def test_interval_single_slot_when_window_is_a_point():
    rule = Interval(every_minutes=30, window_start=parse_clock("10:00"), window_end=parse_clock("10:00"))
    assert compile_rule(rule) == hhmm("10:00")


def test_fractional_hour_interval():
    """0.1 h entered by a caregiver is a 6-minute interval."""
    every = hours_to_minutes(0.1)
    assert every == 6
    slots = compile_rule(every_n_minutes(every, parse_clock("08:00"), parse_clock("09:00")))
    assert len(slots) == 11
    assert slots[-1] == parse_clock("09:00")


def test_full_day_every_minute():
    slots = compile_rule(Interval(every_minutes=1, window_start=0, window_end=1439))
    assert len(slots) == 1440
    assert slots[0] == 0 and slots[-1] == 1439


def test_compile_is_idempotent():
    rule = Interval(every_minutes=240, window_start=parse_clock("06:00"), window_end=parse_clock("23:00"))
    assert compile_rule(rule) == compile_rule(rule)


@pytest.mark.parametrize("rule", [
    Interval(every_minutes=30, window_start=parse_clock("10:00"), window_end=parse_clock("09:00")),
    Interval(every_minutes=0, window_start=parse_clock("08:00"), window_end=parse_clock("20:00")),
    Interval(every_minutes=-60, window_start=parse_clock("08:00"), window_end=parse_clock("20:00")),
    Interval(every_minutes=60, window_start=parse_clock("08:00"), window_end=1440),
    Explicit(times=()),
    Explicit(times=(480, 1440)),
    Explicit(times=(-1,)),
])
def test_invalid_rules_raise(rule):
    with pytest.raises(InvalidRule):
        compile_rule(rule)


def test_invalid_rule_is_a_value_error():
    with pytest.raises(ValueError):
        every_n_minutes(30, parse_clock("10:00"), parse_clock("09:00"))


def test_rule_builders_validate_eagerly():
    with pytest.raises(InvalidRule):
        explicit([])
    assert explicit([600, 480]).times == (600, 480)


def test_summary_and_count():
    assert schedule_summary(hhmm("08:00")) == "1 dose (08:00)"
    assert schedule_summary(hhmm("08:00", "14:00", "20:00")) == "3 doses (08:00, 20:00)"
    assert schedule_summary(()) == "No schedule defined"
    assert daily_dose_count(Interval(every_minutes=480, window_start=480, window_end=1440 - 1)) == 2


def test_clock_parsing():
    assert parse_clock("8:05") == 485
    assert format_clock(485) == "08:05"
    for bad in ("24:00", "12:60", "noon", "12"):
        with pytest.raises(ValueError):
            parse_clock(bad)
    with pytest.raises(InvalidRule):
        hours_to_minutes(0)
    with pytest.raises(InvalidRule):
        hours_to_minutes(0.001)
