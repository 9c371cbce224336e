# src/doseengine/config.py
"""
Limits and defaults for the dosing schedule engine.
"""

MINUTES_PER_DAY = 24 * 60

# Engine configuration
ENGINE_CONFIG = {
    'clock_min': 0,
    'clock_max': MINUTES_PER_DAY - 1,       # 23:59
    'schedule_days_min': 1,
    'schedule_days_max': 60,
    'default_schedule_days': 14,
    # 60 days with a dose every minute; anything above is a malformed input
    'occurrence_ceiling': 60 * MINUTES_PER_DAY,
}

# Record field names used by the medications API
RECORD_FIELDS = {
    'times': 'times',
    'every_minutes': 'repeatEveryMinutes',
    'every_hours': 'everyHours',
    'window_start': 'startTime',
    'window_end': 'endTime',
    'start_date': 'startDate',
    'end_date': 'endDate',
    'schedule_days': 'scheduleDays',
    'dose_unit': 'doseUnit',
    'child_id': 'childId',
}
