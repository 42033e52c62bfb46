"""
Core domain: week keys, the weekly data model and the gamification engine.
"""

from .errors import (
    JournalError,
    ValidationError,
    InvalidWeekKeyError,
    UnknownTemplateError,
    StorageError,
    CorruptedDataError
)

from .week_key import (
    week_key_of,
    shift_week,
    format_week_label,
    parse_week_key,
    is_week_key,
    week_dates
)

from .models import (
    DayStatus,
    Mood,
    Task,
    SleepEntry,
    Fitness,
    Appointment,
    Trackers,
    WeekRecord,
    Profile,
    AppState,
    normalize_week_record
)

from .gamification import (
    GamificationEngine,
    LevelUpEvent,
    calculate_level,
    xp_for_level,
    level_progress
)

__all__ = [
    # Errors
    'JournalError',
    'ValidationError',
    'InvalidWeekKeyError',
    'UnknownTemplateError',
    'StorageError',
    'CorruptedDataError',

    # Week keys
    'week_key_of',
    'shift_week',
    'format_week_label',
    'parse_week_key',
    'is_week_key',
    'week_dates',

    # Models
    'DayStatus',
    'Mood',
    'Task',
    'SleepEntry',
    'Fitness',
    'Appointment',
    'Trackers',
    'WeekRecord',
    'Profile',
    'AppState',
    'normalize_week_record',

    # Gamification
    'GamificationEngine',
    'LevelUpEvent',
    'calculate_level',
    'xp_for_level',
    'level_progress'
]
