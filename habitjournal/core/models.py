#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Journal - Core Data Models
Weekly records, trackers, profile and the application state aggregate.

Every ``from_dict`` is tolerant: malformed or legacy shapes are healed to
defaults instead of raising, so a record loaded from any older blob always
satisfies the model invariants.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Set

from habitjournal.core.errors import CorruptedDataError, ValidationError
from habitjournal.core.sleep import AM, PM, MERIDIEMS, format_hours
from habitjournal.core.week_key import DAYS_IN_WEEK, is_week_key, week_key_of

logger = logging.getLogger(__name__)

# ===== ENUMS =====


class DayStatus(Enum):
    """Per-day task status; persisted as null / "check" / "x" / "na"."""
    NONE = None
    CHECK = "check"
    CROSS = "x"
    NOT_APPLICABLE = "na"

    def next(self) -> "DayStatus":
        return _NEXT_STATUS[self]

    @classmethod
    def parse(cls, value: Any) -> "DayStatus":
        try:
            return cls(value)
        except (ValueError, TypeError):
            return cls.NONE


_NEXT_STATUS = {
    DayStatus.NONE: DayStatus.CHECK,
    DayStatus.CHECK: DayStatus.CROSS,
    DayStatus.CROSS: DayStatus.NOT_APPLICABLE,
    DayStatus.NOT_APPLICABLE: DayStatus.NONE,
}


class Mood(Enum):
    """Weekly mood, best first"""
    RAD = "rad"
    GOOD = "good"
    MEH = "meh"
    BAD = "bad"
    AWFUL = "awful"

    @property
    def score(self) -> int:
        return MOOD_SCORES[self]


MOOD_SCORES = {
    Mood.RAD: 5,
    Mood.GOOD: 4,
    Mood.MEH: 3,
    Mood.BAD: 2,
    Mood.AWFUL: 1,
}

MEALS = ("breakfast", "lunch", "dinner", "snack")

# ===== HELPERS =====


def _as_text(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    return str(value)


def _as_hours(value: Any) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return format_hours(value)
    return _as_text(value)


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _fit_days(values: List[DayStatus]) -> List[DayStatus]:
    values = values[:DAYS_IN_WEEK]
    return values + [DayStatus.NONE] * (DAYS_IN_WEEK - len(values))


def validate_day_index(day: int) -> int:
    if not isinstance(day, int) or not 0 <= day < DAYS_IN_WEEK:
        raise ValidationError(f"day index must be between 0 and {DAYS_IN_WEEK - 1}, got {day!r}")
    return day


def validate_mood(value: Any) -> Optional[Mood]:
    if value is None or isinstance(value, Mood):
        return value
    if value == "":
        return None
    try:
        return Mood(value)
    except (ValueError, TypeError):
        valid_values = [m.value for m in Mood]
        raise ValidationError(f"mood must be one of: {valid_values}")


def validate_meal(meal: str) -> str:
    if meal not in MEALS:
        raise ValidationError(f"meal must be one of: {list(MEALS)}")
    return meal

# ===== WEEK MODELS =====


@dataclass
class Task:
    """A weekly task with one status slot per weekday, Monday first"""
    text: str = ""
    days: List[DayStatus] = field(default_factory=lambda: [DayStatus.NONE] * DAYS_IN_WEEK)

    def __post_init__(self):
        self.days = _fit_days(list(self.days))

    @property
    def checked_days(self) -> int:
        return sum(1 for status in self.days if status is DayStatus.CHECK)

    @property
    def has_check(self) -> bool:
        return self.checked_days > 0

    def toggle_day(self, day: int) -> DayStatus:
        """Advance one day to its next status"""
        validate_day_index(day)
        self.days[day] = self.days[day].next()
        return self.days[day]

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "days": [status.value for status in self.days]}

    @classmethod
    def from_dict(cls, data: Any) -> "Task":
        data = _as_mapping(data)
        raw_days = data.get("days")
        days = [DayStatus.parse(v) for v in raw_days] if isinstance(raw_days, list) else []
        return cls(text=_as_text(data.get("text")), days=days)


@dataclass
class SleepEntry:
    """One night of sleep in 12-hour clock form"""
    wake: str = ""
    wake_meridiem: str = AM
    bed: str = ""
    bed_meridiem: str = PM
    hours: str = ""

    def __post_init__(self):
        if self.wake_meridiem not in MERIDIEMS:
            self.wake_meridiem = AM
        if self.bed_meridiem not in MERIDIEMS:
            self.bed_meridiem = PM

    @property
    def is_logged(self) -> bool:
        return self.hours not in ("", "0")

    @property
    def hours_value(self) -> float:
        try:
            return float(self.hours)
        except ValueError:
            return 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "wake": self.wake,
            "wakeAmPm": self.wake_meridiem,
            "bed": self.bed,
            "bedAmPm": self.bed_meridiem,
            "hours": self.hours,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "SleepEntry":
        data = _as_mapping(data)
        return cls(
            wake=_as_text(data.get("wake", data.get("wakeTime"))),
            wake_meridiem=data.get("wakeAmPm", data.get("wakeMeridiem")) or AM,
            bed=_as_text(data.get("bed", data.get("bedTime"))),
            bed_meridiem=data.get("bedAmPm", data.get("bedMeridiem")) or PM,
            hours=_as_hours(data.get("hours")),
        )


@dataclass
class Fitness:
    type: str = ""
    duration: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "duration": self.duration}

    @classmethod
    def from_dict(cls, data: Any) -> "Fitness":
        data = _as_mapping(data)
        return cls(type=_as_text(data.get("type")), duration=_as_text(data.get("duration")))


@dataclass
class Appointment:
    time: str = ""
    event: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"time": self.time, "event": self.event}

    @classmethod
    def from_dict(cls, data: Any) -> "Appointment":
        data = _as_mapping(data)
        return cls(time=_as_text(data.get("time")), event=_as_text(data.get("event")))


def default_water() -> List[bool]:
    return [False] * DAYS_IN_WEEK


def default_sleep() -> List[SleepEntry]:
    return [SleepEntry() for _ in range(DAYS_IN_WEEK)]


def default_food() -> Dict[str, bool]:
    return {meal: False for meal in MEALS}


@dataclass
class Trackers:
    """Non-task habit signals for one week"""
    water: List[bool] = field(default_factory=default_water)
    sleep: List[SleepEntry] = field(default_factory=default_sleep)
    food: Dict[str, bool] = field(default_factory=default_food)
    mood: Optional[Mood] = None
    weather: Optional[str] = None
    unique_event: str = ""
    fitness: Fitness = field(default_factory=Fitness)
    appointments: List[Appointment] = field(default_factory=list)

    @property
    def water_days(self) -> int:
        return sum(1 for filled in self.water if filled)

    @property
    def meals_logged(self) -> int:
        return sum(1 for checked in self.food.values() if checked)

    @property
    def sleep_days_logged(self) -> int:
        return sum(1 for entry in self.sleep if entry.is_logged)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "water": list(self.water),
            "sleep": [entry.to_dict() for entry in self.sleep],
            "food": dict(self.food),
            "mood": self.mood.value if self.mood else None,
            "weather": self.weather,
            "uniqueEvent": self.unique_event,
            "fitness": self.fitness.to_dict(),
            "appointments": [appt.to_dict() for appt in self.appointments],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Trackers":
        data = _as_mapping(data)

        water = data.get("water")
        if isinstance(water, list) and len(water) == DAYS_IN_WEEK:
            water = [bool(filled) for filled in water]
        else:
            water = default_water()

        sleep = data.get("sleep")
        if isinstance(sleep, list) and len(sleep) == DAYS_IN_WEEK:
            sleep = [SleepEntry.from_dict(entry) for entry in sleep]
        else:
            # legacy blobs store a bare number of hours here
            sleep = default_sleep()

        food = data.get("food")
        if isinstance(food, Mapping):
            food = {meal: bool(food.get(meal, False)) for meal in MEALS}
        else:
            food = default_food()

        try:
            mood = Mood(data.get("mood")) if data.get("mood") else None
        except (ValueError, TypeError):
            mood = None

        weather = data.get("weather")
        weather = str(weather) if weather else None

        appointments = data.get("appointments")
        if isinstance(appointments, list):
            appointments = [Appointment.from_dict(appt) for appt in appointments]
        else:
            appointments = []

        return cls(
            water=water,
            sleep=sleep,
            food=food,
            mood=mood,
            weather=weather,
            unique_event=_as_text(data.get("uniqueEvent")),
            fitness=Fitness.from_dict(data.get("fitness")),
            appointments=appointments,
        )


@dataclass
class WeekRecord:
    """Everything tracked for one calendar week"""
    tasks: List[Task] = field(default_factory=lambda: [Task()])
    trackers: Trackers = field(default_factory=Trackers)
    week_of: str = ""

    @property
    def checked_days(self) -> int:
        return sum(task.checked_days for task in self.tasks)

    @property
    def has_check(self) -> bool:
        return any(task.has_check for task in self.tasks)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tasks": [task.to_dict() for task in self.tasks],
            "trackers": self.trackers.to_dict(),
            "weekOf": self.week_of,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "WeekRecord":
        data = _as_mapping(data)
        tasks = data.get("tasks")
        if isinstance(tasks, list):
            tasks = [Task.from_dict(task) for task in tasks]
        else:
            tasks = [Task()]
        return cls(
            tasks=tasks,
            trackers=Trackers.from_dict(data.get("trackers")),
            week_of=_as_text(data.get("weekOf")),
        )

    @classmethod
    def create_empty(cls) -> "WeekRecord":
        return cls()


def normalize_week_record(record: WeekRecord) -> WeekRecord:
    """Canonical copy of ``record``; idempotent."""
    return WeekRecord.from_dict(record.to_dict())

# ===== PROFILE & APP STATE =====


@dataclass
class Profile:
    """Progress signal derived from the week history"""
    xp: int = 0
    level: int = 1
    streak_days: int = 0
    longest_streak: int = 0
    unlocked_themes: Set[str] = field(default_factory=set)

    def __post_init__(self):
        self.xp = max(0, self.xp)
        self.level = max(1, self.level)
        self.streak_days = max(0, self.streak_days)
        self.longest_streak = max(0, self.longest_streak)
        self.unlocked_themes = set(self.unlocked_themes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "xp": self.xp,
            "level": self.level,
            "streakDays": self.streak_days,
            "longestStreak": self.longest_streak,
            "unlockedThemes": sorted(self.unlocked_themes),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Profile":
        data = _as_mapping(data)

        def _int(key: str, default: int) -> int:
            value = data.get(key, default)
            if isinstance(value, bool):
                return default
            try:
                return int(value)
            except (TypeError, ValueError, OverflowError):
                return default

        themes = data.get("unlockedThemes")
        themes = {str(t) for t in themes} if isinstance(themes, list) else set()

        return cls(
            xp=_int("xp", 0),
            level=_int("level", 1),
            streak_days=_int("streakDays", 0),
            longest_streak=_int("longestStreak", 0),
            unlocked_themes=themes,
        )


@dataclass
class AppState:
    """Aggregate root: profile plus every tracked week keyed by its Monday"""
    current_week: str
    profile: Profile = field(default_factory=Profile)
    weeks: Dict[str, WeekRecord] = field(default_factory=dict)

    def get_record(self, key: str) -> WeekRecord:
        """Normalized record for ``key``, created empty on first access"""
        key = week_key_of(key)
        record = self.weeks.get(key)
        if record is None:
            logger.debug(f"Creating empty week record for {key}")
            record = WeekRecord.create_empty()
        else:
            record = normalize_week_record(record)
        self.weeks[key] = record
        return record

    @property
    def current_record(self) -> WeekRecord:
        return self.get_record(self.current_week)

    def sorted_week_keys(self) -> List[str]:
        return sorted(self.weeks)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currentWeek": self.current_week,
            "profile": self.profile.to_dict(),
            "weeks": {key: record.to_dict() for key, record in sorted(self.weeks.items())},
        }

    @classmethod
    def from_dict(cls, data: Any, fallback_week: str) -> "AppState":
        """Rebuild the state from a current-schema payload.

        Raises CorruptedDataError if ``data`` is not an object with a
        ``weeks`` mapping; anything finer-grained is healed.
        """
        if not isinstance(data, Mapping) or not isinstance(data.get("weeks"), Mapping):
            raise CorruptedDataError("payload is not a current-schema journal object")

        weeks: Dict[str, WeekRecord] = {}
        for key, raw in data["weeks"].items():
            if not is_week_key(key):
                try:
                    normalized = week_key_of(key)
                except ValueError:
                    logger.warning(f"Dropping week with invalid key {key!r}")
                    continue
                if normalized in data["weeks"] or normalized in weeks:
                    logger.warning(f"Dropping week {key!r}, its Monday {normalized} already exists")
                    continue
                key = normalized
            weeks[key] = WeekRecord.from_dict(raw)

        current_week = data.get("currentWeek")
        if not is_week_key(current_week):
            current_week = week_key_of(fallback_week)

        state = cls(
            current_week=current_week,
            profile=Profile.from_dict(data.get("profile")),
            weeks=weeks,
        )
        state.get_record(state.current_week)
        return state

    @classmethod
    def create(cls, current_week: str) -> "AppState":
        """Fresh state with one empty record at ``current_week``"""
        state = cls(current_week=week_key_of(current_week))
        state.get_record(state.current_week)
        return state
