# services/journal.py

"""
Journal service: owns one AppState and routes every mutation through
recompute + persist, so the stored profile always matches the history.
"""

import logging
from datetime import date
from typing import Any, Callable, List, Optional, Sequence, TypeVar

from habitjournal.config import JournalConfig
from habitjournal.core import analytics, templates
from habitjournal.core.errors import ValidationError
from habitjournal.core.gamification import GamificationEngine, LevelUpEvent, level_progress
from habitjournal.core.models import (
    Appointment,
    AppState,
    DayStatus,
    SleepEntry,
    Task,
    WeekRecord,
    validate_day_index,
    validate_meal,
    validate_mood,
)
from habitjournal.core.sleep import MERIDIEMS, compute_sleep_hours
from habitjournal.core.week_key import format_week_label, shift_week, week_key_of
from habitjournal.database.migrations import (
    LEGACY_STORAGE_KEY,
    STORAGE_KEY,
    MigrationService,
    serialize_state,
)
from habitjournal.database.storage import BlobStore
from habitjournal.utils.datetime_utils import today_local

logger = logging.getLogger(__name__)

T = TypeVar("T")


def load_or_migrate(store: BlobStore, today: Optional[date] = None,
                    tz_name: Optional[str] = None,
                    storage_key: str = STORAGE_KEY,
                    legacy_storage_key: str = LEGACY_STORAGE_KEY) -> AppState:
    """Load the current journal, migrating or starting fresh when needed"""
    today = today or today_local(tz_name)
    return MigrationService(store, storage_key, legacy_storage_key).load_or_migrate(today)


def _check_index(items: Sequence[Any], index: int, what: str) -> int:
    if not isinstance(index, int) or not 0 <= index < len(items):
        raise ValidationError(f"{what} index {index!r} is out of range (0-{len(items) - 1})")
    return index


def _check_meridiem(value: str) -> str:
    if value not in MERIDIEMS:
        raise ValidationError(f"meridiem must be one of: {list(MERIDIEMS)}")
    return value


class JournalService:
    """
    Operations surface for rendering collaborators.

    Reads go through ``get_record``; writes go through ``mutate``, which
    recomputes the profile and saves the whole state afterwards.
    """

    def __init__(self, store: BlobStore, state: AppState,
                 engine: Optional[GamificationEngine] = None,
                 storage_key: str = STORAGE_KEY,
                 analytics_weeks: int = analytics.DEFAULT_WEEKS):
        self.store = store
        self.state = state
        self.engine = engine or GamificationEngine()
        self.storage_key = storage_key
        self.analytics_weeks = analytics_weeks

    @classmethod
    def open(cls, store: BlobStore, config: Optional[JournalConfig] = None,
             today: Optional[date] = None,
             engine: Optional[GamificationEngine] = None) -> "JournalService":
        """Load (or migrate) the stored journal and recompute the profile"""
        storage_key, legacy_key, tz_name = STORAGE_KEY, LEGACY_STORAGE_KEY, None
        analytics_weeks = analytics.DEFAULT_WEEKS
        if config is not None:
            storage_key = config.storage.storage_key
            legacy_key = config.storage.legacy_storage_key
            tz_name = config.gamification.timezone
            analytics_weeks = config.gamification.analytics_weeks

        state = load_or_migrate(store, today=today, tz_name=tz_name,
                                storage_key=storage_key, legacy_storage_key=legacy_key)
        service = cls(store, state, engine=engine, storage_key=storage_key,
                      analytics_weeks=analytics_weeks)
        service._ensure_label(state.current_week)
        service.save()
        return service

    # ===== PERSISTENCE =====

    def save(self) -> Optional[LevelUpEvent]:
        """Recompute the profile and write the full state"""
        event = self.engine.recompute(self.state)
        self.store.save(self.storage_key, serialize_state(self.state))
        return event

    # ===== ACCESS & NAVIGATION =====

    def get_record(self, key: Optional[str] = None) -> WeekRecord:
        return self.state.get_record(key or self.state.current_week)

    @property
    def current_record(self) -> WeekRecord:
        return self.state.current_record

    @property
    def level_progress(self) -> float:
        return level_progress(self.state.profile)

    def _ensure_label(self, key: str) -> None:
        record = self.state.get_record(key)
        if not record.week_of:
            record.week_of = format_week_label(week_key_of(key))

    def navigate(self, delta: int) -> str:
        """Move the current week by ``delta`` weeks and persist"""
        self.state.current_week = shift_week(self.state.current_week, delta)
        self._ensure_label(self.state.current_week)
        self.save()
        logger.debug(f"Navigated to week {self.state.current_week}")
        return self.state.current_week

    def go_to_date(self, day: date) -> str:
        """Make the week containing ``day`` current and persist"""
        self.state.current_week = week_key_of(day)
        self._ensure_label(self.state.current_week)
        self.save()
        return self.state.current_week

    def mutate(self, key: Optional[str], updater: Callable[[WeekRecord], T]) -> T:
        """Apply ``updater`` to a week record, then recompute and persist"""
        record = self.get_record(key)
        result = updater(record)
        self.save()
        return result

    # ===== TASKS =====

    def add_task(self, text: str = "", key: Optional[str] = None) -> int:
        def _add(record: WeekRecord) -> int:
            record.tasks.append(Task(text=text))
            return len(record.tasks) - 1
        return self.mutate(key, _add)

    def remove_task(self, index: int, key: Optional[str] = None) -> Task:
        def _remove(record: WeekRecord) -> Task:
            return record.tasks.pop(_check_index(record.tasks, index, "task"))
        return self.mutate(key, _remove)

    def move_task(self, from_index: int, to_index: int, key: Optional[str] = None) -> None:
        """Reorder: take the task at ``from_index`` and insert it at ``to_index``"""
        def _move(record: WeekRecord) -> None:
            _check_index(record.tasks, from_index, "task")
            _check_index(record.tasks, to_index, "task")
            moved = record.tasks.pop(from_index)
            record.tasks.insert(to_index, moved)
        self.mutate(key, _move)

    def set_task_text(self, index: int, text: str, key: Optional[str] = None) -> None:
        def _set(record: WeekRecord) -> None:
            record.tasks[_check_index(record.tasks, index, "task")].text = text
        self.mutate(key, _set)

    def toggle_task_day(self, index: int, day: int, key: Optional[str] = None) -> DayStatus:
        def _toggle(record: WeekRecord) -> DayStatus:
            return record.tasks[_check_index(record.tasks, index, "task")].toggle_day(day)
        return self.mutate(key, _toggle)

    def apply_template(self, name: str, key: Optional[str] = None) -> List[Task]:
        added = self.mutate(key, lambda record: templates.apply_template(record, name))
        logger.info(f"Applied habit template {name!r} ({len(added)} tasks)")
        return added

    # ===== TRACKERS =====

    def toggle_water(self, day: int, key: Optional[str] = None) -> bool:
        validate_day_index(day)

        def _toggle(record: WeekRecord) -> bool:
            water = record.trackers.water
            water[day] = not water[day]
            return water[day]
        return self.mutate(key, _toggle)

    def toggle_meal(self, meal: str, key: Optional[str] = None) -> bool:
        validate_meal(meal)

        def _toggle(record: WeekRecord) -> bool:
            food = record.trackers.food
            food[meal] = not food[meal]
            return food[meal]
        return self.mutate(key, _toggle)

    def set_mood(self, mood, key: Optional[str] = None) -> None:
        value = validate_mood(mood)

        def _set(record: WeekRecord) -> None:
            record.trackers.mood = value
        self.mutate(key, _set)

    def set_weather(self, weather: Optional[str], key: Optional[str] = None) -> None:
        def _set(record: WeekRecord) -> None:
            record.trackers.weather = weather or None
        self.mutate(key, _set)

    def set_unique_event(self, text: str, key: Optional[str] = None) -> None:
        def _set(record: WeekRecord) -> None:
            record.trackers.unique_event = text
        self.mutate(key, _set)

    def set_fitness(self, type: Optional[str] = None, duration: Optional[str] = None,
                    key: Optional[str] = None) -> None:
        def _set(record: WeekRecord) -> None:
            if type is not None:
                record.trackers.fitness.type = type
            if duration is not None:
                record.trackers.fitness.duration = duration
        self.mutate(key, _set)

    def set_week_label(self, label: str, key: Optional[str] = None) -> None:
        def _set(record: WeekRecord) -> None:
            record.week_of = label
        self.mutate(key, _set)

    # ===== APPOINTMENTS =====

    def add_appointment(self, time: str = "", event: str = "", key: Optional[str] = None) -> int:
        def _add(record: WeekRecord) -> int:
            record.trackers.appointments.append(Appointment(time=time, event=event))
            return len(record.trackers.appointments) - 1
        return self.mutate(key, _add)

    def update_appointment(self, index: int, time: Optional[str] = None,
                           event: Optional[str] = None, key: Optional[str] = None) -> None:
        def _update(record: WeekRecord) -> None:
            appointments = record.trackers.appointments
            appt = appointments[_check_index(appointments, index, "appointment")]
            if time is not None:
                appt.time = time
            if event is not None:
                appt.event = event
        self.mutate(key, _update)

    def remove_appointment(self, index: int, key: Optional[str] = None) -> Appointment:
        def _remove(record: WeekRecord) -> Appointment:
            appointments = record.trackers.appointments
            return appointments.pop(_check_index(appointments, index, "appointment"))
        return self.mutate(key, _remove)

    # ===== SLEEP =====

    def update_sleep(self, day: int, wake: Optional[str] = None, wake_meridiem: Optional[str] = None,
                     bed: Optional[str] = None, bed_meridiem: Optional[str] = None,
                     key: Optional[str] = None) -> SleepEntry:
        """Edit a night's clock times; hours are re-derived when both times parse"""
        validate_day_index(day)
        if wake_meridiem is not None:
            _check_meridiem(wake_meridiem)
        if bed_meridiem is not None:
            _check_meridiem(bed_meridiem)

        def _update(record: WeekRecord) -> SleepEntry:
            entry = record.trackers.sleep[day]
            if wake is not None:
                entry.wake = wake
            if wake_meridiem is not None:
                entry.wake_meridiem = wake_meridiem
            if bed is not None:
                entry.bed = bed
            if bed_meridiem is not None:
                entry.bed_meridiem = bed_meridiem

            hours = compute_sleep_hours(entry.wake, entry.wake_meridiem, entry.bed, entry.bed_meridiem)
            if hours is not None:
                entry.hours = hours
            return entry
        return self.mutate(key, _update)

    def set_sleep_hours(self, day: int, hours: str, key: Optional[str] = None) -> None:
        validate_day_index(day)

        def _set(record: WeekRecord) -> None:
            record.trackers.sleep[day].hours = hours
        self.mutate(key, _set)

    # ===== PROFILE =====

    def unlock_theme(self, theme: str) -> bool:
        """Add a theme to the profile; False if it was already unlocked"""
        themes = self.state.profile.unlocked_themes
        if theme in themes:
            return False
        themes.add(theme)
        self.save()
        logger.info(f"Theme unlocked: {theme}")
        return True

    def weekly_summaries(self, limit: Optional[int] = None) -> List[analytics.WeekSummary]:
        """Most recent weeks, ``analytics_weeks`` of them unless ``limit`` is given"""
        if limit is None:
            limit = self.analytics_weeks
        return analytics.weekly_summaries(self.state, limit)

    def on_work_session_complete(self, work_minutes: int) -> None:
        """Pomodoro hook: persist the journal; focus time earns no stored XP"""
        logger.info(f"🍅 Work session of {work_minutes} min completed")
        self.save()
