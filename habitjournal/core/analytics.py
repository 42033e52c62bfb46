# core/analytics.py

"""Per-week summary series for the analytics panel."""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from habitjournal.core.models import AppState, WeekRecord
from habitjournal.core.week_key import parse_week_key, short_date_label

DEFAULT_WEEKS = 8


@dataclass
class WeekSummary:
    week_key: str
    label: str
    avg_sleep: float
    mood_score: Optional[int]
    task_completion: int
    water_days: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def average_sleep(record: WeekRecord) -> float:
    """Mean of the positive sleep hours, one decimal; 0 when nothing is logged"""
    hours = [entry.hours_value for entry in record.trackers.sleep]
    hours = [h for h in hours if h > 0]
    if not hours:
        return 0.0
    return round(sum(hours) / len(hours), 1)


def task_completion_rate(record: WeekRecord) -> int:
    """Checked task-days as a whole percentage of all task-days"""
    total = sum(len(task.days) for task in record.tasks)
    if total == 0:
        return 0
    return round(record.checked_days / total * 100)


def summarize_week(key: str, record: WeekRecord) -> WeekSummary:
    mood = record.trackers.mood
    return WeekSummary(
        week_key=key,
        label=short_date_label(parse_week_key(key)),
        avg_sleep=average_sleep(record),
        mood_score=mood.score if mood else None,
        task_completion=task_completion_rate(record),
        water_days=record.trackers.water_days,
    )


def weekly_summaries(state: AppState, limit: int = DEFAULT_WEEKS) -> List[WeekSummary]:
    """Summaries for the most recent ``limit`` weeks, oldest first"""
    keys = state.sorted_week_keys()[-limit:] if limit > 0 else []
    return [summarize_week(key, state.weeks[key]) for key in keys]
