#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Journal - Gamification Engine
Experience, level and streak derived from the entire week history.

The profile is recomputed from scratch on every call: xp is never
accumulated incrementally, so anything added to ``profile.xp`` outside
the tracked fields is replaced by the next recompute.
"""

import math
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from habitjournal.core.models import AppState, Profile, WeekRecord

logger = logging.getLogger(__name__)

XP_RULES: Dict[str, int] = {
    'task_check': 10,
    'water_day': 5,
    'meal': 5,
    'sleep_day': 10,
    'mood': 5,
    'weather': 5,
}

XP_PER_LEVEL_UNIT = 100


def calculate_level(xp: int) -> int:
    """level = max(1, floor(sqrt(xp / 100)))"""
    return max(1, math.isqrt(max(0, xp) // XP_PER_LEVEL_UNIT))


def xp_for_level(level: int) -> int:
    """XP at which ``level`` begins: 100, 400, 900, ..."""
    return level * level * XP_PER_LEVEL_UNIT


def level_progress(profile: Profile) -> float:
    """Percent of the way from the current level to the next, clamped to 0-100"""
    current_level_xp = xp_for_level(profile.level)
    next_level_xp = xp_for_level(profile.level + 1)
    progress = (profile.xp - current_level_xp) / (next_level_xp - current_level_xp) * 100
    return max(0.0, min(100.0, progress))


def week_xp(record: WeekRecord) -> int:
    """XP contributed by a single week"""
    trackers = record.trackers
    xp = record.checked_days * XP_RULES['task_check']
    xp += trackers.water_days * XP_RULES['water_day']
    xp += trackers.meals_logged * XP_RULES['meal']
    xp += trackers.sleep_days_logged * XP_RULES['sleep_day']
    if trackers.mood:
        xp += XP_RULES['mood']
    if trackers.weather:
        xp += XP_RULES['weather']
    return xp


def total_xp(state: AppState) -> int:
    return sum(week_xp(record) for record in state.weeks.values())


def current_streak(state: AppState) -> int:
    """Consecutive most-recent weeks with at least one checked task-day"""
    streak = 0
    for key in reversed(state.sorted_week_keys()):
        if not state.weeks[key].has_check:
            break
        streak += 1
    return streak


@dataclass(frozen=True)
class LevelUpEvent:
    previous_level: int
    level: int
    xp: int


LevelUpListener = Callable[[LevelUpEvent], None]


class GamificationEngine:
    """Recomputes the profile and notifies listeners about level-ups"""

    def __init__(self):
        self.level_up_callbacks: List[LevelUpListener] = []

    def on_level_up(self, callback: LevelUpListener) -> None:
        self.level_up_callbacks.append(callback)

    def recompute(self, state: AppState) -> Optional[LevelUpEvent]:
        """Rewrite ``state.profile`` from the week history.

        Returns the level-up event if the level rose, otherwise None.
        """
        profile = state.profile
        previous_level = profile.level

        profile.xp = total_xp(state)
        profile.level = calculate_level(profile.xp)

        profile.streak_days = current_streak(state)
        if profile.streak_days > profile.longest_streak:
            profile.longest_streak = profile.streak_days

        event = None
        if profile.level > previous_level and previous_level >= 1:
            event = LevelUpEvent(previous_level=previous_level, level=profile.level, xp=profile.xp)
            logger.info(f"Level up: {previous_level} -> {profile.level} ({profile.xp} XP)")
            self._emit(event)

        logger.debug(
            f"Profile recomputed: xp={profile.xp} level={profile.level} "
            f"streak={profile.streak_days} longest={profile.longest_streak}"
        )
        return event

    def _emit(self, event: LevelUpEvent) -> None:
        for callback in self.level_up_callbacks:
            try:
                callback(event)
            except Exception as e:
                logger.error(f"Level-up listener failed: {e}")
