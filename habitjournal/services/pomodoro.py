"""
Pomodoro timer: work/break countdown driven by a one-second tick
"""

import logging
from typing import Callable, List, Optional

from apscheduler.triggers.interval import IntervalTrigger

logger = logging.getLogger(__name__)

WORK_MINUTES = 25
BREAK_MINUTES = 5
TICK_JOB_ID = 'pomodoro_tick'

WorkCompleteCallback = Callable[[int], None]


def format_countdown(seconds: int) -> str:
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


class PomodoroTimer:
    """Countdown state machine

    The tick runs on the caller's scheduler (an AsyncIOScheduler in the
    app), so it never interleaves with a journal edit.
    """

    def __init__(self, work_minutes: int = WORK_MINUTES, break_minutes: int = BREAK_MINUTES):
        self.work_minutes = work_minutes
        self.break_minutes = break_minutes
        self.is_work = True
        self.seconds_left = work_minutes * 60
        self.scheduler = None
        self.work_complete_callbacks: List[WorkCompleteCallback] = []

    @property
    def running(self) -> bool:
        return self.scheduler is not None

    @property
    def display(self) -> str:
        return format_countdown(self.seconds_left)

    @property
    def label(self) -> str:
        return "WORK" if self.is_work else "BREAK"

    def on_work_complete(self, callback: WorkCompleteCallback) -> None:
        self.work_complete_callbacks.append(callback)

    def tick(self) -> None:
        """Advance one second and switch phase at zero"""
        self.seconds_left -= 1
        if self.seconds_left > 0:
            return

        if self.is_work:
            logger.info(f"⏰ Work phase finished ({self.work_minutes} min), starting break")
            self.is_work = False
            self.seconds_left = self.break_minutes * 60
            for callback in self.work_complete_callbacks:
                try:
                    callback(self.work_minutes)
                except Exception as e:
                    logger.error(f"❌ Work-complete callback failed: {e}")
        else:
            logger.info("⏰ Break finished, back to work")
            self.is_work = True
            self.seconds_left = self.work_minutes * 60

    def start(self, scheduler) -> bool:
        """Schedule the tick every second; False if already running"""
        if self.running:
            return False
        scheduler.add_job(
            self.tick,
            IntervalTrigger(seconds=1),
            id=TICK_JOB_ID,
            replace_existing=True
        )
        self.scheduler = scheduler
        logger.debug("⏰ Pomodoro started")
        return True

    def stop(self) -> bool:
        """Pause: remove the tick job and keep the remaining time"""
        if not self.running:
            return False
        self.scheduler.remove_job(TICK_JOB_ID)
        self.scheduler = None
        logger.debug("⏹️ Pomodoro paused")
        return True

    def toggle(self, scheduler) -> bool:
        """Start when paused, pause when running; returns the new running state"""
        if self.running:
            self.stop()
        else:
            self.start(scheduler)
        return self.running

    def reset(self) -> None:
        self.stop()
        self.is_work = True
        self.seconds_left = self.work_minutes * 60


def create_timer(config=None, on_work_complete: Optional[WorkCompleteCallback] = None) -> PomodoroTimer:
    """Timer configured from a JournalConfig, optionally wired to a callback"""
    if config is not None:
        timer = PomodoroTimer(config.pomodoro.work_minutes, config.pomodoro.break_minutes)
    else:
        timer = PomodoroTimer()
    if on_work_complete is not None:
        timer.on_work_complete(on_work_complete)
    return timer
