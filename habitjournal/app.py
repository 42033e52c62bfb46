"""
Application wiring: config, logging, storage, journal service and Pomodoro timer
"""

import logging
from datetime import date
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from habitjournal.config import JournalConfig, load_config
from habitjournal.core.gamification import LevelUpEvent
from habitjournal.database.storage import BlobStore, JsonFileStore
from habitjournal.services.journal import JournalService
from habitjournal.services.pomodoro import PomodoroTimer, create_timer
from habitjournal.utils.logger import setup_logger

logger = logging.getLogger(__name__)


class JournalApp:
    """
    Owns the collaborators for one running journal.

    Initialization order: logging, store, journal (load/migrate), timer.
    The scheduler is created on first ``start_timer`` and must be started
    from inside a running event loop.
    """

    def __init__(self, config: Optional[JournalConfig] = None,
                 store: Optional[BlobStore] = None,
                 configure_logging: bool = True):
        self.config = config or load_config()
        self.configure_logging = configure_logging
        self.store = store
        self.journal: Optional[JournalService] = None
        self.timer: Optional[PomodoroTimer] = None
        self.scheduler: Optional[AsyncIOScheduler] = None
        self.last_level_up: Optional[LevelUpEvent] = None
        self.initialized = False

    def initialize(self, today: Optional[date] = None) -> JournalService:
        if self.configure_logging:
            setup_logger(self.config)

        logger.info("🔧 Initializing habit journal...")
        self.config.ensure_directories()
        if self.store is None:
            self.store = JsonFileStore(self.config.storage.data_dir)

        self.journal = JournalService.open(self.store, config=self.config, today=today)
        self.journal.engine.on_level_up(self._remember_level_up)
        self.timer = create_timer(self.config, on_work_complete=self.journal.on_work_session_complete)

        self.initialized = True
        profile = self.journal.state.profile
        logger.info(f"✅ Journal ready: week {self.journal.state.current_week}, "
                    f"level {profile.level}, {profile.xp} XP")
        return self.journal

    def _remember_level_up(self, event: LevelUpEvent) -> None:
        self.last_level_up = event

    def start_timer(self) -> bool:
        if not self.initialized:
            raise RuntimeError("JournalApp.initialize() must be called first")
        if self.scheduler is None:
            self.scheduler = AsyncIOScheduler()
            self.scheduler.start()
        return self.timer.start(self.scheduler)

    def shutdown(self) -> None:
        if self.timer is not None:
            self.timer.stop()
        if self.scheduler is not None:
            self.scheduler.shutdown(wait=False)
            self.scheduler = None
        logger.info("🛑 Habit journal stopped")
