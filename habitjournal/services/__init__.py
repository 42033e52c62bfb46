"""
Service layer: the journal operations surface and the Pomodoro timer.
"""

from .journal import JournalService, load_or_migrate
from .pomodoro import PomodoroTimer, create_timer

__all__ = [
    'JournalService',
    'load_or_migrate',
    'PomodoroTimer',
    'create_timer'
]
