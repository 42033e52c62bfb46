import os
from datetime import date

import pytest

os.environ.setdefault("HABITJOURNAL_ENV", "test")
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("TIMEZONE", "UTC")

from habitjournal.core.models import AppState, DayStatus, Task, WeekRecord
from habitjournal.database.storage import JsonFileStore, MemoryStore

# Wednesday; its week starts on Monday 2024-06-10
TODAY = date(2024, 6, 12)
TODAY_KEY = "2024-06-10"


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def file_store(tmp_path):
    return JsonFileStore(tmp_path / "data")


def make_task(*statuses, text="task"):
    """Task whose first days take the given statuses, rest none"""
    return Task(text=text, days=list(statuses))


def checked_week(checks=1):
    """Week record with ``checks`` checked days on one task"""
    return WeekRecord(tasks=[make_task(*([DayStatus.CHECK] * checks))])


def empty_state(current_week=TODAY_KEY):
    return AppState.create(current_week)
