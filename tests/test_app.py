import json

import pytest

from habitjournal.app import JournalApp
from habitjournal.config import load_config
from habitjournal.database.migrations import STORAGE_KEY
from habitjournal.database.storage import JsonFileStore

from conftest import TODAY, TODAY_KEY


@pytest.fixture
def config(monkeypatch, tmp_path):
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("POMODORO_WORK_MINUTES", "1")
    return load_config()


def test_initialize_wires_collaborators(config):
    app = JournalApp(config, configure_logging=False)
    journal = app.initialize(today=TODAY)

    assert app.initialized
    assert isinstance(app.store, JsonFileStore)
    assert journal.state.current_week == TODAY_KEY
    assert app.timer.work_minutes == 1
    assert json.loads(app.store.load(STORAGE_KEY))["currentWeek"] == TODAY_KEY


def test_timer_completion_persists_journal(config, memory_store):
    app = JournalApp(config, store=memory_store, configure_logging=False)
    journal = app.initialize(today=TODAY)
    journal.state.current_week = "2024-06-17"

    app.timer.seconds_left = 1
    app.timer.tick()

    assert json.loads(memory_store.load(STORAGE_KEY))["currentWeek"] == "2024-06-17"


def test_level_up_is_recorded(config, memory_store):
    app = JournalApp(config, store=memory_store, configure_logging=False)
    journal = app.initialize(today=TODAY)
    for _ in range(3):
        journal.apply_template("Self Care")
    for index in range(16):
        for day in range(3):
            journal.toggle_task_day(index, day)

    assert app.last_level_up is not None
    assert app.last_level_up.level == 2


def test_start_timer_requires_initialize(config):
    with pytest.raises(RuntimeError):
        JournalApp(config, configure_logging=False).start_timer()


def test_shutdown_without_timer(config, memory_store):
    app = JournalApp(config, store=memory_store, configure_logging=False)
    app.initialize(today=TODAY)
    app.shutdown()
    assert app.scheduler is None
    assert not app.timer.running
