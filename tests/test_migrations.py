import json
import logging

from habitjournal.core.models import Profile, SleepEntry
from habitjournal.database.migrations import (
    LEGACY_STORAGE_KEY,
    STORAGE_KEY,
    MigrationService,
    serialize_state,
)

from conftest import TODAY, TODAY_KEY, checked_week, empty_state

LEGACY_WEEK = {
    "tasks": [{"text": "Read", "days": ["check", None, "x", None, None, None, "na"]}],
    "trackers": {
        "water": [True, False, False, False, False, False, False],
        "sleep": 7.5,
        "food": {"breakfast": True, "lunch": False, "dinner": False, "snack": False},
        "mood": "good",
        "weather": "rainy",
        "uniqueEvent": "",
        "fitness": {"type": "run", "duration": "30"},
    },
    "weekOf": "June 10",
}


def test_legacy_blob_is_wrapped_under_current_week(memory_store):
    memory_store.save(LEGACY_STORAGE_KEY, json.dumps(LEGACY_WEEK))

    state = MigrationService(memory_store).load_or_migrate(TODAY)

    assert state.current_week == TODAY_KEY
    assert list(state.weeks) == [TODAY_KEY]
    record = state.weeks[TODAY_KEY]
    assert record.trackers.sleep == [SleepEntry() for _ in range(7)]
    assert record.tasks[0].text == "Read"
    assert record.week_of == "June 10"
    assert record.trackers.appointments == []
    assert state.profile == Profile()
    assert state.profile.to_dict() == {
        "xp": 0, "level": 1, "streakDays": 0, "longestStreak": 0, "unlockedThemes": [],
    }


def test_migration_result_is_persisted_immediately(memory_store):
    memory_store.save(LEGACY_STORAGE_KEY, json.dumps(LEGACY_WEEK))
    MigrationService(memory_store).load_or_migrate(TODAY)

    stored = json.loads(memory_store.load(STORAGE_KEY))
    assert stored["currentWeek"] == TODAY_KEY
    assert len(stored["weeks"][TODAY_KEY]["trackers"]["sleep"]) == 7


def test_current_schema_wins_over_legacy(memory_store):
    state = empty_state("2024-05-06")
    state.weeks["2024-05-06"] = checked_week(2)
    memory_store.save(STORAGE_KEY, serialize_state(state))
    memory_store.save(LEGACY_STORAGE_KEY, json.dumps(LEGACY_WEEK))

    loaded = MigrationService(memory_store).load_or_migrate(TODAY)

    assert loaded.current_week == "2024-05-06"
    assert loaded.weeks["2024-05-06"].checked_days == 2
    assert TODAY_KEY not in loaded.weeks


def test_fresh_start_without_any_data(memory_store):
    state = MigrationService(memory_store).load_or_migrate(TODAY)

    assert state.current_week == TODAY_KEY
    record = state.weeks[TODAY_KEY]
    assert len(record.tasks) == 1
    assert record.trackers.water == [False] * 7
    assert memory_store.load(STORAGE_KEY) is not None


def test_malformed_legacy_json_starts_fresh(memory_store, caplog):
    memory_store.save(LEGACY_STORAGE_KEY, "{not json")

    with caplog.at_level(logging.WARNING):
        state = MigrationService(memory_store).load_or_migrate(TODAY)

    assert state.weeks[TODAY_KEY].tasks[0].text == ""
    assert "not valid JSON" in caplog.text


def test_malformed_current_blob_falls_back_to_migration(memory_store):
    memory_store.save(STORAGE_KEY, "[]")
    memory_store.save(LEGACY_STORAGE_KEY, json.dumps(LEGACY_WEEK))

    state = MigrationService(memory_store).load_or_migrate(TODAY)

    assert state.weeks[TODAY_KEY].tasks[0].text == "Read"
    assert json.loads(memory_store.load(STORAGE_KEY))["currentWeek"] == TODAY_KEY


def test_loaded_state_heals_old_records(memory_store):
    memory_store.save(STORAGE_KEY, json.dumps({
        "currentWeek": TODAY_KEY,
        "profile": {"xp": 10, "level": 1},
        "weeks": {TODAY_KEY: {"tasks": [], "trackers": {"sleep": 6}}},
    }))

    state = MigrationService(memory_store).load_or_migrate(TODAY)

    trackers = state.weeks[TODAY_KEY].trackers
    assert len(trackers.sleep) == 7
    assert trackers.food["dinner"] is False
    assert state.profile.unlocked_themes == set()


def test_custom_storage_keys(memory_store):
    memory_store.save("old", json.dumps(LEGACY_WEEK))
    service = MigrationService(memory_store, storage_key="new", legacy_storage_key="old")
    service.load_or_migrate(TODAY)
    assert memory_store.load("new") is not None
    assert memory_store.load(STORAGE_KEY) is None


def test_non_dashed_week_keys_are_not_trusted(memory_store):
    memory_store.save(STORAGE_KEY, json.dumps({
        "currentWeek": "20240610",
        "weeks": {"20240603": {}, "2024-W22-1": {}},
    }))

    state = MigrationService(memory_store).load_or_migrate(TODAY)

    assert state.current_week == TODAY_KEY
    assert state.current_week in state.weeks
    assert "20240603" not in state.weeks
    assert "2024-W22-1" not in state.weeks
    assert all(len(key) == 10 and key[4] == "-" for key in state.weeks)
    assert state.sorted_week_keys()[-1] == TODAY_KEY


def test_overflowing_profile_numbers_fall_back_to_defaults(memory_store):
    memory_store.save(
        STORAGE_KEY,
        '{"currentWeek": "%s", "weeks": {}, "profile": {"longestStreak": 1e999, "xp": -1e999}}' % TODAY_KEY,
    )

    state = MigrationService(memory_store).load_or_migrate(TODAY)

    assert state.profile.longest_streak == 0
    assert state.profile.xp == 0
