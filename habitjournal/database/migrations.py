# database/migrations.py

"""
Loading the journal blob, and the one-time upgrade from the legacy
single-week schema (V4) to the multi-week schema (V5).
"""

import json
import logging
from datetime import date
from typing import Any, Optional

from habitjournal.core.errors import CorruptedDataError
from habitjournal.core.models import AppState, Profile, WeekRecord
from habitjournal.core.week_key import week_key_of
from habitjournal.database.storage import BlobStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "habitJournalDataV5"
LEGACY_STORAGE_KEY = "habitJournalDataV4"


def _parse_blob(blob: Optional[str], key: str) -> Optional[Any]:
    """Decode a stored blob; malformed JSON counts as absent"""
    if blob is None:
        return None
    try:
        return json.loads(blob)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning(f"Stored data under {key} is not valid JSON, ignoring it: {e}")
        return None


def serialize_state(state: AppState) -> str:
    return json.dumps(state.to_dict(), ensure_ascii=False)


class MigrationService:
    """Builds the startup AppState from whatever the store holds"""

    def __init__(self, store: BlobStore,
                 storage_key: str = STORAGE_KEY,
                 legacy_storage_key: str = LEGACY_STORAGE_KEY):
        self.store = store
        self.storage_key = storage_key
        self.legacy_storage_key = legacy_storage_key

    def load_current(self, today: date) -> Optional[AppState]:
        """Current-schema state, or None if absent or malformed"""
        data = _parse_blob(self.store.load(self.storage_key), self.storage_key)
        if data is None:
            return None
        try:
            return AppState.from_dict(data, fallback_week=week_key_of(today))
        except CorruptedDataError as e:
            logger.warning(f"Ignoring malformed {self.storage_key} payload: {e}")
            return None

    def migrate(self, today: date) -> AppState:
        """Wrap the legacy week, or start fresh, then persist immediately"""
        current_key = week_key_of(today)
        legacy = _parse_blob(self.store.load(self.legacy_storage_key), self.legacy_storage_key)

        if isinstance(legacy, dict):
            logger.info(f"Migrating {self.legacy_storage_key} data into week {current_key}")
            state = AppState(
                current_week=current_key,
                profile=Profile(),
                weeks={current_key: WeekRecord.from_dict(legacy)},
            )
        else:
            if legacy is not None:
                logger.warning(f"{self.legacy_storage_key} payload is not a week object, starting fresh")
            logger.info(f"No stored journal found, starting fresh at week {current_key}")
            state = AppState.create(current_key)

        self.store.save(self.storage_key, serialize_state(state))
        return state

    def load_or_migrate(self, today: date) -> AppState:
        state = self.load_current(today)
        if state is not None:
            logger.info(f"Loaded journal with {len(state.weeks)} weeks")
            return state
        return self.migrate(today)
