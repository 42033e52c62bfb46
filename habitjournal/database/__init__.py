from .storage import BlobStore, MemoryStore, JsonFileStore
from .migrations import (
    MigrationService,
    STORAGE_KEY,
    LEGACY_STORAGE_KEY,
    serialize_state
)

__all__ = [
    'BlobStore',
    'MemoryStore',
    'JsonFileStore',
    'MigrationService',
    'STORAGE_KEY',
    'LEGACY_STORAGE_KEY',
    'serialize_state'
]
