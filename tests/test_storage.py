import pytest

from habitjournal.core.errors import StorageError
from habitjournal.database.storage import JsonFileStore, MemoryStore


def test_file_store_round_trip(file_store):
    assert file_store.load("habitJournalDataV5") is None
    file_store.save("habitJournalDataV5", '{"weeks": {}}')
    assert file_store.load("habitJournalDataV5") == '{"weeks": {}}'
    assert (file_store.data_dir / "habitJournalDataV5.json").exists()
    assert not (file_store.data_dir / "habitJournalDataV5.tmp").exists()


def test_file_store_overwrites(file_store):
    file_store.save("k", "one")
    file_store.save("k", "two")
    assert file_store.load("k") == "two"


def test_file_store_delete(file_store):
    file_store.save("k", "one")
    file_store.delete("k")
    assert file_store.load("k") is None
    file_store.delete("k")


def test_file_store_rejects_path_keys(file_store):
    with pytest.raises(StorageError):
        file_store.save("../escape", "x")


def test_file_store_write_failure(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    store = JsonFileStore(blocker / "data")
    with pytest.raises(StorageError):
        store.save("k", "x")


def test_memory_store():
    store = MemoryStore({"a": "1"})
    assert store.load("a") == "1"
    store.save("b", "2")
    store.delete("a")
    assert store.blobs == {"b": "2"}
