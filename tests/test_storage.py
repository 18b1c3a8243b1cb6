# tests/test_storage.py - key-value store
from taskboard.storage import JsonFileStore


def test_missing_file_is_empty(tmp_path):
    """A missing file reads as an empty store."""
    store = JsonFileStore(tmp_path / "nothing.json")
    assert store.get_item("projects") is None


def test_set_and_get(tmp_path):
    """Values survive a new store on the same file."""
    store = JsonFileStore(tmp_path / "nested" / "store.json")
    store.set_item("projects", '{"a": 1}')
    store.set_item("theme", "dark")
    assert JsonFileStore(tmp_path / "nested" / "store.json").get_item("projects") == '{"a": 1}'
    assert store.get_item("theme") == "dark"


def test_corrupt_file_reads_as_empty(tmp_path):
    """A corrupt file reads as empty and can be rewritten."""
    path = tmp_path / "store.json"
    path.write_text("{{{", encoding="utf-8")
    store = JsonFileStore(path)
    assert store.get_item("projects") is None
    store.set_item("projects", "{}")
    assert store.get_item("projects") == "{}"


def test_remove_item(tmp_path):
    """Removing a key, set or not, leaves it absent."""
    store = JsonFileStore(tmp_path / "store.json")
    store.set_item("a", "1")
    store.remove_item("a")
    store.remove_item("never-set")
    assert store.get_item("a") is None
