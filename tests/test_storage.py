import json

import pytest

from storage import LocalStorage, StorageQuotaError, atomic_write_json


def _document(storage):
    return json.loads(storage.path.read_text(encoding="utf-8"))


def test_missing_file_reads_as_empty(storage):
    assert storage.get_item("anything") is None
    assert not storage.path.exists()


def test_set_get_remove(storage):
    storage.set_item("a", "1")
    storage.set_items({"b": "2", "c": "3"})
    assert storage.get_item("a") == "1"
    assert _document(storage) == {"a": "1", "b": "2", "c": "3"}

    storage.remove_items("a", "b")
    assert _document(storage) == {"c": "3"}
    storage.remove_item("missing")
    assert _document(storage) == {"c": "3"}


def test_values_persist_across_instances(tmp_path):
    path = tmp_path / "ls.json"
    LocalStorage(path).set_item("k", "v")
    assert LocalStorage(path).get_item("k") == "v"


def test_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "ls.json"
    path.write_text("{not json", encoding="utf-8")
    storage = LocalStorage(path)
    assert storage.get_item("k") is None

    storage.set_item("k", "v")
    assert json.loads(path.read_text(encoding="utf-8")) == {"k": "v"}


def test_non_object_document_reads_as_empty(tmp_path):
    path = tmp_path / "ls.json"
    path.write_text("[1, 2]", encoding="utf-8")
    storage = LocalStorage(path)
    assert storage.get_item("0") is None
    storage.set_item("k", "v")
    assert _document(storage) == {"k": "v"}


def test_quota_exceeded_leaves_file_untouched(tmp_path):
    path = tmp_path / "ls.json"
    storage = LocalStorage(path, quota_bytes=64)
    storage.set_item("small", "x")

    with pytest.raises(StorageQuotaError):
        storage.set_item("big", "y" * 200)
    assert _document(storage) == {"small": "x"}


def test_atomic_write_creates_parent_dirs(tmp_path):
    target = tmp_path / "nested" / "dir" / "doc.json"
    atomic_write_json(target, {"a": 1})
    assert json.loads(target.read_text(encoding="utf-8")) == {"a": 1}
    assert [p.name for p in target.parent.iterdir()] == ["doc.json"]
