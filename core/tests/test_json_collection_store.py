"""Generic JSON collection store: bootstrap, full replace, error taxonomy."""
from __future__ import annotations

import json
import os
import sys
import threading

import pytest

from core.common.errors import DecodeError, EncodeError, StorageIOError
from core.common.json_collection_store import ItemShapeError, JsonCollectionStore


def _decode_int(value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ItemShapeError("expected an integer")
    return value


@pytest.fixture
def store():
    return JsonCollectionStore(_decode_int, lambda v: v, label="numbers")


def test_missing_file_is_empty_collection(store, tmp_path):
    assert store.load(tmp_path / "nope" / "numbers.json") == []


def test_save_creates_parent_directories(store, tmp_path):
    target = tmp_path / "a" / "b" / "numbers.json"
    store.save(target, [1, 2, 3])
    assert json.loads(target.read_text(encoding="utf-8")) == [1, 2, 3]
    assert store.load(target) == [1, 2, 3]


def test_save_is_full_replace(store, tmp_path):
    target = tmp_path / "numbers.json"
    store.save(target, [1, 2, 3, 4])
    store.save(target, [9])
    assert store.load(target) == [9]


def test_empty_collection_round_trip(store, tmp_path):
    target = tmp_path / "numbers.json"
    store.save(target, [])
    assert target.exists()
    assert store.load(target) == []


def test_no_temp_files_left_behind(store, tmp_path):
    store.save(tmp_path / "numbers.json", [1])
    assert sorted(p.name for p in tmp_path.iterdir()) == ["numbers.json"]


@pytest.mark.parametrize("content", [b"[1, 2", b"{\"a\": 1}", b"", b"\xff\xfe"])
def test_corrupt_file_raises_decode_error(store, tmp_path, content):
    target = tmp_path / "numbers.json"
    target.write_bytes(content)
    with pytest.raises(DecodeError):
        store.load(target)


def test_wrong_item_shape_raises_decode_error(store, tmp_path):
    target = tmp_path / "numbers.json"
    target.write_text('[1, "two", 3]', encoding="utf-8")
    with pytest.raises(DecodeError, match="entry 1"):
        store.load(target)


def test_unserializable_item_raises_encode_error(tmp_path):
    store = JsonCollectionStore(_decode_int, lambda v: v)
    with pytest.raises(EncodeError):
        store.save(tmp_path / "numbers.json", [object()])
    assert not (tmp_path / "numbers.json").exists()


def test_unencodable_text_raises_encode_error(tmp_path):
    store = JsonCollectionStore(str, str, label="snippets")
    target = tmp_path / "snippets.json"
    with pytest.raises(EncodeError):
        store.save(target, ["ok", "\ud800"])
    assert not target.exists()


@pytest.mark.skipif(sys.platform.startswith("win"), reason="replace over an open file is refused on Windows")
def test_concurrent_saves_in_one_process_do_not_conflict(store, tmp_path):
    target = tmp_path / "numbers.json"
    errors = []

    def worker(value):
        for _ in range(100):
            try:
                store.save(target, [value])
            except StorageIOError as exc:
                errors.append(exc)

    threads = [threading.Thread(target=worker, args=(n,)) for n in (1, 2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert store.load(target) in ([1], [2])
    assert sorted(p.name for p in tmp_path.iterdir()) == ["numbers.json"]


def test_unreadable_path_raises_io_error(store, tmp_path):
    # a directory where the file should be cannot be read as bytes
    target = tmp_path / "numbers.json"
    target.mkdir()
    with pytest.raises(StorageIOError):
        store.load(target)


def test_parent_is_a_file_raises_io_error(store, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(StorageIOError):
        store.save(blocker / "numbers.json", [1])


@pytest.mark.skipif(sys.platform.startswith("win") or os.geteuid() == 0,
                    reason="permission bits not enforced")
def test_read_only_directory_raises_io_error(store, tmp_path):
    locked = tmp_path / "locked"
    locked.mkdir()
    locked.chmod(0o500)
    try:
        with pytest.raises(StorageIOError):
            store.save(locked / "numbers.json", [1])
    finally:
        locked.chmod(0o700)
