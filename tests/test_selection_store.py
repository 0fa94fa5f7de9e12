from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from selection.store import InMemorySelectionStore, JsonSelectionStore

if TYPE_CHECKING:
    from pathlib import Path


def test_missing_history_file_has_no_entry(tmp_path: Path) -> None:
    store = JsonSelectionStore(tmp_path / "missing" / "history.json")

    record = store.load("/repo")

    assert record.root == "/repo"
    assert record.names is None
    assert not record.has_entry


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        '["a", "b"]',
        '{"selections": {"/repo": 3}}',
        "",
    ],
)
def test_corrupt_history_is_treated_as_empty(tmp_path: Path, content: str) -> None:
    path = tmp_path / "history.json"
    path.write_text(content, encoding="utf-8")

    assert JsonSelectionStore(path).load("/repo").names is None


def test_save_creates_parent_dirs_and_round_trips(tmp_path: Path) -> None:
    path = tmp_path / "config" / "crate-digest" / "history.json"
    store = JsonSelectionStore(path)

    store.save("/repo", ["src/lib.rs::add", "src/lib.rs::Counter::new"])

    assert store.load("/repo").names == ("src/lib.rs::add", "src/lib.rs::Counter::new")
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "selections": {"/repo": ["src/lib.rs::add", "src/lib.rs::Counter::new"]}
    }


def test_save_replaces_record_and_keeps_other_roots(tmp_path: Path) -> None:
    store = JsonSelectionStore(tmp_path / "history.json")
    store.save("/repo", ["src/lib.rs::add"])
    store.save("/other", ["src/main.rs::main"])

    store.save("/repo", ["src/lib.rs::sub"])

    assert store.load("/repo").names == ("src/lib.rs::sub",)
    assert store.load("/other").names == ("src/main.rs::main",)


def test_empty_selection_is_an_entry(tmp_path: Path) -> None:
    store = JsonSelectionStore(tmp_path / "history.json")

    store.save("/repo", [])

    record = store.load("/repo")
    assert record.has_entry
    assert record.names == ()


def test_save_overwrites_corrupt_history(tmp_path: Path) -> None:
    path = tmp_path / "history.json"
    path.write_text("{broken", encoding="utf-8")

    JsonSelectionStore(path).save("/repo", ["src/lib.rs::add"])

    assert json.loads(path.read_text(encoding="utf-8")) == {
        "selections": {"/repo": ["src/lib.rs::add"]}
    }


def test_default_store_lives_under_home_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    store = JsonSelectionStore.default()

    assert store.path == tmp_path / ".config" / "crate-digest" / "history.json"


def test_in_memory_store() -> None:
    store = InMemorySelectionStore()
    assert store.load("/repo").names is None

    store.save("/repo", ["src/lib.rs::add"])

    assert store.load("/repo").names == ("src/lib.rs::add",)
    assert store.selections == {"/repo": ["src/lib.rs::add"]}
