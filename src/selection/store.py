"""Persistence of previously chosen qualified names, keyed by project root."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

import orjson
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from utils import default_config_dir

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

HISTORY_FILENAME = "history.json"


class SelectionRecord(BaseModel):
    """Prior choices for one project root.

    ``names`` is None when the root has never been recorded, which is
    different from an empty list of choices.
    """

    model_config = ConfigDict(frozen=True)

    root: str
    names: tuple[str, ...] | None = None

    @property
    def has_entry(self) -> bool:
        return self.names is not None


class SelectionHistory(BaseModel):
    """On-disk layout of the history file."""

    selections: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Project root path -> chosen qualified names",
    )


class SelectionStore(Protocol):
    def load(self, root: str) -> SelectionRecord: ...

    def save(self, root: str, names: Sequence[str]) -> None: ...


class InMemorySelectionStore:
    """Selection store that keeps records in a dict."""

    def __init__(self, selections: dict[str, list[str]] | None = None) -> None:
        self.selections: dict[str, list[str]] = dict(selections or {})

    def load(self, root: str) -> SelectionRecord:
        names = self.selections.get(root)
        return SelectionRecord(
            root=root, names=tuple(names) if names is not None else None
        )

    def save(self, root: str, names: Sequence[str]) -> None:
        self.selections[root] = list(names)


class JsonSelectionStore:
    """Selection store backed by a single JSON file.

    Concurrent runs are not coordinated; the last write wins.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    @classmethod
    def default(cls) -> JsonSelectionStore:
        return cls(default_config_dir() / HISTORY_FILENAME)

    def _read_history(self) -> SelectionHistory:
        """Read the history file; anything unreadable counts as empty."""
        try:
            raw = self.path.read_bytes()
        except OSError:
            return SelectionHistory()

        try:
            return SelectionHistory.model_validate(orjson.loads(raw))
        except (orjson.JSONDecodeError, ValidationError):
            return SelectionHistory()

    def load(self, root: str) -> SelectionRecord:
        names = self._read_history().selections.get(root)
        return SelectionRecord(
            root=root, names=tuple(names) if names is not None else None
        )

    def save(self, root: str, names: Sequence[str]) -> None:
        """Replace the record for ``root``.

        Raises:
            OSError: If the history file cannot be written.
        """
        history = self._read_history()
        history.selections[root] = list(names)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        opts = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2
        self.path.write_bytes(orjson.dumps(history.model_dump(), option=opts))


__all__ = [
    "HISTORY_FILENAME",
    "InMemorySelectionStore",
    "JsonSelectionStore",
    "SelectionHistory",
    "SelectionRecord",
    "SelectionStore",
]
