"""Sequence discovery, extraction, selection and rewriting across a project."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from digest.compose import format_block, join_blocks
from parse.models import SourceUnit
from parse.treesitter_functions import ParseError, extract_callables
from rewrite import RewriteMode, rewrite
from scan.files import find_candidate_files
from selection.selector import select_callables, select_everything

if TYPE_CHECKING:
    from pathlib import Path

    from parse.models import Callable
    from selection.picker import Picker
    from selection.store import SelectionStore
    from settings.config import DigestConfig

logger = logging.getLogger(__name__)

RUST_EXTENSION = "rs"
README_FILENAME = "README.md"
MANIFEST_FILENAME = "Cargo.toml"

DigestStatus = Literal[
    "ok", "no_files", "no_callables", "nothing_selected", "cancelled", "empty"
]

STATUS_MESSAGES: dict[DigestStatus, str] = {
    "no_files": "No matching files found in the project.",
    "no_callables": "No functions found in Rust files.",
    "nothing_selected": "No functions selected.",
    "cancelled": "Selection cancelled.",
    "empty": "No content generated with the current selection.",
}


@dataclass(frozen=True)
class DigestOptions:
    functions: bool = False
    only: bool = False
    select_all: bool = False
    include_readme: bool = False
    include_manifest: bool = False


@dataclass(frozen=True)
class DigestResult:
    status: DigestStatus
    text: str = ""
    skipped: tuple[str, ...] = field(default_factory=tuple)

    @property
    def message(self) -> str | None:
        return STATUS_MESSAGES.get(self.status)


def allow_list(options: DigestOptions, config: DigestConfig) -> frozenset[str]:
    """File names and extensions to pick up; Rust sources are always included."""
    allow = {RUST_EXTENSION}
    if options.select_all or options.include_readme or config.readme:
        allow.add(README_FILENAME)
    if options.select_all or options.include_manifest or config.toml:
        allow.add(MANIFEST_FILENAME)
    return frozenset(allow)


def _is_rust(unit: SourceUnit) -> bool:
    return unit.relative_path.endswith(f".{RUST_EXTENSION}")


def _read_units(
    root: Path, paths: list[Path], skipped: list[str]
) -> list[SourceUnit]:
    units: list[SourceUnit] = []
    for path in paths:
        try:
            units.append(SourceUnit.from_path(path, root))
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping unreadable file %s: %s", path, exc)
            skipped.append(str(path))
    return units


def _extract_all(
    units: list[SourceUnit], skipped: list[str]
) -> dict[str, list[Callable]]:
    """Extract callables per Rust unit; units that fail to parse map to []."""
    by_path: dict[str, list[Callable]] = {}
    for unit in units:
        if not _is_rust(unit):
            continue
        try:
            by_path[unit.relative_path] = extract_callables(unit)
        except ParseError as exc:
            logger.warning("Failed to parse %s: %s", unit.relative_path, exc.message)
            skipped.append(unit.relative_path)
            by_path[unit.relative_path] = []
    return by_path


def run_digest(
    root: Path,
    options: DigestOptions,
    config: DigestConfig,
    *,
    store: SelectionStore,
    picker: Picker,
) -> DigestResult:
    """Build the digest text for the project at ``root``.

    Without ``options.functions`` every matched file is emitted verbatim.
    Otherwise callables are extracted, selected and each Rust file is
    rewritten; ``options.only`` switches from elision to extraction and drops
    non-Rust files.
    """
    allow = (
        frozenset({RUST_EXTENSION})
        if options.functions and options.only
        else allow_list(options, config)
    )
    paths = find_candidate_files(
        root,
        allow,
        include_patterns=config.include or None,
        exclude_patterns=config.exclude or None,
        nested_gitignore=config.nested_gitignore,
    )
    skipped: list[str] = []
    units = _read_units(root, paths, skipped)
    if not units:
        return DigestResult(status="no_files", skipped=tuple(skipped))

    if not options.functions:
        text = join_blocks(format_block(u.relative_path, u.text) for u in units)
        return DigestResult(
            status="ok" if text else "empty", text=text, skipped=tuple(skipped)
        )

    callables_by_path = _extract_all(units, skipped)
    all_callables = [c for cs in callables_by_path.values() for c in cs]
    if not all_callables:
        return DigestResult(status="no_callables", skipped=tuple(skipped))

    if options.select_all:
        selection = select_everything(all_callables)
    else:
        selection = select_callables(
            all_callables, root_key=str(root), store=store, picker=picker
        )
    if selection.cancelled:
        return DigestResult(status="cancelled", skipped=tuple(skipped))
    if not selection.names:
        return DigestResult(status="nothing_selected", skipped=tuple(skipped))

    mode = RewriteMode.EXTRACT if options.only else RewriteMode.ELIDE
    blocks: list[str] = []
    for unit in units:
        if not _is_rust(unit):
            if not options.only:
                blocks.append(format_block(unit.relative_path, unit.text))
            continue

        keep = {name for name in selection.names if name.path == unit.relative_path}
        transformed = rewrite(
            unit,
            callables_by_path[unit.relative_path],
            keep,
            mode,
            config.keep_match,
        )
        if transformed.strip():
            blocks.append(format_block(unit.relative_path, transformed))

    text = join_blocks(blocks)
    if not text:
        return DigestResult(status="empty", skipped=tuple(skipped))
    return DigestResult(status="ok", text=text, skipped=tuple(skipped))


__all__ = [
    "STATUS_MESSAGES",
    "DigestOptions",
    "DigestResult",
    "DigestStatus",
    "allow_list",
    "run_digest",
]
