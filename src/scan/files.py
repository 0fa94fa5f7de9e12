"""File scanning utilities for crate-digest."""

from __future__ import annotations

import os
from fnmatch import fnmatch
from pathlib import Path
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from collections.abc import Callable, Collection, Iterator

PRUNED_DIRECTORIES = frozenset({"target", "node_modules"})


def should_include_file(path: Path, allow: Collection[str]) -> bool:
    """Match a file against an allow-list of file names and extensions.

    ``allow`` mixes exact names (``Cargo.toml``) and bare extensions (``rs``).
    """
    if path.name in allow:
        return True
    suffix = path.suffix
    return bool(suffix) and suffix[1:] in allow


def _is_pruned(name: str) -> bool:
    return name.startswith(".") or name in PRUNED_DIRECTORIES


def _should_include_file(
    path: Path,
    directory: Path,
    allow: Collection[str],
    gitignore_matches: Callable[[str], bool] | None,
    include_patterns: list[str] | None,
    exclude_patterns: list[str] | None,
) -> bool:
    """Check if a file should be included based on all filtering rules."""
    if not path.is_file() or path.is_symlink():
        return False

    if not _is_within_root(path, directory):
        return False

    if not should_include_file(path, allow):
        return False

    try:
        rel_path = path.relative_to(directory)
    except ValueError:
        return False

    rel_path_str = rel_path.as_posix()

    if gitignore_matches is not None and gitignore_matches(str(path)):
        return False

    if include_patterns and not any(
        fnmatch(rel_path_str, pat) for pat in include_patterns
    ):
        return False

    has_excluded_match = exclude_patterns and any(
        fnmatch(rel_path_str, pat) for pat in exclude_patterns
    )
    return not has_excluded_match


def _is_within_root(path: Path, root: Path) -> bool:
    """Return True when the resolved path stays within the resolved root."""
    try:
        root_resolved = root.resolve()
        path_resolved = path.resolve()
    except OSError:
        return False

    try:
        path_resolved.relative_to(root_resolved)
    except ValueError:
        return False

    return True


def _walk_files(root: Path) -> Iterator[Path]:
    """Yield files under root, never descending into pruned or linked dirs."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [name for name in dirnames if not _is_pruned(name)]
        base = Path(dirpath)
        for filename in filenames:
            if not _is_pruned(filename):
                yield base / filename


def _iter_gitignore_files(root: Path) -> list[Path]:
    """Return sorted list of .gitignore files under root (including root)."""
    gitignore_paths = [root / ".gitignore"]
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [name for name in dirnames if not _is_pruned(name)]
        if ".gitignore" in filenames:
            gitignore_paths.append(Path(dirpath) / ".gitignore")
    unique_paths = {
        path for path in gitignore_paths if path.is_file() and not path.is_symlink()
    }
    return sorted(unique_paths, key=lambda p: p.relative_to(root).as_posix())


def _build_gitignore_matcher(
    root: Path,
    *,
    nested_gitignore: bool,
) -> Callable[[str], bool] | None:
    if not nested_gitignore:
        gitignore_path = root / ".gitignore"
        if gitignore_path.is_file():
            return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))
        return None

    gitignore_paths = _iter_gitignore_files(root)
    if not gitignore_paths:
        return None

    matchers = [parse_gitignore(path) for path in gitignore_paths]

    def matches(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                continue
        return False

    return matches


def find_candidate_files(
    directory: Path,
    allow: Collection[str],
    *,
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    nested_gitignore: bool = False,
) -> list[Path]:
    """Find the files of a project that pass the ignore rules and allow-list.

    Dot-entries, ``target`` and ``node_modules`` are never visited, and
    ``.gitignore`` rules apply.

    Args:
        directory: Project root to search
        allow: File names and bare extensions to accept
        include_patterns: Optional list of fnmatch patterns; if provided,
            files must match at least one pattern to be included
        exclude_patterns: Optional list of fnmatch patterns; files matching
            any pattern are excluded
        nested_gitignore: Also honour ``.gitignore`` files below the root

    Returns:
        Matching paths sorted lexicographically by relative path.
    """
    gitignore_matches = _build_gitignore_matcher(
        directory,
        nested_gitignore=nested_gitignore,
    )

    matched_files = [
        path
        for path in _walk_files(directory)
        if _should_include_file(
            path,
            directory,
            allow,
            gitignore_matches,
            include_patterns,
            exclude_patterns,
        )
    ]

    matched_files.sort(key=lambda p: p.relative_to(directory).as_posix())

    return matched_files


__all__ = ["find_candidate_files", "should_include_file"]
