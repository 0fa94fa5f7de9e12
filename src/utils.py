"""Shared utilities for crate-digest."""

from __future__ import annotations

from pathlib import Path

APP_DIR_NAME = "crate-digest"


class EnvironmentFailure(Exception):
    """Raised when the runtime environment cannot support the requested action."""


def relative_posix_path(file_path: Path, root: Path) -> str:
    """Return ``file_path`` relative to ``root`` as a POSIX string.

    Falls back to the path as given when it does not live under ``root``.

    Examples:
        >>> relative_posix_path(Path("/repo/src/lib.rs"), Path("/repo"))
        'src/lib.rs'
    """
    try:
        return file_path.relative_to(root).as_posix()
    except ValueError:
        return file_path.as_posix()


def default_config_dir() -> Path:
    """Return ``~/.config/crate-digest``.

    Raises:
        EnvironmentFailure: If the home directory cannot be resolved.
    """
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as exc:
        msg = f"Failed to get home directory: {exc}"
        raise EnvironmentFailure(msg) from exc
    return home / ".config" / APP_DIR_NAME
