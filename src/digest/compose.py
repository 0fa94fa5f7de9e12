"""Output blocks: a path marker line followed by the file's text."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


def format_block(relative_path: str, text: str) -> str:
    """Format one ``// <relative-path>`` block, ending in a blank line."""
    if not text.endswith("\n"):
        text += "\n"
    return f"// {relative_path}\n{text}\n"


def join_blocks(blocks: Iterable[str]) -> str:
    """Concatenate blocks and trim trailing whitespace."""
    return "".join(blocks).rstrip()


__all__ = ["format_block", "join_blocks"]
