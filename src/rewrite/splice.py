"""Non-overlapping range replacement over a byte buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class OverlappingReplacementError(ValueError):
    """Raised when two replacements cover intersecting ranges."""


@dataclass(frozen=True)
class Replacement:
    """Replace ``data[start:end]`` with ``text``."""

    start: int
    end: int
    text: bytes


def drop_nested(replacements: Iterable[Replacement]) -> list[Replacement]:
    """Drop replacements whose range lies inside another replacement's range.

    Returns the survivors ordered by start offset.
    """
    ordered = sorted(replacements, key=lambda r: (r.start, -r.end))
    kept: list[Replacement] = []
    for replacement in ordered:
        if kept and replacement.end <= kept[-1].end:
            continue
        kept.append(replacement)
    return kept


def apply_replacements(data: bytes, replacements: Iterable[Replacement]) -> bytes:
    """Apply all replacements, with offsets taken against the original ``data``.

    Raises:
        ValueError: If a range falls outside ``data`` or is inverted.
        OverlappingReplacementError: If two ranges intersect.
    """
    ordered = sorted(replacements, key=lambda r: (r.start, r.end))

    previous: Replacement | None = None
    for replacement in ordered:
        if not 0 <= replacement.start <= replacement.end <= len(data):
            msg = (
                f"Replacement range {replacement.start}..{replacement.end} "
                f"is outside 0..{len(data)}"
            )
            raise ValueError(msg)
        if previous is not None and replacement.start < previous.end:
            msg = (
                f"Replacement {replacement.start}..{replacement.end} overlaps "
                f"{previous.start}..{previous.end}"
            )
            raise OverlappingReplacementError(msg)
        previous = replacement

    result = bytearray(data)
    for replacement in reversed(ordered):
        result[replacement.start : replacement.end] = replacement.text
    return bytes(result)


__all__ = [
    "OverlappingReplacementError",
    "Replacement",
    "apply_replacements",
    "drop_nested",
]
