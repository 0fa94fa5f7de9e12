"""Elision: replace the bodies of non-kept callables with a placeholder."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rewrite.splice import Replacement, apply_replacements, drop_nested

if TYPE_CHECKING:
    from collections.abc import Sequence

    from parse.models import Callable, SourceUnit
    from rewrite.keep import KeepFilter

PLACEHOLDER_BODY = "{ /* ... */ }"


def elide_bodies(
    unit: SourceUnit, callables: Sequence[Callable], keep: KeepFilter
) -> str:
    """Return the unit text with every non-kept body replaced.

    Everything outside the replaced bodies is left byte for byte. A body
    nested inside another replaced body disappears with it, even when the
    nested callable is kept.
    """
    placeholder = PLACEHOLDER_BODY.encode("utf-8")
    replacements = [
        Replacement(*callable_.body_range, placeholder)
        for callable_ in callables
        if not keep.keeps(callable_)
    ]
    if not replacements:
        return unit.text

    spliced = apply_replacements(unit.source_bytes, drop_nested(replacements))
    return spliced.decode("utf-8")


__all__ = ["PLACEHOLDER_BODY", "elide_bodies"]
