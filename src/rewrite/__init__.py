"""Text rewriting modes for selective disclosure of callables."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from rewrite.elide import PLACEHOLDER_BODY, elide_bodies
from rewrite.extract import extract_kept
from rewrite.keep import KeepFilter, KeepMatch

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from parse.models import Callable, SourceUnit
    from parse.names import QualifiedName


class RewriteMode(str, Enum):
    """How non-kept callables are treated."""

    ELIDE = "elide"
    EXTRACT = "extract"


def rewrite(
    unit: SourceUnit,
    callables: Sequence[Callable],
    keep: Collection[QualifiedName],
    mode: RewriteMode = RewriteMode.ELIDE,
    match: KeepMatch = "qualified",
) -> str:
    """Rewrite one unit so that only the kept callables disclose their code.

    Args:
        unit: Source unit the callables were extracted from.
        callables: Callables of this unit, as returned by the extractor.
        keep: Names selected within this unit.
        mode: ``ELIDE`` keeps structure and replaces other bodies with a
            placeholder; ``EXTRACT`` emits only the kept callables.
        match: Whether ``keep`` is compared by full qualified name or by the
            bare method identifier.

    Returns:
        The rewritten text. An empty keep-set yields a fully elided unit, or
        an empty string in extraction mode.
    """
    keep_filter = KeepFilter(keep, match)
    if mode is RewriteMode.EXTRACT:
        return extract_kept(unit, callables, keep_filter)
    return elide_bodies(unit, callables, keep_filter)


__all__ = [
    "PLACEHOLDER_BODY",
    "KeepFilter",
    "KeepMatch",
    "RewriteMode",
    "rewrite",
]
