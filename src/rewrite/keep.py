"""Matching callables against a keep-set."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from collections.abc import Collection

    from parse.models import Callable
    from parse.names import QualifiedName

KeepMatch = Literal["qualified", "bare"]


class KeepFilter:
    """Decides whether a callable keeps its text.

    ``qualified`` compares whole qualified names. ``bare`` compares only the
    method identifier, so two types in one file that both define ``new`` are
    kept or elided together.
    """

    def __init__(
        self, keep: Collection[QualifiedName], match: KeepMatch = "qualified"
    ) -> None:
        if match not in ("qualified", "bare"):
            msg = f"Unknown keep match mode: {match!r}"
            raise ValueError(msg)
        self._match = match
        self._names = frozenset(keep)
        self._bare = frozenset(name.method for name in keep)

    def __bool__(self) -> bool:
        return bool(self._names)

    def keeps(self, callable_: Callable) -> bool:
        if self._match == "bare":
            return callable_.bare_name in self._bare
        return callable_.name in self._names


__all__ = ["KeepFilter", "KeepMatch"]
