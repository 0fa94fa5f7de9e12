"""Qualified names for extracted callables.

A qualified name is kept as tagged segments (file, type, trait, method) so
that equality is structural. The ``path::Type::Trait::method`` string form is
only used for display and persistence.
"""

from __future__ import annotations

from dataclasses import dataclass, field

SEPARATOR = "::"


@dataclass(frozen=True)
class BestEffortLabel:
    """A type or trait name picked from a single lexical token.

    This is not a resolved symbol: ``impl<T> Vec<T>`` labels as ``Vec`` and
    ``impl &Foo`` labels as ``&``. Only ``text`` takes part in equality.
    """

    text: str
    expression: str = field(default="", compare=False)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class QualifiedName:
    """Identity of a callable within a project."""

    path: str
    method: str
    type_label: BestEffortLabel | None = None
    trait_label: BestEffortLabel | None = None

    def segments(self) -> tuple[str, ...]:
        parts = [self.path]
        if self.type_label is not None:
            parts.append(self.type_label.text)
        if self.trait_label is not None:
            parts.append(self.trait_label.text)
        parts.append(self.method)
        return tuple(parts)

    @property
    def is_method(self) -> bool:
        return self.type_label is not None

    def display(self) -> str:
        return SEPARATOR.join(self.segments())

    def __str__(self) -> str:
        return self.display()


__all__ = ["SEPARATOR", "BestEffortLabel", "QualifiedName"]
