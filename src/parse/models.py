"""Value types produced by the syntax extractor."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING

from utils import relative_posix_path

if TYPE_CHECKING:
    from pathlib import Path

    from parse.names import QualifiedName


@dataclass(frozen=True)
class SourceUnit:
    """One file's text plus its path relative to the project root."""

    relative_path: str
    text: str

    @cached_property
    def source_bytes(self) -> bytes:
        return self.text.encode("utf-8")

    @classmethod
    def from_path(cls, path: Path, root: Path) -> SourceUnit:
        """Read a unit from disk.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file is not valid UTF-8.
        """
        text = path.read_text(encoding="utf-8")
        return cls(relative_path=relative_posix_path(path, root), text=text)


@dataclass(frozen=True)
class ImplBlock:
    """Header pieces of an ``impl`` block, each copied verbatim from source."""

    start_byte: int
    end_byte: int
    type_expression: str
    trait_expression: str | None = None
    type_parameters: str | None = None
    where_clause: str | None = None
    unsafe: bool = False
    negative: bool = False

    def header(self) -> str:
        """Render the minimal header, without the opening brace."""
        keyword = "unsafe impl" if self.unsafe else "impl"
        pieces = [keyword + (self.type_parameters or "")]
        if self.trait_expression is not None:
            marker = "!" if self.negative else ""
            pieces.append(f"{marker}{self.trait_expression} for")
        pieces.append(self.type_expression)
        if self.where_clause:
            pieces.append(self.where_clause)
        return " ".join(pieces)


@dataclass(frozen=True)
class Callable:
    """A function or method with a body, located by byte offsets.

    ``body_range`` is the half-open range of the body block, braces included.
    ``item_range`` spans the whole item, including directly preceding
    attributes and comments.
    """

    name: QualifiedName
    body_range: tuple[int, int]
    item_range: tuple[int, int]
    impl_block: ImplBlock | None = None

    @property
    def bare_name(self) -> str:
        return self.name.method

    def body_text(self, unit: SourceUnit) -> str:
        start, end = self.body_range
        return unit.source_bytes[start:end].decode("utf-8")

    def item_text(self, unit: SourceUnit) -> str:
        start, end = self.item_range
        return unit.source_bytes[start:end].decode("utf-8")


__all__ = ["Callable", "ImplBlock", "SourceUnit"]
