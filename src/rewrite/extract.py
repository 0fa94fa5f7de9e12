"""Extraction: emit only kept callables, rebuilding minimal impl headers."""

from __future__ import annotations

import textwrap
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from parse.models import Callable, ImplBlock, SourceUnit
    from rewrite.keep import KeepFilter

INDENT = "    "


def _method_text(unit: SourceUnit, callable_: Callable) -> str:
    """Return a method's text dedented to column zero.

    The indentation in front of the item's first line is included before
    dedenting so that all lines shift by the same amount.
    """
    source = unit.source_bytes
    start, end = callable_.item_range
    line_start = source.rfind(b"\n", 0, start) + 1
    if not source[line_start:start].strip():
        start = line_start
    return textwrap.dedent(source[start:end].decode("utf-8"))


def _render_impl(
    unit: SourceUnit, impl_block: ImplBlock, methods: Sequence[Callable]
) -> str:
    rendered = [
        textwrap.indent(_method_text(unit, method), INDENT) for method in methods
    ]
    return f"{impl_block.header()} {{\n" + "\n\n".join(rendered) + "\n}\n\n"


def _within(span: tuple[int, int], emitted: list[tuple[int, int]]) -> bool:
    start, end = span
    return any(e_start <= start and end <= e_end for e_start, e_end in emitted)


def extract_kept(
    unit: SourceUnit, callables: Sequence[Callable], keep: KeepFilter
) -> str:
    """Return only the kept callables of a unit, in source order.

    Free functions are emitted verbatim. Kept methods are grouped under a
    reconstructed header for their impl block; impl blocks without kept
    methods are left out. A kept callable inside the text of another kept
    callable is not repeated.
    """
    if not keep:
        return ""

    free_functions: list[Callable] = []
    impl_methods: dict[ImplBlock, list[Callable]] = {}
    for callable_ in callables:
        if not keep.keeps(callable_):
            continue
        if callable_.impl_block is None:
            free_functions.append(callable_)
        else:
            impl_methods.setdefault(callable_.impl_block, []).append(callable_)

    # (position, ranges the rendered text covers, rendered text)
    items: list[tuple[int, list[tuple[int, int]], str]] = [
        (
            function.item_range[0],
            [function.item_range],
            function.item_text(unit) + "\n\n",
        )
        for function in free_functions
    ]
    items.extend(
        (
            block.start_byte,
            [method.item_range for method in methods],
            _render_impl(unit, block, methods),
        )
        for block, methods in impl_methods.items()
    )
    items.sort(key=lambda item: item[0])

    parts: list[str] = []
    emitted: list[tuple[int, int]] = []
    for _, spans, text in items:
        if all(_within(span, emitted) for span in spans):
            continue
        parts.append(text)
        emitted.extend(spans)

    return "".join(parts)


__all__ = ["extract_kept"]
