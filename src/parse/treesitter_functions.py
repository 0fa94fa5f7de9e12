"""Tree-sitter based function and method extraction for Rust sources."""

from __future__ import annotations

import logging

from tree_sitter import Language, Node, Parser
from tree_sitter_rust import language as get_rust_language

from parse.models import Callable, ImplBlock, SourceUnit
from parse.names import BestEffortLabel, QualifiedName

logger = logging.getLogger(__name__)

_PARSER: Parser | None = None

_TRIVIA_TYPES = frozenset({"attribute_item", "line_comment", "block_comment"})


class ParseError(Exception):
    """Raised when a source unit cannot be parsed into any tree."""

    def __init__(self, relative_path: str, message: str) -> None:
        super().__init__(f"{relative_path}: {message}")
        self.relative_path = relative_path
        self.message = message


def _get_parser() -> Parser:
    """Initialize and return the Tree-sitter parser with the Rust language."""
    global _PARSER
    if _PARSER is None:
        lang = Language(get_rust_language())
        _PARSER = Parser(lang)

    return _PARSER


def _decode_node_text(source_bytes: bytes, node: Node) -> str:
    return source_bytes[node.start_byte : node.end_byte].decode("utf8")


def _first_token(node: Node) -> Node:
    while node.child_count > 0:
        node = node.children[0]
    return node


def _last_token(node: Node) -> Node:
    while node.child_count > 0:
        node = node.children[-1]
    return node


def _type_label(source_bytes: bytes, type_node: Node) -> BestEffortLabel:
    """Label an impl target type by its first lexical token."""
    token = _first_token(type_node)
    return BestEffortLabel(
        text=_decode_node_text(source_bytes, token),
        expression=_decode_node_text(source_bytes, type_node),
    )


def _trait_label(source_bytes: bytes, trait_node: Node) -> BestEffortLabel:
    """Label a trait reference by the last token of its path.

    Generic arguments are not part of the path, so ``From<u8>`` labels as
    ``From``.
    """
    path_node = trait_node
    if trait_node.type == "generic_type":
        path_node = trait_node.child_by_field_name("type") or trait_node
    token = _last_token(path_node)
    return BestEffortLabel(
        text=_decode_node_text(source_bytes, token),
        expression=_decode_node_text(source_bytes, trait_node),
    )


def _leading_trivia_start(node: Node, source_bytes: bytes) -> int:
    """Return the start offset of attributes and comments directly above ``node``.

    A sibling counts when only whitespace separates it from what follows and
    it starts on its own line.
    """
    start = node.start_byte
    sibling = node.prev_sibling
    while sibling is not None and sibling.type in _TRIVIA_TYPES:
        if source_bytes[sibling.end_byte : start].strip():
            break
        line_start = source_bytes.rfind(b"\n", 0, sibling.start_byte) + 1
        if source_bytes[line_start : sibling.start_byte].strip():
            break
        start = sibling.start_byte
        sibling = sibling.prev_sibling
    return start


def _build_impl_block(node: Node, source_bytes: bytes) -> ImplBlock | None:
    type_node = node.child_by_field_name("type")
    if type_node is None:
        return None

    trait_node = node.child_by_field_name("trait")
    params_node = node.child_by_field_name("type_parameters")
    where_node = next(
        (child for child in node.children if child.type == "where_clause"), None
    )

    return ImplBlock(
        start_byte=node.start_byte,
        end_byte=node.end_byte,
        type_expression=_decode_node_text(source_bytes, type_node),
        trait_expression=(
            _decode_node_text(source_bytes, trait_node) if trait_node else None
        ),
        type_parameters=(
            _decode_node_text(source_bytes, params_node) if params_node else None
        ),
        where_clause=(
            _decode_node_text(source_bytes, where_node) if where_node else None
        ),
        unsafe=any(child.type == "unsafe" for child in node.children),
        negative=any(child.type == "!" for child in node.children),
    )


def _build_qualified_name(
    source_bytes: bytes,
    relative_path: str,
    name: str,
    impl_node: Node | None,
) -> QualifiedName:
    if impl_node is None:
        return QualifiedName(path=relative_path, method=name)

    type_node = impl_node.child_by_field_name("type")
    trait_node = impl_node.child_by_field_name("trait")
    return QualifiedName(
        path=relative_path,
        method=name,
        type_label=(
            _type_label(source_bytes, type_node)
            if type_node is not None
            else BestEffortLabel("Unknown")
        ),
        trait_label=(
            _trait_label(source_bytes, trait_node) if trait_node is not None else None
        ),
    )


def _handle_impl_item(
    node: Node,
    callables: list[Callable],
    source_bytes: bytes,
    relative_path: str,
) -> bool:
    """Process an impl block. Returns True if handled."""
    impl_block = _build_impl_block(node, source_bytes)
    body = node.child_by_field_name("body")
    if impl_block is None or body is None:
        return False

    for child in body.children:
        if child.type == "function_item":
            _handle_function_item(
                child, callables, source_bytes, relative_path, node, impl_block
            )
        else:
            _traverse_node(child, callables, source_bytes, relative_path)
    return True


def _handle_function_item(
    node: Node,
    callables: list[Callable],
    source_bytes: bytes,
    relative_path: str,
    impl_node: Node | None = None,
    impl_block: ImplBlock | None = None,
) -> bool:
    """Process a function item. Returns True if handled.

    Functions nested in the body are visited as free functions, since their
    nearest enclosing container is a function rather than an impl.
    """
    name_node = node.child_by_field_name("name")
    body = node.child_by_field_name("body")
    if name_node is None or body is None:
        return False

    qualified = _build_qualified_name(
        source_bytes,
        relative_path,
        _decode_node_text(source_bytes, name_node),
        impl_node,
    )
    callables.append(
        Callable(
            name=qualified,
            body_range=(body.start_byte, body.end_byte),
            item_range=(_leading_trivia_start(node, source_bytes), node.end_byte),
            impl_block=impl_block,
        )
    )

    _traverse_node(body, callables, source_bytes, relative_path)
    return True


def _traverse_node(
    node: Node,
    callables: list[Callable],
    source_bytes: bytes,
    relative_path: str,
) -> None:
    """Traverse the syntax tree and collect callables."""
    if node.type == "impl_item" and _handle_impl_item(
        node, callables, source_bytes, relative_path
    ):
        return

    if node.type == "function_item" and _handle_function_item(
        node, callables, source_bytes, relative_path
    ):
        return

    for child in node.children:
        _traverse_node(child, callables, source_bytes, relative_path)


def extract_callables(unit: SourceUnit) -> list[Callable]:
    """Extract every function and method that has a body.

    Args:
        unit: Source unit to parse.

    Returns:
        Callables in source order. Trees recovered from malformed input are
        accepted and yield whatever callables survived.

    Raises:
        ParseError: If the parser cannot produce a tree at all.
    """
    parser = _get_parser()

    try:
        tree = parser.parse(unit.source_bytes)
    except (TypeError, ValueError) as exc:
        raise ParseError(unit.relative_path, str(exc)) from exc
    if tree is None:
        raise ParseError(unit.relative_path, "parser produced no tree")

    root_node = tree.root_node
    if root_node.has_error:
        logger.debug("Recovered from syntax errors in %s", unit.relative_path)

    callables: list[Callable] = []
    _traverse_node(root_node, callables, unit.source_bytes, unit.relative_path)
    callables.sort(key=lambda c: c.item_range[0])

    return callables


__all__ = ["ParseError", "extract_callables"]
