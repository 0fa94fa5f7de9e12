from __future__ import annotations

from pathlib import Path

from parse.models import SourceUnit
from parse.names import QualifiedName
from parse.treesitter_functions import extract_callables
from rewrite import PLACEHOLDER_BODY, RewriteMode, rewrite

FIXTURE_CRATE = Path(__file__).parent / "fixtures" / "mini_crate"

TWO_METHODS = """\
struct Foo;

impl Foo {
    fn foo(&self) -> u8 {
        1
    }

    fn bar(&self) -> u8 {
        2
    }
}
"""


def _unit(source: str, relative_path: str = "src/lib.rs") -> SourceUnit:
    return SourceUnit(relative_path=relative_path, text=source)


def _elide(unit: SourceUnit, keep: set[str], match: str = "qualified") -> str:
    callables = extract_callables(unit)
    names = {c.name for c in callables if c.name.display() in keep}
    return rewrite(unit, callables, names, RewriteMode.ELIDE, match)


def test_free_function_body_becomes_placeholder() -> None:
    unit = _unit("fn add(a: i32, b: i32) -> i32 { a + b }")

    assert _elide(unit, set()) == "fn add(a: i32, b: i32) -> i32 { /* ... */ }"


def test_mixed_keep_retains_only_kept_body() -> None:
    unit = _unit(TWO_METHODS)

    output = _elide(unit, {"src/lib.rs::Foo::foo"})

    assert "fn foo(&self) -> u8 {\n        1\n    }" in output
    assert f"fn bar(&self) -> u8 {PLACEHOLDER_BODY}" in output
    assert "2" not in output


def test_keeping_everything_round_trips() -> None:
    unit = SourceUnit.from_path(FIXTURE_CRATE / "src" / "lib.rs", FIXTURE_CRATE)
    callables = extract_callables(unit)

    output = rewrite(unit, callables, {c.name for c in callables})

    assert output == unit.text


def test_kept_bodies_verbatim_and_others_replaced() -> None:
    unit = SourceUnit.from_path(FIXTURE_CRATE / "src" / "lib.rs", FIXTURE_CRATE)
    callables = extract_callables(unit)
    keep = {c.name for c in callables if c.bare_name in {"add", "fmt"}}

    output = rewrite(unit, callables, keep)

    for callable_ in callables:
        body = callable_.body_text(unit)
        if callable_.name in keep:
            assert body in output
        else:
            assert body not in output
    assert output.count(PLACEHOLDER_BODY) == len(callables) - len(keep)


def test_non_callable_structure_is_preserved() -> None:
    unit = SourceUnit.from_path(FIXTURE_CRATE / "src" / "lib.rs", FIXTURE_CRATE)

    output = _elide(unit, set())

    assert output.startswith("//! Counter utilities.\n\nuse std::fmt;\n\nmod shapes;\n")
    assert "pub struct Counter {\n    count: u32,\n}" in output
    assert "fn describe(&self) -> String;" in output
    assert "/// Adds two numbers." in output


def test_eliding_already_elided_output_is_a_no_op() -> None:
    first = _elide(_unit(TWO_METHODS), {"src/lib.rs::Foo::foo"})

    second = _elide(_unit(first), {"src/lib.rs::Foo::foo"})

    assert second == first


def test_elided_outer_function_swallows_nested_function() -> None:
    source = "fn outer() {\n    fn inner() { 1 }\n    inner();\n}\n"

    assert _elide(_unit(source), set()) == f"fn outer() {PLACEHOLDER_BODY}\n"


def test_kept_outer_function_still_elides_nested_function() -> None:
    source = "fn outer() {\n    fn inner() { 1 }\n    inner();\n}\n"

    output = _elide(_unit(source), {"src/lib.rs::outer"})

    assert output == f"fn outer() {{\n    fn inner() {PLACEHOLDER_BODY}\n    inner();\n}}\n"


def test_kept_function_inside_elided_body_is_elided_with_it() -> None:
    source = "fn outer() {\n    fn inner() -> u8 { 42 }\n}\n"

    output = _elide(_unit(source), {"src/lib.rs::inner"})

    assert output == f"fn outer() {PLACEHOLDER_BODY}\n"


SHARED_NAMES = """\
impl Foo {
    fn new() -> Self { Foo }
}

impl Bar {
    fn new() -> Self { Bar }
}
"""


def test_qualified_match_separates_same_named_methods() -> None:
    output = _elide(_unit(SHARED_NAMES), {"src/lib.rs::Foo::new"})

    assert "fn new() -> Self { Foo }" in output
    assert "{ Bar }" not in output


def test_bare_match_keeps_same_named_methods_together() -> None:
    output = _elide(_unit(SHARED_NAMES), {"src/lib.rs::Foo::new"}, match="bare")

    assert output == SHARED_NAMES


def test_unit_without_callables_is_unchanged() -> None:
    unit = _unit("pub struct Empty;\n")

    assert rewrite(unit, [], set()) == unit.text


def test_keep_accepts_names_built_independently_of_extraction() -> None:
    unit = _unit("fn add() -> u8 { 1 }\nfn sub() -> u8 { 2 }\n")

    output = rewrite(
        unit,
        extract_callables(unit),
        {QualifiedName(path="src/lib.rs", method="add")},
    )

    assert output == f"fn add() -> u8 {{ 1 }}\nfn sub() -> u8 {PLACEHOLDER_BODY}\n"
