from __future__ import annotations

from collections.abc import Sequence

from parse.models import Callable
from parse.names import BestEffortLabel, QualifiedName
from selection.picker import PickerAborted
from selection.selector import (
    PROMPT_MESSAGE,
    default_indices,
    display_index,
    select_callables,
    select_everything,
)
from selection.store import InMemorySelectionStore, SelectionRecord

ROOT = "/work/mini_crate"


def _callable(
    method: str, type_name: str | None = None, trait_name: str | None = None
) -> Callable:
    name = QualifiedName(
        path="src/lib.rs",
        method=method,
        type_label=BestEffortLabel(type_name) if type_name else None,
        trait_label=BestEffortLabel(trait_name) if trait_name else None,
    )
    return Callable(name=name, body_range=(0, 0), item_range=(0, 0))


CALLABLES = [
    _callable("add"),
    _callable("new", "Counter"),
    _callable("fmt", "Counter", "Display"),
]


class FakePicker:
    def __init__(
        self, answer: Sequence[str] | None = None, *, abort: bool = False
    ) -> None:
        self.answer = answer
        self.abort = abort
        self.calls: list[tuple[str, list[str], list[int]]] = []

    def pick(
        self,
        message: str,
        choices: Sequence[str],
        default_indices: Sequence[int],
    ) -> list[str]:
        self.calls.append((message, list(choices), list(default_indices)))
        if self.abort:
            raise PickerAborted
        if self.answer is None:
            return [choices[i] for i in default_indices]
        return list(self.answer)


def test_choices_are_sorted_and_everything_is_prechecked_without_history() -> None:
    picker = FakePicker()

    select_callables(
        CALLABLES, root_key=ROOT, store=InMemorySelectionStore(), picker=picker
    )

    message, choices, defaults = picker.calls[0]
    assert message == PROMPT_MESSAGE
    assert choices == [
        "src/lib.rs::Counter::Display::fmt",
        "src/lib.rs::Counter::new",
        "src/lib.rs::add",
    ]
    assert defaults == [0, 1, 2]


def test_prior_record_prechecks_intersection_and_drops_stale_names() -> None:
    store = InMemorySelectionStore(
        {ROOT: ["src/lib.rs::add", "src/lib.rs::renamed_function"]}
    )
    picker = FakePicker()

    result = select_callables(CALLABLES, root_key=ROOT, store=store, picker=picker)

    assert picker.calls[0][2] == [2]
    assert [name.display() for name in result.names] == ["src/lib.rs::add"]
    assert store.selections[ROOT] == ["src/lib.rs::add"]


def test_prior_records_of_other_roots_are_ignored() -> None:
    store = InMemorySelectionStore({"/elsewhere": ["src/lib.rs::add"]})
    picker = FakePicker()

    select_callables(CALLABLES, root_key=ROOT, store=store, picker=picker)

    assert picker.calls[0][2] == [0, 1, 2]


def test_choice_is_persisted_wholesale_in_display_order() -> None:
    store = InMemorySelectionStore({ROOT: ["src/lib.rs::add"]})
    picker = FakePicker(["src/lib.rs::Counter::new", "src/lib.rs::Counter::Display::fmt"])

    result = select_callables(CALLABLES, root_key=ROOT, store=store, picker=picker)

    assert store.selections[ROOT] == [
        "src/lib.rs::Counter::Display::fmt",
        "src/lib.rs::Counter::new",
    ]
    assert set(result.names) == {CALLABLES[1].name, CALLABLES[2].name}
    assert not result.cancelled


def test_cancelled_pick_leaves_store_untouched() -> None:
    store = InMemorySelectionStore({ROOT: ["src/lib.rs::add"]})

    result = select_callables(
        CALLABLES, root_key=ROOT, store=store, picker=FakePicker(abort=True)
    )

    assert result.cancelled
    assert result.names == ()
    assert store.selections == {ROOT: ["src/lib.rs::add"]}


def test_colliding_display_names_are_listed_once_and_select_both() -> None:
    first = Callable(
        name=QualifiedName("src/lib.rs", "new", BestEffortLabel("Foo", "Foo<u8>")),
        body_range=(0, 1),
        item_range=(0, 1),
    )
    second = Callable(
        name=QualifiedName("src/lib.rs", "new", BestEffortLabel("Foo", "Foo<u16>")),
        body_range=(5, 6),
        item_range=(5, 6),
    )
    picker = FakePicker()

    result = select_callables(
        [first, second],
        root_key=ROOT,
        store=InMemorySelectionStore(),
        picker=picker,
    )

    assert picker.calls[0][1] == ["src/lib.rs::Foo::new"]
    assert result.names == (first.name,)
    assert second.name in result.names


def test_default_indices_with_empty_prior_entry() -> None:
    record = SelectionRecord(root=ROOT, names=())

    assert default_indices(["a", "b"], record) == []


def test_display_index_is_sorted() -> None:
    assert list(display_index(CALLABLES)) == sorted(
        c.name.display() for c in CALLABLES
    )


def test_select_everything_does_not_prompt() -> None:
    result = select_everything(CALLABLES)

    assert set(result.names) == {c.name for c in CALLABLES}
    assert not result.cancelled
