"""Default pre-selection, interactive picking and persistence of choices."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from selection.picker import PickerAborted

if TYPE_CHECKING:
    from collections.abc import Sequence

    from parse.models import Callable
    from parse.names import QualifiedName
    from selection.picker import Picker
    from selection.store import SelectionRecord, SelectionStore

logger = logging.getLogger(__name__)

PROMPT_MESSAGE = "Select functions/methods to include:"


@dataclass(frozen=True)
class SelectionResult:
    names: tuple[QualifiedName, ...] = field(default_factory=tuple)
    cancelled: bool = False


def display_index(callables: Sequence[Callable]) -> dict[str, list[QualifiedName]]:
    """Map each display string to the qualified names rendering as it, sorted.

    Callables that collide on the display string are listed once.
    """
    index: dict[str, list[QualifiedName]] = {}
    for callable_ in callables:
        names = index.setdefault(callable_.name.display(), [])
        if callable_.name not in names:
            names.append(callable_.name)
    return dict(sorted(index.items()))


def default_indices(choices: Sequence[str], prior: SelectionRecord) -> list[int]:
    """Indices to pre-check.

    With a prior record, only names still present are pre-checked and stale
    names drop out. Without one, everything is pre-checked.
    """
    if not prior.has_entry:
        return list(range(len(choices)))
    previous = set(prior.names)
    return [i for i, choice in enumerate(choices) if choice in previous]


def select_callables(
    callables: Sequence[Callable],
    *,
    root_key: str,
    store: SelectionStore,
    picker: Picker,
) -> SelectionResult:
    """Let the user pick callables and persist the choice for ``root_key``.

    A cancelled pick returns an empty, cancelled result and leaves the stored
    record untouched.
    """
    index = display_index(callables)
    choices = list(index)

    prior = store.load(root_key)
    defaults = default_indices(choices, prior)
    if prior.has_entry:
        stale = set(prior.names).difference(choices)
        if stale:
            logger.debug("Ignoring %d stale selections for %s", len(stale), root_key)

    try:
        picked = set(picker.pick(PROMPT_MESSAGE, choices, defaults))
    except PickerAborted:
        return SelectionResult(cancelled=True)

    chosen = [choice for choice in choices if choice in picked]
    store.save(root_key, chosen)

    names = tuple(name for choice in chosen for name in index[choice])
    return SelectionResult(names=names)


def select_everything(callables: Sequence[Callable]) -> SelectionResult:
    """Select every callable without prompting or touching the store."""
    index = display_index(callables)
    return SelectionResult(names=tuple(n for names in index.values() for n in names))


__all__ = [
    "PROMPT_MESSAGE",
    "SelectionResult",
    "default_indices",
    "display_index",
    "select_callables",
    "select_everything",
]
