"""Selection of callables and persistence of prior choices."""

from selection.picker import Picker, PickerAborted, QuestionaryPicker
from selection.selector import (
    SelectionResult,
    default_indices,
    select_callables,
    select_everything,
)
from selection.store import (
    InMemorySelectionStore,
    JsonSelectionStore,
    SelectionRecord,
    SelectionStore,
)

__all__ = [
    "InMemorySelectionStore",
    "JsonSelectionStore",
    "Picker",
    "PickerAborted",
    "QuestionaryPicker",
    "SelectionRecord",
    "SelectionResult",
    "SelectionStore",
    "default_indices",
    "select_callables",
    "select_everything",
]
