"""Interactive checklist used to pick qualified names."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

import questionary

if TYPE_CHECKING:
    from collections.abc import Sequence


class PickerAborted(Exception):
    """Raised when the user cancels the interaction."""


class Picker(Protocol):
    def pick(
        self,
        message: str,
        choices: Sequence[str],
        default_indices: Sequence[int],
    ) -> list[str]: ...


class QuestionaryPicker:
    """Checkbox list in the terminal."""

    def pick(
        self,
        message: str,
        choices: Sequence[str],
        default_indices: Sequence[int],
    ) -> list[str]:
        checked = set(default_indices)
        question = questionary.checkbox(
            message,
            choices=[
                questionary.Choice(title=choice, value=choice, checked=i in checked)
                for i, choice in enumerate(choices)
            ],
            instruction="(space: toggle, a: all, i: invert, enter: confirm)",
        )
        # ask() returns None on Ctrl-C instead of raising
        answer = question.ask()
        if answer is None:
            raise PickerAborted
        return list(answer)


__all__ = ["Picker", "PickerAborted", "QuestionaryPicker"]
