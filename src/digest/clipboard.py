"""Clipboard sink."""

from __future__ import annotations

import pyperclip

from utils import EnvironmentFailure


class ClipboardError(EnvironmentFailure):
    """Raised when the system clipboard cannot be written."""


def copy_to_clipboard(text: str) -> None:
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as exc:
        msg = f"Failed to copy to clipboard: {exc}"
        raise ClipboardError(msg) from exc


__all__ = ["ClipboardError", "copy_to_clipboard"]
