"""Run ``cargo check`` and turn its diagnostics into a prompt."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING

from utils import EnvironmentFailure

if TYPE_CHECKING:
    from pathlib import Path

CARGO_CHECK_COMMAND = ("cargo", "check", "--message-format=human")


@dataclass(frozen=True)
class Explanation:
    prompt: str
    diagnostics: str


def build_prompt(diagnostics: str, context: str | None = None) -> str:
    parts = ["Help me understand and fix these Rust compilation errors:\n\n"]
    if context:
        parts.append(f"Additional context: {context}\n\n")
    parts.append(f"```\n{diagnostics}\n```\n\n")
    parts.append("Please explain what's wrong and suggest how to fix it.")
    return "".join(parts)


def explain_build_errors(root: Path, context: str | None = None) -> Explanation | None:
    """Run the build check in ``root``.

    Returns:
        None when the check printed nothing, otherwise the prompt and the
        combined stdout and stderr.

    Raises:
        EnvironmentFailure: If cargo cannot be started.
    """
    try:
        completed = subprocess.run(
            CARGO_CHECK_COMMAND,
            cwd=root,
            capture_output=True,
            check=False,
        )
    except OSError as exc:
        msg = (
            "Failed to run cargo check - make sure cargo is installed and "
            f"you're in a Rust project directory: {exc}"
        )
        raise EnvironmentFailure(msg) from exc

    stdout = completed.stdout.decode("utf-8", errors="replace")
    stderr = completed.stderr.decode("utf-8", errors="replace")
    diagnostics = f"{stdout}{stderr}".strip()
    if not diagnostics:
        return None

    return Explanation(prompt=build_prompt(diagnostics, context), diagnostics=diagnostics)


__all__ = ["CARGO_CHECK_COMMAND", "Explanation", "build_prompt", "explain_build_errors"]
