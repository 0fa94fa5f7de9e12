"""Digest entry points."""

from digest.clipboard import ClipboardError, copy_to_clipboard
from digest.explain import Explanation, explain_build_errors
from digest.run import DigestOptions, DigestResult, allow_list, run_digest

__all__ = [
    "ClipboardError",
    "DigestOptions",
    "DigestResult",
    "Explanation",
    "allow_list",
    "copy_to_clipboard",
    "explain_build_errors",
    "run_digest",
]
