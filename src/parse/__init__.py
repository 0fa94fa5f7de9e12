"""Parsing utilities for crate-digest."""

from parse.models import Callable, ImplBlock, SourceUnit
from parse.names import BestEffortLabel, QualifiedName
from parse.treesitter_functions import ParseError, extract_callables

__all__ = [
    "BestEffortLabel",
    "Callable",
    "ImplBlock",
    "ParseError",
    "QualifiedName",
    "SourceUnit",
    "extract_callables",
]
