"""Terminal rendering of results."""

from .formatter import (
    ResultPrinter,
    cross_references_to_json,
    format_percentage,
    make_console,
    passage_text,
    passages_to_json,
)

__all__ = [
    "ResultPrinter",
    "cross_references_to_json",
    "format_percentage",
    "make_console",
    "passage_text",
    "passages_to_json",
]
