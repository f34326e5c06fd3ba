"""
Result Formatting
=================

Renders passages, search results and cross-references for the terminal.

Three formats:
    text        "Book c:v text", references in cyan, search terms highlighted
    json        machine-readable dicts (scores included for cross-references)
    verse-only  the passage text alone, one per line

Results go to stdout. Status and error messages go to stderr so that
``--format json`` output stays parseable.
"""

from __future__ import annotations

import json
from typing import Iterable, Sequence

from rich.console import Console
from rich.text import Text

from ..config import OUTPUT_FORMATS
from ..corpus.loader import Passage
from ..cross_reference.analyzer import DEFAULT_THRESHOLD, CrossReferenceResult
from ..search.engine import SearchResult

REFERENCE_STYLE = "cyan"
HIGHLIGHT_STYLE = "black on yellow"
SCORE_STYLE = "bold yellow"


def make_console(color: bool = True, stderr: bool = False) -> Console:
    """Console that never wraps verse text or rewrites it (highlighting, emoji codes)."""
    return Console(
        stderr=stderr,
        color_system="auto" if color else None,
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )


def passage_text(
    passage: Passage,
    terms: Iterable[str] = (),
    case_sensitive: bool = False,
) -> Text:
    """``Book c:v text`` with the reference styled and ``terms`` highlighted."""
    body = Text(passage.text)
    words = [t for t in terms if t]
    if words:
        body.highlight_words(words, style=HIGHLIGHT_STYLE, case_sensitive=case_sensitive)
    return Text.assemble((passage.reference, REFERENCE_STYLE), " ", body)


def format_percentage(score: float) -> str:
    return f"{score * 100.0:.1f}%"


def passages_to_json(passages: Sequence[Passage]) -> str:
    return json.dumps([p.to_dict() for p in passages], indent=2, ensure_ascii=False)


def cross_references_to_json(result: CrossReferenceResult) -> str:
    data = {
        "source": result.source.to_dict(),
        "threshold": result.threshold,
        "used_synonyms": result.used_synonyms,
        "matches": [m.to_dict() for m in result.matches],
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


class ResultPrinter:
    """Writes results in one output format to a pair of consoles."""

    def __init__(
        self,
        fmt: str = "text",
        color: bool = True,
        out: Console | None = None,
        err: Console | None = None,
    ):
        if fmt not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown output format: {fmt}")
        self.format = fmt
        self.color = color
        self.out = out or make_console(color)
        self.err = err or make_console(color, stderr=True)

    # -- messages ---------------------------------------------------------

    def info(self, message: str, style: str | None = None) -> None:
        self.err.print(message, style=style, markup=False)

    def warning(self, message: str) -> None:
        self.err.print(message, style="yellow", markup=False)

    def error(self, message: str) -> None:
        self.err.print(message, style="bold red", markup=False)

    # -- passages ---------------------------------------------------------

    def passages(
        self,
        passages: Sequence[Passage],
        terms: Iterable[str] = (),
        case_sensitive: bool = False,
    ) -> None:
        if self.format == "json":
            self.out.print(passages_to_json(passages), markup=False)
            return
        terms = list(terms)
        for p in passages:
            if self.format == "verse-only":
                self.out.print(p.text, markup=False)
            else:
                self.out.print(passage_text(p, terms, case_sensitive))

    def search_result(self, result: SearchResult) -> None:
        query = result.query
        if self.format != "text":
            self.passages(result.passages)
            return

        if query.use_synonyms and result.synonyms_matched:
            self.out.print(
                f"Searching for '{query.text}' (with synonyms: {', '.join(result.terms)})...",
                markup=False,
            )
        elif query.use_synonyms:
            self.out.print(
                f"Searching for '{query.text}' (no synonyms defined for these terms)...",
                markup=False,
            )
        else:
            self.out.print(f"Searching for '{query.text}'...", markup=False)

        if not result.passages:
            self.out.print("No results found.", style="red")
            return

        self.out.print()
        self.passages(result.passages, terms=result.terms, case_sensitive=query.case_sensitive)
        self.out.print(f"\nFound {len(result)} matching verses.")

    def cross_references(self, result: CrossReferenceResult) -> None:
        if self.format == "json":
            self.out.print(cross_references_to_json(result), markup=False)
            return
        if self.format == "verse-only":
            for m in result.matches:
                self.out.print(m.passage.text, markup=False)
            return

        threshold = format_percentage(result.threshold)
        self.out.print("Source Verse:", style="bold bright_green")
        self.out.print(passage_text(result.source))
        self.out.print()

        if not result.source_words:
            self.out.print("No significant words found in source verse.", style="yellow")
            return

        if not result.matches:
            self.out.print(f"No cross-references found with similarity >= {threshold}", style="red")
            self.out.print(f"Try lowering the --similarity threshold (default: {DEFAULT_THRESHOLD})")
            return

        self.out.print(
            f"Found {len(result)} cross-reference(s) with similarity >= {threshold}:",
            style="bold green",
        )
        if result.used_synonyms:
            self.out.print("(Using synonym matching)", style="bright_black")
        self.out.print()

        for m in result.matches:
            line = Text.assemble(
                (format_percentage(m.score), SCORE_STYLE),
                " - ",
                passage_text(m.passage),
            )
            self.out.print(line)
            self.out.print()
