"""
Corpus Loader
=============

Loads a Bible translation into an immutable, indexed corpus of passages.

Two on-disk formats are supported:

Tab-separated text (one verse per line)::

    KJV
    King James Version
    Genesis 1:1<TAB>In the beginning God created the heaven and the earth.
    1 John 4:8<TAB>He that loveth not knoweth not God; for God is love.

The first two lines are the translation abbreviation and full name. Book
names may contain spaces and a leading numeral.

Nested JSON (the BibleTranslations layout)::

    {"Genesis": {"1": {"1": "In the beginning ...", "2": "..."}}}

Malformed verse lines are skipped with a warning; a file is rejected only
when it has no usable header or no passages at all.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from ..errors import InvalidArgumentError, ParseError, ReferenceNotFoundError

logger = logging.getLogger(__name__)

# "Genesis 1:1", "1 Corinthians 13:4", "Song of Solomon 2:1"
VERSE_REF_PATTERN = re.compile(r"^(?P<book>.+?)\s+(?P<chapter>\d+):(?P<verse>\d+)$")

# "John 3:16", "Genesis 1", "1 John" (chapter and verse optional)
LOOKUP_REF_PATTERN = re.compile(
    r"^(?P<book>.+?)(?:\s+(?P<chapter>\d+)(?::(?P<verse>\d+))?)?$"
)


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Passage:
    """A single verse."""
    book: str
    chapter: int
    verse: int
    text: str

    @property
    def reference(self) -> str:
        return f"{self.book} {self.chapter}:{self.verse}"

    @property
    def key(self) -> tuple[str, int, int]:
        """Identity used for lookups; the book name is case-folded."""
        return (self.book.lower(), self.chapter, self.verse)

    def to_dict(self) -> dict:
        return {
            "reference": self.reference,
            "book": self.book,
            "chapter": self.chapter,
            "verse": self.verse,
            "text": self.text,
        }


class Corpus:
    """
    A loaded translation: passages in file order plus lookup indices.

    Raises InvalidArgumentError if two passages share a reference.

    The corpus is read-only once built. Passages are reachable three ways:
        - Sequentially, in the order they were loaded
        - By exact reference (book, chapter, verse)
        - By book, or by chapter within a book
    """

    def __init__(
        self,
        passages: list[Passage],
        abbreviation: str = "",
        name: str = "",
    ):
        self.passages: tuple[Passage, ...] = tuple(passages)
        self.abbreviation = abbreviation
        self.name = name
        self._build_indices()

    def _build_indices(self) -> None:
        """Build lookup indices for efficient access."""
        self._by_key: dict[tuple[str, int, int], Passage] = {}
        self._by_book: dict[str, list[Passage]] = {}
        self._book_names: dict[str, str] = {}

        for p in self.passages:
            if p.key in self._by_key:
                raise InvalidArgumentError(f"Duplicate passage: {p.reference}")
            self._by_key[p.key] = p
            folded = p.book.lower()
            self._by_book.setdefault(folded, []).append(p)
            self._book_names.setdefault(folded, p.book)

    def __len__(self) -> int:
        return len(self.passages)

    def __iter__(self) -> Iterator[Passage]:
        return iter(self.passages)

    def __contains__(self, passage: object) -> bool:
        return isinstance(passage, Passage) and self._by_key.get(passage.key) == passage

    @property
    def books(self) -> list[str]:
        """Book names in the order they first appear."""
        return list(self._book_names.values())

    def get(self, book: str, chapter: int, verse: int) -> Optional[Passage]:
        return self._by_key.get((book.lower(), chapter, verse))

    def book(self, book: str) -> list[Passage]:
        """All passages of a book (case-insensitive name), in corpus order."""
        return list(self._by_book.get(book.lower(), []))

    def chapter(self, book: str, chapter: int) -> list[Passage]:
        return [p for p in self._by_book.get(book.lower(), []) if p.chapter == chapter]

    def summary(self) -> dict:
        """Summary statistics of the corpus."""
        return {
            "abbreviation": self.abbreviation,
            "name": self.name,
            "books": len(self._by_book),
            "passages": len(self.passages),
            "passages_per_book": {
                self._book_names[k]: len(v) for k, v in self._by_book.items()
            },
        }

    @classmethod
    def from_text(cls, path: str | Path) -> Corpus:
        """Load a tab-separated translation file."""
        path = Path(path)
        with open(path, encoding="utf-8-sig") as f:
            lines = f.read().splitlines()

        if len(lines) < 2:
            raise ParseError(
                f"{path}: expected translation abbreviation and name on the first two lines"
            )

        abbreviation = lines[0].strip()
        name = lines[1].strip()
        passages: list[Passage] = []
        seen: set[tuple[str, int, int]] = set()

        for line_number, line in enumerate(lines[2:], start=3):
            if not line.strip():
                continue
            try:
                passage = _parse_verse_line(line, line_number)
            except ParseError as e:
                logger.warning(f"{path}: skipping {e}")
                continue
            if passage.key in seen:
                logger.warning(f"{path}: skipping line {line_number}: duplicate {passage.reference}")
                continue
            seen.add(passage.key)
            passages.append(passage)

        if not passages:
            raise ParseError(f"{path}: no valid passages found")

        logger.info(f"Loaded {len(passages)} passages from {path} ({abbreviation})")
        return cls(passages, abbreviation=abbreviation, name=name)

    @classmethod
    def from_json(cls, path: str | Path) -> Corpus:
        """
        Load a nested JSON translation.

        Expected format:
        {
            "Genesis": {
                "1": {"1": "In the beginning ...", "2": "..."},
                ...
            },
            ...
        }

        Books keep document order; chapters and verses are ordered
        numerically.
        """
        path = Path(path)
        with open(path, encoding="utf-8-sig") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ParseError(f"{path}: invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ParseError(f"{path}: expected an object of books at the top level")

        passages: list[Passage] = []
        seen: set[tuple[str, int, int]] = set()
        for book, chapters in data.items():
            if not isinstance(chapters, dict):
                logger.warning(f"{path}: skipping book {book!r}: expected an object of chapters")
                continue
            for chapter, verses in _numeric_items(chapters, f"{path}: {book}"):
                if not isinstance(verses, dict):
                    logger.warning(f"{path}: skipping {book} {chapter}: expected an object of verses")
                    continue
                for verse, text in _numeric_items(verses, f"{path}: {book} {chapter}"):
                    passage = Passage(
                        book=book.strip(),
                        chapter=chapter,
                        verse=verse,
                        text=str(text).strip(),
                    )
                    if passage.key in seen:
                        logger.warning(f"{path}: skipping duplicate {passage.reference}")
                        continue
                    seen.add(passage.key)
                    passages.append(passage)

        if not passages:
            raise ParseError(f"{path}: no valid passages found")

        logger.info(f"Loaded {len(passages)} passages from {path}")
        return cls(passages, abbreviation=path.stem.upper(), name=path.stem)


def _parse_verse_line(line: str, line_number: int) -> Passage:
    """Parse one ``reference<TAB>text`` line."""
    reference, sep, text = line.partition("\t")
    if not sep:
        raise ParseError("missing tab between reference and text", line_number)

    match = VERSE_REF_PATTERN.match(reference.strip())
    if match is None:
        raise ParseError(f"unrecognised reference {reference.strip()!r}", line_number)

    chapter, verse = int(match.group("chapter")), int(match.group("verse"))
    if chapter < 1 or verse < 1:
        raise ParseError(f"chapter and verse must be >= 1 in {reference.strip()!r}", line_number)

    return Passage(
        book=match.group("book").strip(),
        chapter=chapter,
        verse=verse,
        text=text.strip(),
    )


def _numeric_items(mapping: dict, context: str) -> list[tuple[int, object]]:
    """Items of a JSON object keyed by positive integers, sorted numerically."""
    items = []
    for key, value in mapping.items():
        try:
            number = int(key)
        except (TypeError, ValueError):
            logger.warning(f"{context}: skipping non-numeric key {key!r}")
            continue
        if number < 1:
            logger.warning(f"{context}: skipping key {key!r} (must be >= 1)")
            continue
        items.append((number, value))
    items.sort(key=lambda x: x[0])
    return items


def _is_json_file(path: Path) -> bool:
    """Detect JSON by extension, then by the first non-blank character."""
    if path.suffix.lower() == ".json":
        return True
    with open(path, encoding="utf-8-sig") as f:
        for line in f:
            stripped = line.strip()
            if stripped:
                return stripped.startswith("{")
    return False


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def load_corpus(path: str | Path) -> Corpus:
    """
    Load a translation, detecting its format.

    Raises:
        OSError: the file is missing or unreadable.
        ParseError: the file has no usable header or no passages.
    """
    path = Path(path)
    try:
        if _is_json_file(path):
            return Corpus.from_json(path)
        return Corpus.from_text(path)
    except UnicodeDecodeError as e:
        raise ParseError(f"{path}: not valid UTF-8 text ({e.reason})") from e


def parse_reference(reference: str) -> tuple[str, Optional[int], Optional[int]]:
    """
    Split a reference into (book, chapter, verse).

    Chapter and verse are ``None`` when omitted: "John 3:16" gives
    ("John", 3, 16), "Genesis 1" gives ("Genesis", 1, None) and "1 John"
    gives ("1 John", None, None).
    """
    match = LOOKUP_REF_PATTERN.match(" ".join(reference.split()))
    if match is None:
        raise InvalidArgumentError(
            f"Invalid reference {reference!r}; use a format like 'John 3:16' or 'Genesis 1'"
        )
    chapter = match.group("chapter")
    verse = match.group("verse")
    return (
        match.group("book"),
        int(chapter) if chapter is not None else None,
        int(verse) if verse is not None else None,
    )


def lookup_reference(corpus: Corpus, reference: str) -> list[Passage]:
    """
    Resolve a reference to passages in corpus order.

    A full reference yields one verse, "Book N" a whole chapter and a bare
    book name the whole book.

    Raises:
        InvalidArgumentError: the reference cannot be parsed.
        ReferenceNotFoundError: nothing in the corpus matches.
    """
    book, chapter, verse = parse_reference(reference)

    if verse is not None:
        passage = corpus.get(book, chapter, verse)
        found = [passage] if passage is not None else []
    elif chapter is not None:
        found = corpus.chapter(book, chapter)
    else:
        found = corpus.book(book)

    if not found:
        raise ReferenceNotFoundError(reference.strip())
    return found


def resolve_passage(corpus: Corpus, reference: str) -> Passage:
    """Resolve a full "Book chapter:verse" reference to a single passage."""
    book, chapter, verse = parse_reference(reference)
    if chapter is None or verse is None:
        raise InvalidArgumentError(
            f"Invalid reference {reference!r}; use 'Book Chapter:Verse'"
        )
    passage = corpus.get(book, chapter, verse)
    if passage is None:
        raise ReferenceNotFoundError(reference.strip())
    return passage
