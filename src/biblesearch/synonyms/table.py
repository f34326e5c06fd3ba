"""
Synonym Table
=============

Maps a word to the group of interchangeable terms it belongs to.

File format::

    # comment
    god: god, lord, almighty, creator
    love: love, loved, beloved, charity

Keywords and terms are case-insensitive and stored lower-cased. Every group
contains its own keyword, and every member of a group expands to the whole
group, so expansion is symmetric: "lord" finds the same terms as "god".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

DEFAULT_SYNONYMS = """\
# Bible Search Tool - Synonym Configuration
# Format: keyword: synonym1, synonym2, synonym3
# Lines starting with # are comments and will be ignored
# Keywords and synonyms are case-insensitive

# Deity references
god: god, lord, almighty, creator, father, jehovah, yahweh, most high
jesus: jesus, christ, savior, saviour, redeemer, messiah, son, lamb

# Spiritual concepts
love: love, loved, loveth, beloved, charity, affection, devotion
peace: peace, tranquil, calm, serenity, rest, quiet, still
joy: joy, happiness, gladness, delight, rejoice, joyful, glad
wisdom: wisdom, knowledge, understanding, insight, prudence, wise, discernment
faith: faith, belief, trust, confidence, hope, believe, believing
fear: fear, afraid, terror, dread, reverence, awe

# Sin and salvation
sin: sin, transgression, iniquity, wickedness, evil, trespass
salvation: salvation, save, saved, deliverance, rescue, redeem, redeemed

# Virtues
righteousness: righteousness, righteous, just, justice, upright
mercy: mercy, merciful, compassion, compassionate, grace, gracious
truth: truth, true, truthful, verity, honest, honesty

# Actions
praise: praise, worship, glorify, exalt, magnify, honor
prayer: prayer, pray, petition, supplication, intercession
repent: repent, repentance, turn, return, humble

# Additional concepts
spirit: spirit, soul, heart, mind
word: word, words, scripture, law, commandment, testimony
kingdom: kingdom, reign, dominion, rule
"""


@dataclass(frozen=True)
class SynonymGroup:
    """A keyword and the terms interchangeable with it (keyword included)."""
    keyword: str
    terms: frozenset[str]

    def __contains__(self, term: object) -> bool:
        return isinstance(term, str) and term.lower() in self.terms


class SynonymTable:
    """
    Keyword groups with a reverse index from every member term.

    An empty table is valid and falsy; it is what callers get when no
    synonym file is available, and expansion then returns the term alone.
    """

    def __init__(self, groups: list[SynonymGroup] | None = None, loaded: bool = True):
        self.loaded = loaded
        self._groups: dict[str, SynonymGroup] = {}
        for group in groups or []:
            self._add(group.keyword, group.terms)
        self._build_index()

    def _add(self, keyword: str, terms) -> None:
        keyword = keyword.strip().lower()
        merged = {t.strip().lower() for t in terms if t.strip()}
        merged.add(keyword)
        existing = self._groups.get(keyword)
        if existing is not None:
            merged |= existing.terms
        self._groups[keyword] = SynonymGroup(keyword=keyword, terms=frozenset(merged))

    def _build_index(self) -> None:
        """Map each term to the union of every group it belongs to."""
        self._expansions: dict[str, frozenset[str]] = {}
        for group in self._groups.values():
            for term in group.terms:
                current = self._expansions.get(term)
                self._expansions[term] = group.terms if current is None else current | group.terms

    @classmethod
    def empty(cls) -> SynonymTable:
        """A table standing in for a synonym file that could not be loaded."""
        return cls(loaded=False)

    def __len__(self) -> int:
        return len(self._groups)

    def __bool__(self) -> bool:
        return bool(self._groups)

    def __iter__(self) -> Iterator[SynonymGroup]:
        return iter(self._groups.values())

    @property
    def groups(self) -> list[SynonymGroup]:
        return list(self._groups.values())

    def group(self, keyword: str) -> SynonymGroup | None:
        return self._groups.get(keyword.strip().lower())

    def has_group(self, term: str) -> bool:
        return term.strip().lower() in self._expansions

    def expand(self, term: str) -> frozenset[str]:
        """
        All terms interchangeable with ``term``.

        Returns the full group for any member (case-insensitive), or a set
        holding just the lower-cased term when no group contains it.
        """
        folded = term.strip().lower()
        return self._expansions.get(folded, frozenset({folded}))

    @classmethod
    def from_file(cls, path: str | Path) -> SynonymTable:
        """
        Parse a synonym file.

        Raises:
            OSError: the file is missing or unreadable.
        """
        path = Path(path)
        table = cls()
        with open(path, encoding="utf-8-sig") as f:
            for line_number, raw in enumerate(f, start=1):
                line = raw.strip()
                if not line or line.startswith("#"):
                    continue
                keyword, sep, values = line.partition(":")
                if not sep or not keyword.strip():
                    logger.warning(f"{path}: skipping line {line_number}: expected 'keyword: term, ...'")
                    continue
                terms = [t for t in values.split(",") if t.strip()]
                if not terms:
                    logger.warning(f"{path}: skipping line {line_number}: no terms for {keyword.strip()!r}")
                    continue
                table._add(keyword, terms)
        table._build_index()
        logger.info(f"Loaded {len(table)} synonym groups from {path}")
        return table


def load_synonyms(path: str | Path) -> SynonymTable:
    """
    Load a synonym file, degrading to an empty table.

    A missing or unreadable file is logged and yields ``SynonymTable.empty()``
    so that searches still run with exact matching.
    """
    try:
        return SynonymTable.from_file(path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not load synonyms file ({path}): {e}")
        return SynonymTable.empty()


def create_default(path: str | Path) -> Path:
    """Write the built-in synonym groups to ``path``."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_SYNONYMS, encoding="utf-8")
    logger.info(f"Wrote default synonyms to {path}")
    return path
