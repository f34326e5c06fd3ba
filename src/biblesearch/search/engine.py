"""
Search Engine
=============

Substring search over passage text.

A passage matches when its text contains any term of the effective term
set. Without synonyms the term set is the query text itself, so a
multi-word query is matched as a phrase. With synonyms each query word is
expanded independently through the synonym table and any expansion may
match.

Matching is by substring, not whole word: "love" also finds "loved" and
"beloved". The book filter is a case-insensitive substring test on the
book name, so "John" selects John, 1 John, 2 John and 3 John.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, Optional

from ..corpus.loader import Corpus, Passage
from ..corpus.tokenizer import PUNCTUATION, normalize
from ..errors import InvalidArgumentError
from ..synonyms.table import SynonymTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchQuery:
    """Parameters of a single search."""
    text: str
    case_sensitive: bool = False
    book_filter: Optional[str] = None
    limit: Optional[int] = None
    use_synonyms: bool = False

    def __post_init__(self):
        if self.limit is not None and self.limit <= 0:
            raise InvalidArgumentError(f"limit must be a positive integer, got {self.limit}")


@dataclass
class SearchResult:
    """Matching passages in corpus order, with how the query was expanded."""
    query: SearchQuery
    passages: list[Passage] = field(default_factory=list)
    terms: tuple[str, ...] = ()
    synonyms_matched: bool = False

    @property
    def used_synonyms(self) -> bool:
        return self.query.use_synonyms

    def __len__(self) -> int:
        return len(self.passages)

    def __iter__(self) -> Iterator[Passage]:
        return iter(self.passages)


def expand_terms(
    query: SearchQuery,
    synonyms: Optional[SynonymTable] = None,
) -> tuple[list[str], bool]:
    """
    Build the effective term set for a query.

    Returns:
        (terms, synonyms_matched) where ``synonyms_matched`` is False when
        synonym expansion was requested but no query word has a group.
    """
    text = query.text.strip()
    if not text:
        return [], False
    if not query.use_synonyms:
        return [text], False

    terms: set[str] = set()
    matched = False
    for word in text.split():
        cleaned = word.strip(PUNCTUATION)
        if not cleaned:
            continue
        terms.add(cleaned)
        if synonyms and synonyms.has_group(cleaned):
            matched = True
            terms.update(synonyms.expand(cleaned))
    return sorted(terms), matched


def _book_matches(passage: Passage, book_filter: Optional[str]) -> bool:
    return book_filter is None or book_filter.lower() in passage.book.lower()


def search(
    corpus: Corpus,
    query: SearchQuery,
    synonyms: Optional[SynonymTable] = None,
) -> SearchResult:
    """
    Find passages whose text contains any effective query term.

    An empty query yields an empty result rather than every passage.
    """
    terms, matched = expand_terms(query, synonyms)
    result = SearchResult(query=query, terms=tuple(terms), synonyms_matched=matched)
    if not terms:
        return result

    if query.use_synonyms and not matched:
        logger.debug(f"No synonyms defined for {query.text!r}; using exact terms")

    needles = [normalize(t, query.case_sensitive) for t in terms]
    book_filter = (query.book_filter or "").strip() or None

    for passage in corpus:
        if not _book_matches(passage, book_filter):
            continue
        haystack = normalize(passage.text, query.case_sensitive)
        if any(n in haystack for n in needles):
            result.passages.append(passage)
            if query.limit is not None and len(result.passages) >= query.limit:
                break

    logger.debug(f"Search {query.text!r}: {len(result.passages)} matches for terms {terms}")
    return result
