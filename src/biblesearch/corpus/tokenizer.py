"""
Tokenizer
=========

Word splitting and case folding shared by the search and cross-reference
engines, so both agree on what a "word" is.

Tokenization splits on whitespace and strips punctuation from both ends of
each token. Punctuation inside a token is kept, which preserves possessives
("Lord's") and hyphenated compounds ("burnt-offering").
"""

from __future__ import annotations

import string
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from ..synonyms.table import SynonymTable

# ASCII punctuation plus the typographic quotes and dashes found in
# modern translations.
PUNCTUATION = string.punctuation + "‘’“”–—¶§"

# Function words of English and KJV-era prose. Only applied when a caller
# asks for stop-word filtering.
STOP_WORDS = frozenset({
    "a", "an", "and", "are", "as", "at", "be", "but", "by", "for", "from",
    "has", "he", "in", "is", "it", "its", "of", "on", "that", "the", "to",
    "was", "will", "with", "shall", "unto", "thee", "thou", "thy", "ye",
    "hath", "his", "her", "him", "them", "they", "their", "all", "not",
    "which", "there", "this", "these", "those", "when", "who", "what",
    "into", "upon", "out", "up", "have", "had", "do", "did", "done",
    "said", "came", "went", "been", "were", "being",
})

# Words shorter than this are dropped alongside stop words.
STOP_WORD_MIN_LENGTH = 3


def tokenize(text: str) -> list[str]:
    """Split text into word tokens in reading order."""
    words = []
    for token in text.split():
        cleaned = token.strip(PUNCTUATION)
        if cleaned:
            words.append(cleaned)
    return words


def normalize(token: str, case_sensitive: bool = False) -> str:
    """Return the comparison form of a token."""
    return token if case_sensitive else token.lower()


def clean_word(word: str) -> str:
    """Case-fold a single query word and strip surrounding punctuation."""
    return word.strip(PUNCTUATION).lower()


def word_set(
    text: str,
    synonyms: SynonymTable | None = None,
    stop_words: Iterable[str] = (),
    min_length: int = 1,
) -> frozenset[str]:
    """
    Reduce text to its set of unique, case-folded words.

    Args:
        text: Passage text.
        synonyms: If given, every word is replaced by the terms of its
            synonym group (or kept as is when it has none).
        stop_words: Words to discard before expansion.
        min_length: Words shorter than this are discarded.

    Returns:
        Frozen set of comparison words.
    """
    stop = stop_words if isinstance(stop_words, (set, frozenset)) else set(stop_words)
    words = {
        w for w in (normalize(t) for t in tokenize(text))
        if len(w) >= min_length and w not in stop
    }
    if synonyms:
        expanded: set[str] = set()
        for w in words:
            expanded.update(synonyms.expand(w))
        return frozenset(expanded)
    return frozenset(words)
