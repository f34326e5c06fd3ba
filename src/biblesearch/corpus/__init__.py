"""
Corpus Package
==============

Passage storage, reference resolution and tokenization shared by the
search and cross-reference engines.
"""

from .loader import (
    Corpus,
    Passage,
    load_corpus,
    lookup_reference,
    parse_reference,
    resolve_passage,
)
from .tokenizer import STOP_WORDS, normalize, tokenize, word_set

__all__ = [
    "Corpus",
    "Passage",
    "load_corpus",
    "lookup_reference",
    "parse_reference",
    "resolve_passage",
    "STOP_WORDS",
    "normalize",
    "tokenize",
    "word_set",
]
