"""
Bible Search
============

Command-line search and retrieval over a Bible translation: substring
search with optional synonym expansion, reference lookup by verse, chapter
or book, random verses, and cross-references ranked by lexical (Jaccard)
similarity.

The core is a handful of functions over immutable values::

    from biblesearch import load_corpus, load_synonyms, cross_reference

    corpus = load_corpus("bibles/kjv.txt")
    synonyms = load_synonyms("synonyms.txt")
    for match in cross_reference(corpus, "John 3:16", synonyms, threshold=0.2):
        print(f"{match.score:.1%} {match.passage.reference}")
"""

__version__ = "2.1.0"

from .corpus.loader import Corpus, Passage, load_corpus, lookup_reference
from .cross_reference.analyzer import CrossReferenceResult, ScoredPassage, cross_reference
from .errors import BibleSearchError, InvalidArgumentError, ParseError, ReferenceNotFoundError
from .sampling.sampler import random_passage
from .search.engine import SearchQuery, SearchResult, search
from .synonyms.table import SynonymTable, load_synonyms

__all__ = [
    "Corpus",
    "Passage",
    "load_corpus",
    "lookup_reference",
    "CrossReferenceResult",
    "ScoredPassage",
    "cross_reference",
    "BibleSearchError",
    "InvalidArgumentError",
    "ParseError",
    "ReferenceNotFoundError",
    "random_passage",
    "SearchQuery",
    "SearchResult",
    "search",
    "SynonymTable",
    "load_synonyms",
]
