"""
Cross-Reference Analyzer
========================

Finds passages that share vocabulary with a source passage.

Each passage is reduced to its set of unique, case-folded words. Two
passages are compared with the Jaccard index:

    similarity(A, B) = |A ∩ B| / |A ∪ B|

which is symmetric and always in [0, 1]. Every passage other than the
source is scored, those at or above the threshold are kept, and the
survivors are ordered by descending score with ties left in corpus order.

Options:
    - Synonym expansion: each word is replaced by the terms of its synonym
      group before comparison, so "lord" and "god" count as shared.
    - Stop-word filtering: drops common function words ("the", "and",
      "unto", ...) and words shorter than three letters, which otherwise
      dominate scores between short verses. Off by default.

Example:
    "love the lord your god" vs "the lord is my shepherd"
    A = {love, the, lord, your, god}, B = {the, lord, is, my, shepherd}
    |A ∩ B| = 2, |A ∪ B| = 8, similarity = 0.25
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, Optional

from ..corpus.loader import Corpus, Passage, resolve_passage
from ..corpus.tokenizer import STOP_WORD_MIN_LENGTH, STOP_WORDS, word_set
from ..errors import InvalidArgumentError
from ..synonyms.table import SynonymTable

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.3


@dataclass(frozen=True)
class ScoredPassage:
    """A candidate passage and its similarity to the source."""
    passage: Passage
    score: float

    @property
    def percentage(self) -> float:
        return self.score * 100.0

    def to_dict(self) -> dict:
        data = self.passage.to_dict()
        data["score"] = self.score
        return data


@dataclass
class CrossReferenceResult:
    """Passages similar to a source passage, best first."""
    source: Passage
    threshold: float
    matches: list[ScoredPassage] = field(default_factory=list)
    used_synonyms: bool = False
    source_words: frozenset[str] = frozenset()
    candidates_scored: int = 0

    def __len__(self) -> int:
        return len(self.matches)

    def __iter__(self) -> Iterator[ScoredPassage]:
        return iter(self.matches)

    @property
    def passages(self) -> list[Passage]:
        return [m.passage for m in self.matches]

    @property
    def top_score(self) -> float:
        return self.matches[0].score if self.matches else 0.0


def jaccard_similarity(a: frozenset[str] | set[str], b: frozenset[str] | set[str]) -> float:
    """Intersection over union of two word sets; 0.0 if either is empty."""
    if not a or not b:
        return 0.0
    if len(a) > len(b):
        a, b = b, a
    shared = sum(1 for w in a if w in b)
    return shared / (len(a) + len(b) - shared)


def validate_threshold(threshold: float) -> float:
    # Written so that NaN is rejected too.
    if not (0.0 <= threshold <= 1.0):
        raise InvalidArgumentError(f"similarity threshold must be between 0.0 and 1.0, got {threshold}")
    return float(threshold)


def validate_limit(limit: Optional[int]) -> Optional[int]:
    if limit is not None and limit <= 0:
        raise InvalidArgumentError(f"limit must be a positive integer, got {limit}")
    return limit


class CrossReferenceAnalyzer:
    """
    Scores passages of one corpus against each other.

    Word sets are computed on first use and cached per passage, so repeated
    queries against the same corpus (as in interactive mode) only tokenize
    each passage once.
    """

    def __init__(
        self,
        corpus: Corpus,
        synonyms: Optional[SynonymTable] = None,
        filter_stop_words: bool = False,
    ):
        self.corpus = corpus
        self.synonyms = synonyms if synonyms else None
        self.filter_stop_words = filter_stop_words
        self._word_sets: dict[tuple[str, int, int], frozenset[str]] = {}

    @property
    def uses_synonyms(self) -> bool:
        return self.synonyms is not None

    def word_set(self, passage: Passage) -> frozenset[str]:
        """The comparison words of a passage under this analyzer's options."""
        words = self._word_sets.get(passage.key)
        if words is None:
            if self.filter_stop_words:
                words = word_set(
                    passage.text,
                    synonyms=self.synonyms,
                    stop_words=STOP_WORDS,
                    min_length=STOP_WORD_MIN_LENGTH,
                )
            else:
                words = word_set(passage.text, synonyms=self.synonyms)
            self._word_sets[passage.key] = words
        return words

    def score(self, a: Passage, b: Passage) -> float:
        return jaccard_similarity(self.word_set(a), self.word_set(b))

    def find(
        self,
        source_ref: str,
        threshold: float = DEFAULT_THRESHOLD,
        limit: Optional[int] = None,
    ) -> CrossReferenceResult:
        """
        Cross-references for the passage at ``source_ref``.

        Args:
            source_ref: Full reference of the source ("John 3:16").
            threshold: Minimum similarity, inclusive, in [0, 1].
            limit: Keep at most this many matches (must be > 0).

        Raises:
            ReferenceNotFoundError: the source is not in the corpus.
            InvalidArgumentError: bad reference syntax, threshold or limit.
        """
        threshold = validate_threshold(threshold)
        limit = validate_limit(limit)
        source = resolve_passage(self.corpus, source_ref)
        return self.find_for_passage(source, threshold=threshold, limit=limit)

    def find_for_passage(
        self,
        source: Passage,
        threshold: float = DEFAULT_THRESHOLD,
        limit: Optional[int] = None,
    ) -> CrossReferenceResult:
        threshold = validate_threshold(threshold)
        limit = validate_limit(limit)

        source_words = self.word_set(source)
        result = CrossReferenceResult(
            source=source,
            threshold=threshold,
            used_synonyms=self.uses_synonyms,
            source_words=source_words,
        )
        if not source_words:
            logger.warning(f"No significant words found in {source.reference}")
            return result

        source_key = source.key
        n_source = len(source_words)
        matches: list[ScoredPassage] = []

        for candidate in self.corpus:
            if candidate.key == source_key:
                continue
            words = self.word_set(candidate)
            result.candidates_scored += 1
            shared = sum(1 for w in words if w in source_words)
            if shared == 0 and threshold > 0.0:
                continue
            similarity = shared / (n_source + len(words) - shared)
            if similarity >= threshold:
                matches.append(ScoredPassage(passage=candidate, score=similarity))

        # Stable sort: equal scores stay in corpus order.
        matches.sort(key=lambda m: -m.score)
        if limit is not None:
            matches = matches[:limit]
        result.matches = matches

        logger.debug(
            f"Cross-references for {source.reference}: {len(matches)} of "
            f"{result.candidates_scored} passages at >= {threshold:.3f}"
        )
        return result


def cross_reference(
    corpus: Corpus,
    source_ref: str,
    synonyms: Optional[SynonymTable] = None,
    threshold: float = DEFAULT_THRESHOLD,
    limit: Optional[int] = None,
    filter_stop_words: bool = False,
) -> CrossReferenceResult:
    """Score every passage against ``source_ref`` and return the best matches."""
    analyzer = CrossReferenceAnalyzer(
        corpus,
        synonyms=synonyms,
        filter_stop_words=filter_stop_words,
    )
    return analyzer.find(source_ref, threshold=threshold, limit=limit)
