"""Lexical cross-referencing between passages."""

from .analyzer import (
    DEFAULT_THRESHOLD,
    CrossReferenceAnalyzer,
    CrossReferenceResult,
    ScoredPassage,
    cross_reference,
    jaccard_similarity,
)

__all__ = [
    "DEFAULT_THRESHOLD",
    "CrossReferenceAnalyzer",
    "CrossReferenceResult",
    "ScoredPassage",
    "cross_reference",
    "jaccard_similarity",
]
