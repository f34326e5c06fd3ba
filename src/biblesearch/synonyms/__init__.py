"""Synonym groups used to widen searches and cross-references."""

from .table import (
    DEFAULT_SYNONYMS,
    SynonymGroup,
    SynonymTable,
    create_default,
    load_synonyms,
)

__all__ = [
    "DEFAULT_SYNONYMS",
    "SynonymGroup",
    "SynonymTable",
    "create_default",
    "load_synonyms",
]
