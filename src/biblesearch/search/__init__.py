"""Substring search with optional synonym expansion."""

from .engine import SearchQuery, SearchResult, expand_terms, search

__all__ = ["SearchQuery", "SearchResult", "expand_terms", "search"]
