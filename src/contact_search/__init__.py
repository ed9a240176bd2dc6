"""Fuzzy contact search engine."""

from .config import MatchingConfig, QueryConfig
from .search.pipeline import SearchPipeline
from .types import SearchQuery, SearchResult

__all__ = ["MatchingConfig", "QueryConfig", "SearchPipeline", "SearchQuery", "SearchResult"]
