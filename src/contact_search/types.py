"""Shared domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeAlias

# A caller-owned record: a mapping of field key to scalar, or any object
# exposing the same keys as attributes. The engine only reads it.
ContactRecord: TypeAlias = Any
Scalar: TypeAlias = str | int | float | bool | None


class MatchKind(str, Enum):
    """How a field value satisfied the query, strongest first."""

    PREFIX = "prefix"
    WORD_BOUNDARY = "word_boundary"
    SUBSTRING = "substring"
    FUZZY = "fuzzy"


@dataclass(frozen=True, slots=True)
class SearchQuery:
    """One search request, as received from the calling layer."""

    raw_text: str
    threshold: float = 0.6
    max_results: int = 50
    requested_fields: tuple[str, ...] = ()
    fuzzy: bool = True


@dataclass(slots=True)
class FieldScore:
    """Weighted contribution of one field for one record."""

    field: str
    score: float
    kind: MatchKind


@dataclass(slots=True)
class MatchOutcome:
    """Matcher verdict for one record that matched at least one field."""

    score: float
    matched_fields: list[str]
    field_scores: dict[str, float]
    field_kinds: dict[str, MatchKind] = field(default_factory=dict)

    @property
    def has_prefix_match(self) -> bool:
        return MatchKind.PREFIX in self.field_kinds.values()


@dataclass(slots=True)
class SearchResult:
    """A ranked result with the record projected to the requested fields."""

    record: dict[str, Scalar]
    score: float
    matched_fields: list[str]
    field_scores: dict[str, float]


@dataclass(slots=True)
class SearchResponse:
    """Search results plus the metadata echoed back by the HTTP layer."""

    results: list[SearchResult]
    query: str | None
    threshold: float
    fuzzy: bool
    total: int
    total_contacts: int
