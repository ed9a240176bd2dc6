"""End-to-end contact search: match -> filter -> rank -> truncate -> project."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from decimal import ROUND_HALF_UP, Decimal

from loguru import logger

from contact_search.catalog.accessor import FieldAccessor, RecordAccessor
from contact_search.catalog.schema import FieldSchema, default_schema
from contact_search.config import QueryConfig
from contact_search.obs.timing import Timer
from contact_search.scoring.matcher import MultiFieldMatcher
from contact_search.search.ranking import browse_newest_first, rank_outcomes
from contact_search.types import (
    ContactRecord,
    MatchOutcome,
    SearchQuery,
    SearchResponse,
    SearchResult,
)

BrowseOrder = Callable[[Sequence[ContactRecord]], list[ContactRecord]]


class SearchPipeline:
    """Runs one query over an already materialized record collection.

    The pipeline holds no per-call state, so one instance can serve
    concurrent calls. Callers must hand it a snapshot that nobody mutates
    during the scan.

    A blank query switches to browse mode: every record is returned as a
    perfect match in browse order (newest `createdAt` first unless a
    `browse_order` callable is given). Browse and search therefore share one
    result shape.
    """

    def __init__(
        self,
        schema: FieldSchema | None = None,
        *,
        matcher: MultiFieldMatcher | None = None,
        accessor: FieldAccessor | None = None,
        config: QueryConfig | None = None,
        browse_order: BrowseOrder | None = None,
    ) -> None:
        self.schema = schema or default_schema()
        self.accessor = accessor or RecordAccessor(self.schema)
        self.matcher = matcher or MultiFieldMatcher(self.schema, accessor=self.accessor)
        self.config = config or QueryConfig()
        self.browse_order = browse_order

    def search(
        self,
        records: Sequence[ContactRecord],
        query: SearchQuery,
    ) -> list[SearchResult]:
        """Return ranked, projected results; an empty list when nothing matches."""

        threshold = self.config.clamp_threshold(query.threshold)
        max_results = self.config.clamp_max_results(query.max_results)
        projection = self.schema.validate(query.requested_fields)

        with Timer() as timer:
            if not query.raw_text.strip():
                mode = "browse"
                selected = [
                    (record, _perfect_match("all"))
                    for record in self._browse(records)[:max_results]
                ]
            else:
                mode = "fuzzy" if query.fuzzy else "exact"
                selected = self._match(records, query, threshold)[:max_results]

            results = [
                SearchResult(
                    record=self.accessor.project(record, projection),
                    score=round_score(outcome.score),
                    matched_fields=list(outcome.matched_fields),
                    field_scores={
                        field: round_score(score) for field, score in outcome.field_scores.items()
                    },
                )
                for record, outcome in selected
            ]

        logger.debug(
            f"[{mode}] query={query.raw_text[:50]!r} threshold={threshold} "
            f"matched {len(results)}/{len(records)} contacts in {timer.elapsed_ms:.1f}ms"
        )
        return results

    def run(self, records: Sequence[ContactRecord], query: SearchQuery) -> SearchResponse:
        """Search and wrap the results with the envelope metadata."""

        results = self.search(records, query)
        return SearchResponse(
            results=results,
            query=query.raw_text or None,
            threshold=self.config.clamp_threshold(query.threshold),
            fuzzy=query.fuzzy,
            total=len(results),
            total_contacts=len(records),
        )

    def _match(
        self,
        records: Sequence[ContactRecord],
        query: SearchQuery,
        threshold: float,
    ) -> list[tuple[ContactRecord, MatchOutcome]]:
        if not query.fuzzy:
            return self._match_simple(records, query)

        scored: list[tuple[ContactRecord, MatchOutcome]] = []
        for record in records:
            outcome = self.matcher.match_record(record, query.raw_text, threshold)
            if outcome is None or outcome.score < threshold:
                continue
            scored.append((record, outcome))
        return rank_outcomes(scored)

    def _match_simple(
        self,
        records: Sequence[ContactRecord],
        query: SearchQuery,
    ) -> list[tuple[ContactRecord, MatchOutcome]]:
        # Ordered by the unweighted score, but every hit is reported as an exact match
        scored: list[tuple[ContactRecord, float]] = []
        for record in records:
            score = self.matcher.simple_score(record, query.raw_text)
            if score is not None:
                scored.append((record, score))
        scored.sort(key=lambda item: -item[1])
        return [(record, _perfect_match("exact_match")) for record, _ in scored]

    def _browse(self, records: Sequence[ContactRecord]) -> list[ContactRecord]:
        if self.browse_order is not None:
            return self.browse_order(records)
        if "createdAt" in self.schema:
            return browse_newest_first(records, self.accessor)
        return list(records)


def _perfect_match(label: str) -> MatchOutcome:
    return MatchOutcome(score=1.0, matched_fields=[label], field_scores={label: 1.0})


def round_score(score: float) -> float:
    """Round to two decimals with halves rounded up (0.625 -> 0.63)."""
    return float(Decimal(str(score)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
