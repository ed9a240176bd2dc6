"""Weighted multi-field matching of one record against one query."""

from __future__ import annotations

import re

from contact_search.catalog.accessor import FieldAccessor, RecordAccessor
from contact_search.catalog.schema import FieldSchema, default_schema
from contact_search.config import MatchingConfig
from contact_search.scoring.similarity import similarity
from contact_search.types import ContactRecord, FieldScore, MatchKind, MatchOutcome


class MultiFieldMatcher:
    """Scores a contact record against a query across all searchable fields.

    Each field is tested in priority order and the first test that applies
    decides its raw score:

    1. Prefix: the field value starts with the query (`prefix_bonus`).
    2. Substring: the query occurs inside the value, scored
       `word_boundary_bonus` when an occurrence starts a word and
       `substring_bonus` otherwise.
    3. Fuzzy: the best word-to-word similarity between query words and field
       words, where a field word starting with a query word counts as
       `word_prefix_bonus`. Short fields are also compared whole against the
       query, discounted by `full_field_penalty`.

    The raw score is multiplied by the field weight. A field counts as
    matched when its weighted score reaches `threshold * weight`; the record
    score is the best matched field score.

    Bonuses above 1.0 are deliberate. Scores are only compared with the
    threshold and with each other, so exact evidence must not lose to a lucky
    fuzzy hit.
    """

    def __init__(
        self,
        schema: FieldSchema | None = None,
        *,
        accessor: FieldAccessor | None = None,
        config: MatchingConfig | None = None,
    ) -> None:
        self.schema = schema or default_schema()
        self.accessor = accessor or RecordAccessor(self.schema)
        self.config = config or MatchingConfig()

    def match_record(
        self,
        record: ContactRecord,
        query: str,
        threshold: float,
    ) -> MatchOutcome | None:
        """Return the record's match outcome, or None when no field matched."""

        search_term = normalize_query(query)
        if not search_term:
            return None

        hits: list[FieldScore] = []
        for descriptor in self.schema.searchable_fields():
            weight = self.schema.weight_of(descriptor.key)
            field_value = self.accessor.text(record, descriptor.key).lower()
            raw_score, kind = self.score_field(field_value, search_term, threshold)
            field_score = raw_score * weight
            if kind is not None and field_score >= threshold * weight:
                hits.append(FieldScore(field=descriptor.key, score=field_score, kind=kind))

        if not hits:
            return None

        return MatchOutcome(
            score=max(hit.score for hit in hits),
            matched_fields=[hit.field for hit in hits],
            field_scores={hit.field: hit.score for hit in hits},
            field_kinds={hit.field: hit.kind for hit in hits},
        )

    def score_field(
        self,
        field_value: str,
        search_term: str,
        threshold: float,
    ) -> tuple[float, MatchKind | None]:
        """Return the unweighted score and match kind for normalized inputs."""

        cfg = self.config
        if field_value.startswith(search_term):
            return cfg.prefix_bonus, MatchKind.PREFIX

        if search_term in field_value:
            if re.search(r"\b" + re.escape(search_term), field_value):
                return cfg.word_boundary_bonus, MatchKind.WORD_BOUNDARY
            return cfg.substring_bonus, MatchKind.SUBSTRING

        word_score = 0.0
        field_words = field_value.split()
        for query_word in search_term.split():
            for field_word in field_words:
                if field_word.startswith(query_word):
                    candidate = cfg.word_prefix_bonus
                else:
                    candidate = similarity(query_word, field_word)
                word_score = max(word_score, candidate)

        if (
            len(search_term) >= cfg.full_field_min_query_length
            and len(field_value) <= cfg.full_field_max_length
        ):
            full_similarity = similarity(search_term, field_value)
            if full_similarity >= threshold:
                word_score = max(word_score, full_similarity * cfg.full_field_penalty)

        if word_score <= 0.0:
            return 0.0, None
        return word_score, MatchKind.FUZZY

    def simple_score(self, record: ContactRecord, query: str) -> float | None:
        """Unweighted best-field score used when fuzzy search is turned off.

        Fields are not weighted and no prefix or word-prefix bonus applies:
        a substring hit scores 1.0, a word-to-word similarity scores
        `similarity * simple_word_penalty` and a short whole field scores
        `similarity * simple_full_field_penalty`. Similarities below
        `simple_threshold` are ignored. Returns None when the best score stays
        below `simple_threshold`.
        """

        search_term = normalize_query(query)
        if not search_term:
            return None

        cfg = self.config
        threshold = cfg.simple_threshold
        query_words = search_term.split()
        best = 0.0
        for descriptor in self.schema.searchable_fields():
            field_value = self.accessor.text(record, descriptor.key).lower()
            if search_term in field_value:
                best = max(best, 1.0)
                continue

            for query_word in query_words:
                for field_word in field_value.split():
                    word_similarity = similarity(query_word, field_word)
                    if word_similarity >= threshold:
                        best = max(best, word_similarity * cfg.simple_word_penalty)

            if (
                len(search_term) >= cfg.full_field_min_query_length
                and len(field_value) <= cfg.full_field_max_length
            ):
                full_similarity = similarity(search_term, field_value)
                if full_similarity >= threshold:
                    best = max(best, full_similarity * cfg.simple_full_field_penalty)

        return best if best >= threshold else None


def normalize_query(query: str) -> str:
    return query.lower().strip()
