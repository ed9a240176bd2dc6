"""Ordering policies for search and browse results."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import TypeVar

from contact_search.catalog.accessor import FieldAccessor
from contact_search.types import ContactRecord, MatchOutcome, Scalar

T = TypeVar("T")


def rank_outcomes(scored: Sequence[tuple[T, MatchOutcome]]) -> list[tuple[T, MatchOutcome]]:
    """Order matches by prefix evidence first, then by descending score.

    The prefix group is an explicit first sort key rather than a consequence
    of the prefix multiplier, so a prefix hit on a low-weight field still
    ranks above a fuzzy hit on a high-weight field. The sort is stable: equal
    keys keep their input order.
    """

    return sorted(
        scored,
        key=lambda item: (not item[1].has_prefix_match, -item[1].score),
    )


def browse_newest_first(
    records: Sequence[ContactRecord],
    accessor: FieldAccessor,
) -> list[ContactRecord]:
    """Default browse order: newest `createdAt` first.

    Timestamps are compared as instants, not as text, so values with
    different fractional precision still order correctly. Records whose
    `createdAt` is missing or unparseable follow the dated ones in their
    input order.
    """

    dated: list[tuple[datetime, ContactRecord]] = []
    undated: list[ContactRecord] = []
    for record in records:
        created_at = parse_timestamp(accessor.get(record, "createdAt"))
        if created_at is None:
            undated.append(record)
        else:
            dated.append((created_at, record))
    dated.sort(key=lambda item: item[0], reverse=True)
    return [record for _, record in dated] + undated


def parse_timestamp(value: Scalar | datetime) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text[-1] in "zZ":
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
