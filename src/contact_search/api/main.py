"""FastAPI entrypoint for contact search and field catalog endpoints."""

from __future__ import annotations

import re
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, HTTPException
from loguru import logger
from pydantic import BaseModel, Field

from contact_search.catalog.schema import default_schema
from contact_search.errors import ContactSearchError
from contact_search.search.pipeline import SearchPipeline
from contact_search.settings import Settings
from contact_search.store import SAMPLE_CONTACTS, ContactStore
from contact_search.types import SearchQuery

_LEADING_FLOAT = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_LEADING_INT = re.compile(r"\s*[+-]?\d+")


@asynccontextmanager
async def _lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # Own stderr sink at the configured level; sinks added by the host stay untouched
    handler_id = logger.add(sys.stderr, level=_settings.log_level.upper())
    logger.info(f"Serving {len(_store)} contacts")
    try:
        yield
    finally:
        logger.remove(handler_id)


def _create_store(settings: Settings) -> ContactStore:
    store = ContactStore()
    if settings.contacts_path:
        store.load_json(settings.contacts_path)
    else:
        store.upsert(SAMPLE_CONTACTS)
    return store


class ContactLookupRequest(BaseModel):
    ids: list[str] = Field(min_length=1)


_settings = Settings()

app = FastAPI(title=_settings.app_name, version="0.1.0", lifespan=_lifespan)

_schema = default_schema()
_store = _create_store(_settings)
_pipeline = SearchPipeline(_schema)


@app.get("/health")
def health() -> dict[str, Any]:
    return {
        "status": "ok",
        "contacts": len(_store),
        "fields": len(_schema),
    }


@app.get("/contacts")
def list_contacts(
    search: str = "",
    fuzzy: str = "true",
    threshold: str | None = None,
    limit: str | None = None,
    fields: str | None = None,
) -> dict[str, Any]:
    query = SearchQuery(
        raw_text=search,
        threshold=_parse_float(threshold, _settings.default_threshold),
        max_results=_parse_int(limit, _settings.default_limit),
        requested_fields=_parse_fields(fields),
        fuzzy=fuzzy == "true",
    )
    try:
        response = _pipeline.run(_store.snapshot(), query)
    except ContactSearchError as exc:
        logger.exception(f"Contact search failed for {search!r}")
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return {
        "success": True,
        "results": [
            {
                "contact": result.record,
                "score": result.score,
                "matchedFields": result.matched_fields,
                "fieldScores": result.field_scores,
            }
            for result in response.results
        ],
        "query": response.query,
        "fuzzySearch": response.fuzzy,
        "threshold": response.threshold,
        "total": response.total,
        "totalContacts": response.total_contacts,
        "timestamp": _timestamp(),
    }


@app.get("/contacts/fields")
def contact_fields() -> dict[str, Any]:
    return {
        "success": True,
        "fields": [
            {
                "key": descriptor.key,
                "label": descriptor.label,
                "type": descriptor.value_type.value,
                "weight": descriptor.default_weight,
                "searchable": descriptor.searchable,
            }
            for descriptor in _schema.list_fields()
        ],
        "timestamp": _timestamp(),
    }


@app.post("/contacts/lookup")
def lookup_contacts(request: ContactLookupRequest) -> dict[str, Any]:
    return {"items": _store.get_many(request.ids)}


def _parse_float(raw: str | None, default: float) -> float:
    """Read the leading number of `raw`, so "0.7x" gives 0.7."""
    match = _LEADING_FLOAT.match(raw or "")
    value = float(match.group(0)) if match else 0.0
    # Unparseable and zero values fall back like a missing value
    return value or default


def _parse_int(raw: str | None, default: int) -> int:
    """Read the leading integer of `raw`, so "2.5" gives 2."""
    match = _LEADING_INT.match(raw or "")
    value = int(match.group(0)) if match else 0
    return value or default


def _parse_fields(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return ()
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()
