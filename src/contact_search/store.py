"""In-memory contact snapshot store."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from loguru import logger

SAMPLE_CONTACTS: tuple[dict[str, Any], ...] = (
    {
        "id": "101",
        "firstName": "John",
        "lastName": "Doe",
        "email": "john.doe@example.com",
        "phoneNumber": "+1-555-123-4567",
        "campus": "Main Campus",
        "major": "Computer Science",
        "year": "senior",
        "isInterested": True,
        "gender": "male",
        "followUpStatusNumber": 1,
        "createdAt": "2025-01-15T10:30:00Z",
    },
    {
        "id": "102",
        "firstName": "Jane",
        "lastName": "Smith",
        "email": "jane.smith@example.com",
        "phoneNumber": "+1-555-987-6543",
        "campus": "North Campus",
        "major": "Business Administration",
        "year": "junior",
        "isInterested": True,
        "gender": "female",
        "followUpStatusNumber": 2,
        "createdAt": "2025-01-14T14:20:00Z",
    },
    {
        "id": "103",
        "firstName": "Michael",
        "lastName": "Johnson",
        "email": "m.johnson@company.com",
        "phoneNumber": "+1-555-456-7890",
        "campus": "South Campus",
        "major": "Engineering",
        "year": "sophomore",
        "isInterested": False,
        "gender": "male",
        "followUpStatusNumber": 1,
        "createdAt": "2025-01-13T09:15:00Z",
    },
)


class ContactStore:
    """Contacts keyed by id, standing in for the relational store.

    `snapshot()` returns a fresh list on every call, so a search scans a
    private copy even if the store is written to while the scan runs.
    """

    def __init__(self, records: Iterable[Mapping[str, Any]] = ()) -> None:
        self._records: dict[str, dict[str, Any]] = {}
        self.upsert(records)

    def __len__(self) -> int:
        return len(self._records)

    def upsert(self, records: Iterable[Mapping[str, Any]]) -> None:
        for record in records:
            contact_id = record.get("id")
            if contact_id is None or contact_id == "":
                raise ValueError("contact records must carry an 'id'")
            self._records[str(contact_id)] = dict(record)

    def snapshot(self) -> list[dict[str, Any]]:
        return [dict(record) for record in self._records.values()]

    def get_many(self, contact_ids: Iterable[str]) -> list[dict[str, Any]]:
        """Return contacts for `contact_ids` in request order, skipping unknown ids."""
        return [
            dict(self._records[contact_id])
            for contact_id in contact_ids
            if contact_id in self._records
        ]

    def load_json(self, path: str | Path) -> int:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(payload, list):
            raise ValueError(f"expected a JSON list of contacts in {path}")
        self.upsert(payload)
        logger.info(f"Loaded {len(payload)} contacts from {path}")
        return len(payload)
