"""Field access on caller-owned contact records."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Protocol

from contact_search.catalog.schema import FieldSchema, default_schema
from contact_search.errors import UnknownFieldError
from contact_search.types import ContactRecord, Scalar


class FieldAccessor(Protocol):
    """Reads named attributes from a record."""

    def get(self, record: ContactRecord, key: str) -> Scalar:
        """Return the attribute value, or None when the record lacks it."""

    def text(self, record: ContactRecord, key: str) -> str:
        """Return the attribute as searchable text."""

    def project(self, record: ContactRecord, keys: Iterable[str]) -> dict[str, Scalar]:
        """Return a dict holding exactly `keys`."""


class RecordAccessor:
    """Accessor for mapping records and plain attribute objects.

    This is the only place where records are read by string key. Keys are
    checked against the schema so a typo'd internal key fails loudly instead
    of reading as an empty value.
    """

    def __init__(self, schema: FieldSchema | None = None) -> None:
        self.schema = schema or default_schema()

    def get(self, record: ContactRecord, key: str) -> Scalar:
        if key not in self.schema:
            raise UnknownFieldError(key)
        if isinstance(record, Mapping):
            return record.get(key)
        return getattr(record, key, None)

    def text(self, record: ContactRecord, key: str) -> str:
        """Return the attribute rendered as text; missing values read as ''."""
        value = self.get(record, key)
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def project(self, record: ContactRecord, keys: Iterable[str]) -> dict[str, Scalar]:
        return {key: self.get(record, key) for key in keys}
