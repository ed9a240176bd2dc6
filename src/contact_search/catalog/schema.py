"""Field catalog for searchable and selectable contact attributes."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

from contact_search.errors import UnknownFieldError


class ValueType(str, Enum):
    TEXT = "text"
    EMAIL = "email"
    NUMBER = "number"
    BOOLEAN = "boolean"
    SELECT = "select"


class FieldDescriptor(BaseModel):
    """Declarative description of one contact attribute."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(min_length=1)
    label: str
    value_type: ValueType = ValueType.TEXT
    default_weight: float = Field(default=1.0, gt=0.0)
    searchable: bool = True


class FieldSchema:
    """Immutable registry of contact fields.

    The registry is the single source of truth for which attributes can be
    searched or requested, how much each one weighs in scoring, and how the
    calling layer should label them. Unknown keys requested by callers are
    dropped silently; unknown keys looked up internally raise
    `UnknownFieldError`.
    """

    def __init__(
        self,
        fields: Iterable[FieldDescriptor],
        default_projection: Sequence[str],
    ) -> None:
        self._fields: dict[str, FieldDescriptor] = {}
        for descriptor in fields:
            if descriptor.key in self._fields:
                raise ValueError(f"Field already registered: {descriptor.key}")
            self._fields[descriptor.key] = descriptor

        if not default_projection:
            raise ValueError("default_projection must name at least one field")
        missing = [key for key in default_projection if key not in self._fields]
        if missing:
            raise ValueError(f"default_projection names unknown fields: {missing}")
        self._default_projection = tuple(dict.fromkeys(default_projection))

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, key: object) -> bool:
        return key in self._fields

    def list_fields(self) -> list[FieldDescriptor]:
        return list(self._fields.values())

    def searchable_fields(self) -> list[FieldDescriptor]:
        return [descriptor for descriptor in self._fields.values() if descriptor.searchable]

    def default_projection(self) -> tuple[str, ...]:
        return self._default_projection

    def validate(self, requested: Iterable[str] | None) -> tuple[str, ...]:
        """Return the known subset of `requested`, in catalog order.

        Falls back to the default projection when nothing valid remains, so
        the result is never empty.
        """

        wanted = set(requested or ())
        known = tuple(key for key in self._fields if key in wanted)
        return known or self._default_projection

    def weight_of(self, key: str) -> float:
        descriptor = self._fields.get(key)
        if descriptor is None:
            raise UnknownFieldError(key)
        return descriptor.default_weight


_DEFAULT_FIELDS = (
    FieldDescriptor(key="id", label="ID", searchable=False),
    FieldDescriptor(key="firstName", label="First Name", default_weight=1.0),
    FieldDescriptor(key="lastName", label="Last Name", default_weight=1.0),
    FieldDescriptor(
        key="email", label="Email", value_type=ValueType.EMAIL, default_weight=0.9
    ),
    FieldDescriptor(key="phoneNumber", label="Phone Number", default_weight=0.8),
    FieldDescriptor(
        key="campus", label="Campus", value_type=ValueType.SELECT, default_weight=0.7
    ),
    FieldDescriptor(key="major", label="Major", default_weight=0.7),
    FieldDescriptor(
        key="year", label="Year", value_type=ValueType.SELECT, default_weight=0.6
    ),
    FieldDescriptor(
        key="gender", label="Gender", value_type=ValueType.SELECT, default_weight=0.5
    ),
    FieldDescriptor(
        key="followUpStatusNumber",
        label="Follow-up Status",
        value_type=ValueType.NUMBER,
        default_weight=0.5,
        searchable=False,
    ),
    FieldDescriptor(
        key="isInterested",
        label="Is Interested",
        value_type=ValueType.BOOLEAN,
        default_weight=0.5,
        searchable=False,
    ),
    FieldDescriptor(key="createdAt", label="Created At", default_weight=0.5, searchable=False),
)


@lru_cache(maxsize=1)
def default_schema() -> FieldSchema:
    """Process-wide contact catalog, built on first use and never mutated."""
    return FieldSchema(_DEFAULT_FIELDS, default_projection=("id", "firstName", "lastName"))
