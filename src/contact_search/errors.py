"""
Exception hierarchy for the contact search engine.

Only programming errors are raised from the engine. Out-of-range query
parameters are clamped and missing record attributes read as empty values,
so neither surfaces as an exception. An empty result list is a normal
outcome, not an error.

Usage:
------
    from contact_search.errors import ContactSearchError, UnknownFieldError

    try:
        weight = schema.weight_of("firstName")
    except UnknownFieldError as e:
        logger.error(f"Catalog is out of sync: {e.field}")
"""

from __future__ import annotations


class ContactSearchError(Exception):
    """Base exception for all contact search errors."""


class UnknownFieldError(ContactSearchError):
    """
    A field key was looked up that the field catalog does not register.

    This indicates a catalog/pipeline desynchronization bug. It is fatal to
    the current call and should not be retried.

    Attributes:
        field: The unregistered key
    """

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Unknown contact field: {field!r}")
