"""Error kinds raised by the content store and the editing helpers.

Every error derives from ``InsightsError`` so request handlers and the CLI
can catch the whole family at once and still tell the kinds apart.
"""

from __future__ import annotations

from typing import Any


class InsightsError(Exception):
    """Base class for all domain errors."""


class ValidationError(InsightsError):
    """A submitted field is missing, empty, or malformed."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class NotFoundError(InsightsError, KeyError):
    """The addressed item does not exist in its collection."""

    def __init__(self, collection: str, key: object) -> None:
        self.collection = collection
        self.key = key
        super().__init__(f"{collection}: {key!r} not found")

    def __str__(self) -> str:
        return str(self.args[0])


class ConflictError(InsightsError):
    """Another item in the collection already owns this slug."""

    def __init__(self, collection: str, slug: str) -> None:
        self.collection = collection
        self.slug = slug
        super().__init__(f"{collection}: slug {slug!r} is already in use")


class PolicyViolation(InsightsError):
    """A list edit was refused; ``items`` holds the unchanged input."""

    def __init__(self, message: str, items: list[Any]) -> None:
        self.items = items
        super().__init__(message)


class OutOfRangeError(InsightsError, IndexError):
    """A list index does not address an existing element."""

    def __init__(self, index: int, length: int) -> None:
        self.index = index
        self.length = length
        super().__init__(f"index {index} out of range for list of length {length}")


class StoreUnavailable(InsightsError):
    """The backing store could not be read or written."""
