"""Pure edits over ordered, identity-bearing lists.

Used for article sections, the paragraphs inside a section, and the
methodology and nugget strips of the homepage.  Every function returns a
new list and leaves its input untouched.  A record's ``id`` is assigned
once by ``new_id`` and no edit here ever changes it, reordering included.

Records may be Pydantic models, plain mappings, or bare values such as
paragraph strings.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Mapping, Sequence
from enum import StrEnum
from typing import Any, TypeVar

from pydantic import BaseModel

from insights.errors import OutOfRangeError, PolicyViolation, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

ID_LENGTH = 10


class Direction(StrEnum):
    UP = "up"
    DOWN = "down"


def new_id(existing: Iterable[str] = ()) -> str:
    """Return a short random id not present in *existing*."""
    taken = set(existing)
    while True:
        candidate = uuid.uuid4().hex[:ID_LENGTH]
        if candidate not in taken:
            return candidate


def ids_of(items: Sequence[Any]) -> list[str]:
    """Collect the ids of the records in *items*."""
    return [str(_get(item, "id")) for item in items if _get(item, "id") is not None]


def append(items: Sequence[T], record: T) -> list[T]:
    return [*items, record]


def remove_at(items: Sequence[T], index: int, *, min_length: int = 0) -> list[T]:
    """Return *items* without the element at *index*.

    Raises:
        OutOfRangeError: *index* does not address an element.
        PolicyViolation: the result would be shorter than *min_length*.
    """
    check_index(items, index)
    if len(items) - 1 < min_length:
        raise PolicyViolation(
            f"cannot remove: at least {min_length} entr{'y' if min_length == 1 else 'ies'} "
            "must remain",
            list(items),
        )
    return [item for i, item in enumerate(items) if i != index]


def move_adjacent(items: Sequence[T], index: int, direction: Direction | str) -> list[T]:
    """Swap the element at *index* with its neighbour in *direction*.

    Moving the first element up or the last element down returns an
    unchanged copy.

    Raises:
        OutOfRangeError: *index* does not address an element.
        ValidationError: *direction* is neither up nor down.
    """
    check_index(items, index)
    try:
        direction = Direction(direction)
    except ValueError as exc:
        raise ValidationError("direction", f"must be up or down, got {direction!r}") from exc
    step = -1 if direction is Direction.UP else 1
    swap = index + step
    result = list(items)
    if swap < 0 or swap >= len(result):
        logger.debug("Ignoring move %s at boundary index %d", direction, index)
        return result
    result[index], result[swap] = result[swap], result[index]
    return result


def replace_at(items: Sequence[T], index: int, patch: Any) -> list[T]:
    """Shallow-merge *patch* into the element at *index*.

    For models and mappings, *patch* is a mapping of fields and the
    element's ``id`` is kept even if *patch* names one.  Any other element
    (e.g. a paragraph string) is replaced by *patch* outright.

    Raises:
        OutOfRangeError: *index* does not address an element.
    """
    check_index(items, index)
    result = list(items)
    result[index] = _patched(result[index], patch)
    return result


def append_to_nested(items: Sequence[T], index: int, field: str, value: Any) -> list[T]:
    """Append *value* to the list field *field* of the element at *index*."""
    check_index(items, index)
    current = _get(items[index], field) or []
    return replace_at(items, index, {field: [*current, value]})


def check_index(items: Sequence[Any], index: int) -> None:
    if not 0 <= index < len(items):
        raise OutOfRangeError(index, len(items))


def _get(record: Any, field: str) -> Any:
    if isinstance(record, BaseModel):
        return getattr(record, field, None)
    if isinstance(record, Mapping):
        return record.get(field)
    return None


def _patched(record: Any, patch: Any) -> Any:
    if isinstance(record, BaseModel):
        update = {k: v for k, v in dict(patch).items() if k != "id"}
        return type(record).model_validate({**record.model_dump(), **update})
    if isinstance(record, Mapping):
        update = {k: v for k, v in dict(patch).items() if k != "id"}
        return {**record, **update}
    return patch
