"""Admin form submission cleaning.

Submissions arrive as loose mappings (from a request body or the CLI).
They are trimmed and validated here, before anything reaches the store,
so a bad field is reported back with its name instead of surfacing as a
storage failure.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from insights.content.models import (
    CATEGORY_TYPES,
    SLUG_PATTERN,
    Collection,
    item_type,
)
from insights.errors import ValidationError

# Fields the store owns; a submission can never set them directly.
READ_ONLY_FIELDS = frozenset({"id", "is_hero", "isHero"})


def clean_submission(collection: Collection | str, fields: Mapping[str, Any]) -> dict[str, Any]:
    """Validate and normalise a create/edit submission.

    Returns a dict of snake_case field names ready for the store.

    Raises:
        ValidationError: naming the first offending field.
    """
    collection = Collection(collection)
    model = item_type(collection)
    data = {k: v for k, v in fields.items() if k not in READ_ONLY_FIELDS}

    for required in ("slug", "title"):
        value = data.get(required)
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(required, "is required")
        data[required] = value.strip()

    if not SLUG_PATTERN.match(data["slug"]):
        raise ValidationError(
            "slug", "use lower-case letters, digits and single hyphens only"
        )

    category = data.get("category")
    if category is not None:
        allowed = CATEGORY_TYPES[collection]
        if category not in {c.value for c in allowed}:
            raise ValidationError(
                "category", f"must be one of: {', '.join(c.value for c in allowed)}"
            )

    try:
        validated = model.model_validate({"id": 0, **data})
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        loc = first["loc"][0] if first["loc"] else "submission"
        raise ValidationError(str(loc), first["msg"]) from exc

    return validated.model_dump(exclude={"id", "is_hero"})
