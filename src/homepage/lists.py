"""Admin edits on a homepage configuration.

Each function takes a configuration and returns a new, merged one; the
input is never modified.  Methodology cards and podcast nuggets are
ordered strips edited with the generic ordered-list operations.
"""

from __future__ import annotations

from typing import Literal

from pydantic import ValidationError as PydanticValidationError

from insights.editing import ordered
from insights.editing.ordered import Direction
from insights.errors import ValidationError
from insights.homepage.merge import clamp_limit, merge_with_defaults
from insights.homepage.schema import (
    DEFAULT_LIMITS,
    LIMIT_MAX,
    LIMIT_MIN,
    SECTION_KEYS,
    TITLE_KEYS,
    HomepageConfig,
    MethodologyItem,
    Nugget,
)

Strip = Literal["methodology", "nuggets"]

_STRIP_MODELS = {"methodology": MethodologyItem, "nuggets": Nugget}


def _with(config: HomepageConfig, **update: object) -> HomepageConfig:
    document = config.to_document()
    document.update(update)
    return merge_with_defaults(document)


def _strip(config: HomepageConfig, strip: Strip) -> list:
    if strip not in _STRIP_MODELS:
        raise ValidationError("strip", f"unknown strip {strip!r}")
    return list(getattr(config, strip))


def add_entry(config: HomepageConfig, strip: Strip, **fields: str) -> HomepageConfig:
    """Append a new card to *strip* with a freshly generated id."""
    items = _strip(config, strip)
    model = _STRIP_MODELS[strip]
    fields.pop("id", None)
    try:
        entry = model(id=ordered.new_id(ordered.ids_of(items)), **fields)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        raise ValidationError(str(first["loc"][0]), first["msg"]) from exc
    return _with(config, **{strip: [i.model_dump() for i in ordered.append(items, entry)]})


def remove_entry(config: HomepageConfig, strip: Strip, index: int) -> HomepageConfig:
    """Remove a card.

    Removing the last card reseeds the strip from the defaults, because an
    empty strip is never stored.
    """
    items = ordered.remove_at(_strip(config, strip), index)
    return _with(config, **{strip: [i.model_dump() for i in items]})


def move_entry(
    config: HomepageConfig, strip: Strip, index: int, direction: Direction | str
) -> HomepageConfig:
    items = ordered.move_adjacent(_strip(config, strip), index, direction)
    return _with(config, **{strip: [i.model_dump() for i in items]})


def update_entry(config: HomepageConfig, strip: Strip, index: int, **fields: str) -> HomepageConfig:
    items = ordered.replace_at(_strip(config, strip), index, fields)
    return _with(config, **{strip: [i.model_dump() for i in items]})


def update_podcast(config: HomepageConfig, **fields: str) -> HomepageConfig:
    podcast = {**config.podcast.model_dump(), **fields}
    return _with(config, podcast=podcast)


def set_section_visible(config: HomepageConfig, key: str, visible: bool) -> HomepageConfig:
    if key not in SECTION_KEYS:
        raise ValidationError("section", f"unknown section {key!r}")
    return _with(config, sections={**config.sections, key: visible})


def set_title(config: HomepageConfig, key: str, title: str) -> HomepageConfig:
    if key not in TITLE_KEYS:
        raise ValidationError("title", f"section {key!r} has no editable title")
    return _with(config, titles={**config.titles, key: title})


def set_limit(config: HomepageConfig, key: str, value: int) -> HomepageConfig:
    """Set an item-count limit, clamped into the allowed range."""
    if key not in DEFAULT_LIMITS:
        raise ValidationError("limit", f"unknown limit {key!r}")
    if value < LIMIT_MIN:
        raise ValidationError("limit", f"must be between {LIMIT_MIN} and {LIMIT_MAX}")
    return _with(config, limits={**config.limits, key: clamp_limit(value, DEFAULT_LIMITS[key])})
