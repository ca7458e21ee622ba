"""Tolerant merge of a stored homepage document against the defaults.

The stored document may have been written by any earlier release, or only
partially by an admin form.  ``merge_with_defaults`` always returns a
complete ``HomepageConfig``: every canonical key is present, well-typed
stored values are kept, and unknown keys or malformed values are dropped
in favour of the defaults.  The function is idempotent.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from insights.homepage.schema import (
    DEFAULT_LIMITS,
    DEFAULT_METHODOLOGY,
    DEFAULT_NUGGETS,
    DEFAULT_PODCAST,
    DEFAULT_SECTIONS,
    DEFAULT_TITLES,
    LIMIT_MAX,
    LIMIT_MIN,
    HomepageConfig,
    MethodologyItem,
    Nugget,
    PodcastBlock,
)

logger = logging.getLogger(__name__)

# Older releases stored the "Listen" strip heading at the top level.
LEGACY_LISTEN_TITLE_KEY = "nuggetsTitle"

_T = TypeVar("_T", bound=BaseModel)


def merge_with_defaults(partial: Any) -> HomepageConfig:
    """Reconcile *partial* with the default homepage configuration.

    Args:
        partial: Whatever the store holds for the homepage document.
            Anything that is not a mapping is treated as empty.

    Returns:
        A fully-populated HomepageConfig.
    """
    if isinstance(partial, HomepageConfig):
        partial = partial.to_document()
    if not isinstance(partial, Mapping):
        if partial is not None:
            logger.warning("Homepage document is %s, not a mapping; using defaults",
                           type(partial).__name__)
        return HomepageConfig()

    titles = _merge_flat(partial.get("titles"), DEFAULT_TITLES, _is_str, "titles")
    legacy_listen = partial.get(LEGACY_LISTEN_TITLE_KEY)
    stored_titles = partial.get("titles")
    has_listen = isinstance(stored_titles, Mapping) and _is_str(stored_titles.get("listen"))
    if _is_str(legacy_listen) and not has_listen:
        titles["listen"] = legacy_listen

    return HomepageConfig(
        sections=_merge_flat(partial.get("sections"), DEFAULT_SECTIONS, _is_bool, "sections"),
        titles=titles,
        limits=_merge_limits(partial.get("limits")),
        methodology=_merge_list(partial.get("methodology"), MethodologyItem, DEFAULT_METHODOLOGY,
                                "methodology"),
        podcast=_merge_podcast(partial.get("podcast")),
        nuggets=_merge_list(partial.get("nuggets"), Nugget, DEFAULT_NUGGETS, "nuggets"),
    )


def clamp_limit(value: Any, default: int) -> int:
    """Coerce a stored limit into ``[LIMIT_MIN, LIMIT_MAX]``.

    Booleans, non-numbers, non-finite and negative numbers yield *default*.
    """
    if isinstance(value, bool) or not isinstance(value, int | float):
        return default
    if isinstance(value, float) and not math.isfinite(value):
        return default
    if value < LIMIT_MIN:
        return default
    return min(int(value), LIMIT_MAX)


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


def _merge_flat(
    stored: Any, defaults: dict[str, Any], accept: Callable[[Any], bool], part: str
) -> dict[str, Any]:
    merged = dict(defaults)
    if not isinstance(stored, Mapping):
        return merged
    for key, value in stored.items():
        if key not in defaults:
            logger.debug("Dropping unknown %s key %r", part, key)
            continue
        if accept(value):
            merged[key] = value
        else:
            logger.debug("Dropping malformed %s.%s value %r", part, key, value)
    return merged


def _merge_limits(stored: Any) -> dict[str, int]:
    merged = dict(DEFAULT_LIMITS)
    if not isinstance(stored, Mapping):
        return merged
    for key, default in DEFAULT_LIMITS.items():
        if key in stored:
            merged[key] = clamp_limit(stored[key], default)
    return merged


def _merge_podcast(stored: Any) -> PodcastBlock:
    if not isinstance(stored, Mapping):
        return DEFAULT_PODCAST.model_copy()
    fields = DEFAULT_PODCAST.model_dump()
    for key in fields:
        if _is_str(stored.get(key)):
            fields[key] = stored[key]
    return PodcastBlock(**fields)


def _merge_list(stored: Any, model: type[_T], defaults: list[_T], part: str) -> list[_T]:
    """Keep a non-empty stored list as-is; otherwise seed from defaults.

    Entries that are not mappings or lack a usable ``id`` are dropped; the
    remaining entries are not merged with the default items.
    """
    if not isinstance(stored, list) or not stored:
        return [d.model_copy() for d in defaults]

    kept: list[_T] = []
    for entry in stored:
        if not isinstance(entry, Mapping):
            logger.warning("Dropping malformed %s entry %r", part, entry)
            continue
        ident = entry.get("id")
        if isinstance(ident, bool) or not isinstance(ident, str | int) or str(ident) == "":
            logger.warning("Dropping %s entry without id: %r", part, entry)
            continue
        values = {
            name: entry[name]
            for name in model.model_fields
            if name != "id" and _is_str(entry.get(name))
        }
        try:
            kept.append(model(id=str(ident), **values))
        except PydanticValidationError:
            logger.warning("Dropping malformed %s entry %r", part, entry)

    if not kept:
        return [d.model_copy() for d in defaults]
    return kept
