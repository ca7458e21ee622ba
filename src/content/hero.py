"""Hero designation for content collections.

A collection's hero is the single item shown in the homepage's featured
slot.  ``HeroSelector`` never rewrites the collection itself: it checks
the target exists and hands the change to the store's atomic
``set_hero_exclusive`` so that two admins designating different heroes
at once still leave exactly one hero behind (the last to commit).
"""

from __future__ import annotations

import logging

from insights.content.models import Collection, ContentItem, supports_hero
from insights.content.store import ContentStore
from insights.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class HeroSelector:
    """Read and change the hero item of a collection."""

    def __init__(self, store: ContentStore) -> None:
        self._store = store

    def designate(self, collection: Collection | str, item_id: int) -> ContentItem:
        """Make *item_id* the hero of *collection*.

        Raises:
            ValidationError: the collection has no hero slot.
            NotFoundError: the item does not exist.
        """
        collection = _hero_collection(collection)
        if not self._store.exists(collection, item_id):
            raise NotFoundError(collection.value, item_id)
        hero = self._store.set_hero_exclusive(collection, item_id)
        logger.info("Designated %s #%d (%s) as hero", collection, hero.id, hero.slug)
        return hero

    def clear(self, collection: Collection | str) -> None:
        """Leave *collection* without a hero."""
        collection = _hero_collection(collection)
        self._store.clear_hero(collection)
        logger.info("Cleared hero of %s", collection)

    def hero_conflicts(self, collection: Collection | str) -> list[int]:
        """Return ids of every item flagged as hero, lowest first.

        More than one id means the stored data breaks the single-hero rule.
        """
        collection = _hero_collection(collection)
        return sorted(
            item.id
            for item in self._store.list(collection, order="id")
            if getattr(item, "is_hero", False)
        )

    def current_hero(self, collection: Collection | str) -> ContentItem | None:
        """Return the hero of *collection*, or None if there is none.

        If several items carry the hero flag the lowest id is returned
        and the inconsistency is logged as a warning.
        """
        collection = _hero_collection(collection)
        heroes = [
            item
            for item in self._store.list(collection, order="id")
            if getattr(item, "is_hero", False)
        ]
        if not heroes:
            return None
        if len(heroes) > 1:
            logger.warning(
                "Collection %s has %d hero items (ids %s); using #%d",
                collection,
                len(heroes),
                ", ".join(str(h.id) for h in heroes),
                heroes[0].id,
            )
        return heroes[0]


def _hero_collection(collection: Collection | str) -> Collection:
    try:
        collection = Collection(collection)
    except ValueError as exc:
        raise ValidationError("collection", f"unknown collection {collection!r}") from exc
    if not supports_hero(collection):
        raise ValidationError("collection", f"{collection} has no hero slot")
    return collection
