"""JSON-backed content store.

Persists every content collection, the homepage configuration document
and the site settings in a single JSON file that is saved after every
write operation.  Provides CRUD per collection plus the atomic
hero-designation primitive.

All mutations run inside ``_transaction``, which holds a thread lock and
a lock file next to the store so writers in other processes are serialised
too.  The file is re-read under the lock before every change and replaced
atomically afterwards; a failed save restores the in-memory snapshot so no
partial write is ever observable.  Reads re-read the file as well.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from filelock import FileLock, Timeout
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from insights.content.models import (
    Article,
    ArticleSection,
    Collection,
    ContentItem,
    HomeTourItem,
    NewLaunchItem,
    Reel,
    item_type,
    supports_hero,
)
from insights.errors import ConflictError, NotFoundError, StoreUnavailable, ValidationError

logger = logging.getLogger(__name__)

STORE_FILENAME = ".insights-content-store.json"
LOCK_FILENAME = ".insights-content-store.lock"

# Seconds to wait for another process holding the store lock.
LOCK_TIMEOUT = 10.0

# Alias to avoid shadowing by ContentStore.list method
_list = list

_ATTRS: dict[Collection, str] = {
    Collection.ARTICLES: "articles",
    Collection.REELS: "reels",
    Collection.NEW_LAUNCHES: "new_launches",
    Collection.HOME_TOURS: "home_tours",
}


class _StoreData(BaseModel):
    """Internal wrapper for JSON serialization."""

    articles: list[Article] = Field(default_factory=list)
    reels: list[Reel] = Field(default_factory=list)
    new_launches: list[NewLaunchItem] = Field(default_factory=list)
    home_tours: list[HomeTourItem] = Field(default_factory=list)
    # Last id handed out per collection; ids are never reused.
    sequences: dict[str, int] = Field(default_factory=dict)
    # Kept loosely typed: older releases wrote other shapes here.
    homepage: Any = None
    settings: dict[str, str] = Field(default_factory=dict)


class ContentStore:
    """JSON-backed CRUD store for content collections.

    Re-reads the store file for every operation and saves after every
    mutation.
    Items returned to callers are copies; mutating them does not touch
    the store.
    """

    def __init__(self, output_dir: Path) -> None:
        self._path = output_dir / STORE_FILENAME
        self._lock = threading.RLock()
        self._file_lock = FileLock(str(output_dir / LOCK_FILENAME), timeout=LOCK_TIMEOUT)
        self._data = self._load()

    @property
    def path(self) -> Path:
        return self._path

    # ── Private helpers ──────────────────────────────────────────

    def _load(self) -> _StoreData:
        if not self._path.exists():
            return _StoreData()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return _StoreData.model_validate(raw)
        except (json.JSONDecodeError, ValueError, KeyError):
            logger.warning("Corrupt content store at %s, starting fresh", self._path)
            return _StoreData()

    def _save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = self._data.model_dump_json(indent=2, by_alias=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=".insights-", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    @contextmanager
    def _file_locked(self) -> Iterator[None]:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._file_lock:
                yield
        except Timeout as exc:
            raise StoreUnavailable(f"timed out waiting for lock on {self._path}") from exc

    def _refresh(self) -> None:
        """Re-read the file so reads see writes made through other handles."""
        self._data = self._load()

    @contextmanager
    def _transaction(self) -> Iterator[_StoreData]:
        with self._lock, self._file_locked():
            self._refresh()
            snapshot = self._data.model_copy(deep=True)
            try:
                yield self._data
                self._save()
            except OSError as exc:
                self._data = snapshot
                raise StoreUnavailable(f"could not write {self._path}: {exc}") from exc
            except BaseException:
                self._data = snapshot
                raise

    def _validated(self, model: type[ContentItem], values: Mapping[str, Any]) -> ContentItem:
        try:
            return model.model_validate(values)
        except PydanticValidationError as exc:
            first = exc.errors()[0]
            loc = first["loc"][0] if first["loc"] else "item"
            raise ValidationError(str(loc), first["msg"]) from exc

    def _items(self, collection: Collection | str) -> _list[ContentItem]:
        return getattr(self._data, _ATTRS[Collection(collection)])

    def _find(self, collection: Collection | str, item_id: int) -> ContentItem | None:
        for item in self._items(collection):
            if item.id == item_id:
                return item
        return None

    def _require(self, collection: Collection | str, item_id: int) -> ContentItem:
        item = self._find(collection, item_id)
        if item is None:
            raise NotFoundError(str(collection), item_id)
        return item

    def _check_slug(
        self, collection: Collection | str, slug: str, exclude_id: int | None = None
    ) -> None:
        for item in self._items(collection):
            if item.slug == slug and item.id != exclude_id:
                raise ConflictError(str(collection), slug)

    def _next_id(self, collection: Collection) -> int:
        last = self._data.sequences.get(collection.value, 0)
        existing = max((i.id for i in self._items(collection)), default=0)
        next_id = max(last, existing) + 1
        self._data.sequences[collection.value] = next_id
        return next_id

    # ── Read operations ──────────────────────────────────────────

    def list(self, collection: Collection | str, *, order: str = "hero-first") -> _list[ContentItem]:
        """Return every item of *collection*.

        ``order="hero-first"`` puts hero items first, then newest id first,
        which is how the admin tables and public lists show them.
        ``order="id"`` sorts by ascending id.
        """
        with self._lock:
            self._refresh()
            items = [i.model_copy(deep=True) for i in self._items(collection)]
        if order == "id":
            return sorted(items, key=lambda i: i.id)
        return sorted(items, key=lambda i: (not getattr(i, "is_hero", False), -i.id))

    def get(self, collection: Collection | str, item_id: int) -> ContentItem:
        """Return an item by id.

        Raises NotFoundError if the id does not exist.
        """
        with self._lock:
            self._refresh()
            return self._require(collection, item_id).model_copy(deep=True)

    def get_by_slug(self, collection: Collection | str, slug: str) -> ContentItem:
        """Return an item by slug.

        Raises NotFoundError if the slug does not exist.
        """
        with self._lock:
            self._refresh()
            for item in self._items(collection):
                if item.slug == slug:
                    return item.model_copy(deep=True)
        raise NotFoundError(str(collection), slug)

    def exists(self, collection: Collection | str, item_id: int) -> bool:
        with self._lock:
            self._refresh()
            return self._find(collection, item_id) is not None

    # ── Write operations ─────────────────────────────────────────

    def create(self, collection: Collection | str, fields: Mapping[str, Any]) -> ContentItem:
        """Insert a new item and return it with its assigned id.

        Raises ConflictError if the slug is already taken. Raises
        ValidationError naming the first field the item model rejects.
        """
        collection = Collection(collection)
        model = item_type(collection)
        if not fields.get("slug"):
            raise ValidationError("slug", "is required")
        with self._transaction() as data:
            self._check_slug(collection, fields["slug"])
            values = {k: v for k, v in fields.items() if k not in ("id", "is_hero", "isHero")}
            item = self._validated(model, {**values, "id": self._next_id(collection)})
            getattr(data, _ATTRS[collection]).append(item)
        logger.info("Created %s #%d (%s)", collection, item.id, item.slug)
        return item.model_copy(deep=True)

    def update(
        self, collection: Collection | str, item_id: int, fields: Mapping[str, Any]
    ) -> ContentItem:
        """Replace the mutable fields of an item.

        The id and the hero flag are preserved; hero changes go through
        ``set_hero_exclusive``.

        Raises NotFoundError or ConflictError.
        """
        collection = Collection(collection)
        model = item_type(collection)
        with self._transaction() as data:
            existing = self._require(collection, item_id)
            if "slug" in fields:
                self._check_slug(collection, fields["slug"], exclude_id=item_id)
            merged = {**existing.model_dump(), **fields, "id": item_id}
            if hasattr(existing, "is_hero"):
                merged["is_hero"] = existing.is_hero
            merged.pop("isHero", None)
            updated = self._validated(model, merged)
            items = getattr(data, _ATTRS[collection])
            items[items.index(existing)] = updated
        return updated.model_copy(deep=True)

    def update_sections(self, item_id: int, sections: _list[ArticleSection]) -> Article:
        """Replace the ordered section list of an article.

        Raises NotFoundError if the article does not exist.
        """
        return self.update(
            Collection.ARTICLES,
            item_id,
            {"sections": [s.model_dump() for s in sections]},
        )

    def set_featured(self, item_id: int, featured: bool) -> Article:
        """Toggle the ``featured`` flag of an article."""
        return self.update(Collection.ARTICLES, item_id, {"featured": featured})

    def delete(self, collection: Collection | str, item_id: int) -> None:
        """Remove an item.

        Deleting the hero leaves the collection without one.

        Raises NotFoundError if the id does not exist.
        """
        with self._transaction() as data:
            item = self._require(collection, item_id)
            getattr(data, _ATTRS[Collection(collection)]).remove(item)
        if getattr(item, "is_hero", False):
            logger.info("Deleted hero %s #%d; collection now has no hero", collection, item_id)
        else:
            logger.info("Deleted %s #%d", collection, item_id)

    # ── Hero operations ──────────────────────────────────────────

    def set_hero_exclusive(self, collection: Collection | str, item_id: int) -> ContentItem:
        """Make *item_id* the only hero of *collection*.

        Clearing the previous hero and setting the new one happen in one
        transaction: concurrent callers are serialised on the store lock
        and either the whole change is persisted or none of it is.

        Raises NotFoundError if the id does not exist.
        """
        collection = Collection(collection)
        if not supports_hero(collection):
            raise ValidationError("collection", f"{collection} has no hero slot")
        with self._transaction() as data:
            target = self._require(collection, item_id)
            items = getattr(data, _ATTRS[collection])
            for idx, item in enumerate(items):
                flag = item is target
                if item.is_hero != flag:
                    items[idx] = item.model_copy(update={"is_hero": flag})
            hero = self._require(collection, item_id)
        return hero.model_copy(deep=True)

    def clear_hero(self, collection: Collection | str) -> None:
        """Remove the hero designation from every item of *collection*."""
        collection = Collection(collection)
        if not supports_hero(collection):
            raise ValidationError("collection", f"{collection} has no hero slot")
        with self._transaction() as data:
            items = getattr(data, _ATTRS[collection])
            for idx, item in enumerate(items):
                if item.is_hero:
                    items[idx] = item.model_copy(update={"is_hero": False})

    # ── Homepage document ────────────────────────────────────────

    def read_config(self) -> dict[str, Any]:
        """Return the stored homepage document as-is, or ``{}``."""
        with self._lock:
            self._refresh()
            raw = self._data.homepage
            if raw is None:
                return {}
            if not isinstance(raw, Mapping):
                logger.warning("Ignoring non-mapping homepage document in %s", self._path)
                return {}
            return json.loads(json.dumps(raw))

    def write_config(self, document: Mapping[str, Any]) -> dict[str, Any]:
        """Store *document* as the homepage configuration and return it."""
        stored = json.loads(json.dumps(dict(document)))
        with self._transaction() as data:
            data.homepage = stored
        return json.loads(json.dumps(stored))

    # ── Site settings ────────────────────────────────────────────

    def read_settings(self) -> dict[str, str]:
        with self._lock:
            self._refresh()
            return dict(self._data.settings)

    def write_settings(self, values: Mapping[str, str]) -> dict[str, str]:
        """Upsert settings keys and return the full stored mapping."""
        with self._transaction() as data:
            data.settings.update({k: str(v) for k, v in values.items()})
            return dict(data.settings)
