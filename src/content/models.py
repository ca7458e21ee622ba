"""Content domain models as pure Pydantic v2 data types.

Four content variants share one base shape: a store-assigned integer
``id``, a ``slug`` unique within the variant's collection, a ``title`` and
a category drawn from a closed, variant-specific enumeration.  Articles
additionally own an ordered list of ``ArticleSection`` records.

Persisted JSON uses the camelCase field names of the public site
(``isHero``, ``readTime``, ``videoUrl``); Python code uses snake_case.
"""

from __future__ import annotations

import re
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class Collection(StrEnum):
    """Named content collections held by the store."""

    ARTICLES = "articles"
    REELS = "reels"
    NEW_LAUNCHES = "new-launches"
    HOME_TOURS = "home-tours"


class ArticleCategory(StrEnum):
    PROPERTY = "Property"
    MARKET = "Market"
    INVESTMENT = "Investment"
    NEWS = "News"
    MARKET_ANALYSIS = "Market Analysis"
    REAL_ESTATE_NEWS = "Real Estate News"
    GUIDES = "Guides"
    HOUSING_AND_LIFE = "Housing & Life"
    PROJECT_REVIEWS = "Project Reviews"
    HOME_DECOR = "Home Decor"


class ReelCategory(StrEnum):
    """Shared by reels and new-launch listings."""

    MOST_VIEWED = "Most Viewed"
    LATEST = "Latest"
    EDITORS_PICK = "Editor's Pick"


class HomeTourCategory(StrEnum):
    CONDO = "Condo"
    HDB = "HDB"
    LANDED = "Landed"
    APARTMENT = "Apartment"
    COMMERCIAL = "Commercial"


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )


class ArticleSection(_CamelModel):
    """One headed block of an article body."""

    id: str
    heading: str = ""
    paragraphs: list[str] = Field(default_factory=lambda: [""])
    image: str = ""


class ContentItem(_CamelModel):
    """Fields common to every content variant."""

    id: int
    slug: str
    title: str


class Article(ContentItem):
    excerpt: str = ""
    content: str | None = None
    sections: list[ArticleSection] = Field(default_factory=list)
    category: ArticleCategory = ArticleCategory.PROPERTY
    image: str = ""
    author: str = ""
    date: str = ""
    read_time: str = ""
    featured: bool = False
    is_hero: bool = False


class Reel(ContentItem):
    thumbnail: str = ""
    duration: str = ""
    category: ReelCategory = ReelCategory.MOST_VIEWED
    video_url: str = ""


class NewLaunchItem(ContentItem):
    excerpt: str = ""
    image: str = ""
    category: ReelCategory = ReelCategory.MOST_VIEWED
    read_time: str = ""
    is_hero: bool = False


class HomeTourItem(ContentItem):
    excerpt: str = ""
    image: str = ""
    category: HomeTourCategory = HomeTourCategory.CONDO
    read_time: str = ""
    is_hero: bool = False


ITEM_TYPES: dict[Collection, type[ContentItem]] = {
    Collection.ARTICLES: Article,
    Collection.REELS: Reel,
    Collection.NEW_LAUNCHES: NewLaunchItem,
    Collection.HOME_TOURS: HomeTourItem,
}

CATEGORY_TYPES: dict[Collection, type[StrEnum]] = {
    Collection.ARTICLES: ArticleCategory,
    Collection.REELS: ReelCategory,
    Collection.NEW_LAUNCHES: ReelCategory,
    Collection.HOME_TOURS: HomeTourCategory,
}

HERO_COLLECTIONS = frozenset(
    {Collection.ARTICLES, Collection.NEW_LAUNCHES, Collection.HOME_TOURS}
)


def item_type(collection: Collection | str) -> type[ContentItem]:
    """Return the model class stored in *collection*."""
    return ITEM_TYPES[Collection(collection)]


def supports_hero(collection: Collection | str) -> bool:
    return Collection(collection) in HERO_COLLECTIONS
