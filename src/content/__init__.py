"""Content domain: content item models, the JSON store and hero selection."""

from insights.content.hero import HeroSelector
from insights.content.models import (
    Article,
    ArticleCategory,
    ArticleSection,
    Collection,
    ContentItem,
    HomeTourCategory,
    HomeTourItem,
    NewLaunchItem,
    Reel,
    ReelCategory,
)
from insights.content.store import ContentStore

__all__ = [
    "Article",
    "ArticleCategory",
    "ArticleSection",
    "Collection",
    "ContentItem",
    "ContentStore",
    "HeroSelector",
    "HomeTourCategory",
    "HomeTourItem",
    "NewLaunchItem",
    "Reel",
    "ReelCategory",
]
