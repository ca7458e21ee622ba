"""Load and save the homepage configuration through the content store."""

from __future__ import annotations

import logging
from typing import Any

from insights.content.store import ContentStore
from insights.homepage.merge import merge_with_defaults
from insights.homepage.schema import HomepageConfig

logger = logging.getLogger(__name__)


def load_homepage_config(store: ContentStore) -> HomepageConfig:
    """Return the stored configuration, completed from the defaults."""
    return merge_with_defaults(store.read_config())


def save_homepage_config(store: ContentStore, config: HomepageConfig | dict[str, Any]) -> HomepageConfig:
    """Merge *config* with the defaults, persist it and return it.

    A partial document is accepted; whatever it omits is filled from the
    defaults before writing, so the stored document is always complete.
    """
    merged = merge_with_defaults(config)
    store.write_config(merged.to_document())
    logger.info("Saved homepage configuration")
    return merged


def reset_homepage_config(store: ContentStore) -> HomepageConfig:
    """Overwrite the stored configuration with the defaults."""
    return save_homepage_config(store, HomepageConfig())
