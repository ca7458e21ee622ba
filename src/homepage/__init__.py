"""Homepage configuration: canonical schema, tolerant merge and edits."""

from insights.homepage.merge import merge_with_defaults
from insights.homepage.schema import (
    HomepageConfig,
    MethodologyItem,
    Nugget,
    PodcastBlock,
    default_config,
)
from insights.homepage.services import (
    load_homepage_config,
    reset_homepage_config,
    save_homepage_config,
)

__all__ = [
    "HomepageConfig",
    "MethodologyItem",
    "Nugget",
    "PodcastBlock",
    "default_config",
    "load_homepage_config",
    "merge_with_defaults",
    "reset_homepage_config",
    "save_homepage_config",
]
