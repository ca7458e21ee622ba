"""Site-wide settings stored as a flat string mapping.

Only the keys in ``DEFAULT_SITE_SETTINGS`` exist; stored values overlay the
defaults on read and unknown keys are ignored on write.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from insights.content.store import ContentStore

logger = logging.getLogger(__name__)

DEFAULT_SITE_SETTINGS: dict[str, str] = {
    "siteTitle": "Insights — Singapore Real Estate News & Analysis",
    "siteDescription": (
        "Your trusted source for Singapore real estate news, market analysis, "
        "property trends, and investment insights."
    ),
    "siteUrl": "https://insights.example.com",
    "logoUrl": "/images/insights-logo.png",
    "primaryColor": "#2a9d8f",
    "enableSearch": "true",
    "articlesPerPage": "9",
    "enableNewsletter": "true",
    "newsletterHeading": "Stay Informed with PLB Insights",
    "newsletterSubtext": (
        "Get the latest property market analysis, investment tips, and exclusive "
        "content delivered to your inbox."
    ),
    "enableNotifications": "true",
    "emailRecipient": "admin@insights.example.com",
    "metaTitle": "Insights — Singapore Real Estate News & Analysis",
    "metaDescription": (
        "Your trusted source for Singapore real estate news, market analysis, "
        "property trends, and investment insights."
    ),
    "ogImage": "https://images.unsplash.com/photo-1524813686514-a57563d77965?w=1200&q=80",
    "analyticsId": "",
    "headerScript": "",
}


def load_site_settings(store: ContentStore) -> dict[str, str]:
    """Return every known setting, stored values taking precedence."""
    settings = dict(DEFAULT_SITE_SETTINGS)
    for key, value in store.read_settings().items():
        if key in settings:
            settings[key] = value
    return settings


def save_site_settings(store: ContentStore, values: Mapping[str, object]) -> dict[str, str]:
    """Persist the known keys of *values* and return the full settings."""
    known = {k: str(v) for k, v in values.items() if k in DEFAULT_SITE_SETTINGS}
    ignored = sorted(set(values) - set(known))
    if ignored:
        logger.warning("Ignoring unknown settings: %s", ", ".join(ignored))
    if known:
        store.write_settings(known)
    return load_site_settings(store)


def articles_per_page(settings: Mapping[str, str], fallback: int = 9) -> int:
    """Parse the ``articlesPerPage`` setting, falling back when invalid."""
    try:
        value = int(settings.get("articlesPerPage", fallback))
    except (TypeError, ValueError):
        return fallback
    return value if value > 0 else fallback
