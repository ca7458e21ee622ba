"""Unified configuration loaded from .insights.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".insights.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "insights" / "config.toml"


class StoreConfig(BaseModel):
    """[store] section."""

    directory: str = "./content"


class PaginationConfig(BaseModel):
    """[pagination] section.

    ``*_window`` is the largest page count shown in full before the
    page-number sequence switches to an elided window.
    """

    public_page_size: int = 9
    admin_page_size: int = 10
    public_window: int = 5
    admin_window: int = 7

    @field_validator("public_page_size", "admin_page_size")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("page size must be at least 1")
        return value


class LoggingConfig(BaseModel):
    """[logging] section."""

    level: str = "WARNING"


class InsightsConfig(BaseModel):
    """Top-level configuration model for the insights tooling."""

    store: StoreConfig = Field(default_factory=StoreConfig)
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def store_path(self) -> Path:
        return Path(self.store.directory)


def load_config(path: str | Path | None = None) -> InsightsConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .insights.toml in CWD
    3. ~/.config/insights/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged InsightsConfig.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG_PATH.exists():
            data = _load_toml(GLOBAL_CONFIG_PATH)
            logger.info("Loaded config from %s", GLOBAL_CONFIG_PATH)

    config = InsightsConfig.model_validate(data) if data else InsightsConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: InsightsConfig, **cli_kwargs: object) -> InsightsConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).

    Args:
        config: Base config.
        **cli_kwargs: CLI flag values, e.g. ``store_directory`` or
            ``log_level``.

    Returns:
        Updated config with CLI overrides applied.
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "store_directory": ("store", "directory"),
        "log_level": ("logging", "level"),
        "public_page_size": ("pagination", "public_page_size"),
        "admin_page_size": ("pagination", "admin_page_size"),
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key in mapping:
            section, field = mapping[key]
            data[section][field] = value

    return InsightsConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: InsightsConfig) -> InsightsConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "INSIGHTS_STORE_DIR": ("store", "directory"),
        "INSIGHTS_LOG_LEVEL": ("logging", "level"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    for env_var, field in [
        ("INSIGHTS_PUBLIC_PAGE_SIZE", "public_page_size"),
        ("INSIGHTS_ADMIN_PAGE_SIZE", "admin_page_size"),
    ]:
        raw = os.environ.get(env_var)
        if raw is not None:
            data["pagination"][field] = int(raw)

    return InsightsConfig.model_validate(data)
