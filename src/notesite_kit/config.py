# src/notesite_kit/config.py

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from notesite_kit.errors import ConfigError
from notesite_kit.merging.merger import DEFAULT_DUPLICATE_THRESHOLD

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS = ("*.md", "*.markdown")


@dataclass(frozen=True)
class BuildConfig:
    """Configuration for a site build.

    Immutable. Explicit. No magic defaults from environment.
    """

    duplicate_threshold: float = DEFAULT_DUPLICATE_THRESHOLD
    page_depth: int = 1
    site_title: str = "Notes"
    highlight_style: str = "default"
    patterns: tuple[str, ...] = DEFAULT_PATTERNS

    def __post_init__(self) -> None:
        if not 0.0 <= self.duplicate_threshold <= 1.0:
            raise ConfigError("duplicate_threshold must be between 0 and 1")
        if not 1 <= self.page_depth <= 6:
            raise ConfigError("page_depth must be between 1 and 6")
        if not self.patterns:
            raise ConfigError("patterns must not be empty")

    def with_overrides(self, **overrides: Any) -> "BuildConfig":
        """Copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


class BuildConfigFile(BaseModel):
    """Schema of a YAML build configuration file."""

    duplicate_threshold: float = Field(DEFAULT_DUPLICATE_THRESHOLD, ge=0.0, le=1.0)
    page_depth: int = Field(1, ge=1, le=6)
    site_title: str = "Notes"
    highlight_style: str = "default"
    patterns: list[str] = Field(default_factory=lambda: list(DEFAULT_PATTERNS))

    class Config:
        extra = "forbid"


def load_build_config(path: str | Path) -> BuildConfig:
    logger.info("Loading build configuration from %s", path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as exc:
        raise ConfigError(f"Cannot read config file '{path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file '{path}' is not valid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{path}' must contain a mapping")

    try:
        model = BuildConfigFile(**data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config file '{path}': {exc}") from exc

    return BuildConfig(
        duplicate_threshold=model.duplicate_threshold,
        page_depth=model.page_depth,
        site_title=model.site_title,
        highlight_style=model.highlight_style,
        patterns=tuple(model.patterns),
    )
