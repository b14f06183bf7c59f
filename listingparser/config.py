"""Extraction tunables and YAML profile loading.

A profile file has an optional ``default`` section and an optional ``domains``
mapping keyed by marketplace host; the longest host suffix matching the
listing URL wins and is merged over ``default``::

    default:
      max_bullets: 8
    domains:
      amazon.in:
        description:
          numeric_ratio: 0.25
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from listingparser import settings


class ConfigError(ValueError):
    """Raised when a profile cannot be read or holds invalid values."""


class DescriptionPolicy(BaseModel):
    """Thresholds of the description noise classifier.

    These were tuned against one marketplace layout and are expected to be
    adjusted per profile rather than treated as fixed.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Spec-sheet heuristic
    spec_colon_limit: int = Field(default=3, ge=1)
    spec_keyword_limit: int = Field(default=3, ge=1)
    spec_label_line_limit: int = Field(default=3, ge=1)
    label_max_offset: int = Field(default=40, ge=1)
    short_spare_length: int = Field(default=200, ge=0)

    # Duplicated-halves heuristic
    halves_min_length: int = Field(default=50, ge=0)
    halves_overlap: float = Field(default=0.5, ge=0.0, le=1.0)

    min_length: int = Field(default=20, ge=1)

    # Numeric-density heuristic
    numeric_ratio: float = Field(default=0.2, ge=0.0, le=1.0)
    numeric_min_length: int = Field(default=120, ge=0)

    # Final spec-density check
    final_keyword_limit: int = Field(default=5, ge=1)
    final_min_length: int = Field(default=100, ge=0)


class ExtractionConfig(BaseModel):
    """Every knob the extraction engine exposes to callers."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_bullets: int = Field(default=settings.MAX_BULLETS, ge=1)
    fallback_min_bullets: int = Field(default=settings.FALLBACK_MIN_BULLETS, ge=1)
    description: DescriptionPolicy = Field(default_factory=DescriptionPolicy)


DEFAULT_CONFIG = ExtractionConfig()


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _best_domain(domains: dict[str, Any], url: str) -> dict[str, Any]:
    netloc = urlparse(url).netloc.lower()
    best_key = ""
    best_cfg: dict[str, Any] = {}
    for key, cfg in domains.items():
        if not isinstance(key, str) or not isinstance(cfg, dict):
            continue
        key_lower = key.lower()
        if (netloc == key_lower or netloc.endswith("." + key_lower)) and (
            len(key_lower) > len(best_key)
        ):
            best_key = key_lower
            best_cfg = cfg
    return best_cfg


def load_config(path: str | Path, url: str | None = None) -> ExtractionConfig:
    """Load a YAML profile and return the :class:`ExtractionConfig` for *url*."""
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot read profile {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Profile {path} must be a mapping")

    default = data.get("default") or {}
    domains = data.get("domains") or {}
    if not isinstance(default, dict) or not isinstance(domains, dict):
        raise ConfigError(f"Profile {path}: 'default' and 'domains' must be mappings")

    merged = dict(default)
    if url:
        merged = _merge(merged, _best_domain(domains, url))

    try:
        return ExtractionConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid profile {path}: {exc}") from exc
