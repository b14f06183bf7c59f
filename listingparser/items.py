"""Pydantic schemas for listing candidates, extracted listings and rewrites."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _strip_or_none(v: Any) -> Any:
    if isinstance(v, str):
        return v.strip() or None
    return v


class ListingCandidates(BaseModel):
    """Raw text handed over by the page-selection layer, in priority order."""

    title_candidates: list[str] = Field(default_factory=list)
    bullet_blobs: list[str] = Field(default_factory=list)  # primary first, then alternates
    description_candidates: list[str] = Field(default_factory=list)
    script_texts: list[str] = Field(default_factory=list)
    source_url: str | None = None

    @field_validator(
        "title_candidates", "bullet_blobs", "description_candidates", "script_texts",
        mode="before",
    )
    @classmethod
    def drop_nulls(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [v]
        if isinstance(v, list):
            return [item for item in v if item is not None]
        return v or []


class ExtractedListing(BaseModel):
    """Structured result of one extraction. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    bullets: tuple[str, ...] = ()
    description: str | None = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        return _strip_or_none(v)

    @property
    def is_empty(self) -> bool:
        """True when nothing usable was found; callers treat this as not-found."""
        return not (self.title or self.bullets or self.description)


class OptimizedListing(BaseModel):
    """Rewritten listing returned by the language model."""

    title: str = ""
    bullets: list[str] = Field(default_factory=list)
    description: str = ""
    keywords: list[str] = Field(default_factory=list)

    @field_validator("bullets", "keywords", mode="before")
    @classmethod
    def coerce_strings(cls, v: Any) -> Any:
        if not isinstance(v, list):
            return []
        return [str(item).strip() for item in v if str(item).strip()]

    @field_validator("title", "description", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else ""
