"""Extraction orchestrator: raw candidates in, :class:`ExtractedListing` out.

Usage::

    from listingparser import extract

    listing = extract(
        title_candidates=[product_title_text, og_title],
        bullet_blobs=[feature_bullets_text, detail_bullets_text],
        description_candidates=[product_description_text, aplus_text],
    )
    if listing.is_empty:
        ...  # treat as not found at the orchestration layer

Nothing here raises for missing content: absent fields come back as ``None``
or an empty tuple.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from listingparser import settings
from listingparser.config import DEFAULT_CONFIG, ExtractionConfig
from listingparser.extractors.bullets import clean_bullets
from listingparser.extractors.description import classify_description
from listingparser.extractors.normalize import normalize
from listingparser.items import ExtractedListing, ListingCandidates

logger = logging.getLogger(__name__)

# Embedded JSON title keys, most specific first
_SCRIPT_TITLE_RES: tuple[re.Pattern[str], ...] = (
    re.compile(r'"productTitle"\s*:\s*"([^"]{10,300})"', re.IGNORECASE),
    re.compile(r'"title"\s*:\s*"([^"]{10,300})"', re.IGNORECASE),
)


def _pick_title(candidates: Iterable[str | None], script_texts: Iterable[str | None]) -> str | None:
    for candidate in candidates:
        title = normalize(candidate)
        if title:
            return title

    scripts = [s for s in script_texts if s]
    for pattern in _SCRIPT_TITLE_RES:
        for script in scripts:
            m = pattern.search(script)
            if m:
                title = normalize(m.group(1))
                if title:
                    logger.debug("title recovered from embedded script")
                    return title
    return None


def _pick_bullets(blobs: Iterable[str | None], config: ExtractionConfig) -> list[str]:
    for index, blob in enumerate(list(blobs)[: settings.MAX_BULLET_SOURCES]):
        bullets = clean_bullets(blob, config=config)
        if bullets:
            if index:
                logger.debug("bullets taken from alternate source #%d", index)
            return bullets
    return []


def _pick_description(candidates: Iterable[str | None], config: ExtractionConfig) -> str | None:
    for candidate in candidates:
        description = classify_description(candidate, config)
        if description:
            return description
    return None


def extract(
    title_candidates: Iterable[str | None] = (),
    bullet_blobs: str | Iterable[str | None] | None = (),
    description_candidates: Iterable[str | None] = (),
    script_texts: Iterable[str | None] = (),
    *,
    config: ExtractionConfig | None = None,
) -> ExtractedListing:
    """Build an :class:`ExtractedListing` from prioritised raw candidates.

    Args:
        title_candidates:       Title texts, primary source first.
        bullet_blobs:           Primary bullet blob followed by up to two
                                alternates (a single string is the primary).
        description_candidates: Description texts, primary source first.
        script_texts:           Inline script bodies searched for an embedded
                                title when no title candidate is usable.
        config:                 Extraction tunables.

    Returns:
        :class:`~listingparser.items.ExtractedListing`; check ``is_empty``.
    """
    config = config or DEFAULT_CONFIG
    if bullet_blobs is None:
        bullet_blobs = ()
    elif isinstance(bullet_blobs, str):
        bullet_blobs = (bullet_blobs,)

    listing = ExtractedListing(
        title=_pick_title(title_candidates, script_texts),
        bullets=tuple(_pick_bullets(bullet_blobs, config)),
        description=_pick_description(description_candidates, config),
    )

    if listing.is_empty:
        logger.warning("extract: no usable title, bullets or description found")
    else:
        logger.info(
            "extract: title=%s bullets=%d description=%s",
            "yes" if listing.title else "no",
            len(listing.bullets),
            "yes" if listing.description else "no",
        )
    return listing


def extract_candidates(
    candidates: ListingCandidates,
    config: ExtractionConfig | None = None,
) -> ExtractedListing:
    """Run :func:`extract` over a :class:`ListingCandidates` document."""
    return extract(
        candidates.title_candidates,
        candidates.bullet_blobs,
        candidates.description_candidates,
        candidates.script_texts,
        config=config,
    )
