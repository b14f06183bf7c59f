"""Segment splitter: break a raw bullet blob into candidate fragments."""

from __future__ import annotations

import re

_BR_RE = re.compile(r"<\s*/?\s*br\s*/?\s*>", re.IGNORECASE)
_IMG_RE = re.compile(r"<img[^>]*>", re.IGNORECASE)
_BLOCK_TAG_RE = re.compile(
    r"<\s*/?\s*(?:li|p)\b[^>]*>|</div>|<div class=\"a-section\">",
    re.IGNORECASE,
)
_HSPACE_RE = re.compile(r"[ \t\f\v]+")

BULLET_GLYPHS = "•·‣⁃◦∙▪●"

_DELIMITER_RE = re.compile(
    rf"\n|[{BULLET_GLYPHS}]|;|—|–|</?li>|</?p>",
    re.IGNORECASE,
)


def split_segments(raw: str | None) -> list[str]:
    """Split *raw* into trimmed, non-empty fragments in source order."""
    if not raw:
        return []
    text = raw.replace("\r", " ")
    text = _BR_RE.sub("\n", text)
    text = _IMG_RE.sub(" ", text)
    text = _BLOCK_TAG_RE.sub("\n", text)
    text = _HSPACE_RE.sub(" ", text)
    return [part.strip() for part in _DELIMITER_RE.split(text) if part.strip()]
