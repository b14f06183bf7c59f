"""Text normalizer shared by the description and bullet classifiers."""

from __future__ import annotations

import re

# Structural tokens whose boundary must survive whitespace collapsing
_BREAK_TAG_RE = re.compile(r"<\s*/?\s*(?:br|p|li|ul|ol)\b[^>]*>", re.IGNORECASE)

_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&nbsp;", " "),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&amp;", "&"),
)
_ENTITY_RE = re.compile("|".join(re.escape(e) for e, _ in _ENTITIES), re.IGNORECASE)
_ENTITY_MAP = {e: r for e, r in _ENTITIES}

_WS_RE = re.compile(r"\s+")


def decode_entities(text: str) -> str:
    """Decode the handful of HTML entities scraped listings actually carry.

    Double-encoded input (``&amp;amp;``) is decoded until nothing changes.
    """
    while True:
        decoded = _ENTITY_RE.sub(lambda m: _ENTITY_MAP[m.group(0).lower()], text)
        if decoded == text:
            return decoded
        text = decoded


def collapse_whitespace(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def normalize(text: str | None) -> str | None:
    """Return *text* as a single trimmed line, or ``None`` if nothing is left.

    Line/paragraph/list-item tags become line breaks first so that adjacent
    words on either side of them are never glued together.
    """
    if not text:
        return None
    text = _BREAK_TAG_RE.sub("\n", text)
    text = decode_entities(text)
    text = collapse_whitespace(text)
    return text or None
