"""Bullet classifier and deduplicator.

Turns the fragments produced by :func:`~listingparser.extractors.segments.split_segments`
into a short, ordered, case-insensitively unique list of feature bullets.

Strict pass: every fragment runs through :data:`BULLET_RULES`; survivors longer
than :data:`OVERSIZED_LENGTH` are broken into sentences, the rest have stray
glyphs stripped.  Relaxed pass: only when the strict pass accepts nothing, any
fragment of reasonable length with letters and no review/spec-id terms is
taken, so unusual page layouts still yield some copy.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from listingparser.config import DEFAULT_CONFIG, ExtractionConfig
from listingparser.extractors.normalize import collapse_whitespace, decode_entities
from listingparser.extractors.rules import Rule, run_rules
from listingparser.extractors.segments import BULLET_GLYPHS, split_segments
from listingparser.extractors.vocabulary import IMAGE_ASSET_RE, SCRIPT_SIGNATURE_RE

OVERSIZED_LENGTH = 300
MIN_SENTENCE_LENGTH = 20
TERMINATE_LENGTH = 40

RELAXED_MIN_LENGTH = 12
RELAXED_MAX_LENGTH = 180

# ---------------------------------------------------------------------------
# Compiled patterns
# ---------------------------------------------------------------------------

_REVIEW_RE = re.compile(r"\bout of 5 stars\b|\bverified purchase\b|\brated\b", re.IGNORECASE)

JUNK_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(page not found|looking for something|to view this video|download flash player)\b", re.IGNORECASE),
    re.compile(r"\b(customer reviews|out of 5 stars|ratings|verified purchase|helpful report)\b", re.IGNORECASE),
    re.compile(r"\b(best sellers rank|best sellers|see top 100|rank in)\b", re.IGNORECASE),
    re.compile(
        r"\b(asin|item model|manufacturer|importer|packer|country of origin|item weight"
        r"|item dimensions|net quantity)\b",
        re.IGNORECASE,
    ),
    SCRIPT_SIGNATURE_RE,
    re.compile(r"\b(Size|Colour|Color|Fabric|Material|Sleeve|Pattern|Department)\b[:\s]", re.IGNORECASE),
    re.compile(r"https?://\S+", re.IGNORECASE),
    IMAGE_ASSET_RE,
    re.compile(r"\b(reviews?|reviewed in)\b", re.IGNORECASE),
    re.compile(r"^\s*[\d.,%\-#]+\s*$"),
    re.compile(r"^[\W_]+$"),
)

# Consulted only after a junk pattern matched
ALLOWED_IF_SHORT_RE = re.compile(
    r"\b(Sleeve|Pattern|Fabric|Fabric Type|Colour|Color|Size|Material|Fit|Style)\b",
    re.IGNORECASE,
)
ALLOWED_MAX_LENGTH = 120

_SIZE_TOKEN_RE = re.compile(
    r"^\s*(xs|s|m|l|xl|xxl|2xl|3xl|4xl|size|sizes)\b|\b(xs|s|m|l|xl|xxl)\b",
    re.IGNORECASE,
)
_SIZE_CHARSET_RE = re.compile(r"^[A-Za-z0-9\s\-,]+$")
_ALNUM_RE = re.compile(r"^[A-Za-z0-9]+$")

_RANK_PREFIX_RE = re.compile(
    r"^\s*(best sellers rank|customer reviews|customer rating|ratings|best sellers)\b",
    re.IGNORECASE,
)
_BOILERPLATE_RE = re.compile(
    r"\b(reviewed in|read more|helpful report|verified purchase)\b", re.IGNORECASE,
)
_LETTER_RE = re.compile(r"[A-Za-z]")

_SENTENCE_SPLIT_RE = re.compile(r"[.!?؛;]\s+")
_LEADING_GLYPHS_RE = re.compile(rf"^[\s\-*{BULLET_GLYPHS}]+")
_TRAILING_STRAY_RE = re.compile(r"[\s\-|,;:/]+$")

_RELAXED_BLOCKLIST_RE = re.compile(r"review|rating|best sellers|asin|item model", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Rules (strict pass)
# ---------------------------------------------------------------------------

def review_rating(text: str, config: ExtractionConfig) -> str | None:
    if _REVIEW_RE.search(text):
        return "review or rating boilerplate"
    return None


def script_code(text: str, config: ExtractionConfig) -> str | None:
    if SCRIPT_SIGNATURE_RE.search(text):
        return "script or tracking code"
    return None


def image_asset(text: str, config: ExtractionConfig) -> str | None:
    if IMAGE_ASSET_RE.search(text):
        return "image asset reference"
    return None


def colon_dump(text: str, config: ExtractionConfig) -> str | None:
    # A lone "label: value" pair is fine, two or more colons is a field dump
    if text.count(":") >= 2:
        return "multi-field dump"
    return None


def junk_pattern(text: str, config: ExtractionConfig) -> str | None:
    matched = next((p for p in JUNK_PATTERNS if p.search(text)), None)
    if matched is None:
        return None
    if ALLOWED_IF_SHORT_RE.search(text) and len(text) < ALLOWED_MAX_LENGTH:
        return None
    return f"junk pattern {matched.pattern[:40]!r}"


def size_list(text: str, config: ExtractionConfig) -> str | None:
    if not (_SIZE_TOKEN_RE.search(text) and _SIZE_CHARSET_RE.match(text)):
        return None
    words = text.split()
    if len(words) <= 10 and all(_ALNUM_RE.match(w) and len(w) <= 4 for w in words):
        return "size enumeration"
    return None


def rank_prefix(text: str, config: ExtractionConfig) -> str | None:
    if _RANK_PREFIX_RE.search(text):
        return "rank or ratings line"
    return None


def not_copy(text: str, config: ExtractionConfig) -> str | None:
    has_letters = bool(_LETTER_RE.search(text))
    if len(text) < 8 and not has_letters:
        return "short symbol run"
    if _BOILERPLATE_RE.search(text):
        return "review boilerplate"
    if not has_letters:
        return "no letters"
    if len(text.split()) < 2:
        return "single token"
    return None


BULLET_RULES: tuple[Rule, ...] = (
    review_rating,
    script_code,
    image_asset,
    colon_dump,
    junk_pattern,
    size_list,
    rank_prefix,
    not_copy,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _clean(segment: str) -> str:
    return collapse_whitespace(decode_entities(segment))


def _strip_decorations(text: str) -> str:
    text = _LEADING_GLYPHS_RE.sub("", text)
    return _TRAILING_STRAY_RE.sub("", text).strip()


def _terminate(text: str) -> str:
    """Give long unpunctuated bullets a closing period for a consistent voice."""
    if len(text) >= TERMINATE_LENGTH and text[-1].isalpha():
        return text + "."
    return text


class _BulletCollector:
    """Ordered, case-insensitively unique, capped bullet list."""

    def __init__(self, cap: int) -> None:
        self.cap = cap
        self.items: list[str] = []
        self._seen: set[str] = set()

    @property
    def full(self) -> bool:
        return len(self.items) >= self.cap

    def add(self, text: str) -> None:
        if not text or self.full:
            return
        text = _terminate(text)
        key = text.lower()
        if key not in self._seen:
            self._seen.add(key)
            self.items.append(text)


def _strict_pass(segments: list[str], out: _BulletCollector, config: ExtractionConfig) -> None:
    for segment in segments:
        if out.full:
            return
        part = _clean(segment)
        if not part or not run_rules(part, BULLET_RULES, config).accepted:
            continue
        if len(part) > OVERSIZED_LENGTH:
            for sentence in _SENTENCE_SPLIT_RE.split(part):
                sentence = sentence.strip()
                if len(sentence) >= MIN_SENTENCE_LENGTH and _LETTER_RE.search(sentence):
                    out.add(_strip_decorations(sentence))
            continue
        out.add(_strip_decorations(part))


def _relaxed_pass(segments: list[str], out: _BulletCollector) -> None:
    for segment in segments:
        if out.full:
            return
        part = _clean(segment)
        if (
            RELAXED_MIN_LENGTH <= len(part) <= RELAXED_MAX_LENGTH
            and _LETTER_RE.search(part)
            and not _RELAXED_BLOCKLIST_RE.search(part)
        ):
            out.add(part)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def classify_bullets(
    segments: Iterable[str],
    max_bullets: int | None = None,
    config: ExtractionConfig | None = None,
) -> list[str]:
    """Filter, dedupe and cap candidate *segments* into feature bullets.

    Args:
        segments:    Candidate fragments in source order.
        max_bullets: Output cap; defaults to ``config.max_bullets``.
        config:      Extraction tunables (defaults to :data:`DEFAULT_CONFIG`).

    Returns:
        At most *max_bullets* strings, first-seen order, no two equal ignoring case.
    """
    config = config or DEFAULT_CONFIG
    cap = max_bullets if max_bullets is not None else config.max_bullets
    if cap <= 0:
        return []
    segments = list(segments)

    strict = _BulletCollector(cap)
    _strict_pass(segments, strict, config)
    if strict.items:
        return strict.items

    relaxed = _BulletCollector(min(config.fallback_min_bullets, cap))
    _relaxed_pass(segments, relaxed)
    return relaxed.items


def clean_bullets(
    raw: str | None,
    max_bullets: int | None = None,
    config: ExtractionConfig | None = None,
) -> list[str]:
    """Split a raw bullet blob and classify the resulting fragments."""
    return classify_bullets(split_segments(raw), max_bullets=max_bullets, config=config)
