"""Description noise classifier.

Decides whether one description candidate is marketing prose or noise
(script fragments, dead-page text, spec tables flattened to text, doubled
renders, numeric dumps).  Rules run in a fixed order and the first rejection
wins.

Usage::

    from listingparser.extractors.description import classify_description

    text = classify_description(raw)   # cleaned string or None
"""

from __future__ import annotations

import re

from listingparser.config import DEFAULT_CONFIG, ExtractionConfig
from listingparser.extractors.normalize import normalize
from listingparser.extractors.rules import Rule, Verdict, run_rules
from listingparser.extractors.vocabulary import (
    SCRIPT_SIGNATURE_RE,
    count_spec_keywords,
    has_dead_page_phrase,
)

# ---------------------------------------------------------------------------
# Compiled patterns
# ---------------------------------------------------------------------------

_LABEL_LINE_SPLIT_RE = re.compile(r"\n|\.{2,}|;|—|–")
_WORD_CHAR_RE = re.compile(r"\w")
_RESIDUAL_MARKUP_RE = re.compile(
    r"</?script\b|</?div\b|</?table\b|<meta\b|</?style\b|<img\b",
    re.IGNORECASE,
)
_SENTENCE_RE = re.compile(r"[a-z][.?!]\s+[A-Z0-9]")
_DIGIT_RE = re.compile(r"\d")
_SPACE_RE = re.compile(r"\s+")


def _count_label_lines(text: str, max_offset: int) -> int:
    """Count ``label: value`` shaped lines with a short label."""
    count = 0
    for line in _LABEL_LINE_SPLIT_RE.split(text):
        c = line.find(":")
        if 0 < c < max_offset and _WORD_CHAR_RE.search(line[:c]) and _WORD_CHAR_RE.search(line[c + 1:]):
            count += 1
    return count


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def script_code(text: str, config: ExtractionConfig) -> str | None:
    if SCRIPT_SIGNATURE_RE.search(text):
        return "script or tracking code"
    return None


def dead_page(text: str, config: ExtractionConfig) -> str | None:
    if has_dead_page_phrase(text):
        return "dead page text"
    return None


def spec_sheet(text: str, config: ExtractionConfig) -> str | None:
    policy = config.description
    colons = text.count(":")
    keywords = count_spec_keywords(text)
    label_lines = _count_label_lines(text, policy.label_max_offset)

    if (
        colons >= policy.spec_colon_limit
        or keywords >= policy.spec_keyword_limit
        or label_lines >= policy.spec_label_line_limit
    ):
        spared = len(text) < policy.short_spare_length and colons <= 1 and keywords <= 1
        if not spared:
            return (
                f"spec sheet (colons={colons}, keywords={keywords}, "
                f"label lines={label_lines})"
            )
    return None


def duplicated_halves(text: str, config: ExtractionConfig) -> str | None:
    policy = config.description
    half = len(text) // 2
    if half <= policy.halves_min_length:
        return None
    first_words = text[:half].strip().split(" ")
    second_words = set(text[half:].strip().split(" "))
    common = sum(1 for w in first_words if w in second_words)
    if common / max(1, len(first_words)) > policy.halves_overlap:
        return "duplicated render"
    return None


def residual_markup(text: str, config: ExtractionConfig) -> str | None:
    if _RESIDUAL_MARKUP_RE.search(text):
        return "residual markup"
    return None


def too_short(text: str, config: ExtractionConfig) -> str | None:
    if len(text) < config.description.min_length:
        return "too short"
    return None


def numeric_dump(text: str, config: ExtractionConfig) -> str | None:
    policy = config.description
    sentence_like = bool(_SENTENCE_RE.search(text)) or ". " in text
    if sentence_like or len(text) <= policy.numeric_min_length:
        return None
    digits = len(_DIGIT_RE.findall(text))
    ratio = digits / max(1, len(_SPACE_RE.sub("", text)))
    if ratio > policy.numeric_ratio:
        return f"numeric dump (digit ratio {ratio:.2f})"
    return None


def spec_density(text: str, config: ExtractionConfig) -> str | None:
    policy = config.description
    if len(text) > policy.final_min_length and count_spec_keywords(text) >= policy.final_keyword_limit:
        return "spec keyword density"
    return None


DESCRIPTION_RULES: tuple[Rule, ...] = (
    script_code,
    dead_page,
    spec_sheet,
    duplicated_halves,
    residual_markup,
    too_short,
    numeric_dump,
    spec_density,
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def judge_description(candidate: str | None, config: ExtractionConfig | None = None) -> Verdict:
    """Classify one description candidate and say why it was rejected."""
    text = normalize(candidate)
    if text is None:
        return Verdict.reject("empty")
    return run_rules(text, DESCRIPTION_RULES, config or DEFAULT_CONFIG)


def classify_description(candidate: str | None, config: ExtractionConfig | None = None) -> str | None:
    """Return the cleaned description, or ``None`` when *candidate* is noise."""
    return judge_description(candidate, config).text
