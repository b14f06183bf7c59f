"""Read-only vocabularies shared by the description and bullet classifiers.

Everything here is built once at import time and never mutated.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Product-attribute keywords (spec-sheet detection)
# ---------------------------------------------------------------------------

SPEC_KEYWORDS: tuple[str, ...] = (
    "asin",
    "manufacturer",
    "item model",
    "model number",
    "model name",
    "product dimensions",
    "item dimensions",
    "package dimensions",
    "included components",
    "country of origin",
    "item weight",
    "net quantity",
    "part number",
    "generic name",
    "date first available",
    "material",
    "fabric",
    "care instructions",
    "size",
    "colour",
    "color",
    "wash",
    "battery",
    "ram",
    "storage",
    "processor",
    "voltage",
    "watt",
    "capacity",
    "power",
    "waterproof",
    "warranty",
    "ean",
    "upc",
    "sku",
    "brand",
    "importer",
    "packer",
    "department",
    "best sellers rank",
)


def _keyword_pattern(kw: str) -> re.Pattern[str]:
    """Match *kw* with its common inflections (materials, washable, batteries)."""
    forms = rf"{re.escape(kw)}(?:s|es|able|ful)?"
    if kw.endswith("y"):
        forms = rf"(?:{forms}|{re.escape(kw[:-1])}ies)"
    return re.compile(rf"\b{forms}\b", re.IGNORECASE)


_SPEC_KEYWORD_RES: tuple[re.Pattern[str], ...] = tuple(_keyword_pattern(kw) for kw in SPEC_KEYWORDS)


def count_spec_keywords(text: str) -> int:
    """Number of distinct :data:`SPEC_KEYWORDS` occurring in *text*."""
    return sum(1 for pat in _SPEC_KEYWORD_RES if pat.search(text))


# ---------------------------------------------------------------------------
# Script / tracking code signatures
# ---------------------------------------------------------------------------

SCRIPT_SIGNATURE_RE = re.compile(
    r"p\.when\(|a\.on\(|window\.ue\b|window\.csa\b|\bcsa\(|execute\(function"
    r"|\bfunction\s*\(|\bvar\s+\w+\s*=|\.addEventListener\(|</?script\b"
    r"|dpAcrHasRegisteredArcLinkClickAction|ue\.count\(",
    re.IGNORECASE,
)

# ---------------------------------------------------------------------------
# Dead / missing page text
# ---------------------------------------------------------------------------

DEAD_PAGE_PHRASES: tuple[str, ...] = (
    "page not found",
    "the web address you entered is not a functioning page",
    "looking for something",
    "this page is no longer available",
)


def has_dead_page_phrase(text: str) -> bool:
    lower = text.lower()
    return any(phrase in lower for phrase in DEAD_PAGE_PHRASES)


# ---------------------------------------------------------------------------
# Image / avatar asset references
# ---------------------------------------------------------------------------

IMAGE_ASSET_RE = re.compile(
    r"img src=|amazon-avatars|m\.media-amazon|\.(?:jpe?g|png|gif|webp)\b",
    re.IGNORECASE,
)
