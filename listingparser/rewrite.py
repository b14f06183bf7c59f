"""listingparser.rewrite — hand-off to the language-model rewrite stage.

The completion call itself belongs to the caller; this module builds the
prompt from an :class:`~listingparser.items.ExtractedListing`, parses whatever
text comes back and retries once with a stricter instruction when the reply is
not JSON.

Usage::

    from listingparser.rewrite import rewrite_listing

    def complete(prompt: str) -> str:
        return client.responses.create(model=MODEL, input=prompt).output_text

    optimized = rewrite_listing(listing, complete)
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from listingparser.items import ExtractedListing, OptimizedListing

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are an ecommerce copy expert who improves marketplace product listings.
Return JSON only using this exact schema:
{
  "title": "optimized title (string, <=200 chars)",
  "bullets": ["bullet1","bullet2",...],    // 3-5 bullets
  "description": "optimized description (string)",
  "keywords": ["kw1","kw2", ...]            // 3-8 keywords
}
Do NOT include any explanation or extraneous text. If a field cannot be produced, \
return an empty string or empty array. Avoid unsubstantiated claims."""

RETRY_PREFIX = "You must only reply with valid JSON following this schema."

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


class RewriteError(RuntimeError):
    """Raised when the model never returns a parseable listing."""


@dataclass(frozen=True)
class RewritePrompt:
    system: str
    user: str

    @property
    def combined(self) -> str:
        return f"{self.system}\n\n{self.user}"


def build_rewrite_prompt(listing: ExtractedListing) -> RewritePrompt:
    """Render the system and user instructions for *listing*."""
    parts: list[str] = []
    if listing.title:
        parts.append(f"Original title:\n{listing.title}")
    if listing.bullets:
        parts.append("Original bullets:\n- " + "\n- ".join(listing.bullets))
    if listing.description:
        parts.append(f"Original description:\n{listing.description}")

    user = (
        "Optimize this product listing and return JSON only as specified.\n\n"
        + "\n\n".join(parts)
    )
    return RewritePrompt(system=SYSTEM_PROMPT, user=user)


def parse_json_payload(text: str) -> dict[str, Any] | None:
    """Parse *text* as a JSON object, falling back to its outermost ``{...}`` span."""
    if not text:
        return None
    try:
        data = json.loads(text)
    except ValueError:
        m = _JSON_OBJECT_RE.search(text)
        if not m:
            return None
        try:
            data = json.loads(m.group(0))
        except ValueError:
            return None
    return data if isinstance(data, dict) else None


def parse_rewrite_response(text: str, listing: ExtractedListing) -> OptimizedListing | None:
    """Turn a raw model reply into an :class:`OptimizedListing`, or ``None``."""
    data = parse_json_payload(text)
    if data is None:
        return None
    if not isinstance(data.get("title"), str):
        data["title"] = listing.title or ""
    try:
        return OptimizedListing.model_validate(data)
    except ValidationError as exc:
        logger.debug("rewrite response failed validation: %s", exc)
        return None


def rewrite_listing(
    listing: ExtractedListing,
    complete: Callable[[str], str],
    *,
    retry: bool = True,
) -> OptimizedListing:
    """Ask *complete* to rewrite *listing*; retry once if the reply is not JSON.

    Raises:
        RewriteError: if no attempt produced a parseable listing.
    """
    prompt = build_rewrite_prompt(listing)
    result = parse_rewrite_response(complete(prompt.combined), listing)

    if result is None and retry:
        logger.warning("rewrite: reply was not valid JSON, retrying with strict instruction")
        result = parse_rewrite_response(complete(f"{RETRY_PREFIX} {prompt.user}"), listing)

    if result is None:
        raise RewriteError("Failed to get a parseable rewrite from the model")
    return result
