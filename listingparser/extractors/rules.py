"""Ordered accept/reject rule pipeline.

A rule is a plain function ``(text, config) -> str | None`` that returns a
rejection reason when it fires and ``None`` otherwise.  :func:`run_rules`
evaluates rules in order and stops at the first rejection, so each rule can be
unit-tested on its own and the battery reads top to bottom.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from listingparser.config import ExtractionConfig

logger = logging.getLogger(__name__)

Rule = Callable[[str, "ExtractionConfig"], "str | None"]


@dataclass(frozen=True)
class Verdict:
    """Outcome of classifying one fragment."""

    accepted: bool
    text: str | None = None
    reason: str | None = None  # informative only, never shown to end users

    @classmethod
    def accept(cls, text: str) -> Verdict:
        return cls(accepted=True, text=text)

    @classmethod
    def reject(cls, reason: str) -> Verdict:
        return cls(accepted=False, reason=reason)


def run_rules(text: str, rules: Sequence[Rule], config: ExtractionConfig) -> Verdict:
    """Apply *rules* to *text* in order; the first rejection short-circuits."""
    for rule in rules:
        reason = rule(text, config)
        if reason is not None:
            logger.debug("%s rejected %.60r: %s", rule.__name__, text, reason)
            return Verdict.reject(reason)
    return Verdict.accept(text)
