"""Extraction sub-package: deterministic text normalization and noise classification."""

from .bullets import classify_bullets, clean_bullets
from .description import classify_description, judge_description
from .normalize import normalize
from .rules import Verdict
from .segments import split_segments

__all__ = [
    "classify_bullets",
    "classify_description",
    "clean_bullets",
    "judge_description",
    "normalize",
    "split_segments",
    "Verdict",
]
