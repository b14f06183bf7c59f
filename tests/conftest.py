"""Shared pytest fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def candidates_path() -> Path:
    return FIXTURES_DIR / "product_candidates.json"


@pytest.fixture
def candidates_data(candidates_path: Path) -> dict:
    return json.loads(candidates_path.read_text(encoding="utf-8"))


@pytest.fixture
def profile_path() -> Path:
    return FIXTURES_DIR / "profile.yaml"


@pytest.fixture
def scenario_blob() -> str:
    return (
        "Durable stainless steel build.\n"
        "• Fits all standard mounts\n"
        "• Waterproof up to IP68\n"
        "Out of 5 stars: 4.5 Verified Purchase"
    )
