"""Tests for listingparser.extractors.description."""

from __future__ import annotations

import pytest

from listingparser.config import DEFAULT_CONFIG, DescriptionPolicy, ExtractionConfig
from listingparser.extractors.description import (
    classify_description,
    duplicated_halves,
    judge_description,
    numeric_dump,
    residual_markup,
    spec_density,
    spec_sheet,
)
from listingparser.extractors.vocabulary import count_spec_keywords

JACKET = "This lightweight jacket keeps you warm in any weather, rain or snow."

SPEC_DUMP = "ASIN: B000123 Manufacturer: Acme Item Weight: 200g Material: Steel Warranty: 1 year"

LABEL_PAIRS_LONG = (
    "Material: stainless steel with a brushed finish that resists fingerprints and daily knocks; "
    "Capacity: one litre which is enough water for a full day of hiking in the hills; "
    "Lid: leak-proof screw cap with a wide carry loop that fits two fingers comfortably"
)

LABEL_SINGLE_SHORT = (
    "Material: stainless steel with a brushed finish that resists fingerprints "
    "and keeps its shine for years."
)

LOT_CODES = "Lot codes " + " ".join(str(1000 + 67 * i) for i in range(24)) + " trail"

SENTENCE = "Keeps coffee hot for twelve hours and drinks cold all day long."

KEYWORD_PROSE = (
    "This brand offers a generous warranty on the battery, the storage and the processor "
    "so that power users can rely on it every single day."
)

INFLECTED_SPEC_PROSE = (
    "Premium materials in five colors and three sizes, machine washable fabrics, "
    "powerful batteries and a sturdy frame that lasts through every season outdoors."
)


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

class TestScenarios:
    def test_prose_accepted_unchanged(self):
        assert classify_description(JACKET) == JACKET

    def test_spec_dump_rejected(self):
        verdict = judge_description(SPEC_DUMP)
        assert verdict.accepted is False
        assert verdict.reason.startswith("spec sheet")
        assert classify_description(SPEC_DUMP) is None

    def test_label_pairs_over_200_rejected(self):
        assert len(LABEL_PAIRS_LONG) > 200
        assert classify_description(LABEL_PAIRS_LONG) is None

    def test_single_label_under_200_accepted(self):
        assert len(LABEL_SINGLE_SHORT) < 200
        assert classify_description(LABEL_SINGLE_SHORT) == LABEL_SINGLE_SHORT

    def test_normalizes_before_accepting(self):
        raw = "  This lightweight jacket<br>keeps you&nbsp;warm in any weather.  "
        assert classify_description(raw) == "This lightweight jacket keeps you warm in any weather."


# ---------------------------------------------------------------------------
# Rejections
# ---------------------------------------------------------------------------

class TestRejections:
    @pytest.mark.parametrize("text", [None, "", "   ", "&nbsp;"])
    def test_empty(self, text):
        verdict = judge_description(text)
        assert verdict.accepted is False
        assert verdict.reason == "empty"

    @pytest.mark.parametrize(
        "text",
        [
            "Great blender for smoothies and soups. function() { return 1; }",
            "<script>track()</script> A handy organiser for the whole family kitchen.",
            "var ueData = 1 A handy organiser for the whole family kitchen.",
            "P.when('A').execute(function(A){}) A handy organiser for the kitchen.",
            "btn.addEventListener('click', go) A handy organiser for the kitchen.",
        ],
    )
    def test_script_signatures(self, text):
        verdict = judge_description(text)
        assert verdict.accepted is False
        assert verdict.reason == "script or tracking code"

    @pytest.mark.parametrize(
        "text",
        [
            "Sorry! Page Not Found. Try searching for something else on our site.",
            "Looking for something? We're sorry. The web address you entered is not a functioning page.",
        ],
    )
    def test_dead_page(self, text):
        verdict = judge_description(text)
        assert verdict.accepted is False
        assert verdict.reason == "dead page text"

    def test_duplicated_render(self):
        verdict = judge_description(f"{SENTENCE} {SENTENCE}")
        assert verdict.accepted is False
        assert verdict.reason == "duplicated render"

    def test_residual_markup(self):
        text = "A sturdy everyday bag with <div class='x'>padded straps</div> and room for a laptop."
        verdict = judge_description(text)
        assert verdict.accepted is False
        assert verdict.reason == "residual markup"

    def test_too_short(self):
        verdict = judge_description("Great bottle.")
        assert verdict.accepted is False
        assert verdict.reason == "too short"

    def test_inflected_spec_prose(self):
        verdict = judge_description(INFLECTED_SPEC_PROSE)
        assert verdict.accepted is False
        assert verdict.reason.startswith("spec sheet")

    def test_numeric_dump(self):
        assert len(LOT_CODES) > 120
        verdict = judge_description(LOT_CODES)
        assert verdict.accepted is False
        assert verdict.reason.startswith("numeric dump")


# ---------------------------------------------------------------------------
# Individual rules
# ---------------------------------------------------------------------------

class TestRules:
    def test_spec_sheet_counts_label_lines(self):
        text = "Weight: 2kg; Height: 30cm; Finish: matte black powder coat for outdoor use"
        assert spec_sheet(text, DEFAULT_CONFIG) is not None

    def test_spec_sheet_ignores_prose(self):
        assert spec_sheet(JACKET, DEFAULT_CONFIG) is None

    def test_duplicated_halves_skips_short_text(self):
        assert duplicated_halves("word " * 20, DEFAULT_CONFIG) is None

    def test_residual_markup_table(self):
        assert residual_markup("<table><tr><td>x</td></tr></table>", DEFAULT_CONFIG) is not None

    def test_numeric_dump_spares_prose(self):
        text = "Model 2024 ships in 2 sizes. It holds 750 ml and weighs 320 g. " * 2
        assert numeric_dump(text.strip(), DEFAULT_CONFIG) is None

    def test_spec_density(self):
        assert len(KEYWORD_PROSE) > 100
        assert spec_density(KEYWORD_PROSE, DEFAULT_CONFIG) == "spec keyword density"

    def test_spec_density_short_text(self):
        assert spec_density("brand warranty battery storage processor", DEFAULT_CONFIG) is None

    def test_inflected_keywords_counted(self):
        assert count_spec_keywords(INFLECTED_SPEC_PROSE) == 7
        assert count_spec_keywords("Rain or shine") == 0


# ---------------------------------------------------------------------------
# Configurable thresholds
# ---------------------------------------------------------------------------

class TestPolicy:
    def test_relaxed_numeric_ratio_accepts_dump(self):
        config = ExtractionConfig(description=DescriptionPolicy(numeric_ratio=1.0))
        assert classify_description(LOT_CODES, config) == LOT_CODES

    def test_final_density_reached_when_spec_sheet_relaxed(self):
        relaxed = DescriptionPolicy(spec_colon_limit=10, spec_keyword_limit=10, spec_label_line_limit=10)
        verdict = judge_description(KEYWORD_PROSE, ExtractionConfig(description=relaxed))
        assert verdict.reason == "spec keyword density"

    def test_density_limit_raised_accepts(self):
        relaxed = DescriptionPolicy(spec_keyword_limit=10, final_keyword_limit=10)
        config = ExtractionConfig(description=relaxed)
        assert classify_description(KEYWORD_PROSE, config) == KEYWORD_PROSE

    def test_min_length(self):
        config = ExtractionConfig(description=DescriptionPolicy(min_length=5))
        assert classify_description("Great bottle.", config) == "Great bottle."
