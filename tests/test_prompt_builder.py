"""Tests for services.prompt_builder."""

import pytest

from schemas.edits import AdjustmentRequest, FilterRequest, Hotspot, RetouchRequest
from services.prompt_builder import (
    EDIT_MODES,
    build_adjustment_prompt,
    build_edit_prompt,
    build_filter_prompt,
    build_prompt_for_request,
    build_retouch_prompt,
)


class TestRetouchPrompt:
    """Tests for build_retouch_prompt."""

    def test_contains_role_and_request(self):
        prompt = build_retouch_prompt("remove the red car", Hotspot(x=120, y=45))

        assert prompt.startswith("You are an expert photo editor AI.")
        assert 'User Request: "remove the red car"' in prompt

    def test_contains_hotspot_coordinates(self):
        prompt = build_retouch_prompt("fix blemish", Hotspot(x=120, y=45))

        assert "(x: 120, y: 45)" in prompt

    def test_localized_guidance(self):
        prompt = build_retouch_prompt("fix blemish", Hotspot(x=0, y=0))

        assert "blend seamlessly" in prompt
        assert "must remain identical to the original" in prompt

    def test_allows_skin_tone_but_refuses_race_change(self):
        """Retouch permits tan/lighter/darker skin while refusing race changes."""
        prompt = build_retouch_prompt("give me a tan", Hotspot(x=1, y=1))

        assert "You MUST fulfill requests to adjust skin tone" in prompt
        assert "'give me a tan'" in prompt
        assert "You MUST REFUSE any request to change a person's fundamental race" in prompt

    def test_output_directive(self):
        prompt = build_retouch_prompt("fix", Hotspot(x=1, y=1))

        assert prompt.endswith("Output: Return ONLY the final edited image. Do not return text.")


class TestFilterPrompt:
    """Tests for build_filter_prompt."""

    def test_contains_request_and_guidance(self):
        prompt = build_filter_prompt("make it look like a 1970s polaroid")

        assert 'Filter Request: "make it look like a 1970s polaroid"' in prompt
        assert "apply a stylistic filter to the entire image" in prompt
        assert "Do not change the composition or content" in prompt

    def test_safety_and_output(self):
        prompt = build_filter_prompt("noir")

        assert "do not alter a person's fundamental race or ethnicity" in prompt
        assert "skin tone" not in prompt
        assert prompt.endswith("Return ONLY the final filtered image. Do not return text.")


class TestAdjustmentPrompt:
    """Tests for build_adjustment_prompt."""

    def test_contains_request_and_guidance(self):
        prompt = build_adjustment_prompt("brighten the shadows")

        assert 'Adjustment Request: "brighten the shadows"' in prompt
        assert "Maintain the original content and composition." in prompt
        assert "enhancing the image's quality and aesthetics" in prompt

    def test_safety_and_output(self):
        prompt = build_adjustment_prompt("warmer")

        assert "must not alter a person's fundamental race or ethnicity" in prompt
        assert prompt.endswith("Return ONLY the final adjusted image. Do not return text.")


class TestQuoting:
    """The instruction is embedded verbatim, including quote characters."""

    def test_inner_quotes_are_not_escaped(self):
        prompt = build_filter_prompt('add the word "hello" in neon')

        assert 'Filter Request: "add the word "hello" in neon"' in prompt
        assert '\\"' not in prompt

    def test_braces_are_literal(self):
        prompt = build_adjustment_prompt("set {contrast} to +10")

        assert "{contrast}" in prompt


class TestBuildEditPrompt:
    """Tests for the mode dispatcher."""

    def test_dispatches_each_mode(self):
        hotspot = Hotspot(x=3, y=4)
        assert build_edit_prompt("retouch", "x", hotspot) == build_retouch_prompt("x", hotspot)
        assert build_edit_prompt("filter", "x") == build_filter_prompt("x")
        assert build_edit_prompt("adjustment", "x") == build_adjustment_prompt("x")

    def test_retouch_requires_hotspot(self):
        with pytest.raises(ValueError, match="hotspot"):
            build_edit_prompt("retouch", "x")

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="Unknown edit mode"):
            build_edit_prompt("sharpen", "x")  # type: ignore[arg-type]

    def test_is_pure(self):
        """Same inputs always give the same prompt."""
        assert build_filter_prompt("sepia") == build_filter_prompt("sepia")

    def test_build_prompt_for_request(self):
        request = RetouchRequest(
            imageData="data:image/png;base64,AAAA",
            userPrompt="remove glare",
            hotspot=Hotspot(x=5, y=6),
        )
        assert build_prompt_for_request(request) == build_retouch_prompt(
            "remove glare", Hotspot(x=5, y=6)
        )


class TestEditModes:
    """Tests for the EDIT_MODES registry."""

    def test_registry_matches_request_types(self):
        assert EDIT_MODES["retouch"].request_type is RetouchRequest
        assert EDIT_MODES["filter"].request_type is FilterRequest
        assert EDIT_MODES["adjustment"].request_type is AdjustmentRequest

    def test_instruction_field_is_required_field(self):
        for spec in EDIT_MODES.values():
            assert spec.instruction_field in spec.request_type.required_fields
            assert spec.request_type.mode == spec.mode

    def test_instruction_reads_mode_field(self):
        """Each request exposes its own prompt field as the instruction."""
        assert RetouchRequest(userPrompt="fix glare").instruction == "fix glare"
        assert FilterRequest(filterPrompt="Sepia").instruction == "Sepia"
        assert AdjustmentRequest(adjustmentPrompt="Warmer").instruction == "Warmer"
        assert FilterRequest(adjustmentPrompt="ignored").instruction == ""

    def test_paths(self):
        assert EDIT_MODES["retouch"].path == "/api/retouch"
        assert EDIT_MODES["filter"].path == "/api/filter"
        assert EDIT_MODES["adjustment"].path == "/api/adjust"
