"""Tests for the prompt builders."""

from __future__ import annotations

import pytest

from restyle.agents.analyzer import prompts as analyzer_prompts
from restyle.agents.analyzer.prompts import build_analysis_prompt
from restyle.agents.redesigner import prompts as redesigner_prompts
from restyle.agents.redesigner.prompts import (
    STYLE_GUIDES,
    build_redesign_prompt,
    get_style_guide,
)
from restyle.schemas.website import DesignStyle


class TestAnalysisPrompt:
    def test_contains_url_and_keys(self) -> None:
        prompt = build_analysis_prompt("https://example.com")

        assert "https://example.com" in prompt
        assert "Return ONLY valid JSON" in prompt
        for key in ("colors", "fonts", "layout", "elements", "images", "contentStructure"):
            assert f'"{key}"' in prompt

    def test_is_deterministic(self) -> None:
        assert build_analysis_prompt("https://a.io") == build_analysis_prompt("https://a.io")

    def test_system_prompts_are_distinguishable(self) -> None:
        assert "web designer" not in analyzer_prompts.SYSTEM_PROMPT.lower()
        assert "web designer" in redesigner_prompts.SYSTEM_PROMPT.lower()


class TestRedesignPrompt:
    @pytest.mark.parametrize("style", list(DesignStyle))
    def test_every_style_has_a_guide(self, website_data, style) -> None:
        guide = STYLE_GUIDES[style]
        prompt = build_redesign_prompt(website_data, style)

        assert f"TARGET DESIGN STYLE: {style.value.upper()}" in prompt
        assert guide.description in prompt
        for technique in guide.techniques:
            assert technique in prompt
        assert "no predefined guide" not in prompt

    def test_includes_site_analysis(self, website_data) -> None:
        prompt = build_redesign_prompt(website_data, DesignStyle.FLAT)

        assert "URL: https://example.com" in prompt
        assert "#111111, #fafafa, #ff5500" in prompt
        assert "Georgia, Verdana" in prompt
        assert "Single column with a sticky header" in prompt

    def test_requirements_and_output_format(self, website_data) -> None:
        prompt = build_redesign_prompt(website_data, DesignStyle.MATERIAL)

        for breakpoint in ("375px", "768px", "1024px", "1440px"):
            assert breakpoint in prompt
        assert "NEVER reference external URLs" in prompt
        assert "Return ONLY a single JSON object" in prompt
        for key in ('"html"', '"css"', '"preview"'):
            assert key in prompt

    def test_unknown_style_uses_generic_guide(self, website_data) -> None:
        prompt = build_redesign_prompt(website_data, "retro-futurism")

        assert "TARGET DESIGN STYLE: RETRO-FUTURISM" in prompt
        assert "no predefined guide" in prompt
        assert redesigner_prompts.GENERIC_GUIDE.description in prompt

    def test_is_deterministic(self, website_data) -> None:
        a = build_redesign_prompt(website_data, DesignStyle.BRUTALIST)
        b = build_redesign_prompt(website_data, DesignStyle.BRUTALIST)
        assert a == b

    def test_style_lookup_accepts_strings(self) -> None:
        assert get_style_guide("glassmorphism") is STYLE_GUIDES[DesignStyle.GLASSMORPHISM]
        assert get_style_guide("vaporwave") is None
