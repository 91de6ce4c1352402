"""Tests for AnalyzerAgent — credential gate, merge rules and fallbacks."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from restyle.agents.analyzer.agent import AnalyzerAgent, merge_analysis, normalize_url
from restyle.agents.analyzer.baseline import BASELINE_COLORS, BASELINE_ELEMENTS, build_baseline
from restyle.schemas.website import AnalysisOutput
from restyle.shared.credentials import MemoryCredentialStore
from restyle.shared.errors import CredentialMissing, ResponseShapeError
from restyle.shared.registry import ProviderRegistry
from tests.fakes import FakeAdapter


class TestNormalizeUrl:
    def test_adds_https(self) -> None:
        assert normalize_url("example.com") == "https://example.com"

    def test_keeps_scheme(self) -> None:
        assert normalize_url("http://example.com/a") == "http://example.com/a"

    def test_strips_whitespace(self) -> None:
        assert normalize_url("  example.com  ") == "https://example.com"

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError):
            normalize_url("   ")


class TestMergeAnalysis:
    def test_partial_output_keeps_baseline_elsewhere(self) -> None:
        baseline = build_baseline("https://a.test")
        merged = merge_analysis(baseline, AnalysisOutput(colors=["#111111"]))

        assert merged.colors == ["#111111"]
        assert merged.fonts == baseline.fonts
        assert merged.layout == baseline.layout
        assert merged.elements == baseline.elements
        assert merged.url == "https://a.test"

    def test_empty_colors_count_as_absent(self) -> None:
        baseline = build_baseline("https://a.test")
        merged = merge_analysis(baseline, AnalysisOutput(colors=[], layout="Two columns"))

        assert merged.colors == BASELINE_COLORS
        assert merged.layout == "Two columns"

    def test_empty_content_structure_counts_as_absent(self) -> None:
        baseline = build_baseline("https://a.test")
        merged = merge_analysis(baseline, AnalysisOutput.model_validate({"contentStructure": {}}))
        assert merged.content_structure == baseline.content_structure


class TestParseOutput:
    def test_accepts_camel_case(self, registry) -> None:
        agent = AnalyzerAgent(registry)
        output = agent.parse_output(json.dumps({
            "colors": ["#000"],
            "contentStructure": {"hierarchy": "flat", "mainSections": ["A"], "contentDensity": "low"},
        }))
        assert output.content_structure.main_sections == ["A"]

    def test_wrong_types_raise_shape_error(self, registry) -> None:
        agent = AnalyzerAgent(registry)
        with pytest.raises(ResponseShapeError):
            agent.parse_output('{"colors": "red"}')

    def test_null_lists_become_empty(self, registry) -> None:
        output = AnalyzerAgent(registry).parse_output(
            '{"colors": ["#111111"], "fonts": null, "elements": null, "images": null}'
        )
        assert output.colors == ["#111111"]
        assert output.fonts == []
        assert output.elements == []
        assert output.images == []


class TestBuildBaseline:
    def test_calls_do_not_share_nested_models(self) -> None:
        a = build_baseline("https://a.test")
        a.fonts[0].name = "Mutated"
        a.elements[0].description = "Mutated"
        a.content_structure.main_sections.append("Mutated")
        a.layout["header"] = "Mutated"

        b = build_baseline("https://b.test")

        assert b.fonts[0].name == "Arial"
        assert b.elements == BASELINE_ELEMENTS
        assert "Mutated" not in b.content_structure.main_sections
        assert b.layout["header"] != "Mutated"


class TestAnalyze:
    @pytest.mark.asyncio
    async def test_missing_key_raises(self, fake_adapter) -> None:
        registry = ProviderRegistry(MemoryCredentialStore(), {"openai": fake_adapter})
        agent = AnalyzerAgent(registry)

        with pytest.raises(CredentialMissing) as exc_info:
            await agent.analyze("example.com", "openai")

        assert exc_info.value.provider == "openai"
        assert fake_adapter.calls == []

    @pytest.mark.asyncio
    async def test_unknown_provider_raises_credential_missing(self, registry) -> None:
        with pytest.raises(CredentialMissing):
            await AnalyzerAgent(registry).analyze("example.com", "mistral")

    @pytest.mark.asyncio
    async def test_merges_model_output(self, registry, fake_adapter) -> None:
        fake_adapter.reply = '```json\n{"colors": ["#111111"]}\n```'
        agent = AnalyzerAgent(registry)

        result = await agent.analyze("example.com", "openai")

        assert result.url == "https://example.com"
        assert result.colors == ["#111111"]
        assert result.elements == BASELINE_ELEMENTS
        call = fake_adapter.calls[0]
        assert "https://example.com" in call["user"]
        assert call["model"] == "fake-default"

    @pytest.mark.asyncio
    async def test_null_list_fields_keep_baseline(self, registry, fake_adapter) -> None:
        fake_adapter.reply = '{"colors": ["#111111"], "fonts": null, "images": null}'

        result = await AnalyzerAgent(registry).analyze("example.com", "openai")

        assert result.colors == ["#111111"]
        assert result.fonts == build_baseline("https://example.com").fonts
        assert result.images == []

    @pytest.mark.asyncio
    async def test_explicit_model_is_forwarded(self, registry, fake_adapter) -> None:
        await AnalyzerAgent(registry).analyze("example.com", "openai", "gpt-4o-mini")
        assert fake_adapter.calls[0]["model"] == "gpt-4o-mini"

    @pytest.mark.asyncio
    async def test_provider_error_falls_back_to_baseline(self, registry, fake_adapter) -> None:
        fake_adapter.reply = TimeoutError("read timed out")

        result = await AnalyzerAgent(registry).analyze("example.com", "openai")

        assert result == build_baseline("https://example.com")

    @pytest.mark.asyncio
    async def test_bad_json_falls_back_to_baseline(self, registry, fake_adapter) -> None:
        fake_adapter.reply = "Sorry, I can't browse the web."

        result = await AnalyzerAgent(registry).analyze("example.com", "openai")

        assert result.colors == BASELINE_COLORS

    @pytest.mark.asyncio
    async def test_client_construction_failure_falls_back(self, registry, fake_adapter) -> None:
        fake_adapter.fail_build = True

        result = await AnalyzerAgent(registry).analyze("example.com", "openai")

        assert result == build_baseline("https://example.com")
        assert fake_adapter.calls == []

    @pytest.mark.asyncio
    async def test_progress_messages(self, registry) -> None:
        messages: list[str] = []
        await AnalyzerAgent(registry).analyze("example.com", "openai", on_progress=messages.append)
        assert messages and "example.com" in messages[-1]


class TestAnalyzePersistence:
    @pytest.mark.asyncio
    async def test_saves_in_background(self, registry, persistence) -> None:
        agent = AnalyzerAgent(registry, persistence)

        result = await agent.analyze("example.com", "openai")
        await agent.drain()

        saved = await persistence.list_analyses()
        assert len(saved) == 1
        assert saved[0]["url"] == result.url

    @pytest.mark.asyncio
    async def test_save_failure_does_not_affect_result(self, registry) -> None:
        sink = AsyncMock()
        sink.save_analysis.side_effect = OSError("read-only filesystem")
        agent = AnalyzerAgent(registry, sink)

        result = await agent.analyze("example.com", "openai")
        await agent.drain()

        assert result.url == "https://example.com"
        sink.save_analysis.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_drain_without_pending_saves(self, registry) -> None:
        await AnalyzerAgent(registry).drain()


class TestAnalyzeWithOtherProviders:
    @pytest.mark.asyncio
    async def test_uses_requested_provider(self) -> None:
        openai = FakeAdapter("openai", reply='{"colors": ["#000000"]}')
        google = FakeAdapter("google", reply='{"colors": ["#4285f4"]}')
        registry = ProviderRegistry(
            MemoryCredentialStore({"openai": "sk-o", "google": "g-key"}),
            {"openai": openai, "google": google},
        )

        result = await AnalyzerAgent(registry).analyze("example.com", "google")

        assert result.colors == ["#4285f4"]
        assert openai.calls == []
