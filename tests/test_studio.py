"""Tests for the Studio entry point."""

from __future__ import annotations

import pytest

from restyle.agents.studio import Studio
from restyle.schemas.config import AppConfig
from restyle.schemas.website import DesignStyle, RedesignRequest
from restyle.shared.credentials import FileCredentialStore
from restyle.shared.errors import CredentialMissing
from restyle.shared.persistence import JsonFilePersistence
from restyle.shared.providers import DryRunAdapter, OpenAIAdapter


class TestFromConfig:
    def test_live_wiring(self, tmp_path) -> None:
        cfg = AppConfig(
            credentials_file=str(tmp_path / "c.json"),
            output_directory=str(tmp_path / "out"),
            models={"google": "gemini-1.5-pro"},
            max_tokens=1000,
        )

        studio = Studio.from_config(cfg)

        assert isinstance(studio.registry.credentials, FileCredentialStore)
        assert isinstance(studio.registry.adapter("openai"), OpenAIAdapter)
        assert studio.registry.adapter("openai").max_tokens == 1000
        assert studio.registry.default_model("google") == "gemini-1.5-pro"
        assert isinstance(studio.persistence, JsonFilePersistence)

    def test_history_can_be_disabled(self, tmp_path) -> None:
        cfg = AppConfig(credentials_file=str(tmp_path / "c.json"), save_history=False)
        assert Studio.from_config(cfg).persistence is None

    def test_dry_run_wiring(self) -> None:
        studio = Studio.from_config(AppConfig(), dry_run=True)
        assert all(isinstance(studio.registry.adapter(p), DryRunAdapter) for p in ("openai", "anthropic", "google"))
        assert studio.persistence is None


class TestStudio:
    @pytest.mark.asyncio
    async def test_dry_run_analyze_and_redesign(self) -> None:
        studio = Studio.from_config(AppConfig(default_provider="anthropic"), dry_run=True)

        data = await studio.analyze_website("example.com")
        result = await studio.redesign_website(
            RedesignRequest(website_data=data, design_style=DesignStyle.FLAT)
        )
        await studio.drain()

        assert data.colors[0] == "#0f172a"
        assert "dry-run" in result.css

    @pytest.mark.asyncio
    async def test_save_credential_refreshes_client(self, tmp_path, monkeypatch) -> None:
        for var in ("OPENAI_API_KEY", "ANTHROPIC_API_KEY", "GOOGLE_API_KEY", "GEMINI_API_KEY"):
            monkeypatch.delenv(var, raising=False)
        cfg = AppConfig(credentials_file=str(tmp_path / "c.json"), save_history=False)
        studio = Studio.from_config(cfg)

        with pytest.raises(CredentialMissing):
            await studio.analyze_website("example.com", "anthropic")

        await studio.save_credential("openai", "sk-first-000000")
        first = await studio.registry.resolve("openai")
        await studio.save_credential("openai", "sk-second-00000")
        second = await studio.registry.resolve("openai")

        assert first is not second
        assert second.api_key == "sk-second-00000"

    def test_catalogue(self, tmp_path) -> None:
        studio = Studio.from_config(AppConfig(credentials_file=str(tmp_path / "c.json")))
        assert set(studio.catalogue()) == {"openai", "anthropic", "google"}
