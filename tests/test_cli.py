"""Tests for the typer CLI — dry-run only, no API calls."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from restyle.cli import app

runner = CliRunner()


def _config(tmp_path: Path) -> Path:
    cfg = tmp_path / "restyle.yml"
    cfg.write_text(
        f'credentials_file: "{tmp_path / "credentials.json"}"\n'
        f'output_directory: "{tmp_path / "output"}"\n'
    )
    return cfg


class TestAnalyzeAndRedesign:
    def test_dry_run_pipeline(self, tmp_path) -> None:
        cfg = _config(tmp_path)
        analysis = tmp_path / "analysis.json"

        result = runner.invoke(app, ["analyze", "example.com", "-c", str(cfg), "-o", str(analysis), "--dry-run"])

        assert result.exit_code == 0, result.output
        assert json.loads(analysis.read_text())["url"] == "https://example.com"

        out_dir = tmp_path / "site"
        result = runner.invoke(
            app,
            ["redesign", "-a", str(analysis), "-s", "glassmorphism", "-c", str(cfg), "-o", str(out_dir), "--dry-run"],
        )

        assert result.exit_code == 0, result.output
        assert (out_dir / "index.html").exists()
        assert (out_dir / "styles.css").exists()
        assert (out_dir / "preview.md").exists()

    def test_missing_analysis_file(self, tmp_path) -> None:
        result = runner.invoke(app, ["redesign", "-a", str(tmp_path / "nope.json"), "-s", "flat", "--dry-run"])
        assert result.exit_code == 1

    def test_unknown_provider(self, tmp_path) -> None:
        result = runner.invoke(app, ["analyze", "example.com", "-p", "mistral", "-c", str(_config(tmp_path)), "--dry-run"])
        assert result.exit_code == 1
        assert "Unknown provider" in result.output


class TestCatalogueCommands:
    def test_styles(self) -> None:
        result = runner.invoke(app, ["styles"])
        assert result.exit_code == 0
        assert "neumorphism" in result.output

    def test_models(self, tmp_path) -> None:
        result = runner.invoke(app, ["models", "-p", "anthropic", "-c", str(_config(tmp_path))])
        assert result.exit_code == 0
        assert "claude-3-haiku-20240307" in result.output
        assert "gpt-4o" not in result.output


class TestKeys:
    def test_set_list_delete(self, tmp_path, monkeypatch) -> None:
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        cfg = _config(tmp_path)

        result = runner.invoke(app, ["keys", "set", "google", "--key", "g-key-1234567890", "-c", str(cfg)])
        assert result.exit_code == 0, result.output

        result = runner.invoke(app, ["keys", "list", "-c", str(cfg)])
        assert "g-ke…7890" in result.output
        assert "g-key-1234567890" not in result.output

        result = runner.invoke(app, ["keys", "delete", "google", "-c", str(cfg)])
        assert "Deleted google key" in result.output


class TestValidate:
    def test_valid(self, tmp_path) -> None:
        result = runner.invoke(app, ["validate", "-c", str(_config(tmp_path))])
        assert result.exit_code == 0
        assert "Config is valid" in result.output

    def test_invalid(self, tmp_path) -> None:
        cfg = tmp_path / "bad.yml"
        cfg.write_text("default_provider: mistral\n")
        result = runner.invoke(app, ["validate", "-c", str(cfg)])
        assert result.exit_code == 1


class TestHistory:
    def test_empty(self, tmp_path) -> None:
        result = runner.invoke(app, ["history", "-c", str(_config(tmp_path))])
        assert result.exit_code == 0
        assert "No saved analyses" in result.output
