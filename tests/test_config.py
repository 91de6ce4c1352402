"""Tests for config loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from restyle.config import load_config
from restyle.schemas.config import AppConfig


class TestLoadConfig:
    def test_load_valid_config(self, tmp_config: Path) -> None:
        cfg = load_config(tmp_config)
        assert cfg.default_provider == "openai"
        assert cfg.output_directory.endswith("output")
        assert cfg.save_history is True

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nonexistent.yml")

    def test_defaults_without_file(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert load_config() == AppConfig()

    def test_picks_up_local_restyle_yml(self, tmp_path: Path, monkeypatch) -> None:
        (tmp_path / "restyle.yml").write_text("default_provider: google\n")
        monkeypatch.chdir(tmp_path)
        assert load_config().default_provider == "google"

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "empty.yml"
        cfg_file.write_text("")
        assert load_config(cfg_file) == AppConfig()

    def test_non_mapping_rejected(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "list.yml"
        cfg_file.write_text("- openai\n- google\n")
        with pytest.raises(ValueError, match="YAML mapping"):
            load_config(cfg_file)

    def test_empty_models_key(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "models.yml"
        cfg_file.write_text("models:\n")
        assert load_config(cfg_file).models == {}

    def test_model_overrides(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "models.yml"
        cfg_file.write_text("models:\n  anthropic: claude-3-haiku-20240307\n")
        assert load_config(cfg_file).models == {"anthropic": "claude-3-haiku-20240307"}


class TestAppConfig:
    def test_provider_normalized(self) -> None:
        assert AppConfig(default_provider=" Anthropic ").default_provider == "anthropic"

    def test_unknown_provider_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AppConfig(default_provider="mistral")

    def test_unknown_model_provider_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AppConfig(models={"mistral": "large"})

    def test_max_tokens_positive(self) -> None:
        with pytest.raises(ValidationError):
            AppConfig(max_tokens=0)

    def test_max_retries_non_negative(self) -> None:
        with pytest.raises(ValidationError):
            AppConfig(max_retries=-1)
