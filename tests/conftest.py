"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from restyle.schemas.website import ElementDescriptor, FontDescriptor, WebsiteData
from restyle.shared.credentials import MemoryCredentialStore
from restyle.shared.persistence import JsonFilePersistence
from restyle.shared.registry import ProviderRegistry
from tests.fakes import FakeAdapter


@pytest.fixture
def fake_adapter() -> FakeAdapter:
    return FakeAdapter("openai")


@pytest.fixture
def credentials() -> MemoryCredentialStore:
    return MemoryCredentialStore({"openai": "sk-test-1234567890"})


@pytest.fixture
def registry(credentials: MemoryCredentialStore, fake_adapter: FakeAdapter) -> ProviderRegistry:
    return ProviderRegistry(credentials, {"openai": fake_adapter})


@pytest.fixture
def persistence(tmp_path: Path) -> JsonFilePersistence:
    return JsonFilePersistence(tmp_path / "history")


@pytest.fixture
def website_data() -> WebsiteData:
    return WebsiteData(
        url="https://example.com",
        colors=["#111111", "#fafafa", "#ff5500"],
        fonts=[FontDescriptor(name="Georgia", purpose="headings"), "Verdana"],
        layout="Single column with a sticky header",
        elements=[
            ElementDescriptor(type="header", description="Logo and menu"),
            ElementDescriptor(type="footer", description="Links"),
        ],
    )


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    cfg = tmp_path / "restyle.yml"
    cfg.write_text(
        """\
default_provider: openai
credentials_file: "{creds}"
output_directory: "{out}"
""".format(creds=str(tmp_path / "credentials.json"), out=str(tmp_path / "output"))
    )
    return cfg
