"""Studio — the public entry point wiring registry, agents and history."""

from __future__ import annotations

import logging
from pathlib import Path

from restyle.agents.analyzer.agent import AnalyzerAgent
from restyle.agents.base import ProgressCallback
from restyle.agents.redesigner.agent import RedesignerAgent
from restyle.schemas.config import KNOWN_PROVIDERS, AppConfig
from restyle.schemas.website import ModelInfo, RedesignRequest, RedesignResult, WebsiteData
from restyle.shared.credentials import (
    EnvCredentialStore,
    FileCredentialStore,
    MemoryCredentialStore,
)
from restyle.shared.persistence import JsonFilePersistence, PersistenceSink
from restyle.shared.providers import DryRunAdapter, default_adapters
from restyle.shared.registry import ProviderRegistry

logger = logging.getLogger(__name__)


class Studio:
    """Analyze and redesign websites through one configured registry."""

    def __init__(
        self,
        registry: ProviderRegistry,
        persistence: PersistenceSink | None = None,
        config: AppConfig | None = None,
    ) -> None:
        self.registry = registry
        self.persistence = persistence
        self.config = config or AppConfig()
        self.analyzer = AnalyzerAgent(registry, persistence)
        self.redesigner = RedesignerAgent(registry, persistence)

    @classmethod
    def from_config(cls, config: AppConfig, dry_run: bool = False) -> Studio:
        """Build a studio from config.

        ``dry_run`` swaps every adapter for a ``DryRunAdapter`` with a
        placeholder key and disables history, so no API or disk writes
        happen.
        """
        if dry_run:
            registry = ProviderRegistry(
                MemoryCredentialStore({p: "dry-run" for p in KNOWN_PROVIDERS}),
                {p: DryRunAdapter(p) for p in KNOWN_PROVIDERS},
            )
            return cls(registry, None, config)

        credentials = FileCredentialStore(
            config.credentials_file,
            user=config.user,
            fallback=EnvCredentialStore(),
        )
        registry = ProviderRegistry(
            credentials,
            default_adapters(
                max_tokens=config.max_tokens,
                timeout=config.request_timeout,
                max_retries=config.max_retries,
            ),
            default_models=config.models,
        )
        persistence = None
        if config.save_history:
            persistence = JsonFilePersistence(Path(config.output_directory) / "history")
        return cls(registry, persistence, config)

    async def analyze_website(
        self,
        url: str,
        provider: str | None = None,
        model_id: str | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> WebsiteData:
        provider = provider or self.config.default_provider
        return await self.analyzer.analyze(url, provider, model_id, on_progress=on_progress)

    async def redesign_website(
        self,
        request: RedesignRequest,
        provider: str | None = None,
        model_id: str | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> RedesignResult:
        provider = provider or self.config.default_provider
        return await self.redesigner.redesign(request, provider, model_id, on_progress=on_progress)

    async def save_credential(self, provider: str, secret: str) -> None:
        """Store a key and drop any client built with the previous one."""
        await self.registry.credentials.save(provider, secret)
        self.registry.clear_cache_for(provider)

    def catalogue(self) -> dict[str, list[ModelInfo]]:
        return self.registry.catalogue()

    async def drain(self) -> None:
        """Wait for background saves started by ``analyze_website``."""
        await self.analyzer.drain()
