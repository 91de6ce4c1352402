"""Provider registry — resolves a provider name to a live, cached client."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

from restyle.schemas.website import ModelInfo
from restyle.shared.credentials import CredentialStore
from restyle.shared.providers import ProviderAdapter, default_adapters

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Resolves provider names to client handles.

    Only successfully built clients are cached. A missing key or a failed
    construction is never cached, so a key saved later is picked up on the
    next ``resolve``. Cache writes are plain last-writer-wins assignments,
    which keeps two overlapping resolves for the same provider harmless.

    Entries live for the process lifetime unless ``ttl`` (seconds, measured
    with ``clock``) is given.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        adapters: dict[str, ProviderAdapter] | None = None,
        *,
        default_models: dict[str, str] | None = None,
        ttl: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.credentials = credentials
        self._adapters = adapters if adapters is not None else default_adapters()
        self._default_models = dict(default_models or {})
        self._ttl = ttl
        self._clock = clock
        self._cache: dict[str, tuple[Any, float]] = {}

    # ------------------------------------------------------------------
    # Adapters and catalogue
    # ------------------------------------------------------------------

    def providers(self) -> list[str]:
        return list(self._adapters)

    def adapter(self, provider: str) -> ProviderAdapter | None:
        return self._adapters.get(provider)

    def catalogue(self) -> dict[str, list[ModelInfo]]:
        """Selectable models per provider, in display order."""
        return {name: list(a.models) for name, a in self._adapters.items()}

    def default_model(self, provider: str) -> str | None:
        adapter = self._adapters.get(provider)
        if adapter is None:
            return None
        return self._default_models.get(provider) or adapter.default_model

    def is_known_model(self, provider: str, model_id: str) -> bool:
        adapter = self._adapters.get(provider)
        return adapter is not None and adapter.is_known_model(model_id)

    def select_model(self, provider: str, model_id: str | None = None) -> str | None:
        """Return the model to call: the requested one, else the default.

        Ids missing from the catalogue are passed through with a warning,
        since vendors ship new models faster than the catalogue changes.
        """
        if not model_id:
            return self.default_model(provider)
        if not self.is_known_model(provider, model_id):
            logger.warning("Model %r is not in the %s catalogue; using it anyway", model_id, provider)
        return model_id

    # ------------------------------------------------------------------
    # Credentials and clients
    # ------------------------------------------------------------------

    async def _secret(self, provider: str) -> str | None:
        try:
            return await self.credentials.get(provider)
        except Exception:
            logger.exception("Credential lookup failed for %s", provider)
            return None

    async def has_credential(self, provider: str) -> bool:
        """True when a client is cached or a key is stored for ``provider``."""
        if provider not in self._adapters:
            return False
        if self._cached(provider) is not None:
            return True
        return bool(await self._secret(provider))

    async def resolve(self, provider: str) -> Any | None:
        """Return a client handle for ``provider`` or None if unavailable."""
        if (cached := self._cached(provider)) is not None:
            return cached

        adapter = self._adapters.get(provider)
        if adapter is None:
            logger.warning("Unsupported AI provider: %s", provider)
            return None

        secret = await self._secret(provider)
        if not secret:
            logger.info("No API key available for %s", provider)
            return None

        client = adapter.create_client(secret)
        if client is None:
            return None

        self._cache[provider] = (client, self._clock())
        return client

    def _cached(self, provider: str) -> Any | None:
        entry = self._cache.get(provider)
        if entry is None:
            return None
        client, created = entry
        if self._ttl is not None and self._clock() - created > self._ttl:
            self._cache.pop(provider, None)
            return None
        return client

    def clear_cache(self) -> None:
        self._cache.clear()

    def clear_cache_for(self, provider: str) -> None:
        self._cache.pop(provider, None)
