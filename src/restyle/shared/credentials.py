"""Credential stores — map a provider name to the user's API key.

The core only reads and forwards keys; it never persists them itself.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

# Environment variables checked per provider, in order.
ENV_VARS: dict[str, tuple[str, ...]] = {
    "openai": ("OPENAI_API_KEY",),
    "anthropic": ("ANTHROPIC_API_KEY",),
    "google": ("GOOGLE_API_KEY", "GEMINI_API_KEY"),
}


class CredentialStore(Protocol):
    async def get(self, provider: str) -> str | None: ...

    async def save(self, provider: str, secret: str) -> None: ...


def mask_secret(secret: str) -> str:
    """Return a display-safe form of a key, e.g. ``sk-p…wxyz``."""
    if len(secret) <= 8:
        return "…" * 3
    return f"{secret[:4]}…{secret[-4:]}"


def _clean(secret: str | None) -> str | None:
    if secret is None:
        return None
    secret = secret.strip()
    return secret or None


class MemoryCredentialStore:
    """Dict-backed store for tests and dry runs."""

    def __init__(self, secrets: dict[str, str] | None = None) -> None:
        self._secrets = dict(secrets or {})

    async def get(self, provider: str) -> str | None:
        return _clean(self._secrets.get(provider))

    async def save(self, provider: str, secret: str) -> None:
        self._secrets[provider] = secret


class EnvCredentialStore:
    """Reads keys from provider-specific environment variables."""

    async def get(self, provider: str) -> str | None:
        for var in ENV_VARS.get(provider, ()):
            if value := _clean(os.environ.get(var)):
                return value
        return None

    async def save(self, provider: str, secret: str) -> None:
        names = ENV_VARS.get(provider)
        if not names:
            raise ValueError(f"No environment variable known for provider {provider!r}")
        os.environ[names[0]] = secret


class FileCredentialStore:
    """JSON file of ``{user: {provider: key}}`` with upsert semantics.

    When the file has no entry for a provider, ``fallback`` (usually an
    ``EnvCredentialStore``) is consulted.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        user: str = "default",
        fallback: CredentialStore | None = None,
    ) -> None:
        self.path = Path(path).expanduser()
        self.user = user
        self.fallback = fallback

    def _read(self) -> dict[str, dict[str, str]]:
        if not self.path.exists():
            return {}
        raw = json.loads(self.path.read_text() or "{}")
        if not isinstance(raw, dict):
            raise ValueError(f"Credentials file must hold a JSON object: {self.path}")
        return raw

    def _write(self, data: dict[str, dict[str, str]]) -> None:
        """Replace the file atomically; mkstemp creates it readable by the owner only."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as fh:
                json.dump(data, fh, indent=2, sort_keys=True)
            os.replace(tmp, self.path)
        except Exception:
            os.unlink(tmp)
            raise

    async def get(self, provider: str) -> str | None:
        data = await asyncio.to_thread(self._read)
        secret = _clean(data.get(self.user, {}).get(provider))
        if secret is None and self.fallback is not None:
            return await self.fallback.get(provider)
        return secret

    async def save(self, provider: str, secret: str) -> None:
        if not _clean(secret):
            raise ValueError("Refusing to save an empty API key")

        def _upsert() -> None:
            data = self._read()
            data.setdefault(self.user, {})[provider] = secret.strip()
            self._write(data)

        await asyncio.to_thread(_upsert)
        logger.info("Saved %s API key for user %s", provider, self.user)

    async def delete(self, provider: str) -> bool:
        """Remove a stored key. Returns False if there was none."""

        def _delete() -> bool:
            data = self._read()
            keys = data.get(self.user, {})
            if provider not in keys:
                return False
            del keys[provider]
            self._write(data)
            return True

        return await asyncio.to_thread(_delete)

    async def providers(self) -> list[str]:
        """Providers with a key stored in the file (fallback not included)."""
        data = await asyncio.to_thread(self._read)
        return sorted(p for p, s in data.get(self.user, {}).items() if _clean(s))
