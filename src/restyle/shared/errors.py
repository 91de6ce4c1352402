"""Exception types shared by the providers, registry and orchestrators."""

from __future__ import annotations


class RestyleError(Exception):
    """Base class for all restyle errors."""


class CredentialMissing(RestyleError):
    """No API key is stored for the requested provider."""

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(
            f"No API key available for provider {provider!r}. Add one before analyzing."
        )


class ProviderCallError(RestyleError):
    """A completion request failed (transport, auth, timeout or vendor error)."""

    def __init__(self, provider: str, model: str | None, cause: BaseException | str) -> None:
        self.provider = provider
        self.model = model
        self.cause = cause
        super().__init__(f"{provider} call failed (model={model}): {cause}")


class ResponseShapeError(RestyleError, ValueError):
    """Model output could not be decoded into the expected shape."""

    def __init__(self, reason: str, raw: str = "") -> None:
        self.reason = reason
        self.raw = raw
        super().__init__(f"{reason} (first 200 chars: {raw[:200]!r})" if raw else reason)


class PersistenceError(RestyleError):
    """Saving or loading a history record failed."""
