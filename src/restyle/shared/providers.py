"""Provider adapters — one uniform completion interface over several LLM SDKs.

Every adapter turns a ``[system, user]`` message pair into the vendor's
native request shape and returns the raw assistant text, unparsed.
"""

from __future__ import annotations

import asyncio
import json
import logging
import random
import re
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable

from restyle.schemas.website import ModelInfo
from restyle.shared.errors import ProviderCallError

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 4000

_RETRY_BASE_DELAY = 2  # seconds, floor for exponential backoff

Message = dict[str, str]


def _parse_retry_after(exc: BaseException) -> float | None:
    """Extract the suggested retry delay from a rate limit error.

    Checks the ``Retry-After`` header first, then falls back to parsing
    the "try again in Xs / Xms" substring from the error message.
    """
    try:
        headers = exc.response.headers  # type: ignore[attr-defined]
        if retry_after := headers.get("retry-after"):
            return float(retry_after)
    except (AttributeError, TypeError, ValueError):
        pass

    m = re.search(r"try again in (\d+(?:\.\d+)?)\s*(ms|s)\b", str(exc), re.IGNORECASE)
    if m:
        value = float(m.group(1))
        return value / 1000 if m.group(2).lower() == "ms" else value

    return None


def split_messages(messages: list[Message]) -> tuple[str, str]:
    """Return ``(system, user)`` content, requiring exactly one of each."""
    systems = [m.get("content", "") for m in messages if m.get("role") == "system"]
    users = [m.get("content", "") for m in messages if m.get("role") == "user"]
    if len(systems) != 1 or len(users) != 1 or len(messages) != 2:
        raise ValueError(
            f"Expected exactly one system and one user message, got roles "
            f"{[m.get('role') for m in messages]}"
        )
    return systems[0], users[0]


class ProviderAdapter(ABC):
    """Uniform interface over one vendor SDK.

    Subclasses implement:
    - ``name`` / ``default_model`` / ``models`` — identity and catalogue
    - ``_build_client(secret)`` — construct the SDK client
    - ``_send(client, system, user, model)`` — one native request, returning text
    - ``_is_retryable(exc)`` — whether an SDK error is worth retrying
    """

    name: str = ""
    default_model: str = ""
    models: list[ModelInfo] = []

    def __init__(
        self,
        *,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        timeout: float | None = None,
        max_retries: int = 2,
    ) -> None:
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.max_retries = max_retries

    def create_client(self, secret: str) -> Any | None:
        """Build a client handle for ``secret``; returns None on any failure."""
        try:
            return self._build_client(secret)
        except Exception:
            logger.exception("Error creating %s client", self.name)
            return None

    async def complete(
        self,
        client: Any,
        messages: list[Message],
        model_id: str | None = None,
    ) -> str:
        """Send the system+user pair and return the assistant text.

        Raises ``ProviderCallError`` on any transport, auth, timeout or
        vendor-side failure.
        """
        model = model_id or self.default_model
        try:
            system, user = split_messages(messages)
        except ValueError as exc:
            raise ProviderCallError(self.name, model, exc) from exc

        logger.info("Requesting %s completion (model=%s)", self.name, model)
        try:
            text = await self._call_with_retry(
                lambda: self._send(client, system, user, model), model
            )
        except Exception as exc:
            raise ProviderCallError(self.name, model, exc) from exc

        logger.debug("%s raw output:\n%s", self.name, text[:500])
        return text

    async def _call_with_retry(self, send: Callable[[], Awaitable[str]], model: str) -> str:
        """Await ``send`` with exponential backoff on retryable errors.

        Waits at least as long as the vendor's suggested retry-after time
        and adds ±25% jitter.
        """
        for attempt in range(self.max_retries + 1):
            try:
                return await send()
            except Exception as exc:
                if attempt >= self.max_retries or not self._is_retryable(exc):
                    raise
                backoff = _RETRY_BASE_DELAY * (2 ** attempt)
                suggested = _parse_retry_after(exc)
                base_delay = max(suggested or 0.0, backoff)
                jitter = random.uniform(-0.25 * base_delay, 0.25 * base_delay)
                delay = max(1.0, base_delay + jitter)
                logger.warning(
                    "%s call failed (model=%s, attempt %d/%d), retrying in %.1fs: %s",
                    self.name, model, attempt + 1, self.max_retries + 1, delay, exc,
                )
                await asyncio.sleep(delay)

    def is_known_model(self, model_id: str) -> bool:
        return any(m.id == model_id for m in self.models)

    @abstractmethod
    def _build_client(self, secret: str) -> Any:
        """Construct the vendor SDK client."""

    @abstractmethod
    async def _send(self, client: Any, system: str, user: str, model: str) -> str:
        """Perform one native completion request."""

    def _is_retryable(self, exc: BaseException) -> bool:
        return False


# ======================================================================
# Vendors
# ======================================================================


class OpenAIAdapter(ProviderAdapter):
    """OpenAI chat completions; the system prompt travels as a message."""

    name = "openai"
    default_model = "gpt-4o"
    models = [
        ModelInfo(id="gpt-4", name="GPT-4", description="Most capable model for complex tasks"),
        ModelInfo(id="gpt-4-turbo", name="GPT-4 Turbo", description="Fast and capable model"),
        ModelInfo(id="gpt-3.5-turbo", name="GPT-3.5 Turbo", description="Fast model for simple tasks"),
        ModelInfo(id="gpt-4o", name="GPT-4o", description="Latest multimodal model"),
        ModelInfo(id="gpt-4o-mini", name="GPT-4o Mini", description="Smaller version of GPT-4o"),
    ]

    # Models that reject response_format={"type": "json_object"}
    _NO_JSON_MODE = {"gpt-4"}

    def _build_client(self, secret: str) -> Any:
        from openai import AsyncOpenAI

        kwargs: dict[str, Any] = {"api_key": secret}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        return AsyncOpenAI(**kwargs)

    async def _send(self, client: Any, system: str, user: str, model: str) -> str:
        kwargs: dict[str, Any] = {
            "model": model,
            "max_tokens": self.max_tokens,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
        }
        if model not in self._NO_JSON_MODE:
            kwargs["response_format"] = {"type": "json_object"}
        response = await client.chat.completions.create(**kwargs)
        return response.choices[0].message.content or ""

    def _is_retryable(self, exc: BaseException) -> bool:
        from openai import APIConnectionError, RateLimitError

        if isinstance(exc, RateLimitError):
            msg = str(exc).lower()
            # The payload itself is too big; retrying won't help.
            return "request too large" not in msg and "context_length_exceeded" not in msg
        return isinstance(exc, APIConnectionError)


class AnthropicAdapter(ProviderAdapter):
    """Anthropic Messages API; the system prompt is a dedicated parameter."""

    name = "anthropic"
    default_model = "claude-3-5-sonnet-20241022"
    models = [
        ModelInfo(id="claude-3-opus-20240229", name="Claude 3 Opus", description="Most powerful model for complex tasks"),
        ModelInfo(id="claude-3-sonnet-20240229", name="Claude 3 Sonnet", description="Balanced performance and cost"),
        ModelInfo(id="claude-3-haiku-20240307", name="Claude 3 Haiku", description="Fastest model for simple tasks"),
        ModelInfo(id="claude-3-5-sonnet-20241022", name="Claude 3.5 Sonnet", description="Latest improved model"),
    ]

    def _build_client(self, secret: str) -> Any:
        from anthropic import AsyncAnthropic

        kwargs: dict[str, Any] = {"api_key": secret}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        return AsyncAnthropic(**kwargs)

    async def _send(self, client: Any, system: str, user: str, model: str) -> str:
        response = await client.messages.create(
            model=model,
            max_tokens=self.max_tokens,
            system=system,
            messages=[{"role": "user", "content": user}],
        )
        parts = [
            block.text for block in response.content
            if getattr(block, "type", None) == "text"
        ]
        return "".join(parts)

    def _is_retryable(self, exc: BaseException) -> bool:
        from anthropic import APIConnectionError, RateLimitError

        return isinstance(exc, (RateLimitError, APIConnectionError))


class GoogleAdapter(ProviderAdapter):
    """Google Gemini via google-genai; the system prompt is ``system_instruction``."""

    name = "google"
    default_model = "gemini-2.0-flash"
    models = [
        ModelInfo(id="gemini-2.0-flash", name="Gemini 2.0 Flash", description="Latest model with fast performance"),
        ModelInfo(id="gemini-1.5-flash", name="Gemini 1.5 Flash", description="Fast model for quick responses"),
        ModelInfo(id="gemini-1.5-pro", name="Gemini 1.5 Pro", description="Advanced model for complex tasks"),
        ModelInfo(id="gemini-1.5-flash-8b", name="Gemini 1.5 Flash 8B", description="Lightweight model for basic tasks"),
    ]

    def _build_client(self, secret: str) -> Any:
        from google import genai
        from google.genai import types

        kwargs: dict[str, Any] = {"api_key": secret}
        if self.timeout is not None:
            # google-genai takes the timeout in milliseconds
            kwargs["http_options"] = types.HttpOptions(timeout=int(self.timeout * 1000))
        return genai.Client(**kwargs)

    async def _send(self, client: Any, system: str, user: str, model: str) -> str:
        from google.genai import types

        response = await client.aio.models.generate_content(
            model=model,
            contents=user,
            config=types.GenerateContentConfig(
                system_instruction=system,
                max_output_tokens=self.max_tokens,
                response_mime_type="application/json",
            ),
        )
        return response.text or ""

    def _is_retryable(self, exc: BaseException) -> bool:
        from google.genai import errors

        if isinstance(exc, errors.ServerError):
            return True
        return isinstance(exc, errors.ClientError) and getattr(exc, "code", None) == 429


def default_adapters(
    *,
    max_tokens: int = DEFAULT_MAX_TOKENS,
    timeout: float | None = None,
    max_retries: int = 2,
) -> dict[str, ProviderAdapter]:
    """One adapter instance per supported vendor, keyed by provider name."""
    opts = {"max_tokens": max_tokens, "timeout": timeout, "max_retries": max_retries}
    adapters: list[ProviderAdapter] = [
        OpenAIAdapter(**opts),
        AnthropicAdapter(**opts),
        GoogleAdapter(**opts),
    ]
    return {a.name: a for a in adapters}


# ======================================================================
# Dry-run adapter: zero API calls
# ======================================================================

_DRY_RUN_ANALYSIS = json.dumps({
    "colors": ["#0f172a", "#f8fafc", "#2563eb", "#64748b", "#f59e0b"],
    "fonts": [
        {"name": "Inter", "purpose": "body text"},
        {"name": "Playfair Display", "purpose": "headings"},
    ],
    "layout": {
        "header": "Sticky top bar with logo left and navigation right",
        "main": "Hero banner followed by a three-column feature grid",
        "footer": "Two-row footer with links and copyright",
    },
    "elements": [
        {"type": "navigation", "description": "Horizontal menu with five links"},
        {"type": "hero", "description": "Large headline with a primary call-to-action"},
        {"type": "cards", "description": "Feature cards with icon, title and blurb"},
    ],
    "images": [{"src": "/images/hero.jpg", "alt": "Hero illustration", "type": "hero"}],
    "contentStructure": {
        "hierarchy": "Single landing page with anchored sections",
        "mainSections": ["Hero", "Features", "Testimonials", "Contact"],
        "contentDensity": "medium",
    },
})

_DRY_RUN_REDESIGN = json.dumps({
    "html": (
        "<!DOCTYPE html><html lang=\"en\"><head><meta charset=\"UTF-8\">"
        "<title>Dry-run redesign</title></head><body>"
        "<main class=\"dry-run\"><h1 class=\"dry-run-title\">Dry-run redesign</h1>"
        "<p>No model was called.</p></main></body></html>"
    ),
    "css": (
        ".dry-run { max-width: 720px; margin: 4rem auto; font-family: system-ui, sans-serif; }\n"
        ".dry-run-title { font-size: 2rem; }\n"
    ),
    "preview": "Dry-run output: a single centered column with a headline. No model was called.",
})


class DryRunAdapter(ProviderAdapter):
    """Drop-in adapter that returns canned JSON without any network call."""

    def __init__(self, name: str = "dry-run") -> None:
        super().__init__(max_retries=0)
        self.name = name
        self.default_model = "dry-run"
        self.models = [ModelInfo(id="dry-run", name="Dry run", description="Canned responses, no API calls")]

    def _build_client(self, secret: str) -> Any:
        return object()

    async def _send(self, client: Any, system: str, user: str, model: str) -> str:
        if "web designer" in system.lower():
            return f"```json\n{_DRY_RUN_REDESIGN}\n```"
        return _DRY_RUN_ANALYSIS
