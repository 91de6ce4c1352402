"""Base agent ABC and JSON extraction helpers shared by both orchestrators."""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Callable

from pydantic import BaseModel

from restyle.shared.errors import ProviderCallError, ResponseShapeError
from restyle.shared.persistence import PersistenceSink
from restyle.shared.registry import ProviderRegistry

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]
"""Called with a short status message as the pipeline advances."""

_FENCE_RE = re.compile(r"```(?:json)?\s*\n?(.*?)\n?```", re.DOTALL | re.IGNORECASE)


def extract_json(text: str) -> str:
    """Strip a markdown code fence from model output.

    Returns the trimmed interior of the first fenced block, or the trimmed
    text itself when there is none. The result is not validated as JSON.
    """
    match = _FENCE_RE.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def decode_json_object(text: str) -> dict[str, Any]:
    """De-fence and parse model output, requiring a JSON object.

    Raises ``ResponseShapeError`` if the payload is not valid JSON or is
    not an object.
    """
    payload = extract_json(text)
    try:
        data = json.loads(payload)
    except json.JSONDecodeError:
        # Might have trailing text, so try raw_decode from the first brace
        try:
            start = payload.index("{")
            data, _ = json.JSONDecoder().raw_decode(payload, idx=start)
        except (ValueError, json.JSONDecodeError):
            raise ResponseShapeError("Model response is not valid JSON", text) from None
    if not isinstance(data, dict):
        raise ResponseShapeError(
            f"Expected a JSON object, got {type(data).__name__}", text
        )
    return data


class BaseAgent(ABC):
    """Abstract base class for the analyze and redesign pipelines.

    Subclasses implement:
    - ``name`` — human-readable agent name
    - ``get_system_prompt()`` — returns the system prompt string
    - ``parse_output(raw_text)`` — parses the model's text into a Pydantic model
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        persistence: PersistenceSink | None = None,
    ) -> None:
        self.registry = registry
        self.persistence = persistence

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for progress display."""

    @abstractmethod
    def get_system_prompt(self) -> str:
        """Return the system prompt for this agent."""

    @abstractmethod
    def parse_output(self, raw_text: str) -> BaseModel:
        """Parse the model's final text response into a Pydantic model."""

    async def generate(
        self,
        client: Any,
        provider: str,
        user_message: str,
        model_id: str | None = None,
    ) -> BaseModel:
        """Call the provider with an already resolved client and parse the reply.

        Raises ``ProviderCallError`` or ``ResponseShapeError``; callers decide
        the fallback.
        """
        adapter = self.registry.adapter(provider)
        if adapter is None:
            raise ProviderCallError(provider, model_id, "unsupported provider")
        model = self.registry.select_model(provider, model_id)

        raw = await adapter.complete(
            client,
            [
                {"role": "system", "content": self.get_system_prompt()},
                {"role": "user", "content": user_message},
            ],
            model,
        )
        logger.debug("Agent %s raw output:\n%s", self.name, raw[:500])
        return self.parse_output(raw)
