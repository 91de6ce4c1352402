"""Website analyzer — asks a model for a site's design identity.

Flow per call: normalize URL → check key → baseline → AI attempt →
merge → best-effort save. Only a missing key reaches the caller as an
error; every AI failure degrades to the baseline.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any

from pydantic import BaseModel, ValidationError

from restyle.agents.analyzer.baseline import build_baseline
from restyle.agents.analyzer.prompts import SYSTEM_PROMPT, build_analysis_prompt
from restyle.agents.base import BaseAgent, ProgressCallback, decode_json_object
from restyle.schemas.website import AnalysisOutput, WebsiteData
from restyle.shared.errors import CredentialMissing, ProviderCallError, ResponseShapeError

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*://")

# AnalysisOutput fields that may override the baseline
_MERGE_FIELDS = ("colors", "fonts", "layout", "elements", "images", "content_structure")


def normalize_url(url: str) -> str:
    """Prepend ``https://`` when ``url`` has no scheme."""
    url = url.strip()
    if not url:
        raise ValueError("URL must not be empty")
    if not _SCHEME_RE.match(url):
        url = "https://" + url
    return url


def _is_present(value: Any) -> bool:
    if isinstance(value, BaseModel):
        return bool(value.model_dump(exclude_defaults=True))
    return bool(value)


def merge_analysis(baseline: WebsiteData, output: AnalysisOutput) -> WebsiteData:
    """Overlay the model's fields on the baseline.

    A field overrides the baseline only when present and non-empty; an
    empty ``colors`` list counts as absent.
    """
    updates = {
        field: getattr(output, field)
        for field in _MERGE_FIELDS
        if _is_present(getattr(output, field))
    }
    return baseline.model_copy(update=updates)


class AnalyzerAgent(BaseAgent):
    """Produces a ``WebsiteData`` for a URL using one provider."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def name(self) -> str:
        return "Website Analyzer"

    def get_system_prompt(self) -> str:
        return SYSTEM_PROMPT

    def parse_output(self, raw_text: str) -> AnalysisOutput:
        data = decode_json_object(raw_text)
        try:
            return AnalysisOutput.model_validate(data)
        except ValidationError as exc:
            raise ResponseShapeError(f"Analysis has unexpected shape: {exc}", raw_text) from exc

    async def analyze(
        self,
        url: str,
        provider: str = "openai",
        model_id: str | None = None,
        *,
        on_progress: ProgressCallback | None = None,
    ) -> WebsiteData:
        """Analyze ``url`` with ``provider``.

        Raises ``CredentialMissing`` when no key is stored for the provider.
        Never raises for provider or response failures.
        """
        url = normalize_url(url)

        if on_progress:
            on_progress("Checking API key…")
        if not await self.registry.has_credential(provider):
            raise CredentialMissing(provider)

        baseline = build_baseline(url)
        result = baseline

        if on_progress:
            on_progress(f"Analyzing {url} with {provider}…")
        prompt = build_analysis_prompt(url)
        client = await self.registry.resolve(provider)
        if client is None:
            logger.warning("No usable %s client; returning baseline analysis for %s", provider, url)
        else:
            try:
                output = await self.generate(client, provider, prompt, model_id)
                result = merge_analysis(baseline, output)
            except (ProviderCallError, ResponseShapeError) as exc:
                logger.warning("AI analysis of %s failed, using baseline data: %s", url, exc)

        self._persist(result)
        return result

    # ------------------------------------------------------------------
    # Fire-and-forget persistence
    # ------------------------------------------------------------------

    def _persist(self, data: WebsiteData) -> None:
        if self.persistence is None:
            return
        task = asyncio.create_task(self._save(data))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _save(self, data: WebsiteData) -> None:
        try:
            analysis_id = await self.persistence.save_analysis(data)
        except Exception as exc:
            logger.warning("Error saving website analysis for %s: %s", data.url, exc)
            return
        logger.info("Saved analysis %s for %s", analysis_id, data.url)

    async def drain(self) -> None:
        """Wait for outstanding saves started by ``analyze``."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
