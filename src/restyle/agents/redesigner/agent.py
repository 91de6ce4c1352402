"""Website redesigner — turns an analysis into a complete HTML/CSS page.

Flow per call: prompt → resolve client → AI attempt → template fallback →
best-effort save. ``redesign`` never raises; every failure degrades to
the static bundle for the requested style.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from restyle.agents.base import BaseAgent, ProgressCallback, decode_json_object
from restyle.agents.redesigner.fallback import render_template
from restyle.agents.redesigner.prompts import SYSTEM_PROMPT, build_redesign_prompt
from restyle.schemas.website import RedesignOutput, RedesignRequest, RedesignResult
from restyle.shared.errors import ProviderCallError, ResponseShapeError

logger = logging.getLogger(__name__)


class RedesignerAgent(BaseAgent):
    """Produces a ``RedesignResult`` for an analysis and a target style."""

    @property
    def name(self) -> str:
        return "Website Redesigner"

    def get_system_prompt(self) -> str:
        return SYSTEM_PROMPT

    def parse_output(self, raw_text: str) -> RedesignOutput:
        data = decode_json_object(raw_text)
        try:
            output = RedesignOutput.model_validate(data)
        except ValidationError as exc:
            raise ResponseShapeError(f"Redesign has unexpected shape: {exc}", raw_text) from exc
        empty = [k for k in ("html", "css", "preview") if not getattr(output, k).strip()]
        if empty:
            raise ResponseShapeError(f"Redesign has empty fields: {', '.join(empty)}", raw_text)
        return output

    async def redesign(
        self,
        request: RedesignRequest,
        provider: str = "openai",
        model_id: str | None = None,
        *,
        on_progress: ProgressCallback | None = None,
    ) -> RedesignResult:
        """Redesign ``request.website_data`` in ``request.design_style``.

        Missing keys, provider errors and malformed replies all fall back
        to the template for the style. The result carries an ``id`` only
        if it was saved.
        """
        data = request.website_data
        style = request.design_style
        result: RedesignResult | None = None

        if on_progress:
            on_progress(f"Generating {style.value} redesign with {provider}…")
        prompt = build_redesign_prompt(data, style)

        client = await self.registry.resolve(provider)
        if client is None:
            logger.warning("No usable %s client; using %s template", provider, style.value)
        else:
            try:
                output = await self.generate(client, provider, prompt, model_id)
                result = RedesignResult(html=output.html, css=output.css, preview=output.preview)
            except (ProviderCallError, ResponseShapeError) as exc:
                logger.warning("AI redesign failed, using %s template: %s", style.value, exc)

        if result is None:
            if on_progress:
                on_progress(f"Rendering {style.value} template…")
            result = render_template(data, style)

        if on_progress:
            on_progress("Saving redesign…")
        redesign_id = await self._persist(request, result)
        if redesign_id is not None:
            result = result.model_copy(update={"id": redesign_id})
        return result

    async def _persist(self, request: RedesignRequest, result: RedesignResult) -> str | None:
        """Save the analysis, then the redesign that references it."""
        if self.persistence is None:
            return None
        try:
            analysis_id = await self.persistence.save_analysis(request.website_data)
            redesign_id = await self.persistence.save_redesign(
                analysis_id,
                request.design_style.value,
                result.html,
                result.css,
                result.preview,
            )
        except Exception as exc:
            logger.warning("Error saving redesign for %s: %s", request.website_data.url, exc)
            return None
        logger.info("Saved redesign %s (analysis %s)", redesign_id, analysis_id)
        return redesign_id
