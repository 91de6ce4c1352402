"""Prompts for the website analyzer."""

SYSTEM_PROMPT = """\
You are a web design analyzer that extracts design information from websites. \
You reply with a single JSON object and nothing else.
"""

ANALYSIS_PROMPT_TEMPLATE = """\
Analyze the design of this website and extract its visual identity.

Website: {url}

Return ONLY valid JSON, no markdown, with exactly these keys:

{{
  "colors": ["#1a1a2e", "#ffffff"],
  "fonts": [{{"name": "Inter", "purpose": "body text"}}],
  "layout": {{"header": "...", "navigation": "...", "main": "...", "footer": "..."}},
  "elements": [{{"type": "navigation", "description": "..."}}],
  "images": [{{"src": "/path/or/url", "type": "hero|logo|icon|content"}}],
  "contentStructure": {{
    "hierarchy": "...",
    "mainSections": ["..."],
    "contentDensity": "low|medium|high"
  }}
}}

Field requirements:
- colors: array of hex color strings, ordered from most to least visually prominent
- fonts: array of font descriptors, each {{"name", "purpose"}} (a plain font name string is also accepted)
- layout: structured description of the layout, keyed by area (header, navigation, main, sidebar, footer)
- elements: array of {{"type", "description"}} objects for the key UI elements and components
- images: array of {{"src", "type"}} objects for notable images
- contentStructure: object with "hierarchy" (string), "mainSections" (array of strings) \
and "contentDensity" (string)
"""


def build_analysis_prompt(url: str) -> str:
    """Return the analysis instruction for ``url``. Pure and deterministic."""
    return ANALYSIS_PROMPT_TEMPLATE.format(url=url)
