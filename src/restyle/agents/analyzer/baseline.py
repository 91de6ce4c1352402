"""Deterministic structural placeholder used when the model can't help."""

from __future__ import annotations

from restyle.schemas.website import (
    ContentStructure,
    ElementDescriptor,
    FontDescriptor,
    WebsiteData,
)

BASELINE_COLORS = ["#1f2937", "#ffffff", "#3b82f6", "#6b7280", "#f3f4f6"]

BASELINE_FONTS: list[str | FontDescriptor] = [
    FontDescriptor(name="Arial", purpose="body text"),
    FontDescriptor(name="Helvetica", purpose="headings"),
]

BASELINE_LAYOUT = {
    "header": "Top bar with logo and primary navigation",
    "navigation": "Horizontal menu of top-level pages",
    "main": "Hero section followed by stacked content sections",
    "footer": "Footer with secondary links and copyright",
}

BASELINE_ELEMENTS = [
    ElementDescriptor(type="header", description="Site header containing the logo"),
    ElementDescriptor(type="navigation", description="Primary navigation menu"),
    ElementDescriptor(type="hero", description="Introductory banner with headline and call-to-action"),
    ElementDescriptor(type="content", description="Main content sections"),
    ElementDescriptor(type="footer", description="Footer with links and copyright notice"),
]

BASELINE_CONTENT_STRUCTURE = ContentStructure(
    hierarchy="Header, hero, content sections, footer",
    main_sections=["Header", "Hero", "Content", "Footer"],
    content_density="medium",
)


def build_baseline(url: str) -> WebsiteData:
    """Return the baseline analysis for an already normalized ``url``.

    Nested models are copied so callers may mutate the result freely.
    """
    return WebsiteData(
        url=url,
        colors=list(BASELINE_COLORS),
        fonts=[f.model_copy(deep=True) if isinstance(f, FontDescriptor) else f for f in BASELINE_FONTS],
        layout=dict(BASELINE_LAYOUT),
        elements=[e.model_copy(deep=True) for e in BASELINE_ELEMENTS],
        images=[],
        content_structure=BASELINE_CONTENT_STRUCTURE.model_copy(deep=True),
    )
