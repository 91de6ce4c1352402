"""Static style bundles used when no model output is usable.

Markup and stylesheets live in ``templates/`` as Jinja2 files, one
``<style>.html`` / ``<style>.css`` pair per design style plus a
``generic`` pair that is filled in from the analysis' colors and fonts.
Each bundle's HTML only uses class names its CSS defines.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import BaseModel

from restyle.schemas.website import DesignStyle, RedesignResult, WebsiteData

logger = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).parent / "templates"

# HTML is autoescaped; CSS values are sanitized before they reach the template.
env = Environment(
    loader=FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
)


class StyleBundle(BaseModel):
    html: str
    css: str
    highlights: list[str]


STYLE_HIGHLIGHTS: dict[DesignStyle, list[str]] = {
    DesignStyle.MINIMALIST: [
        "Clean, spacious layout with plenty of whitespace",
        "Minimal color palette focused on typography",
        "Simple navigation and clear content hierarchy",
        "No unnecessary visual elements or decorations",
    ],
    DesignStyle.BRUTALIST: [
        "Bold, high-contrast design with a raw aesthetic",
        "Monospaced typography and geometric blocks",
        "Thick borders and hard offset shadows",
        "Strong visual impact with primary colors",
    ],
    DesignStyle.GLASSMORPHISM: [
        "Transparent glass-like panels with blur effects",
        "Layered depth with soft shadows",
        "Vivid gradient background with blurred color orbs",
        "Elegant, sophisticated appearance",
    ],
    DesignStyle.NEUMORPHISM: [
        "Soft shadows creating embossed and pressed effects",
        "Monochromatic color scheme with subtle variations",
        "Rounded corners and a tactile appearance",
        "Low contrast, gentle visual hierarchy",
    ],
    DesignStyle.MATERIAL: [
        "Card-based layout with elevation shadows",
        "Material color roles around a purple primary",
        "Top app bar and floating action button",
        "Standard motion curves on every interaction",
    ],
    DesignStyle.FLAT: [
        "Flat design with no shadows or gradients",
        "Bold, solid colors and simple shapes",
        "Clean typography and a direct hierarchy",
        "2D aesthetic with sharp, defined edges",
    ],
}

GENERIC_HIGHLIGHTS = [
    "Layout rebuilt around a centered container",
    "Colors and fonts carried over from the original analysis",
    "Responsive navigation that stacks on small screens",
]


def _render(name: str, **context) -> str:
    return env.get_template(name).render(**context)


def load_bundle(style: DesignStyle) -> StyleBundle:
    """Render the static template pair for ``style``."""
    return StyleBundle(
        html=_render(f"{style.value}.html"),
        css=_render(f"{style.value}.css"),
        highlights=list(STYLE_HIGHLIGHTS[style]),
    )


TEMPLATES: dict[DesignStyle, StyleBundle] = {style: load_bundle(style) for style in STYLE_HIGHLIGHTS}


def _style_label(style: DesignStyle | str) -> str:
    return style.value if isinstance(style, DesignStyle) else str(style)


def build_preview(style: DesignStyle | str, highlights: list[str]) -> str:
    label = _style_label(style)
    bullets = "\n".join(f"- {h}" for h in highlights)
    return (
        f"This {label} redesign transforms the original website with "
        f"{label}-specific design principles:\n\n{bullets}\n\n"
        f"The redesign keeps the original content structure while changing the "
        f"visual presentation to follow the {label} design philosophy."
    )


# ----------------------------------------------------------------------
# Generic fallback for styles without a bundle
# ----------------------------------------------------------------------

_COLOR_RE = re.compile(r"^(#[0-9a-fA-F]{3,8}|[a-zA-Z]{3,20}|rgba?\([\d\s.,%]+\)|hsla?\([\d\s.,%deg]+\))$")
_FONT_RE = re.compile(r"^[\w\s\-]{1,60}$")


def _safe_color(value: str | None, default: str) -> str:
    if value and _COLOR_RE.match(value.strip()):
        return value.strip()
    return default


def _safe_font(value: str | None) -> str:
    if value and _FONT_RE.match(value.strip()):
        return value.strip()
    return ""


def generic_template(data: WebsiteData, style: DesignStyle | str) -> StyleBundle:
    """Synthesize a minimal document from the analysis' colors and fonts."""
    colors = data.colors
    fonts = data.font_names()
    primary = _safe_color(colors[0] if colors else None, "#1f2937")
    context = {
        "label": _style_label(style),
        "primary": primary,
        "background": _safe_color(colors[1] if len(colors) > 1 else None, "#ffffff"),
        "accent": _safe_color(colors[2] if len(colors) > 2 else None, "#3b82f6"),
        "font": _safe_font(fonts[0] if fonts else None),
    }
    return StyleBundle(
        html=_render("generic.html", **context),
        css=_render("generic.css", **context),
        highlights=list(GENERIC_HIGHLIGHTS),
    )


def render_template(data: WebsiteData, style: DesignStyle | str) -> RedesignResult:
    """Return the static redesign for ``style`` (generic when there is no bundle)."""
    try:
        bundle = TEMPLATES.get(DesignStyle(style))
    except ValueError:
        bundle = None
    if bundle is None:
        logger.debug("No bundle for style %r, using the generic template", style)
        bundle = generic_template(data, style)
    return RedesignResult(
        html=bundle.html,
        css=bundle.css,
        preview=build_preview(style, bundle.highlights),
    )
