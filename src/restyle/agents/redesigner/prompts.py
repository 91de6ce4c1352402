"""Prompts and style guides for the website redesigner."""

from __future__ import annotations

import json

from pydantic import BaseModel

from restyle.schemas.website import DesignStyle, WebsiteData

SYSTEM_PROMPT = """\
You are a professional web designer specialized in creating modern, responsive \
websites. You generate clean HTML and CSS code based on design requirements and \
reply with a single JSON object.
"""


class StyleGuide(BaseModel):
    """Design direction handed to the model for one style."""

    description: str
    techniques: list[str]
    color_palette: str
    typography: str
    spacing: str
    layout: str


STYLE_GUIDES: dict[DesignStyle, StyleGuide] = {
    DesignStyle.MINIMALIST: StyleGuide(
        description=(
            "Ultra-clean, sophisticated design with maximum impact through simplicity. "
            "Think Apple, Google, or Stripe."
        ),
        techniques=[
            "CSS Grid and Flexbox for precise layouts",
            "Micro-animations with CSS transitions (0.3s ease)",
            "Subtle hover lifts (transform: translateY(-2px))",
            "Custom properties (--primary-color) for consistency",
            "Smooth scrolling behavior",
            "focus-visible outlines for accessibility",
            "System font stack for performance",
        ],
        color_palette=(
            "Monochromatic: #ffffff, #f8f9fa, #e9ecef, #6c757d, #212529, "
            "with one vibrant accent such as #007bff or #28a745"
        ),
        typography=(
            'System font stack: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, '
            "sans-serif. 16px base, 1.5 line-height, weights 400, 500, 600"
        ),
        spacing="8px grid: 8px, 16px, 24px, 32px, 48px, 64px, 96px",
        layout="Centered max-width containers (1200px), generous whitespace (64px+ sections), single-column focus",
    ),
    DesignStyle.BRUTALIST: StyleGuide(
        description=(
            "Bold, rebellious design that breaks conventional rules. "
            "Raw power meets digital aesthetics."
        ),
        techniques=[
            "CSS transforms for dynamic layouts",
            "Bold typography mixing (serif + monospace)",
            "Glitch effects with CSS keyframe animations",
            "clip-path for geometric shapes",
            "Deliberately 'broken' layouts that still work",
            "Thick borders and hard offset shadows",
            "High contrast for maximum impact",
        ],
        color_palette="High contrast: #000000, #ffffff, #ff0000, #00ff00, #0000ff, #ffff00, #ff00ff",
        typography="Monospace (Courier New, Monaco) mixed with heavy sans-serif; weights 700 and 900",
        spacing="Irregular spacing, overlapping elements, asymmetrical rhythm",
        layout="Grid-based chaos, overlapping sections, bold geometric blocks",
    ),
    DesignStyle.GLASSMORPHISM: StyleGuide(
        description=(
            "Ethereal, floating design with depth and transparency. "
            "Modern sophistication meets visual innovation."
        ),
        techniques=[
            "backdrop-filter: blur(20px) saturate(180%)",
            "Custom properties for glass tints and borders",
            "Layered z-index hierarchy",
            "Subtle animations using will-change",
            "Translucent borders (rgba(255,255,255,0.2))",
            "Progressive blur between layers",
            "Hover transformations on cards",
        ],
        color_palette=(
            "Gradients and transparency: rgba(255,255,255,0.1), "
            "linear-gradient(135deg, #667eea 0%, #764ba2 100%)"
        ),
        typography="Light, airy fonts: Inter, SF Pro Display, weights 300-600",
        spacing="Floating elements with generous padding (32px+), overlapping cards",
        layout="Layered cards, floating navigation, depth through transparency",
    ),
    DesignStyle.NEUMORPHISM: StyleGuide(
        description=(
            "Soft, tactile design that feels touchable. "
            "Digital interfaces that mimic physical materials."
        ),
        techniques=[
            "Paired light and dark box-shadows (inset and outset)",
            "Custom properties for consistent shadows",
            "Micro-interactions on hover",
            "Subtle gradient backgrounds",
            "Consistent border-radius (12px-24px)",
            "Pressed states for buttons",
            "Ambient lighting from a single direction",
        ],
        color_palette="Soft neutrals: #e0e5ec, #f0f2f5, #d1d9e6, #bec8d1, with subtle colored accents",
        typography="Soft, rounded fonts: Poppins, Nunito, weights 400-600",
        spacing="Consistent 24px padding, soft margins, flowing layouts",
        layout="Soft cards, gentle curves, tactile button styles",
    ),
    DesignStyle.MATERIAL: StyleGuide(
        description=(
            "Material Design 3 principles. Bold, intentional, and delightfully interactive."
        ),
        techniques=[
            "Elevation system (0-24dp) expressed as layered shadows",
            "Ripple effects with CSS animations",
            "Floating action button with proper shadow",
            "Material color roles (primary, surface, on-surface)",
            "Standard motion curves (cubic-bezier(0.2, 0, 0, 1))",
            "State layers for hover, focus and pressed",
            "Shaped containers with rounded corners",
        ],
        color_palette=(
            "Material You: #6750a4 (primary), #e8def8 (surface), #1d1b20 (on-surface), "
            "with tonal variants"
        ),
        typography="Roboto or system fonts; type scale 12, 14, 16, 22, 28, 36px",
        spacing="8dp grid: 8, 16, 24, 32, 40dp",
        layout="Top app bar, card grid, FAB positioning, systematic elevation",
    ),
    DesignStyle.FLAT: StyleGuide(
        description=(
            "Clean, direct design with bold colors and sharp edges. "
            "Maximum clarity and usability."
        ),
        techniques=[
            "Bold, saturated color blocks",
            "Button states without shadows or gradients",
            "Simple hover animations (scale, color change)",
            "CSS Grid for precise layouts",
            "Icons drawn with inline SVG or CSS shapes",
            "Clean form styling",
            "Geometric shapes and patterns",
        ],
        color_palette="Bright, saturated: #3498db, #e74c3c, #2ecc71, #f39c12, #9b59b6, #34495e, #ecf0f1",
        typography="Clean sans-serif: Open Sans, Helvetica Neue, weights 400, 600, 700",
        spacing="Consistent 16px grid, clean margins, precise alignment",
        layout="Sharp edges, grid-based sections, bold contrast",
    ),
}

GENERIC_GUIDE = StyleGuide(
    description="A clean, modern, professional redesign that respects the original brand.",
    techniques=[
        "CSS Grid and Flexbox for layouts",
        "Custom properties for colors and spacing",
        "Smooth transitions on interactive elements",
        "Accessible focus states",
    ],
    color_palette="Derived from the original site's colors, with sufficient contrast",
    typography="Readable sans-serif stack with a clear heading scale",
    spacing="Consistent 8px spacing scale",
    layout="Centered container, clear sections, responsive grid",
)


def get_style_guide(style: DesignStyle | str) -> StyleGuide | None:
    """Look up the guide for ``style``; None for unknown styles."""
    try:
        return STYLE_GUIDES.get(DesignStyle(style))
    except ValueError:
        return None


def _style_label(style: DesignStyle | str) -> str:
    return style.value if isinstance(style, DesignStyle) else str(style)


def _describe_site(data: WebsiteData) -> str:
    content = (
        data.content_structure.model_dump(by_alias=True)
        if data.content_structure
        else "Not provided"
    )
    elements = [e.model_dump() for e in data.elements]
    return "\n".join([
        f"URL: {data.url}",
        f"Current Colors: {', '.join(data.colors)}",
        f"Current Fonts: {', '.join(data.font_names())}",
        f"Layout Structure: {json.dumps(data.layout)}",
        f"Key Elements: {json.dumps(elements)}",
        f"Content Structure: {json.dumps(content)}",
    ])


def build_redesign_prompt(data: WebsiteData, style: DesignStyle | str) -> str:
    """Return the redesign instruction for ``data`` in ``style``.

    Pure and deterministic. Unknown styles get a generic guide.
    """
    label = _style_label(style)
    guide = get_style_guide(style)
    if guide is None:
        guide = GENERIC_GUIDE
        heading = f"TARGET DESIGN STYLE: {label.upper()} (no predefined guide; use a modern generic approach)"
    else:
        heading = f"TARGET DESIGN STYLE: {label.upper()}"

    techniques = "\n".join(f"- {t}" for t in guide.techniques)

    return f"""\
Completely redesign this website using {label} design principles.

## ORIGINAL WEBSITE ANALYSIS
{_describe_site(data)}

## {heading}
{guide.description}

## CSS TECHNIQUES TO IMPLEMENT
{techniques}

## COLOR PALETTE
{guide.color_palette}

## TYPOGRAPHY SYSTEM
{guide.typography}

## SPACING & LAYOUT SYSTEM
{guide.spacing}
{guide.layout}

## REQUIREMENTS
1. Visual transformation: redesign the hierarchy and every UI element \
(navigation, hero, content sections, forms, buttons, footer) in {label} style \
while keeping the original content structure.
2. Modern standards: semantic HTML5, CSS Grid and Flexbox, custom properties, \
transitions, accessible focus states and ARIA labels.
3. Responsive, mobile-first breakpoints:
   - Mobile: 375px+ (stacked elements, larger touch targets)
   - Tablet: 768px+ (adjusted layouts and spacing)
   - Desktop: 1024px+ (full layout, hover effects)
   - Large: 1440px+ (max-width containers, preserved readability)
4. No external resources: NEVER reference external URLs for images, fonts, \
scripts or stylesheets (no remote images, no web fonts, no placeholder services). \
Use only CSS gradients, colors and shapes for visual elements.
5. The "html" value must be one complete, standalone HTML5 document \
(<!DOCTYPE html> … </html>) and every class it uses must be styled in "css".

## OUTPUT FORMAT
Return ONLY a single JSON object with exactly these keys:

{{
  "html": "<!DOCTYPE html><html lang='en'>...</html>",
  "css": "Complete stylesheet: reset, custom properties, base, layout, components, responsive breakpoints, animations",
  "preview": "Prose description of the transformation: key {label} features, color and typography choices, user experience improvements"
}}
"""
