"""Export helpers — write analyses and redesigns to disk."""

from __future__ import annotations

import json
import re
from pathlib import Path

from restyle.schemas.website import RedesignRequest, RedesignResult, WebsiteData

STYLESHEET_NAME = "styles.css"

_HEAD_CLOSE_RE = re.compile(r"</head\s*>", re.IGNORECASE)
_HTML_OPEN_RE = re.compile(r"<html[^>]*>", re.IGNORECASE)


def write_analysis(data: WebsiteData, path: str | Path) -> Path:
    """Write an analysis as JSON (camelCase keys) and return the path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data.model_dump(mode="json", by_alias=True), indent=2))
    return path


def load_analysis(path: str | Path) -> WebsiteData:
    return WebsiteData.model_validate_json(Path(path).read_text())


def _insert_in_head(html: str, fragment: str) -> str:
    if match := _HEAD_CLOSE_RE.search(html):
        return html[: match.start()] + fragment + "\n" + html[match.start():]
    head = f"<head>\n{fragment}\n</head>"
    if match := _HTML_OPEN_RE.search(html):
        return html[: match.end()] + "\n" + head + html[match.end():]
    return head + "\n" + html


def link_stylesheet(html: str, href: str = STYLESHEET_NAME) -> str:
    """Reference ``href`` from the document head, unless already linked."""
    if re.search(rf"""<link[^>]+href=["']{re.escape(href)}["']""", html, re.IGNORECASE):
        return html
    return _insert_in_head(html, f'  <link rel="stylesheet" href="{href}">')


def inline_stylesheet(html: str, css: str) -> str:
    """Embed ``css`` in a ``<style>`` block in the document head."""
    return _insert_in_head(html, f"  <style>\n{css}\n  </style>")


def render_preview_markdown(request: RedesignRequest, result: RedesignResult) -> str:
    data = request.website_data
    lines = [
        f"# {request.design_style.value.title()} redesign of {data.url}",
        "",
    ]
    if result.id:
        lines += [f"*Saved as redesign `{result.id}`*", ""]
    lines += ["## Preview", "", result.preview, ""]
    lines += ["## Source analysis", ""]
    if data.colors:
        lines.append(f"- **Colors:** {', '.join(data.colors)}")
    if fonts := data.font_names():
        lines.append(f"- **Fonts:** {', '.join(fonts)}")
    if data.elements:
        lines.append(f"- **Elements:** {', '.join(e.type for e in data.elements)}")
    lines.append("")
    return "\n".join(lines)


def write_redesign(
    result: RedesignResult,
    out_dir: str | Path,
    inline: bool = False,
    request: RedesignRequest | None = None,
) -> dict[str, Path]:
    """Write ``index.html`` (plus ``styles.css`` unless inlined) and ``preview.md``.

    Returns the written paths keyed by kind.
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    paths: dict[str, Path] = {}

    if inline:
        html = inline_stylesheet(result.html, result.css)
    else:
        html = link_stylesheet(result.html)
        paths["css"] = out_dir / STYLESHEET_NAME
        paths["css"].write_text(result.css)

    paths["html"] = out_dir / "index.html"
    paths["html"].write_text(html)

    paths["preview"] = out_dir / "preview.md"
    if request is not None:
        paths["preview"].write_text(render_preview_markdown(request, result))
    else:
        paths["preview"].write_text(result.preview + "\n")
    return paths
