"""Pydantic models for website analysis and redesign results."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DesignStyle(str, Enum):
    """The visual styles a redesign can target."""

    MINIMALIST = "minimalist"
    BRUTALIST = "brutalist"
    GLASSMORPHISM = "glassmorphism"
    NEUMORPHISM = "neumorphism"
    MATERIAL = "material"
    FLAT = "flat"


class FontDescriptor(BaseModel):
    """A font with the role it plays on the page."""

    name: str
    purpose: str = ""


class ElementDescriptor(BaseModel):
    """A structural UI element found on the page."""

    type: str
    description: str = ""


class ImageDescriptor(BaseModel):
    src: str
    alt: str | None = None
    type: str = ""


class ContentStructure(BaseModel):
    hierarchy: str = ""
    main_sections: list[str] = Field(default_factory=list, alias="mainSections")
    content_density: str = Field(default="", alias="contentDensity")

    model_config = ConfigDict(populate_by_name=True)


class WebsiteData(BaseModel):
    """Result of analyzing a website.

    ``colors`` are ordered by visual prominence. ``fonts`` may hold plain
    names or ``FontDescriptor`` entries and ``layout`` may be a sentence or
    a mapping of layout aspect to description, depending on what the model
    returned.
    """

    url: str
    colors: list[str]
    fonts: list[str | FontDescriptor]
    layout: str | dict[str, Any]
    elements: list[ElementDescriptor]
    images: list[ImageDescriptor] | None = None
    content_structure: ContentStructure | None = Field(default=None, alias="contentStructure")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def font_names(self) -> list[str]:
        """Return font names, dropping the purpose of descriptor entries."""
        return [f if isinstance(f, str) else f.name for f in self.fonts]


class RedesignRequest(BaseModel):
    website_data: WebsiteData = Field(alias="websiteData")
    design_style: DesignStyle = Field(alias="designStyle")

    model_config = ConfigDict(populate_by_name=True)


class RedesignResult(BaseModel):
    """Generated redesign. ``id`` is set only when the result was persisted."""

    id: str | None = None
    html: str
    css: str
    preview: str


class ModelInfo(BaseModel):
    """A selectable model in a provider's catalogue."""

    id: str
    name: str
    description: str = ""


class AnalysisOutput(BaseModel):
    """What the model returned for an analysis. Every field may be missing or null."""

    colors: list[str] = []
    fonts: list[str | FontDescriptor] = []
    layout: str | dict[str, Any] | None = None
    elements: list[ElementDescriptor] = []
    images: list[ImageDescriptor] = []
    content_structure: ContentStructure | None = Field(default=None, alias="contentStructure")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("colors", "fonts", "elements", "images", mode="before")
    @classmethod
    def null_list_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class RedesignOutput(BaseModel):
    """What the model returned for a redesign. All three keys are required."""

    html: str
    css: str
    preview: str
