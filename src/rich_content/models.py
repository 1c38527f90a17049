# -*- coding: utf-8 -*-
"""
Pydantic data models for the API.
"""
from typing import Any

from pydantic import BaseModel, Field

from .nodes import AssetDescriptor, Document


class ContentRequest(BaseModel):
    """Stored rich content in any accepted shape."""

    content: Any = Field(
        default=None,
        description="Node array, JSON-encoded node array, doc wrapper, or null",
    )


class FieldsRequest(BaseModel):
    """Several named rich-text fields of one record, in priority order."""

    fields: dict[str, Any] = Field(..., description="Field name to stored content")


class RenderBatchRequest(BaseModel):
    """Several stored documents to render (e.g. the comments of a page)."""

    items: list[Any] = Field(..., description="Stored content values")


class PreviewRequest(ContentRequest):
    """Content to render inside a standalone preview page."""

    title: str | None = Field(default=None, max_length=200)


class ProcessRequest(ContentRequest):
    """Full pipeline request."""

    extract_assets: bool = Field(default=True, description="Collect unique images")
    render_html: bool = Field(default=True, description="Render HTML")


class NormalizeResponse(BaseModel):
    """Canonical document."""

    document: Document


class AssetsResponse(BaseModel):
    """Unique assets in first-seen order."""

    assets: list[AssetDescriptor] = Field(default_factory=list)
    count: int = 0


class RenderResponse(BaseModel):
    """Rendered HTML."""

    html: str = ""
    empty: bool = True


class ProcessResponse(BaseModel):
    """Full pipeline response."""

    document: Document
    assets: list[AssetDescriptor] = Field(default_factory=list)
    html: str = ""
    steps_applied: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    version: str
