# -*- coding: utf-8 -*-
"""
Tests for the Pydantic API models.
"""
import pytest
from pydantic import ValidationError

from rich_content.models import (
    AssetsResponse,
    ContentRequest,
    FieldsRequest,
    NormalizeResponse,
    PreviewRequest,
    ProcessRequest,
    RenderResponse,
)
from rich_content.nodes import AssetDescriptor, Document


class TestModels:
    """Tests for the API models."""

    def test_content_request_accepts_any_shape(self):
        """ContentRequest accepts arrays, strings, wrappers and null."""
        assert ContentRequest().content is None
        assert ContentRequest(content=[{"type": "paragraph"}]).content == [{"type": "paragraph"}]
        assert ContentRequest(content="[]").content == "[]"
        assert ContentRequest(content={"type": "doc"}).content == {"type": "doc"}

    def test_fields_request_keeps_order(self):
        """FieldsRequest preserves field order."""
        req = FieldsRequest(fields={"b": [], "a": [], "c": None})
        assert list(req.fields) == ["b", "a", "c"]

    def test_fields_request_requires_fields(self):
        """FieldsRequest requires the fields mapping."""
        with pytest.raises(ValidationError):
            FieldsRequest()

    def test_process_request_defaults(self):
        """ProcessRequest runs every stage by default."""
        req = ProcessRequest(content=[])
        assert req.extract_assets is True
        assert req.render_html is True

    def test_preview_title_length(self):
        """PreviewRequest rejects overly long titles."""
        with pytest.raises(ValidationError):
            PreviewRequest(title="x" * 201)

    def test_normalize_response_serialization(self):
        """NormalizeResponse serializes the document wire shape."""
        resp = NormalizeResponse(document=Document())
        assert resp.model_dump() == {"document": {"type": "doc", "content": []}}

    def test_assets_response(self):
        """AssetsResponse serializes descriptors with null optionals."""
        resp = AssetsResponse(assets=[AssetDescriptor(src="a.png")], count=1)
        assert resp.model_dump() == {"assets": [{"src": "a.png", "alt": None, "title": None}], "count": 1}

    def test_render_response_defaults(self):
        """RenderResponse defaults to empty."""
        resp = RenderResponse()
        assert resp.html == ""
        assert resp.empty is True
