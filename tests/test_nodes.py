# -*- coding: utf-8 -*-
"""
Tests for the document model.
"""
import pytest
from pydantic import ValidationError

from rich_content.nodes import (
    AssetDescriptor,
    Document,
    HeadingAttrs,
    ImageAttrs,
    LinkAttrs,
    ParagraphAttrs,
    TableCellAttrs,
    YoutubeAttrs,
    make_node,
    node_attrs,
    node_children,
    node_marks,
    node_type,
)


class TestAccessors:
    """Tests for the tolerant node accessors."""

    def test_node_type(self):
        """Should return the type of a mapping node."""
        assert node_type({"type": "paragraph"}) == "paragraph"

    def test_node_type_invalid(self):
        """Should return None for non-mappings and non-string types."""
        assert node_type(None) is None
        assert node_type("paragraph") is None
        assert node_type({"type": 3}) is None
        assert node_type({}) is None

    def test_node_children_list(self):
        """Should return the content list."""
        child = {"type": "text", "text": "a"}
        assert node_children({"type": "paragraph", "content": [child]}) == [child]

    def test_node_children_malformed(self):
        """Non-list content counts as no children."""
        assert node_children({"type": "paragraph", "content": "oops"}) == []
        assert node_children({"type": "paragraph", "content": {"type": "text"}}) == []
        assert node_children({"type": "paragraph"}) == []
        assert node_children(42) == []

    def test_node_marks_deduplicates(self):
        """Should keep the first occurrence of each mark type."""
        node = {
            "type": "text",
            "text": "x",
            "marks": [
                {"type": "bold"},
                {"type": "link", "attrs": {"href": "https://a.example"}},
                {"type": "bold"},
                {"type": "link", "attrs": {"href": "https://b.example"}},
            ],
        }

        marks = node_marks(node)

        assert [m["type"] for m in marks] == ["bold", "link"]
        assert marks[1]["attrs"]["href"] == "https://a.example"

    def test_node_marks_skips_malformed(self):
        """Should skip marks without a string type."""
        node = {"type": "text", "marks": [None, "bold", {"attrs": {}}, {"type": "italic"}]}
        assert node_marks(node) == [{"type": "italic"}]

    def test_make_node_omits_absent_keys(self):
        """make_node should only include the keys it was given."""
        assert make_node("hardBreak") == {"type": "hardBreak"}
        assert make_node("text", text="hi") == {"type": "text", "text": "hi"}
        assert make_node("paragraph", []) == {"type": "paragraph", "content": []}


class TestAttributeViews:
    """Tests for typed attribute views."""

    def test_image_attrs(self):
        """Should read src/alt/title and keep unknown keys as extras."""
        node = make_node("image", attrs={"src": "a.png", "alt": "A", "title": "T", "width": 100})

        attrs = node_attrs(node, ImageAttrs)

        assert attrs.src == "a.png"
        assert attrs.alt == "A"
        assert attrs.title == "T"
        assert attrs.model_extra == {"width": 100}

    def test_image_attrs_requires_src(self):
        """Missing or empty src yields no view."""
        assert node_attrs(make_node("image", attrs={"alt": "A"}), ImageAttrs) is None
        assert node_attrs(make_node("image", attrs={"src": ""}), ImageAttrs) is None
        assert node_attrs(make_node("image", attrs={"src": 12}), ImageAttrs) is None
        assert node_attrs(make_node("image"), ImageAttrs) is None

    def test_image_attrs_non_string_alt(self):
        """Non-string alt/title are dropped."""
        attrs = node_attrs(make_node("image", attrs={"src": "a.png", "alt": 5, "title": ["x"]}), ImageAttrs)
        assert attrs.alt is None
        assert attrs.title is None

    def test_heading_level_coercion(self):
        """Heading level is coerced and clamped to 1..6."""
        assert node_attrs(make_node("heading", attrs={"level": 3}), HeadingAttrs).level == 3
        assert node_attrs(make_node("heading", attrs={"level": "2"}), HeadingAttrs).level == 2
        assert node_attrs(make_node("heading", attrs={"level": 9}), HeadingAttrs).level == 6
        assert node_attrs(make_node("heading", attrs={"level": 0}), HeadingAttrs).level == 1
        assert node_attrs(make_node("heading", attrs={"level": "big"}), HeadingAttrs).level == 1
        assert node_attrs(make_node("heading"), HeadingAttrs).level == 1

    def test_text_align(self):
        """Known alignments are read from textAlign, others ignored."""
        assert node_attrs(make_node("paragraph", attrs={"textAlign": "center"}), ParagraphAttrs).text_align == "center"
        assert node_attrs(make_node("paragraph", attrs={"textAlign": "diagonal"}), ParagraphAttrs).text_align is None
        assert node_attrs(make_node("paragraph", attrs="bad"), ParagraphAttrs).text_align is None

    def test_table_cell_spans(self):
        """Spans are at least 1."""
        attrs = node_attrs(make_node("tableCell", attrs={"colspan": 0, "rowspan": "3"}), TableCellAttrs)
        assert attrs.colspan == 1
        assert attrs.rowspan == 3

    def test_youtube_attrs(self):
        """Youtube dimensions and start are tolerant."""
        attrs = node_attrs(
            make_node("youtube", attrs={"src": "https://youtu.be/x", "width": "-5", "height": 360, "start": "abc"}),
            YoutubeAttrs,
        )
        assert attrs.width is None
        assert attrs.height == 360
        assert attrs.start == 0

    def test_link_attrs_class_alias(self):
        """Link class attribute maps to css_class."""
        mark = {"type": "link", "attrs": {"href": "https://example.com", "class": "external", "target": None}}
        attrs = node_attrs(mark, LinkAttrs)
        assert attrs.href == "https://example.com"
        assert attrs.css_class == "external"
        assert attrs.target is None


class TestDocument:
    """Tests for the Document wrapper."""

    def test_defaults(self):
        """Document defaults to empty content."""
        doc = Document()
        assert doc.type == "doc"
        assert doc.content == []
        assert doc.is_empty()

    def test_value_equality(self):
        """Documents compare by content."""
        nodes = [make_node("paragraph", [make_node("text", text="a")])]
        assert Document(content=nodes) == Document(content=list(nodes))
        assert Document(content=nodes) != Document()

    def test_frozen(self):
        """Documents cannot be reassigned."""
        doc = Document()
        with pytest.raises(ValidationError):
            doc.content = [make_node("paragraph")]

    def test_to_node_array_is_a_copy(self):
        """Unwrapping returns a new list with the same nodes."""
        nodes = [make_node("paragraph")]
        doc = Document(content=nodes)

        array = doc.to_node_array()
        array.append(make_node("hardBreak"))

        assert doc.content == nodes


class TestAssetDescriptor:
    """Tests for AssetDescriptor."""

    def test_optional_fields(self):
        """alt and title default to None."""
        asset = AssetDescriptor(src="a.png")
        assert asset.alt is None
        assert asset.title is None

    def test_src_required(self):
        """Empty src is rejected."""
        with pytest.raises(ValidationError):
            AssetDescriptor(src="")
