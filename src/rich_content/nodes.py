# -*- coding: utf-8 -*-
"""
Rich content document model.

Nodes travel through the pipeline as plain JSON mappings
(``{"type", "attrs", "marks", "content", "text"}``) so that unknown node
kinds and unknown attributes round-trip untouched. This module provides
the shared vocabulary on top of that wire shape:

- ``NodeType`` / ``MarkType`` enums for the known kinds
- tolerant accessors (``node_type``, ``node_children``, ``node_marks``)
- typed attribute views per node kind, built with pydantic; keys a view
  does not know are kept in ``model_extra`` and never interpreted
- the canonical ``Document`` wrapper and the ``AssetDescriptor`` record
"""
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class NodeType(str, Enum):
    """Known node kinds."""

    DOC = "doc"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    TEXT = "text"
    BLOCKQUOTE = "blockquote"
    BULLET_LIST = "bulletList"
    ORDERED_LIST = "orderedList"
    LIST_ITEM = "listItem"
    CODE_BLOCK = "codeBlock"
    HORIZONTAL_RULE = "horizontalRule"
    HARD_BREAK = "hardBreak"
    IMAGE = "image"
    YOUTUBE = "youtube"
    TABLE = "table"
    TABLE_ROW = "tableRow"
    TABLE_HEADER = "tableHeader"
    TABLE_CELL = "tableCell"


class MarkType(str, Enum):
    """Known text marks."""

    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    STRIKE = "strike"
    CODE = "code"
    LINK = "link"
    HIGHLIGHT = "highlight"
    SUPERSCRIPT = "superscript"
    SUBSCRIPT = "subscript"


TextAlign = Literal["left", "center", "right", "justify"]
_TEXT_ALIGNS = ("left", "center", "right", "justify")


# =============================================================================
# Tolerant accessors
# =============================================================================


def is_node(value: Any) -> bool:
    """Return True if value has the shape of a node (a mapping)."""
    return isinstance(value, Mapping)


def node_type(node: Any) -> str | None:
    """Return the node's ``type`` discriminant, or None if missing/invalid."""
    if not is_node(node):
        return None
    value = node.get("type")
    return value if isinstance(value, str) else None


def node_children(node: Any) -> list[Any]:
    """Return the node's children; anything but a list counts as no children."""
    if not is_node(node):
        return []
    content = node.get("content")
    return content if isinstance(content, list) else []


def node_marks(node: Any) -> list[Mapping[str, Any]]:
    """
    Return the node's marks in order, skipping malformed entries.

    A mark type appearing twice is kept only once (first occurrence).
    """
    if not is_node(node):
        return []
    marks = node.get("marks")
    if not isinstance(marks, list):
        return []

    seen: set[str] = set()
    result = []
    for mark in marks:
        mark_type = node_type(mark)
        if mark_type is None or mark_type in seen:
            continue
        seen.add(mark_type)
        result.append(mark)
    return result


def make_node(
        type_: str,
        content: list[Any] | None = None,
        *,
        text: str | None = None,
        attrs: dict[str, Any] | None = None,
        marks: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Build a node mapping in wire shape, omitting absent keys."""
    node: dict[str, Any] = {"type": type_}
    if attrs is not None:
        node["attrs"] = attrs
    if marks is not None:
        node["marks"] = marks
    if content is not None:
        node["content"] = content
    if text is not None:
        node["text"] = text
    return node


# =============================================================================
# Typed attribute views
# =============================================================================


class NodeAttrs(BaseModel):
    """Base for typed attribute views. Unknown keys are kept as extras."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _int_or(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def _text_align(value: Any) -> str | None:
    return value if value in _TEXT_ALIGNS else None


class ImageAttrs(NodeAttrs):
    src: str = Field(min_length=1)
    alt: str | None = None
    title: str | None = None

    @field_validator("alt", "title", mode="before")
    @classmethod
    def _strings_only(cls, value: Any) -> str | None:
        return _optional_str(value)


class ParagraphAttrs(NodeAttrs):
    text_align: TextAlign | None = Field(default=None, alias="textAlign")

    @field_validator("text_align", mode="before")
    @classmethod
    def _known_alignment(cls, value: Any) -> str | None:
        return _text_align(value)


class HeadingAttrs(ParagraphAttrs):
    level: int = 1

    @field_validator("level", mode="before")
    @classmethod
    def _clamp_level(cls, value: Any) -> int:
        return min(max(_int_or(value, 1), 1), 6)


class OrderedListAttrs(NodeAttrs):
    start: int = 1

    @field_validator("start", mode="before")
    @classmethod
    def _int_start(cls, value: Any) -> int:
        return _int_or(value, 1)


class CodeBlockAttrs(NodeAttrs):
    language: str | None = None

    @field_validator("language", mode="before")
    @classmethod
    def _string_language(cls, value: Any) -> str | None:
        return _optional_str(value) or None


class TableCellAttrs(NodeAttrs):
    colspan: int = 1
    rowspan: int = 1

    @field_validator("colspan", "rowspan", mode="before")
    @classmethod
    def _positive_span(cls, value: Any) -> int:
        return max(_int_or(value, 1), 1)


class YoutubeAttrs(NodeAttrs):
    src: str = Field(min_length=1)
    width: int | None = None
    height: int | None = None
    start: int = 0

    @field_validator("width", "height", mode="before")
    @classmethod
    def _dimension(cls, value: Any) -> int | None:
        size = _int_or(value, 0)
        return size if size > 0 else None

    @field_validator("start", mode="before")
    @classmethod
    def _start_seconds(cls, value: Any) -> int:
        return max(_int_or(value, 0), 0)


class LinkAttrs(NodeAttrs):
    href: str | None = None
    target: str | None = None
    rel: str | None = None
    css_class: str | None = Field(default=None, alias="class")

    @field_validator("href", "target", "rel", "css_class", mode="before")
    @classmethod
    def _strings_only(cls, value: Any) -> str | None:
        return _optional_str(value)


class HighlightAttrs(NodeAttrs):
    color: str | None = None

    @field_validator("color", mode="before")
    @classmethod
    def _string_color(cls, value: Any) -> str | None:
        return _optional_str(value) or None


AttrsT = TypeVar("AttrsT", bound=NodeAttrs)


def node_attrs(node: Any, model: type[AttrsT]) -> AttrsT | None:
    """
    Read a node's (or mark's) ``attrs`` through a typed view.

    Returns the model's defaults when attrs are missing or invalid, and None
    only when the view has a required field (e.g. ``ImageAttrs.src``) that
    cannot be satisfied.
    """
    raw = node.get("attrs") if is_node(node) else None
    if not isinstance(raw, Mapping):
        raw = {}

    try:
        return model.model_validate(dict(raw))
    except ValidationError as e:
        logger.debug(f"Invalid {model.__name__} on {node_type(node)!r} node: {e.error_count()} error(s)")

    try:
        return model()
    except ValidationError:
        return None


# =============================================================================
# Document and assets
# =============================================================================


class Document(BaseModel):
    """
    Canonical document wrapper.

    ``content`` is always a list once produced by the normalizer. Inner
    nodes are not validated.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["doc"] = "doc"
    content: list[Any] = Field(default_factory=list)

    def to_node_array(self) -> list[Any]:
        """Unwrap to the bare node array stored by the backend."""
        return list(self.content)

    def is_empty(self) -> bool:
        return not self.content


class AssetDescriptor(BaseModel):
    """A media asset referenced by a document. Identity is ``src``."""

    model_config = ConfigDict(frozen=True)

    src: str = Field(min_length=1)
    alt: str | None = None
    title: str | None = None
