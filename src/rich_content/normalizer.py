# -*- coding: utf-8 -*-
"""
Normalization of stored rich content into the canonical Document shape.

Stored content reaches us as a node array, a JSON-encoded node array, a
``{"type": "doc", "content": [...]}`` wrapper, or nothing at all. Legacy and
partially corrupted values are common, so every function here is fail-soft:
unusable input becomes empty content instead of an exception.
"""
import json
import logging
from collections.abc import Mapping
from typing import Any

from .nodes import Document, NodeType

logger = logging.getLogger(__name__)


def _parse_json_array(raw: str) -> list[Any]:
    """Strict JSON parse; anything but an array yields []."""
    try:
        parsed = json.loads(raw)
    except (ValueError, RecursionError) as e:
        logger.debug(f"Stored content is not valid JSON ({len(raw)} chars): {e}")
        return []

    if not isinstance(parsed, list):
        logger.debug(f"Stored content decoded to {type(parsed).__name__}, expected a node array")
        return []
    return parsed


def _is_doc_wrapper(value: Any) -> bool:
    return isinstance(value, Mapping) and value.get("type") == NodeType.DOC.value


def parse_node_array(value: Any) -> list[Any]:
    """
    Coerce a stored value to a bare node array.

    Args:
        value: Node array, JSON string of a node array, doc wrapper, or None.

    Returns:
        The node list, or [] for anything unusable.
    """
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        return _parse_json_array(value)
    if isinstance(value, Document):
        return value.content
    if _is_doc_wrapper(value):
        content = value.get("content")
        return content if isinstance(content, list) else []
    return []


def normalize(value: Any) -> Document:
    """
    Normalize any accepted stored representation to a Document.

    - list: wrapped as-is, inner nodes are not validated
    - str: parsed as JSON; non-array or invalid JSON gives empty content
    - Document: returned unchanged
    - ``{"type": "doc"}`` mapping: its content (empty if absent or not a list)
    - None and anything else: empty content

    Never raises.
    """
    if isinstance(value, Document):
        return value
    if value is not None and not isinstance(value, (list, str)) and not _is_doc_wrapper(value):
        logger.debug(f"Unsupported stored content type {type(value).__name__}, using empty document")
    return Document(content=parse_node_array(value))


def to_node_array(doc: Document | None) -> list[Any]:
    """Unwrap a Document back to the array shape sent to storage."""
    if doc is None:
        return []
    return doc.to_node_array()
