# -*- coding: utf-8 -*-
"""
Media asset extraction from rich content node trees.

Assets come from two places:
1. ``image`` nodes, via their ``src``/``alt``/``title`` attributes
2. literal ``<img ...>`` markup pasted into ``text`` nodes and never
   converted to an image node

Traversal is depth-first, pre-order, and deduplicates on ``src`` across the
whole tree: the first occurrence wins, including its alt/title.
"""
import logging
import re
from typing import Any

from .nodes import AssetDescriptor, ImageAttrs, NodeType, node_attrs, node_children, node_type

logger = logging.getLogger(__name__)

# A whole <img ...> tag; attribute values may not contain '>'
IMG_TAG_PATTERN = re.compile(r"<img\b[^>]*>", re.IGNORECASE)

# src/alt attributes inside one tag, single- or double-quoted
IMG_ATTR_PATTERN = re.compile(
    r"""\s(src|alt)\s*=\s*(?:"([^"]*)"|'([^']*)')""",
    re.IGNORECASE,
)

IMG_MARKER = "<img"


def _scan_img_tags(html: str):
    """Yield (src, alt) for every <img> tag carrying a non-empty src."""
    for tag in IMG_TAG_PATTERN.finditer(html):
        attrs: dict[str, str] = {}
        for match in IMG_ATTR_PATTERN.finditer(tag.group(0)):
            name = match.group(1).lower()
            value = match.group(2) if match.group(2) is not None else match.group(3)
            attrs.setdefault(name, value)

        src = attrs.get("src")
        if not src:
            continue
        yield src, attrs.get("alt") or None


class AssetCollector:
    """
    Accumulates unique assets across one or more node lists.

    One collector owns one ``seen`` set, so feeding several fields through
    the same collector deduplicates across all of them.
    """

    def __init__(self):
        self._seen: set[str] = set()
        self.assets: list[AssetDescriptor] = []

    def __len__(self) -> int:
        return len(self.assets)

    def add(self, src: str, alt: str | None = None, title: str | None = None) -> bool:
        """Record an asset unless its src was already seen. Returns True if added."""
        if not src or src in self._seen:
            return False
        self._seen.add(src)
        self.assets.append(AssetDescriptor(src=src, alt=alt, title=title))
        return True

    def collect(self, nodes: list[Any]) -> None:
        """Walk a node list in document order and record its assets."""
        # Explicit stack keeps deep trees clear of the recursion limit
        stack = list(reversed(nodes))
        while stack:
            node = stack.pop()
            try:
                self._visit(node)
                stack.extend(reversed(node_children(node)))
            except Exception as e:
                logger.warning(f"Skipping malformed node during asset extraction: {e}")

    def collect_html(self, html: str) -> None:
        """Record every image referenced by <img> markup in an HTML fragment."""
        for src, alt in _scan_img_tags(html):
            self.add(src, alt)

    def _visit(self, node: Any) -> None:
        kind = node_type(node)

        if kind == NodeType.IMAGE.value:
            attrs = node_attrs(node, ImageAttrs)
            if attrs is not None:
                self.add(attrs.src, attrs.alt, attrs.title)

        elif kind == NodeType.TEXT.value:
            text = node.get("text")
            if isinstance(text, str) and IMG_MARKER in text:
                self.collect_html(text)


def extract_assets(content: list[Any]) -> list[AssetDescriptor]:
    """
    Extract unique media assets from a node list.

    Args:
        content: Top-level node list (e.g. ``Document.content``).

    Returns:
        Asset descriptors in first-seen order. A non-list argument gives [].
    """
    if not isinstance(content, list):
        logger.warning(f"extract_assets expects a node list, got {type(content).__name__}")
        return []

    collector = AssetCollector()
    collector.collect(content)
    return collector.assets


def scan_html_images(html: str) -> list[AssetDescriptor]:
    """Extract unique images from <img> markup in an HTML fragment."""
    if not isinstance(html, str) or IMG_MARKER not in html.lower():
        return []

    collector = AssetCollector()
    collector.collect_html(html)
    return collector.assets
