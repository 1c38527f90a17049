# -*- coding: utf-8 -*-
"""
Deterministic HTML rendering of rich content documents.

Rendering is table-driven: ``SIMPLE_BLOCK_TAGS``, ``VOID_TAGS`` and
``MARK_TAGS`` cover the one-to-one cases, dedicated methods handle the
nodes that carry attributes. Unknown node kinds render their children only,
unknown marks are ignored.

All text content and attribute values are HTML-escaped, and URLs with
schemes outside the configured allow-lists are dropped: the output is
inserted as trusted HTML by display surfaces.

Every ``<p>`` carries ``style="white-space: pre-wrap;"`` so blank lines
typed by the author survive display.
"""
import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from html import escape
from typing import Any
from urllib.parse import parse_qs, urlencode, urlparse

from .config import Settings, settings
from .nodes import (
    CodeBlockAttrs,
    HeadingAttrs,
    HighlightAttrs,
    ImageAttrs,
    LinkAttrs,
    MarkType,
    NodeType,
    OrderedListAttrs,
    ParagraphAttrs,
    TableCellAttrs,
    YoutubeAttrs,
    node_attrs,
    node_children,
    node_marks,
    node_type,
)
from .normalizer import parse_node_array

logger = logging.getLogger(__name__)

PARAGRAPH_STYLE = "white-space: pre-wrap;"

# Link attributes applied when a link mark does not set its own
LINK_DEFAULT_TARGET = "_blank"
LINK_DEFAULT_REL = "noopener noreferrer nofollow"

# Containers rendered as a bare tag around their children
SIMPLE_BLOCK_TAGS = {
    NodeType.BLOCKQUOTE.value: "blockquote",
    NodeType.BULLET_LIST.value: "ul",
    NodeType.LIST_ITEM.value: "li",
    NodeType.TABLE_ROW.value: "tr",
}

VOID_TAGS = {
    NodeType.HARD_BREAK.value: "br",
    NodeType.HORIZONTAL_RULE.value: "hr",
}

# Marks rendered as a bare tag around the text
MARK_TAGS = {
    MarkType.BOLD.value: "strong",
    MarkType.ITALIC.value: "em",
    MarkType.UNDERLINE.value: "u",
    MarkType.STRIKE.value: "s",
    MarkType.CODE.value: "code",
    MarkType.SUPERSCRIPT.value: "sup",
    MarkType.SUBSCRIPT.value: "sub",
}

YOUTUBE_HOSTS = ("youtube.com", "youtu.be", "youtube-nocookie.com")
YOUTUBE_EMBED_BASE = "https://www.youtube.com/embed/"
YOUTUBE_NOCOOKIE_EMBED_BASE = "https://www.youtube-nocookie.com/embed/"

_URL_SCHEME = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.\-]*):")
# Browsers ignore these inside a scheme ("java\tscript:")
_URL_IGNORED_CHARS = re.compile(r"[\x00-\x20]")
_VIDEO_ID = re.compile(r"^[A-Za-z0-9_-]+$")
_EXHAUSTED = object()
_CSS_COLOR = re.compile(r"^(#[0-9a-fA-F]{3,8}|[a-zA-Z]+|(rgb|hsl)a?\([\d\s.,%]+\))$")


def is_allowed_url(url: str, protocols: list[str] | tuple[str, ...], allow_data_image: bool = False) -> bool:
    """
    Check a URL against a scheme allow-list.

    Relative URLs (no scheme) are allowed. ``data:image/...`` is allowed only
    when ``allow_data_image`` is set.
    """
    compact = _URL_IGNORED_CHARS.sub("", url)
    match = _URL_SCHEME.match(compact)
    if not match:
        return True

    scheme = match.group(1).lower()
    if scheme in {p.lower() for p in protocols}:
        return True
    return allow_data_image and compact.lower().startswith("data:image/")


def youtube_embed_url(src: str, *, nocookie: bool = True, controls: bool = False, start: int = 0) -> str | None:
    """
    Convert a YouTube watch/share/embed URL to an embed URL.

    Returns None for anything that is not a recognizable YouTube video or
    playlist URL.
    """
    src = src.strip()
    if src.startswith("//"):
        src = f"https:{src}"
    elif not _URL_SCHEME.match(src):
        src = f"https://{src}"
    try:
        parsed = urlparse(src)
    except ValueError:
        return None

    if parsed.scheme not in ("http", "https"):
        return None
    host = (parsed.hostname or "").lower()
    for prefix in ("www.", "m.", "music."):
        if host.startswith(prefix):
            host = host[len(prefix):]
    if host not in YOUTUBE_HOSTS:
        return None

    query = parse_qs(parsed.query)
    segments = [segment for segment in parsed.path.split("/") if segment]

    video_id = None
    if host == "youtu.be":
        video_id = segments[0] if segments else None
    elif len(segments) >= 2 and segments[0] in ("embed", "shorts", "live", "v"):
        video_id = segments[1]
    elif query.get("v"):
        video_id = query["v"][0]

    params: list[tuple[str, str]] = []
    if not video_id and query.get("list"):
        video_id = "videoseries"
        params.append(("list", query["list"][0]))

    if not video_id or not _VIDEO_ID.match(video_id):
        return None

    if not controls:
        params.append(("controls", "0"))
    if start > 0:
        params.append(("start", str(start)))

    base = YOUTUBE_NOCOOKIE_EMBED_BASE if nocookie else YOUTUBE_EMBED_BASE
    return base + video_id + (f"?{urlencode(params)}" if params else "")


def _attrs_html(attrs: list[tuple[str, Any]]) -> str:
    """Serialize (name, value) pairs, skipping None values."""
    return "".join(
        f' {name}="{escape(str(value), quote=True)}"'
        for name, value in attrs
        if value is not None
    )


@dataclass(frozen=True)
class RenderOptions:
    """Renderer options, mirroring the editor's extension configuration."""

    youtube_nocookie: bool = True
    youtube_controls: bool = False
    youtube_width: int = 640
    youtube_height: int = 480
    image_allow_base64: bool = True
    link_protocols: tuple[str, ...] = ("http", "https", "mailto", "tel")
    image_protocols: tuple[str, ...] = ("http", "https")

    @classmethod
    def from_settings(cls, config: Settings) -> "RenderOptions":
        return cls(
            youtube_nocookie=config.YOUTUBE_NOCOOKIE,
            youtube_controls=config.YOUTUBE_CONTROLS,
            youtube_width=config.YOUTUBE_WIDTH,
            youtube_height=config.YOUTUBE_HEIGHT,
            image_allow_base64=config.IMAGE_ALLOW_BASE64,
            link_protocols=tuple(config.LINK_ALLOWED_PROTOCOLS),
        )


class HtmlRenderer:
    """
    Renders node arrays to HTML.

    Instances hold only immutable options and are safe to share between
    threads.
    """

    def __init__(self, options: RenderOptions | None = None):
        self.options = options or RenderOptions()

    def render(self, value: Any) -> str:
        """
        Render stored content to HTML.

        Args:
            value: Node array, JSON string of a node array, doc wrapper, or None.

        Returns:
            HTML string, or "" when there is no content.
        """
        nodes = parse_node_array(value)
        if not nodes:
            return ""
        return self._render_nodes(nodes)

    def _render_nodes(self, nodes: list[Any]) -> str:
        """
        Render a node list depth-first with an explicit stack.

        Each stack entry holds the closing tag of an open container and an
        iterator over its remaining children, so nesting depth is bounded
        by memory only.
        """
        parts: list[str] = []
        stack: list[tuple[str, Iterator[Any]]] = [("", iter(nodes))]

        while stack:
            close_tag, children = stack[-1]
            node = next(children, _EXHAUSTED)
            if node is _EXHAUSTED:
                stack.pop()
                parts.append(close_tag)
                continue

            try:
                rendered = self._dispatch(node)
            except Exception as e:
                logger.warning(f"Skipping node {node_type(node)!r} during HTML rendering: {e}")
                continue

            if isinstance(rendered, str):
                parts.append(rendered)
            else:
                open_tag, node_close_tag = rendered
                parts.append(open_tag)
                stack.append((node_close_tag, iter(node_children(node))))

        return "".join(parts)

    def _dispatch(self, node: Any) -> str | tuple[str, str]:
        """Return a leaf's HTML, or the (open, close) tags around a container's children."""
        kind = node_type(node)

        if kind == NodeType.TEXT.value:
            return self._render_text(node)
        if kind in SIMPLE_BLOCK_TAGS:
            tag = SIMPLE_BLOCK_TAGS[kind]
            return f"<{tag}>", f"</{tag}>"
        if kind in VOID_TAGS:
            return f"<{VOID_TAGS[kind]}>"
        if kind == NodeType.PARAGRAPH.value:
            return self._paragraph_tags(node)
        if kind == NodeType.HEADING.value:
            return self._heading_tags(node)
        if kind == NodeType.ORDERED_LIST.value:
            return self._ordered_list_tags(node)
        if kind == NodeType.CODE_BLOCK.value:
            return self._code_block_tags(node)
        if kind == NodeType.IMAGE.value:
            return self._render_image(node)
        if kind == NodeType.YOUTUBE.value:
            return self._render_youtube(node)
        if kind == NodeType.TABLE.value:
            return "<table><tbody>", "</tbody></table>"
        if kind in (NodeType.TABLE_HEADER.value, NodeType.TABLE_CELL.value):
            return self._table_cell_tags(node, "th" if kind == NodeType.TABLE_HEADER.value else "td")

        # doc wrappers and unknown kinds: children only
        return "", ""

    # -------------------------------------------------------------------------
    # Blocks
    # -------------------------------------------------------------------------

    def _paragraph_tags(self, node: Any) -> tuple[str, str]:
        attrs = node_attrs(node, ParagraphAttrs)
        style = PARAGRAPH_STYLE
        if attrs.text_align and attrs.text_align != "left":
            style = f"{style} text-align: {attrs.text_align};"
        return f"<p{_attrs_html([('style', style)])}>", "</p>"

    def _heading_tags(self, node: Any) -> tuple[str, str]:
        attrs = node_attrs(node, HeadingAttrs)
        style = None
        if attrs.text_align and attrs.text_align != "left":
            style = f"text-align: {attrs.text_align};"
        tag = f"h{attrs.level}"
        return f"<{tag}{_attrs_html([('style', style)])}>", f"</{tag}>"

    def _ordered_list_tags(self, node: Any) -> tuple[str, str]:
        attrs = node_attrs(node, OrderedListAttrs)
        start = attrs.start if attrs.start != 1 else None
        return f"<ol{_attrs_html([('start', start)])}>", "</ol>"

    def _code_block_tags(self, node: Any) -> tuple[str, str]:
        attrs = node_attrs(node, CodeBlockAttrs)
        css_class = f"language-{attrs.language}" if attrs.language else None
        return f"<pre><code{_attrs_html([('class', css_class)])}>", "</code></pre>"

    def _table_cell_tags(self, node: Any, tag: str) -> tuple[str, str]:
        attrs = node_attrs(node, TableCellAttrs)
        spans = [
            ("colspan", attrs.colspan if attrs.colspan > 1 else None),
            ("rowspan", attrs.rowspan if attrs.rowspan > 1 else None),
        ]
        return f"<{tag}{_attrs_html(spans)}>", f"</{tag}>"

    # -------------------------------------------------------------------------
    # Media
    # -------------------------------------------------------------------------

    def _render_image(self, node: Any) -> str:
        attrs = node_attrs(node, ImageAttrs)
        if attrs is None:
            return ""
        if not is_allowed_url(attrs.src, self.options.image_protocols, self.options.image_allow_base64):
            logger.debug("Dropping image with disallowed src scheme")
            return ""
        return f"<img{_attrs_html([('src', attrs.src), ('alt', attrs.alt), ('title', attrs.title)])}>"

    def _render_youtube(self, node: Any) -> str:
        attrs = node_attrs(node, YoutubeAttrs)
        if attrs is None:
            return ""

        embed_url = youtube_embed_url(
            attrs.src,
            nocookie=self.options.youtube_nocookie,
            controls=self.options.youtube_controls,
            start=attrs.start,
        )
        if embed_url is None:
            logger.debug("Dropping youtube node with unrecognized src")
            return ""

        iframe_attrs = [
            ("src", embed_url),
            ("width", attrs.width or self.options.youtube_width),
            ("height", attrs.height or self.options.youtube_height),
            ("allowfullscreen", "true"),
        ]
        return f'<div data-youtube-video=""><iframe{_attrs_html(iframe_attrs)}></iframe></div>'

    # -------------------------------------------------------------------------
    # Text and marks
    # -------------------------------------------------------------------------

    def _render_text(self, node: Any) -> str:
        text = node.get("text")
        if not isinstance(text, str) or not text:
            return ""

        html = escape(text, quote=False)
        # First mark is the outermost tag
        for mark in reversed(node_marks(node)):
            html = self._wrap_mark(mark, html)
        return html

    def _wrap_mark(self, mark: Any, inner: str) -> str:
        kind = node_type(mark)

        if kind in MARK_TAGS:
            tag = MARK_TAGS[kind]
            return f"<{tag}>{inner}</{tag}>"

        if kind == MarkType.LINK.value:
            attrs = node_attrs(mark, LinkAttrs)
            if not attrs.href or not is_allowed_url(attrs.href, self.options.link_protocols):
                return inner
            link_attrs = [
                ("href", attrs.href),
                ("target", attrs.target or LINK_DEFAULT_TARGET),
                ("rel", attrs.rel or LINK_DEFAULT_REL),
                ("class", attrs.css_class),
            ]
            return f"<a{_attrs_html(link_attrs)}>{inner}</a>"

        if kind == MarkType.HIGHLIGHT.value:
            attrs = node_attrs(mark, HighlightAttrs)
            if attrs.color and _CSS_COLOR.match(attrs.color):
                color_attrs = [
                    ("data-color", attrs.color),
                    ("style", f"background-color: {attrs.color}; color: inherit"),
                ]
                return f"<mark{_attrs_html(color_attrs)}>{inner}</mark>"
            return f"<mark>{inner}</mark>"

        return inner


default_renderer = HtmlRenderer(RenderOptions.from_settings(settings))


def render_to_html(value: Any, renderer: HtmlRenderer | None = None) -> str:
    """Render stored content (array, JSON string, doc wrapper or None) to HTML."""
    return (renderer or default_renderer).render(value)
