# -*- coding: utf-8 -*-
"""
Rich content processing pipeline.

Runs one stored value through the three stages:
1. Normalize - coerce the stored shape to a canonical Document
2. Asset Extraction - collect unique images (optional)
3. HTML Rendering - render the Document for display (optional)

Stages 2 and 3 only read the Document and are independent of each other.
"""
import logging
from dataclasses import dataclass, field
from typing import Any

from .assets import extract_assets
from .nodes import AssetDescriptor, Document
from .normalizer import normalize
from .renderer import HtmlRenderer, default_renderer

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Result of the content processing pipeline."""

    document: Document
    html: str = ""
    assets: list[AssetDescriptor] = field(default_factory=list)
    steps_applied: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


class ContentPipeline:
    """
    Content processing pipeline for stored rich content.

    Holds no per-call state; one instance can serve concurrent requests.
    """

    def __init__(self, renderer: HtmlRenderer | None = None):
        self.renderer = renderer or default_renderer

    def process(
            self,
            value: Any,
            *,
            extract: bool = True,
            render: bool = True,
    ) -> PipelineResult:
        """
        Process a stored value through the pipeline.

        Args:
            value: Node array, JSON string, doc wrapper, or None
            extract: Run asset extraction
            render: Run HTML rendering

        Returns:
            PipelineResult with the Document, assets, HTML and step trace
        """
        document = normalize(value)
        result = PipelineResult(document=document, steps_applied=["normalize"])

        if extract:
            result.assets = extract_assets(document.content)
            result.steps_applied.append("extract_assets")

        if render:
            result.html = self.renderer.render(document.content)
            result.steps_applied.append("render_html")

        result.metadata = {
            "node_count": len(document.content),
            "asset_count": len(result.assets),
            "html_length": len(result.html),
        }

        logger.debug(
            "Content pipeline completed",
            extra={"steps": result.steps_applied, **result.metadata},
        )
        return result


# Global pipeline instance
content_pipeline = ContentPipeline()
