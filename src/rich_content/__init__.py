# -*- coding: utf-8 -*-
"""
Rich Content Service - normalization, asset extraction and HTML rendering
for editor-agnostic rich-text documents.
"""
__version__ = "1.0.0"

from .aggregator import extract_all_fields, extract_record_assets  # noqa: E402
from .assets import extract_assets  # noqa: E402
from .nodes import AssetDescriptor, Document  # noqa: E402
from .normalizer import normalize, to_node_array  # noqa: E402
from .renderer import render_to_html  # noqa: E402

__all__ = [
    "AssetDescriptor",
    "Document",
    "extract_all_fields",
    "extract_assets",
    "extract_record_assets",
    "normalize",
    "render_to_html",
    "to_node_array",
    "__version__",
]
