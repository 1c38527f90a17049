# -*- coding: utf-8 -*-
"""
Asset aggregation across several rich-text fields of one record.

A protocol or thread is made of independently stored rich-text fields; the
publish flow needs one image list for the whole record, deduplicated across
fields with the earliest field winning.
"""
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .assets import AssetCollector
from .nodes import AssetDescriptor
from .normalizer import normalize

logger = logging.getLogger(__name__)

# Rich-text fields of a protocol, in publish order
PROTOCOL_CONTENT_FIELDS = (
    "ingredients",
    "mechanism",
    "timeline",
    "instructions",
    "disclaimer",
)


def extract_all_fields(fields: Mapping[str, Any]) -> list[AssetDescriptor]:
    """
    Extract unique assets from several named node lists.

    Fields are visited in mapping order and share one ``seen`` set, so an
    asset referenced from two fields keeps the first field's alt/title.
    Fields whose content is not a list contribute nothing.
    """
    if not isinstance(fields, Mapping):
        logger.warning(f"extract_all_fields expects a mapping, got {type(fields).__name__}")
        return []

    collector = AssetCollector()
    for name, content in fields.items():
        if not isinstance(content, list):
            logger.debug(f"Field {name!r} has no node list, skipping")
            continue
        collector.collect(content)

    return collector.assets


def extract_record_assets(
        record: Mapping[str, Any],
        field_names: Iterable[str] | None = None,
) -> list[AssetDescriptor]:
    """
    Extract unique assets from the rich-text fields of a stored record.

    Field values are normalized first, so JSON strings and doc wrappers are
    accepted as well as bare node arrays.

    Args:
        record: Stored record (e.g. a protocol's attributes).
        field_names: Fields to read, in order. Defaults to every key of the record.

    Returns:
        Asset descriptors in first-seen order.
    """
    if not isinstance(record, Mapping):
        logger.warning(f"extract_record_assets expects a mapping, got {type(record).__name__}")
        return []

    names = list(record.keys()) if field_names is None else list(field_names)
    return extract_all_fields(
        {name: normalize(record.get(name)).content for name in names}
    )
