"""Helpers for converting between wire values and catalog records"""
import json
from typing import Any, List, Optional

from catalog_admin.core.logging import get_logger

logger = get_logger(__name__)


def parse_brand_ids(raw: Optional[str]) -> Optional[List[int]]:
    """
    Parse a legacy JSON-encoded brand id array, e.g. '["1", "4"]' or '[1, 4]'.

    Returns None when the text is not a JSON array of integer-like values,
    so callers can treat the brands as unknown instead of failing.
    """
    if raw is None:
        return None
    try:
        values = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning(f"Could not parse brand ids: {raw!r}")
        return None
    if not isinstance(values, list):
        return None
    try:
        return [int(value) for value in values]
    except (TypeError, ValueError):
        logger.warning(f"Brand ids are not integers: {raw!r}")
        return None


def split_tags(value: Any) -> List[str]:
    """
    Normalize a comma-joined string or a list into unique, stripped tags.
    Empty tags are dropped and the first occurrence keeps its position.
    """
    if value is None:
        return []
    if isinstance(value, str):
        parts = value.split(",")
    else:
        parts = [str(item) for item in value]
    tags = [part.strip() for part in parts if part and part.strip()]
    return list(dict.fromkeys(tags))
