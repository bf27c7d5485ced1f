from __future__ import annotations

from typing import Any, List


def to_search_text(value: Any) -> str:
    """Coerce a single field value into lowercase text for matching.

    Numbers are rendered the way the API shows them: 15 -> '15',
    15.0 -> '15'. Booleans and None yield an empty string.
    """
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip().lower()


def field_values(value: Any) -> List[str]:
    """Return every matchable text for a field; list fields yield one entry per item."""
    if isinstance(value, (list, tuple)):
        items = [to_search_text(v) for v in value]
    else:
        items = [to_search_text(value)]
    return [item for item in items if item]
