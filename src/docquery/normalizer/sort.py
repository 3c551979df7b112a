"""Sort-string normalization (``"-price,name"``)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from docquery.models.filter_expr import FieldMeta, SortSpec

SORT_SEPARATOR = ","
DESCENDING_PREFIX = "-"


def _is_multi_language(meta: Any) -> bool:
    # Shorthand entries such as {"name": "String"} carry no language map.
    if isinstance(meta, Mapping):
        meta = FieldMeta.model_validate(meta)
    return isinstance(meta, FieldMeta) and meta.is_multi_language


def normalize_sort(
    sort: str,
    schema: Mapping[str, Any] | None = None,
    locale: str = "en",
) -> SortSpec:
    """Parse a comma-separated sort string into a SortSpec.

    Each token is a field name, optionally prefixed with ``-`` for
    descending order. Multi-language fields are rewritten to their locale
    subfield (``name`` → ``name.en``). Tokens are whitespace-trimmed and
    empty tokens skipped. A repeated field keeps its first position and
    the last direction.

    Args:
        sort: Sort string such as ``"-price,name"``.
        schema: Field name → metadata (``FieldMeta`` or a mapping with a
            ``langMap`` flag). Any other metadata marks a plain field.
        locale: Locale subfield for multi-language fields.

    Returns:
        SortSpec in token order.
    """
    schema = schema or {}
    directions: dict[str, int] = {}
    for token in sort.split(SORT_SEPARATOR):
        token = token.strip()
        if not token:
            continue
        descending = token.startswith(DESCENDING_PREFIX)
        name = token[len(DESCENDING_PREFIX):] if descending else token
        if _is_multi_language(schema.get(name)):
            name = f"{name}.{locale}"
        directions[name] = -1 if descending else 1
    return SortSpec(directions=directions)
