"""Field-alias expansion for raw query parameters.

A parameter named ``"title|description"`` applies its value to both
``title`` and ``description``. Expansion runs once, before coercion, on a
copy of the caller's mapping.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)

ALIAS_SEPARATOR = "|"


def split_aliases(field: str) -> list[str]:
    """Split a combined field name, dropping empty segments."""
    return [name for name in field.split(ALIAS_SEPARATOR) if name]


def expand_field_aliases(params: Mapping[str, Any]) -> dict[str, Any]:
    """Expand pipe-joined field names into independent entries.

    Each alias receives its own copy of the value. Aliases that are new keys
    are appended in alias order; aliases naming an existing key overwrite
    its value in place. The combined key is removed.

    Args:
        params: Raw parameters. Never mutated.

    Returns:
        New dict with no ``|`` left in any field name.
    """
    working = dict(params)
    for field in list(working):
        if ALIAS_SEPARATOR not in field:
            continue
        value = working[field]
        names = split_aliases(field)
        for name in names:
            working[name] = copy.deepcopy(value)
        del working[field]
        logger.debug("Expanded field alias %r into %s", field, names)
    return working
