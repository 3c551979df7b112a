"""Query and document merging.

- Disjunction merge: cartesian product of two branch lists.
- Field-scoped deep merge of two nested objects.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from docquery.identifiers import OpaqueValuePredicate, is_opaque_value
from docquery.models.filter_expr import Branch, Or
from docquery.paths import FieldPath

# ---------------------------------------------------------------------------
# Disjunction merge
# ---------------------------------------------------------------------------


def merge_branches(branch: Branch, incoming: Branch) -> Branch:
    """Combine two conjunctive rows; ``incoming`` wins on shared fields."""
    return Branch(
        predicates={**branch.predicates, **incoming.predicates},
        all_of=incoming.all_of if incoming.all_of is not None else branch.all_of,
    )


def merge_disjunctions(existing: Or | None, incoming: Or) -> Or:
    """Cartesian-merge ``incoming`` into ``existing``.

    Args:
        existing: Current disjunction, or None when there is none yet.
        incoming: Disjunction to combine in.

    Returns:
        ``incoming`` when there is no existing disjunction; otherwise one
        branch per (incoming, existing) pair, grouped by incoming branch.
    """
    if existing is None:
        return incoming
    return Or(
        branches=[
            merge_branches(branch, other)
            for other in incoming.branches
            for branch in existing.branches
        ]
    )


# ---------------------------------------------------------------------------
# Field-scoped deep merge
# ---------------------------------------------------------------------------


def _is_object(value: Any) -> bool:
    return isinstance(value, (Mapping, list))


def _is_falsy(value: Any) -> bool:
    # Containers are kept even when empty.
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    return False


def _pick_truthy(obj: Mapping[str, Any], fields: Sequence[str]) -> dict[str, Any]:
    picked: dict[str, Any] = {}
    for name in fields:
        if name in obj:
            picked[name] = obj[name]
            continue
        path = FieldPath.parse(name)
        if len(path.segments) > 1 and path.exists(obj):
            path.set(picked, path.get(obj))
    return {key: value for key, value in picked.items() if not _is_falsy(value)}


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def merge_objects_by_fields(
    fields: Sequence[str] | None = None,
    obj: Any = None,
    source: Any = None,
    *,
    is_opaque: OpaqueValuePredicate | None = None,
) -> Any:
    """Deep-merge two objects and keep only the allowed fields.

    Nested mappings present in ``obj`` are merged key by key with the
    matching value of ``source`` (``source`` wins on conflicting leaves).
    Identifier and date values are opaque scalars and never recursed into.
    The result is restricted to ``fields`` (plain keys or dotted paths) and
    falsy scalars are dropped.

    When either side is not an object, or either is a list, no merge
    happens: ``source`` is returned if it is an object, else ``obj`` if it
    is one, else an empty dict.

    Args:
        fields: Allowed field names or dotted paths.
        obj: Base object.
        source: Object taking precedence.
        is_opaque: Override for the opaque-value check.

    Returns:
        Merged, field-restricted result.
    """
    fields = list(fields or [])
    obj = {} if obj is None else obj
    source = {} if source is None else source
    opaque = is_opaque or is_opaque_value

    both_objects = _is_object(obj) and _is_object(source)
    either_list = isinstance(obj, list) or isinstance(source, list)
    if not both_objects or either_list:
        if _is_object(source):
            return source
        if _is_object(obj):
            return obj
        return {}

    merged_from = dict(obj)
    merged_to = dict(source)
    for key, value in merged_from.items():
        if _is_object(value) and not opaque(value):
            nested = merged_to.get(key)
            nested_fields = list(value) if isinstance(value, Mapping) else []
            if isinstance(nested, Mapping):
                nested_fields.extend(nested)
            merged_to[key] = merge_objects_by_fields(
                nested_fields, value, nested, is_opaque=opaque
            )

    return _deep_merge(
        _pick_truthy(merged_from, fields), _pick_truthy(merged_to, fields)
    )
