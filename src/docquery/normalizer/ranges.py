"""Range expansion: ``"18-25"`` and ``"18-25,30-40"`` parameter values.

Runs after coercion over the fields whose value is still range-shaped text.
A single interval replaces the value in place. Several intervals start (or
multiply) a disjunction: each branch is a copy of the filter with the field
set to one interval, so the final branch count is the product of the
interval counts of every multi-interval field, processed in field order.

The pass is a fold over fields threading a DisjunctionState, which holds
the flat filter and, once started, the branch rows.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import reduce
from typing import Any

from docquery.models.filter_expr import (
    Branch,
    Equals,
    FilterExpression,
    Or,
    QueryErrorCode,
    Range,
)

logger = logging.getLogger(__name__)

RANGE_SEPARATOR = ","

_RANGE_PATTERN = re.compile(r"([0-9]+)-([0-9]+)")

Row = Mapping[str, Any]


def is_range_shaped(text: str) -> bool:
    """Return True when ``text`` contains a ``low-high`` integer token."""
    return _RANGE_PATTERN.search(text) is not None


def parse_ranges(raw: str) -> list[Range]:
    """Parse a comma-separated interval list.

    One trailing comma is ignored. Tokens without a ``low-high`` pair are
    dropped.

    Args:
        raw: Range-shaped parameter value.

    Returns:
        Intervals in input order (possibly empty).
    """
    if raw.endswith(RANGE_SEPARATOR):
        raw = raw[:-1]
    ranges: list[Range] = []
    for token in raw.split(RANGE_SEPARATOR):
        match = _RANGE_PATTERN.search(token)
        if match is None:
            logger.debug(
                "%s: dropping %r", QueryErrorCode.INVALID_RANGE_TOKEN.value, token
            )
            continue
        ranges.append(Range(min=int(match.group(1)), max=int(match.group(2))))
    return ranges


@dataclass(frozen=True)
class DisjunctionState:
    """Accumulator of the range fold.

    ``branches`` is None until a field with two or more intervals is met.
    """

    flat: Row = field(default_factory=dict)
    branches: tuple[Row, ...] | None = None

    @property
    def started(self) -> bool:
        return self.branches is not None


def _assign(row: Row, name: str, value: Any) -> dict[str, Any]:
    return {**row, name: value}


def apply_ranges(
    state: DisjunctionState, name: str, ranges: list[Range]
) -> DisjunctionState:
    """Fold one field's intervals into the state.

    Args:
        state: State after the previous fields.
        name: Field being expanded.
        ranges: The field's parsed intervals (non-empty).

    Returns:
        New state; the input state is not modified.
    """
    if not state.started:
        if len(ranges) == 1:
            return DisjunctionState(flat=_assign(state.flat, name, ranges[0]))
        return DisjunctionState(
            flat=state.flat,
            branches=tuple(_assign(state.flat, name, r) for r in ranges),
        )
    # Every existing branch once per interval; one interval keeps the count.
    return DisjunctionState(
        flat=state.flat,
        branches=tuple(
            _assign(branch, name, r) for r in ranges for branch in state.branches
        ),
    )


def _step(state: DisjunctionState, item: tuple[str, Any]) -> DisjunctionState:
    name, raw = item
    ranges = parse_ranges(raw)
    if not ranges:
        literal = Equals(value=raw)
        return DisjunctionState(
            flat=_assign(state.flat, name, literal),
            branches=None
            if state.branches is None
            else tuple(_assign(b, name, literal) for b in state.branches),
        )
    return apply_ranges(state, name, ranges)


def expand_ranges(coerced: Mapping[str, Any]) -> FilterExpression:
    """Expand every range-shaped field of a coerced parameter mapping.

    Args:
        coerced: Field → predicate, or raw text for range-shaped fields.

    Returns:
        A flat FilterExpression when no field had several intervals,
        otherwise a disjunctive one.
    """
    pending = [(name, value) for name, value in coerced.items() if isinstance(value, str)]
    state = reduce(_step, pending, DisjunctionState(flat=dict(coerced)))
    if not state.started:
        return FilterExpression(predicates=dict(state.flat))
    logger.debug("Range expansion produced %d branches", len(state.branches))
    return FilterExpression(
        any_of=Or(branches=[Branch(predicates=dict(row)) for row in state.branches])
    )
