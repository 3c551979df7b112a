"""Free-text search filters.

A query is split into word terms (letters and digits, Unicode-aware). A
document matches when at least one search field partial-matches every
term, case-insensitively.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any

from docquery.models.filter_expr import (
    And,
    Branch,
    Equals,
    FieldPredicate,
    FilterExpression,
    In,
    Or,
    PartialMatch,
)
from docquery.normalizer.merge import merge_disjunctions
from docquery.paths import FieldPath

logger = logging.getLogger(__name__)

# Anything that is not a letter or a digit; ``_`` counts as a separator.
_TERM_SEPARATOR = re.compile(r"[\W_]+")


def tokenize(text: str) -> list[str]:
    """Split text into non-empty letter/digit runs."""
    return [term for term in _TERM_SEPARATOR.split(text) if term]


def text_search_filter(q: str | None, fields: Sequence[str] = ()) -> FilterExpression:
    """Build a disjunction of per-field term conjunctions.

    Terms are used as raw patterns; the tokenizer only lets letters and
    digits through.

    Args:
        q: Free-text query.
        fields: Fields to search.

    Returns:
        ``Or`` of one ``And`` branch per field, or an empty filter when the
        query has no terms or there are no fields.
    """
    terms = tokenize(q or "")
    if not terms or not fields:
        return FilterExpression()
    patterns = [Equals(value=PartialMatch(pattern=term)) for term in terms]
    return FilterExpression(
        any_of=Or(
            branches=[
                Branch(
                    all_of=And(
                        terms=[
                            FieldPredicate(field=name, predicate=pattern)
                            for pattern in patterns
                        ]
                    )
                )
                for name in fields
            ]
        )
    )


def add_text_search_to_query(
    filter: FilterExpression, q: str | None, search_fields: Sequence[str]
) -> None:
    """Attach a text search to an existing filter, in place.

    With an existing disjunction every branch is combined with every
    text-search branch; otherwise the text-search disjunction is attached
    as is. A query without terms leaves the filter unchanged.
    """
    text_filter = text_search_filter(q, search_fields)
    if text_filter.any_of is None:
        return
    before = len(filter.any_of.branches) if filter.any_of is not None else 0
    filter.any_of = merge_disjunctions(filter.any_of, text_filter.any_of)
    logger.debug(
        "Text search merged: %d -> %d branches", before, len(filter.any_of.branches)
    )


def extract_keywords(obj: Any, fields: Sequence[str]) -> list[str]:
    """Collect lower-cased word terms from string values at ``fields``.

    Args:
        obj: Document to read.
        fields: Dotted field paths; lists along the path are descended.

    Returns:
        Terms in field order, then value order.
    """
    keywords: list[str] = []
    for name in fields:
        for value in FieldPath.parse(name).collect(obj):
            if isinstance(value, str) and value:
                keywords.extend(tokenize(value.lower()))
    return keywords


def keywords_query(q: str) -> In:
    """Membership predicate matching ``q`` anywhere in a keyword array."""
    return In(values=[PartialMatch(pattern=q)])
