"""Query-parameter normalization pipeline.

raw parameters → alias expansion → per-field coercion → range expansion
→ FilterExpression.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from docquery.identifiers import IdentifierValidator
from docquery.models.filter_expr import FilterExpression, NormalizeOptions
from docquery.normalizer.aliases import expand_field_aliases
from docquery.normalizer.coercion import coerce_value
from docquery.normalizer.ranges import expand_ranges

logger = logging.getLogger(__name__)


def normalize_search(
    raw: Mapping[str, Any] | None = None,
    options: NormalizeOptions | Mapping[str, Any] | None = None,
    *,
    identifier_validator: IdentifierValidator | None = None,
) -> FilterExpression:
    """Build a filter expression from flat, string-keyed search parameters.

    Already-typed values (numbers, booleans, identifiers, dates, predicates)
    are not reinterpreted, so normalizing a normalized flat filter returns
    it unchanged.

    Args:
        raw: Field → raw value, e.g. parsed from an HTTP query string.
            Field names may be ``|``-joined aliases. Never mutated.
        options: ``no_regex`` / ``match_from_start`` switches.
        identifier_validator: Store-specific identifier check applied to
            24-hex-digit values.

    Returns:
        Flat or disjunctive FilterExpression.

    Raises:
        QueryNormalizationError: MALFORMED_NEGATION for a ``!`` value whose
            remainder is not a JSON literal.
    """
    if options is None:
        options = NormalizeOptions()
    elif not isinstance(options, NormalizeOptions):
        options = NormalizeOptions.model_validate(options)

    working = expand_field_aliases(raw or {})
    coerced = {
        field: coerce_value(value, options, identifier_validator, field)
        for field, value in working.items()
    }
    result = expand_ranges(coerced)
    logger.debug(
        "Normalized %d parameters into %s filter",
        len(working),
        "disjunctive" if result.is_disjunctive else "flat",
    )
    return result
