"""Per-field value coercion.

A raw value is classified once into a RawValue tag. Only TEXT values go
through the coercion rules; everything else is already typed and passes
through (predicates untouched, other values as ``Equals``).

Coercion rules for text, first match wins:

1. contains ``|``            → In(tokens), identifier-shaped tokens tagged
2. contains ``!``            → NotEquals(JSON literal of the remainder)
3. ``^[0-9]+$``              → Equals(int)
4. contains ``N-N``          → left as text for range expansion
5. ``true`` / ``false``      → Equals(bool)
6. valid identifier          → Equals(Identifier)
7. otherwise                 → Equals(PartialMatch) unless ``no_regex``
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from docquery.identifiers import (
    IdentifierValidator,
    has_identifier_shape,
    is_identifier,
    to_identifier,
)
from docquery.models.filter_expr import (
    PREDICATE_TYPES,
    Equals,
    Identifier,
    In,
    NormalizeOptions,
    NotEquals,
    PartialMatch,
    QueryErrorCode,
    QueryNormalizationError,
)
from docquery.normalizer.ranges import is_range_shaped

logger = logging.getLogger(__name__)

MULTI_VALUE_SEPARATOR = "|"
NEGATION_MARKER = "!"

_INTEGER_PATTERN = re.compile(r"[0-9]+")
_REGEX_METACHARACTERS = re.compile(r"([+.)(\][])")


class RawKind(str, Enum):
    """Tag for a raw parameter value, decided once at ingestion."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    IDENTIFIER = "identifier"
    DATE = "date"
    NULL = "null"
    OBJECT = "object"
    PREDICATE = "predicate"


@dataclass(frozen=True)
class RawValue:
    kind: RawKind
    value: Any


def classify_raw(value: Any) -> RawValue:
    """Tag a raw parameter value with its kind."""
    if isinstance(value, PREDICATE_TYPES):
        return RawValue(RawKind.PREDICATE, value)
    if isinstance(value, str):
        return RawValue(RawKind.TEXT, value)
    # bool before number: bool is an int subclass
    if isinstance(value, bool):
        return RawValue(RawKind.BOOLEAN, value)
    if isinstance(value, (int, float, Decimal)):
        return RawValue(RawKind.NUMBER, value)
    if isinstance(value, Identifier):
        return RawValue(RawKind.IDENTIFIER, value)
    if isinstance(value, date):
        return RawValue(RawKind.DATE, value)
    if value is None:
        return RawValue(RawKind.NULL, value)
    return RawValue(RawKind.OBJECT, value)


def sanitize_regex(text: str) -> str:
    """Escape the characters ``+ . ) ( ] [`` for use in a regex source."""
    return _REGEX_METACHARACTERS.sub(r"\\\1", text)


def _coerce_multi_value(text: str, validator: IdentifierValidator | None) -> In:
    tokens = [token for token in text.split(MULTI_VALUE_SEPARATOR) if token]
    return In(
        values=[
            to_identifier(token) if is_identifier(token, validator) else token
            for token in tokens
        ]
    )


def _reject_constant(name: str) -> Any:
    # json accepts NaN and Infinity; JSON does not.
    raise ValueError(f"{name} is not a JSON value")


def _coerce_negation(text: str, field: str | None) -> NotEquals:
    literal = text.replace(NEGATION_MARKER, "", 1)
    try:
        parsed = json.loads(literal, parse_constant=_reject_constant)
    except ValueError as e:
        reason = e.msg if isinstance(e, json.JSONDecodeError) else str(e)
        raise QueryNormalizationError(
            QueryErrorCode.MALFORMED_NEGATION,
            f"Negated value {text!r} is not a valid JSON literal: {reason}.",
            field=field,
            value=text,
        ) from e
    return NotEquals(value=parsed)


def coerce_text(
    text: str,
    options: NormalizeOptions,
    identifier_validator: IdentifierValidator | None = None,
    field: str | None = None,
) -> Any:
    """Apply the text coercion rules to one value.

    Args:
        text: Raw string value.
        options: Caller switches for the fallback partial-match rule.
        identifier_validator: Store-specific identifier check.
        field: Field name, used for error context only.

    Returns:
        A predicate, or the unchanged text when it is range-shaped.

    Raises:
        QueryNormalizationError: MALFORMED_NEGATION when a ``!`` value is
            not valid JSON after the marker is removed.
    """
    if MULTI_VALUE_SEPARATOR in text:
        return _coerce_multi_value(text, identifier_validator)
    if NEGATION_MARKER in text:
        return _coerce_negation(text, field)
    if _INTEGER_PATTERN.fullmatch(text):
        return Equals(value=int(text))
    if is_range_shaped(text):
        return text
    if text in ("true", "false"):
        return Equals(value=text == "true")
    if has_identifier_shape(text):
        if is_identifier(text, identifier_validator):
            return Equals(value=to_identifier(text))
        logger.debug(
            "%s: %r rejected by identifier validator",
            QueryErrorCode.REJECTED_IDENTIFIER.value,
            text,
        )
    if options.no_regex:
        return Equals(value=text)
    return Equals(
        value=PartialMatch(
            pattern=sanitize_regex(text), anchored=options.match_from_start
        )
    )


def coerce_value(
    value: Any,
    options: NormalizeOptions | None = None,
    identifier_validator: IdentifierValidator | None = None,
    field: str | None = None,
) -> Any:
    """Coerce one raw parameter value.

    Returns a predicate, or the raw text for range-shaped values that the
    range pass still has to expand.
    """
    raw = classify_raw(value)
    if raw.kind is RawKind.PREDICATE:
        return raw.value
    if raw.kind is not RawKind.TEXT:
        return Equals(value=raw.value)
    return coerce_text(
        raw.value, options or NormalizeOptions(), identifier_validator, field
    )
