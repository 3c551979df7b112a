"""Store identifier and date recognition.

The identifier format is store-specific, so recognition is split in two:
a fixed shape check (24 hex digits) and an injectable validator that the
caller can replace with its store driver's own check.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Callable

from docquery.models.filter_expr import Identifier

IdentifierValidator = Callable[[str], bool]
OpaqueValuePredicate = Callable[[Any], bool]

_IDENTIFIER_SHAPE = re.compile(r"[0-9a-f]{24}", re.IGNORECASE)


def has_identifier_shape(text: str) -> bool:
    """Return True when ``text`` is exactly 24 hex digits."""
    return _IDENTIFIER_SHAPE.fullmatch(text) is not None


def default_identifier_validator(text: str) -> bool:
    """Accept any 24-hex-digit string."""
    return has_identifier_shape(text)


def is_identifier(text: str, validator: IdentifierValidator | None = None) -> bool:
    """Check whether a string is a valid store identifier.

    Args:
        text: Candidate string.
        validator: Store-specific validity check. Only consulted for
            strings that already have the identifier shape.

    Returns:
        True if the string has the identifier shape and the validator
        accepts it.
    """
    if not has_identifier_shape(text):
        return False
    check = validator or default_identifier_validator
    return bool(check(text))


def to_identifier(text: str) -> Identifier:
    return Identifier(value=text)


def is_date_value(value: Any) -> bool:
    # datetime is a subclass of date
    return isinstance(value, date)


def is_opaque_value(value: Any) -> bool:
    """Values treated as scalars by deep merges (never recursed into)."""
    return isinstance(value, Identifier) or is_date_value(value)
