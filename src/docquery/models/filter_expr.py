"""Filter-expression data models for query-string normalization.

This module defines the value types produced by the normalizer pipeline:
raw query parameters → per-field predicates (Equals, NotEquals, In, Range)
→ FilterExpression (flat conjunction or disjunction of conjunctive branches).
All models are Pydantic v2 for validation and serialization.

Predicate values are store-agnostic: partial matches are carried as
PartialMatch descriptors and store identifiers as Identifier values, so the
compiler (or any other consumer) decides how to render them.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class QueryErrorCode(str, Enum):
    """Deterministic error codes for query normalization."""

    MALFORMED_NEGATION = "MALFORMED_NEGATION"
    INVALID_RANGE_TOKEN = "INVALID_RANGE_TOKEN"
    REJECTED_IDENTIFIER = "REJECTED_IDENTIFIER"


# ---------------------------------------------------------------------------
# Scalar value types
# ---------------------------------------------------------------------------

class Identifier(BaseModel):
    """An opaque store identifier (24 hex digits, stored lower-cased)."""

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., description="Hex identifier string.")

    @field_validator("value")
    @classmethod
    def lowercase_value(cls, value: str) -> str:
        return value.lower()

    def __str__(self) -> str:
        return self.value


class PartialMatch(BaseModel):
    """Case-insensitive partial-match pattern against a string field.

    ``pattern`` never includes the start anchor; ``anchored`` carries it so
    each consumer can render the match with its own regex facility.
    """

    model_config = ConfigDict(frozen=True)

    pattern: str = Field(..., description="Regex source without anchor.")
    case_insensitive: bool = Field(default=True)
    anchored: bool = Field(
        default=False, description="Match only at the start of the value."
    )

    @property
    def regex_source(self) -> str:
        """Pattern source including the start anchor when requested."""
        return f"^{self.pattern}" if self.anchored else self.pattern

    def compile(self) -> re.Pattern[str]:
        """Compile into a Python regular expression."""
        flags = re.IGNORECASE if self.case_insensitive else 0
        return re.compile(self.regex_source, flags)

    def matches(self, text: str) -> bool:
        """Return True when ``text`` contains a match."""
        return self.compile().search(text) is not None


# ---------------------------------------------------------------------------
# Field predicates
# ---------------------------------------------------------------------------

class Equals(BaseModel):
    """Literal match: string, number, boolean, identifier, or PartialMatch."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["eq"] = "eq"
    value: Any


class NotEquals(BaseModel):
    """Negated literal match."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["ne"] = "ne"
    value: Any


class In(BaseModel):
    """Membership in an ordered list of values."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["in"] = "in"
    values: list[Any] = Field(default_factory=list)


class Range(BaseModel):
    """Closed integer interval ``min <= value <= max``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["range"] = "range"
    min: int
    max: int


Predicate = Annotated[
    Union[Equals, NotEquals, In, Range], Field(discriminator="kind")
]

PREDICATE_TYPES = (Equals, NotEquals, In, Range)


class FieldPredicate(BaseModel):
    """A predicate bound to a single field (one term of an And)."""

    field: str
    predicate: Predicate


class And(BaseModel):
    """Conjunction of single-field terms; every term must hold."""

    terms: list[FieldPredicate] = Field(default_factory=list)


class Branch(BaseModel):
    """One conjunctive row of a disjunction.

    ``predicates`` is the implicit field→predicate conjunction; ``all_of``
    carries an explicit term list (text search produces these).
    """

    predicates: dict[str, Predicate] = Field(default_factory=dict)
    all_of: And | None = None


class Or(BaseModel):
    """Disjunction of conjunctive branches."""

    branches: list[Branch] = Field(default_factory=list)


class FilterExpression(BaseModel):
    """Top-level filter value.

    ``normalize_search`` produces either a flat ``predicates`` mapping or an
    ``any_of`` disjunction, never both. ``add_text_search_to_query`` may
    later attach a disjunction to a flat filter, in which case both parts
    must hold.
    """

    predicates: dict[str, Predicate] = Field(default_factory=dict)
    any_of: Or | None = None

    @property
    def is_disjunctive(self) -> bool:
        return self.any_of is not None

    @property
    def is_empty(self) -> bool:
        return not self.predicates and self.any_of is None


# ---------------------------------------------------------------------------
# Options, sort, schema
# ---------------------------------------------------------------------------

class NormalizeOptions(BaseModel):
    """Caller switches for the fallback partial-match rule."""

    no_regex: bool = Field(
        default=False, description="Keep unmatched text as a literal string."
    )
    match_from_start: bool = Field(
        default=False, description="Anchor partial matches to the value start."
    )


class FieldMeta(BaseModel):
    """Per-field schema metadata relevant to sorting."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    is_multi_language: bool = Field(default=False, alias="langMap")


class SortSpec(BaseModel):
    """Ordered field → direction mapping (primary key first).

    Mapping semantics: a repeated field keeps its first position and takes
    the last direction given.
    """

    directions: dict[str, Literal[1, -1]] = Field(default_factory=dict)

    def pairs(self) -> list[tuple[str, int]]:
        return list(self.directions.items())


# ---------------------------------------------------------------------------
# Error
# ---------------------------------------------------------------------------

class QueryNormalizationError(Exception):
    """Deterministic error raised while normalizing query parameters."""

    def __init__(
        self,
        code: QueryErrorCode,
        message: str,
        field: str | None = None,
        value: str | None = None,
    ) -> None:
        """Initialize with a deterministic error code and message.

        Args:
            code: The specific error code from QueryErrorCode enum.
            message: Human-readable description of the failure.
            field: Query parameter the failure belongs to, if any.
            value: Offending raw value, if any.
        """
        self.code = code
        self.message = message
        self.field = field
        self.value = value
        super().__init__(f"[{code.value}] {message}")
