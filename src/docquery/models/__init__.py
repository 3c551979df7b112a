"""Pydantic models for query normalization.

This module exports the filter-expression value types, caller options,
sort specification, and the normalization error.
"""

from docquery.models.filter_expr import (
    PREDICATE_TYPES,
    And,
    Branch,
    Equals,
    FieldMeta,
    FieldPredicate,
    FilterExpression,
    Identifier,
    In,
    NormalizeOptions,
    NotEquals,
    Or,
    PartialMatch,
    Predicate,
    QueryErrorCode,
    QueryNormalizationError,
    Range,
    SortSpec,
)

__all__ = [
    "PREDICATE_TYPES",
    "And",
    "Branch",
    "Equals",
    "FieldMeta",
    "FieldPredicate",
    "FilterExpression",
    "Identifier",
    "In",
    "NormalizeOptions",
    "NotEquals",
    "Or",
    "PartialMatch",
    "Predicate",
    "QueryErrorCode",
    "QueryNormalizationError",
    "Range",
    "SortSpec",
]
