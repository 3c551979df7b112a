"""Filter-expression compiler — deterministic query-document generation.

Compiles a FilterExpression into a MongoDB-style query document. Identifiers
and dates are written in Extended JSON (``$oid`` / ``$date``) so the document
stays JSON-serializable; a store driver converts them on its side.
Guarantees: identical FilterExpression → identical document and explanation.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Union

from pydantic import BaseModel, Field

from docquery.models.filter_expr import (
    And,
    Branch,
    Equals,
    FilterExpression,
    Identifier,
    In,
    NotEquals,
    Or,
    PartialMatch,
    Range,
    SortSpec,
)

COMPILER_VERSION = "query_compiler_v1"


class CompiledQuery(BaseModel):
    """Output of the compiler — query document ready for a document store."""

    document: dict[str, Any] = Field(
        default_factory=dict, description="Query document."
    )
    fields_used: list[str] = Field(
        default_factory=list, description="Fields referenced in the query."
    )
    explanation: str = Field(
        default="", description="Human-readable filter explanation."
    )
    compiler_version: str = Field(
        default=COMPILER_VERSION, description="Compiler that produced the document."
    )


def compile_filter(expr: FilterExpression) -> CompiledQuery:
    """Compile a filter expression into a query document.

    Args:
        expr: Normalized filter expression.

    Returns:
        CompiledQuery with the document, referenced fields and explanation.

    Raises:
        TypeError: On a node type the compiler does not know.
    """
    fields_used: set[str] = set()
    document = _compile_row(expr.predicates, None, fields_used)
    if expr.any_of is not None:
        document["$or"] = _compile_or(expr.any_of, fields_used)
    return CompiledQuery(
        document=document,
        fields_used=sorted(fields_used),
        explanation=explain_filter(expr),
        compiler_version=COMPILER_VERSION,
    )


def compile_sort(spec: SortSpec) -> dict[str, int]:
    """Render a SortSpec as an ordered sort document."""
    return dict(spec.directions)


# ---------------------------------------------------------------------------
# Compilation — recursive tree walk
# ---------------------------------------------------------------------------


def _compile_row(
    predicates: Mapping[str, Any], all_of: And | None, fields_used: set[str]
) -> dict[str, Any]:
    document: dict[str, Any] = {}
    for name, predicate in predicates.items():
        fields_used.add(name)
        document[name] = compile_predicate(predicate)
    if all_of is not None:
        document["$and"] = _compile_and(all_of, fields_used)
    return document


def _compile_and(node: And, fields_used: set[str]) -> list[dict[str, Any]]:
    terms = []
    for term in node.terms:
        fields_used.add(term.field)
        terms.append({term.field: compile_predicate(term.predicate)})
    return terms


def _compile_or(node: Or, fields_used: set[str]) -> list[dict[str, Any]]:
    return [
        _compile_row(branch.predicates, branch.all_of, fields_used)
        for branch in node.branches
    ]


def compile_predicate(predicate: Union[Equals, NotEquals, In, Range]) -> Any:
    """Compile a single field predicate into its document form."""
    if isinstance(predicate, Equals):
        value = predicate.value
        if isinstance(value, PartialMatch):
            return {"$regex": value.regex_source, "$options": _regex_options(value)}
        if isinstance(value, Mapping):
            return {"$eq": _encode_value(value)}
        return _encode_value(value)
    if isinstance(predicate, NotEquals):
        return {"$ne": _encode_value(predicate.value)}
    if isinstance(predicate, In):
        return {"$in": [_encode_value(v) for v in predicate.values]}
    if isinstance(predicate, Range):
        return {"$gte": predicate.min, "$lte": predicate.max}
    raise TypeError(f"Unsupported predicate type: {type(predicate)!r}")


def _regex_options(match: PartialMatch) -> str:
    return "i" if match.case_insensitive else ""


def _encode_value(value: Any) -> Any:
    """Encode a literal into its JSON-compatible document form."""
    if isinstance(value, Identifier):
        return {"$oid": value.value}
    if isinstance(value, PartialMatch):
        return {
            "$regularExpression": {
                "pattern": value.regex_source,
                "options": _regex_options(value),
            }
        }
    if isinstance(value, datetime):
        return {"$date": value.isoformat()}
    if isinstance(value, date):
        return {"$date": datetime(value.year, value.month, value.day).isoformat()}
    if isinstance(value, Mapping):
        return {str(k): _encode_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_encode_value(v) for v in value]
    return value


# ---------------------------------------------------------------------------
# Explanation
# ---------------------------------------------------------------------------


def _describe_value(value: Any) -> str:
    if isinstance(value, PartialMatch):
        flags = "i" if value.case_insensitive else ""
        return f"/{value.regex_source}/{flags}"
    if isinstance(value, str):
        return f"'{value}'"
    return str(value)


def _explain_predicate_label(name: str, predicate: Any) -> str:
    """Generate a human-readable label for a single field predicate.

    Args:
        name: Field the predicate applies to.
        predicate: The predicate to describe.

    Returns:
        Human-readable description string.
    """
    if isinstance(predicate, Equals):
        if isinstance(predicate.value, PartialMatch):
            return f"{name} matches {_describe_value(predicate.value)}"
        return f"{name} equals {_describe_value(predicate.value)}"
    if isinstance(predicate, NotEquals):
        return f"{name} not equal to {_describe_value(predicate.value)}"
    if isinstance(predicate, In):
        values = [_describe_value(v) for v in predicate.values]
        return f"{name} in [{', '.join(values)}]"
    if isinstance(predicate, Range):
        return f"{name} between {predicate.min} and {predicate.max}"
    return f"{name} {predicate!r}"


def _join(parts: list[str], logic: str) -> str:
    parts = [p for p in parts if p]
    if not parts:
        return ""
    if len(parts) == 1:
        return parts[0]
    return "(" + f" {logic} ".join(parts) + ")"


def _explain_row(predicates: Mapping[str, Any], all_of: And | None) -> str:
    parts = [_explain_predicate_label(name, p) for name, p in predicates.items()]
    if all_of is not None:
        parts.extend(
            _explain_predicate_label(term.field, term.predicate)
            for term in all_of.terms
        )
    return _join(parts, "AND")


def _explain_branch(branch: Branch) -> str:
    return _explain_row(branch.predicates, branch.all_of)


def explain_filter(expr: FilterExpression) -> str:
    """Build the explanation string for a filter expression.

    Args:
        expr: Filter expression to describe.

    Returns:
        Explanation prefixed with ``'Filter: '``.
    """
    parts = [_explain_row(expr.predicates, None)]
    if expr.any_of is not None:
        parts.append(_join([_explain_branch(b) for b in expr.any_of.branches], "OR"))
    result = _join(parts, "AND")
    if not result:
        return "No filter conditions."
    # Strip outer parens on the root group
    if result.startswith("(") and result.endswith(")"):
        result = result[1:-1]
    return f"Filter: {result}."
