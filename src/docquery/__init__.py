"""docquery — turn flat query-string parameters into document-store filters.

Public entry points:
- normalize_search: raw parameters → FilterExpression
- normalize_sort: "-price,name" → SortSpec
- text_search_filter / add_text_search_to_query: free-text search
- merge_objects_by_fields: field-scoped deep merge
- compile_filter: FilterExpression → MongoDB-style query document
"""

from docquery.compiler import CompiledQuery, compile_filter, compile_sort, explain_filter
from docquery.identifiers import is_identifier
from docquery.models import (
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
    QueryErrorCode,
    QueryNormalizationError,
    Range,
    SortSpec,
)
from docquery.normalizer import (
    add_text_search_to_query,
    extract_keywords,
    keywords_query,
    merge_objects_by_fields,
    normalize_search,
    normalize_sort,
    sanitize_regex,
    text_search_filter,
)

__version__ = "0.1.0"

__all__ = [
    "And",
    "Branch",
    "CompiledQuery",
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
    "QueryErrorCode",
    "QueryNormalizationError",
    "Range",
    "SortSpec",
    "add_text_search_to_query",
    "compile_filter",
    "compile_sort",
    "explain_filter",
    "extract_keywords",
    "is_identifier",
    "keywords_query",
    "merge_objects_by_fields",
    "normalize_search",
    "normalize_sort",
    "sanitize_regex",
    "text_search_filter",
]
