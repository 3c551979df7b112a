"""Query normalization pipeline and helpers."""

from docquery.normalizer.aliases import expand_field_aliases
from docquery.normalizer.coercion import (
    RawKind,
    RawValue,
    classify_raw,
    coerce_value,
    sanitize_regex,
)
from docquery.normalizer.merge import (
    merge_branches,
    merge_disjunctions,
    merge_objects_by_fields,
)
from docquery.normalizer.ranges import (
    DisjunctionState,
    expand_ranges,
    is_range_shaped,
    parse_ranges,
)
from docquery.normalizer.search import normalize_search
from docquery.normalizer.sort import normalize_sort
from docquery.normalizer.text_search import (
    add_text_search_to_query,
    extract_keywords,
    keywords_query,
    text_search_filter,
    tokenize,
)

__all__ = [
    "DisjunctionState",
    "RawKind",
    "RawValue",
    "add_text_search_to_query",
    "classify_raw",
    "coerce_value",
    "expand_field_aliases",
    "expand_ranges",
    "extract_keywords",
    "is_range_shaped",
    "keywords_query",
    "merge_branches",
    "merge_disjunctions",
    "merge_objects_by_fields",
    "normalize_search",
    "normalize_sort",
    "parse_ranges",
    "sanitize_regex",
    "text_search_filter",
    "tokenize",
]
