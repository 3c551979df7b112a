"""Error handling framework for docquery.

This package provides:
- Error code registry with E-XXXX format codes
- Translation of core normalization errors to registry errors
- Error formatting utilities

Error categories:
- E-1xxx: Query input errors
- E-4xxx: Configuration errors
"""

from docquery.errors.formatter import (
    QUERY_ERROR_CODES,
    DocQueryError,
    format_error,
    from_normalization_error,
)
from docquery.errors.registry import (
    ERROR_REGISTRY,
    ErrorCategory,
    ErrorCode,
    get_error,
    get_errors_by_category,
)

__all__ = [
    # Registry
    "ErrorCode",
    "ErrorCategory",
    "ERROR_REGISTRY",
    "get_error",
    "get_errors_by_category",
    # Formatter
    "DocQueryError",
    "QUERY_ERROR_CODES",
    "format_error",
    "from_normalization_error",
]
