"""Error code registry with E-XXXX format codes.

This module defines the error code system for docquery, organizing errors
into categories:
- E-1xxx: Query input errors
- E-4xxx: Configuration errors

Each error includes a code, title, message template, and remediation steps.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Categories for error codes."""

    INPUT = "input"  # E-1xxx: Query input errors
    CONFIG = "config"  # E-4xxx: Configuration errors


@dataclass
class ErrorCode:
    """Definition of an error code with metadata.

    Attributes:
        code: Error code in E-XXXX format.
        category: Error category for grouping.
        title: Short title for display.
        message_template: Message with {placeholders} for context.
        remediation: Action user should take to resolve.
    """

    code: str  # E-XXXX format
    category: ErrorCategory
    title: str
    message_template: str
    remediation: str


ERROR_REGISTRY: dict[str, ErrorCode] = {
    # Input errors (E-1xxx)
    "E-1001": ErrorCode(
        code="E-1001",
        category=ErrorCategory.INPUT,
        title="Malformed Negation",
        message_template="Negated value for '{field}' is not a valid JSON literal: {value}",
        remediation="Write negations as !<json>, e.g. !true, !5 or !\"text\".",
    ),
    "E-1002": ErrorCode(
        code="E-1002",
        category=ErrorCategory.INPUT,
        title="Invalid Query String",
        message_template="Could not parse query string: {details}",
        remediation="Pass parameters as field=value pairs joined with '&'.",
    ),
    # Configuration errors (E-4xxx)
    "E-4001": ErrorCode(
        code="E-4001",
        category=ErrorCategory.CONFIG,
        title="Config File Not Found",
        message_template="Config file not found: {path}",
        remediation="Check the --config path, or remove it to use the default search locations.",
    ),
    "E-4002": ErrorCode(
        code="E-4002",
        category=ErrorCategory.CONFIG,
        title="Invalid Configuration",
        message_template="Configuration is invalid: {details}",
        remediation="Fix the reported keys in docquery.yaml or the DOCQUERY_* environment variables.",
    ),
}


def get_error(code: str) -> ErrorCode | None:
    """Get error definition by code.

    Args:
        code: Error code in E-XXXX format.

    Returns:
        ErrorCode if found, None otherwise.
    """
    return ERROR_REGISTRY.get(code)


def get_errors_by_category(category: ErrorCategory) -> list[ErrorCode]:
    """Get all errors in a category."""
    return [e for e in ERROR_REGISTRY.values() if e.category == category]
