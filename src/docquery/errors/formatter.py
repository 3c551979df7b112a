"""Error formatting utilities.

This module provides:
- DocQueryError exception class for user-facing errors
- Mapping from core QueryErrorCode values to registry codes
- Error formatting for display
"""

from dataclasses import dataclass, field

from docquery.errors.registry import get_error
from docquery.models.filter_expr import QueryErrorCode, QueryNormalizationError

QUERY_ERROR_CODES: dict[QueryErrorCode, str] = {
    QueryErrorCode.MALFORMED_NEGATION: "E-1001",
}


@dataclass
class DocQueryError(Exception):
    """Application error with code, message, and context.

    Attributes:
        code: Error code in E-XXXX format.
        message: Human-readable error message.
        remediation: Action user should take to resolve.
        parameter: Affected query parameter, if applicable.
        details: Additional context dictionary.
    """

    code: str
    message: str
    remediation: str
    parameter: str | None = None
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    @classmethod
    def from_code(cls, code: str, **kwargs: object) -> "DocQueryError":
        """Create error from registry code with context substitution.

        Args:
            code: Error code in E-XXXX format.
            **kwargs: Context values for message template substitution.
                The special key 'details' is stored on the error rather
                than substituted.

        Returns:
            DocQueryError instance with formatted message.
        """
        error_def = get_error(code)
        details = kwargs.get("details", {})
        if not isinstance(details, dict):
            details = {}
        field_name = kwargs.get("field")
        if not isinstance(field_name, str):
            field_name = None

        if not error_def:
            return cls(
                code=code,
                message=f"Unknown error: {code}",
                remediation="Report this error with the query that caused it.",
                parameter=field_name,
                details=details,
            )

        message = error_def.message_template
        try:
            message = message.format(**kwargs)
        except KeyError:
            # Keep template if some placeholders are missing
            pass

        return cls(
            code=error_def.code,
            message=message,
            remediation=error_def.remediation,
            parameter=field_name,
            details=details,
        )


def from_normalization_error(error: QueryNormalizationError) -> DocQueryError:
    """Translate a core normalization error into a registry error."""
    code = QUERY_ERROR_CODES.get(error.code, error.code.value)
    return DocQueryError.from_code(
        code,
        field=error.field or "",
        value=error.value or "",
        details={"reason": error.message},
    )


def format_error(error: DocQueryError, include_remediation: bool = True) -> str:
    """Format error for display to user.

    Args:
        error: The DocQueryError to format.
        include_remediation: Whether to include remediation steps.

    Returns:
        Multi-line formatted string suitable for user display.
    """
    lines = [f"{error.code}: {error.message}"]
    if error.parameter:
        lines.append(f"  Parameter: {error.parameter}")
    if include_remediation:
        lines.append(f"  Action: {error.remediation}")
    return "\n".join(lines)
