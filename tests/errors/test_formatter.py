"""Tests for error construction and formatting."""

import pytest

from docquery.errors import DocQueryError, format_error, from_normalization_error
from docquery.errors.formatter import QUERY_ERROR_CODES
from docquery.models.filter_expr import QueryErrorCode, QueryNormalizationError
from docquery.normalizer import normalize_search


class TestDocQueryError:
    """Registry-backed error construction."""

    def test_from_code_substitutes(self):
        error = DocQueryError.from_code("E-4001", path="/tmp/x.yaml")
        assert error.code == "E-4001"
        assert error.message == "Config file not found: /tmp/x.yaml"
        assert "--config" in error.remediation

    def test_missing_placeholder_keeps_template(self):
        error = DocQueryError.from_code("E-1001", field="status")
        assert "{value}" in error.message
        assert error.parameter == "status"

    def test_unknown_code(self):
        error = DocQueryError.from_code("E-9999")
        assert error.message == "Unknown error: E-9999"

    def test_str(self):
        assert str(DocQueryError.from_code("E-1002", details="x")).startswith("E-1002: ")


def test_raised_query_error_codes_are_mapped():
    assert QUERY_ERROR_CODES == {QueryErrorCode.MALFORMED_NEGATION: "E-1001"}


def test_from_normalization_error():
    with pytest.raises(QueryNormalizationError) as exc_info:
        normalize_search({"status": "!maybe"})
    error = from_normalization_error(exc_info.value)
    assert error.code == "E-1001"
    assert error.parameter == "status"
    assert "'status'" in error.message
    assert "!maybe" in error.message
    assert error.details["reason"] == exc_info.value.message


def test_format_error():
    error = DocQueryError.from_code("E-1001", field="status", value="!maybe")
    text = format_error(error)
    lines = text.splitlines()
    assert lines[0].startswith("E-1001: ")
    assert lines[1] == "  Parameter: status"
    assert lines[2].startswith("  Action: ")
    assert len(format_error(error, include_remediation=False).splitlines()) == 2
