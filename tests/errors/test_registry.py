"""Unit tests for the docquery error registry."""

import pytest

from docquery.errors.registry import (
    ERROR_REGISTRY,
    ErrorCategory,
    get_error,
    get_errors_by_category,
)


@pytest.mark.parametrize(
    "code,category,title",
    [
        ("E-1001", ErrorCategory.INPUT, "Malformed Negation"),
        ("E-1002", ErrorCategory.INPUT, "Invalid Query String"),
        ("E-4001", ErrorCategory.CONFIG, "Config File Not Found"),
        ("E-4002", ErrorCategory.CONFIG, "Invalid Configuration"),
    ],
)
def test_error_codes_registered(code, category, title):
    """Every docquery error code must be registered."""
    error = get_error(code)
    assert error is not None, f"{code} not found in registry"
    assert error.category == category
    assert error.title == title


def test_codes_match_keys():
    for key, error in ERROR_REGISTRY.items():
        assert error.code == key


def test_unknown_code():
    assert get_error("E-9999") is None


def test_by_category():
    codes = [e.code for e in get_errors_by_category(ErrorCategory.CONFIG)]
    assert codes == ["E-4001", "E-4002"]
