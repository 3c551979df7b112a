"""Tests for filter-expression models."""

import pytest
from pydantic import TypeAdapter, ValidationError

from docquery.models.filter_expr import (
    Branch,
    Equals,
    FieldMeta,
    FilterExpression,
    Identifier,
    In,
    Or,
    PartialMatch,
    Predicate,
    QueryErrorCode,
    QueryNormalizationError,
    Range,
    SortSpec,
)


class TestPredicates:
    """Discriminated predicate union."""

    def test_discriminator_selects_type(self):
        adapter = TypeAdapter(Predicate)
        assert adapter.validate_python({"kind": "range", "min": 1, "max": 2}) == Range(
            min=1, max=2
        )
        assert adapter.validate_python({"kind": "in", "values": ["a"]}) == In(values=["a"])

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            TypeAdapter(Predicate).validate_python({"kind": "gt", "value": 1})

    def test_predicates_are_frozen(self):
        with pytest.raises(ValidationError):
            Range(min=1, max=2).min = 5

    def test_json_round_trip(self):
        expr = FilterExpression(
            any_of=Or(branches=[Branch(predicates={"a": Range(min=1, max=2)})])
        )
        assert FilterExpression.model_validate_json(expr.model_dump_json()) == expr


class TestPartialMatch:
    """Regex descriptor."""

    def test_anchor(self):
        assert PartialMatch(pattern="ab").regex_source == "ab"
        assert PartialMatch(pattern="ab", anchored=True).regex_source == "^ab"

    def test_matches(self):
        match = PartialMatch(pattern="a\\.b", anchored=True)
        assert match.matches("A.B tail")
        assert not match.matches("xa.b")
        assert not match.matches("axb")


def test_identifier_lowercased():
    assert str(Identifier(value="ABCDEF")) == "abcdef"


def test_filter_expression_flags():
    assert FilterExpression().is_empty
    assert not FilterExpression(predicates={"a": Equals(value=1)}).is_disjunctive
    assert FilterExpression(any_of=Or()).is_disjunctive


def test_field_meta_alias():
    assert FieldMeta.model_validate({"langMap": True}).is_multi_language
    assert FieldMeta(is_multi_language=True).is_multi_language
    assert not FieldMeta.model_validate({"type": "string"}).is_multi_language


def test_sort_spec_rejects_other_directions():
    with pytest.raises(ValidationError):
        SortSpec(directions={"a": 2})


def test_normalization_error_message():
    error = QueryNormalizationError(
        QueryErrorCode.MALFORMED_NEGATION, "bad", field="status", value="!x"
    )
    assert str(error) == "[MALFORMED_NEGATION] bad"
    assert error.field == "status"
    assert error.value == "!x"
