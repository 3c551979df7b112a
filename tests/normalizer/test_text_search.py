"""Tests for free-text search filters."""

from docquery.models.filter_expr import (
    And,
    Branch,
    Equals,
    FieldPredicate,
    FilterExpression,
    In,
    Or,
    PartialMatch,
    Range,
)
from docquery.normalizer.search import normalize_search
from docquery.normalizer.text_search import (
    add_text_search_to_query,
    extract_keywords,
    keywords_query,
    text_search_filter,
    tokenize,
)


def _term(field: str, pattern: str) -> FieldPredicate:
    return FieldPredicate(field=field, predicate=Equals(value=PartialMatch(pattern=pattern)))


class TestTokenize:
    """Splitting on anything that is not a letter or digit."""

    def test_words(self):
        assert tokenize("red car") == ["red", "car"]

    def test_unicode_letters_and_digits(self):
        assert tokenize("Grüße, мир! 42_x") == ["Grüße", "мир", "42", "x"]

    def test_only_separators(self):
        assert tokenize(" ,.;- ") == []


class TestTextSearchFilter:
    """Every term must match within at least one field."""

    def test_two_terms_two_fields(self):
        result = text_search_filter("red car", ["title", "desc"])
        assert result == FilterExpression(
            any_of=Or(
                branches=[
                    Branch(all_of=And(terms=[_term("title", "red"), _term("title", "car")])),
                    Branch(all_of=And(terms=[_term("desc", "red"), _term("desc", "car")])),
                ]
            )
        )

    def test_patterns_are_case_insensitive(self):
        result = text_search_filter("Red", ["title"])
        match = result.any_of.branches[0].all_of.terms[0].predicate.value
        assert match.matches("a RED car")
        assert not match.matches("blue")

    def test_no_terms_is_empty(self):
        assert text_search_filter("  !! ", ["title"]).is_empty
        assert text_search_filter(None, ["title"]).is_empty

    def test_no_fields_is_empty(self):
        assert text_search_filter("red", []).is_empty


class TestAddTextSearchToQuery:
    """Text search is merged into an existing filter in place."""

    def test_flat_filter_gets_disjunction(self):
        query = normalize_search({"status": "true"})
        add_text_search_to_query(query, "red", ["title", "desc"])
        assert query.predicates == {"status": Equals(value=True)}
        assert len(query.any_of.branches) == 2
        assert query.any_of.branches[0].all_of == And(terms=[_term("title", "red")])

    def test_disjunctive_filter_cartesian(self):
        query = normalize_search({"age": "1-2,3-4"})
        add_text_search_to_query(query, "red", ["title", "desc"])
        branches = query.any_of.branches
        assert len(branches) == 4
        assert [b.predicates["age"] for b in branches] == [
            Range(min=1, max=2),
            Range(min=3, max=4),
            Range(min=1, max=2),
            Range(min=3, max=4),
        ]
        assert [b.all_of.terms[0].field for b in branches] == [
            "title",
            "title",
            "desc",
            "desc",
        ]

    def test_no_terms_leaves_filter_unchanged(self):
        query = normalize_search({"age": "1-2,3-4"})
        before = query.model_copy(deep=True)
        add_text_search_to_query(query, "  ", ["title"])
        assert query == before


class TestKeywords:
    """Keyword extraction from documents."""

    def test_extract_keywords(self):
        doc = {
            "title": "Red Car",
            "tags": ["Fast", "blue-sky", None],
            "meta": {"desc": "A b"},
            "count": 3,
        }
        keywords = extract_keywords(doc, ["title", "tags", "meta.desc", "count", "missing"])
        assert keywords == ["red", "car", "fast", "blue", "sky", "a", "b"]

    def test_extract_through_lists(self):
        doc = {"items": [{"name": "One"}, {"name": "Two"}]}
        assert extract_keywords(doc, ["items.name"]) == ["one", "two"]

    def test_keywords_query(self):
        assert keywords_query("car") == In(values=[PartialMatch(pattern="car")])
