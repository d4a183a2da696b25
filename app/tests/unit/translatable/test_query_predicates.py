"""Unit tests for translatable.query."""

from unittest.mock import MagicMock

import pytest

from translatable.query import AnyOf, NotNull, QueryBuilder, any_of, not_null

pytestmark = pytest.mark.unit


class FakeQuery:
    """Query builder recording the constraints applied to it."""

    def __init__(self):
        self.constraints = []

    def where_not_null(self, column):
        self.constraints.append(("not_null", column))
        return self

    def where_any(self, predicates):
        self.constraints.append(("any", tuple(p.column for p in predicates)))
        return self


class TestNotNull:
    """Tests for NotNull predicates."""

    def test_column_uses_arrow_notation(self):
        """Path segments are joined with ->."""
        assert not_null("extra", "fr", "title").column == "extra->fr->title"

    def test_render(self):
        assert not_null("title", "fr").render() == "title->fr IS NOT NULL"

    def test_apply_calls_builder(self):
        """apply() delegates to where_not_null."""
        query = FakeQuery()

        not_null("title", "fr").apply(query)

        assert query.constraints == [("not_null", "title->fr")]

    def test_equality(self):
        """Predicates compare by value."""
        assert not_null("title", "fr") == NotNull(("title", "fr"))


class TestAnyOf:
    """Tests for AnyOf predicates."""

    def test_render(self):
        """Predicates are OR-ed inside parentheses."""
        predicate = any_of([not_null("title", "en"), not_null("title", "fr")])

        assert predicate.render() == "(title->en IS NOT NULL OR title->fr IS NOT NULL)"

    def test_render_empty(self):
        """An empty OR never matches."""
        assert any_of([]).render() == "FALSE"

    def test_accepts_generators(self):
        """Predicates are materialized into a tuple."""
        predicate = any_of(not_null("title", locale) for locale in ["en", "fr"])

        assert isinstance(predicate, AnyOf)
        assert len(predicate.predicates) == 2

    def test_apply_calls_builder(self):
        """apply() delegates to where_any."""
        query = FakeQuery()

        any_of([not_null("title", "en"), not_null("title", "fr")]).apply(query)

        assert query.constraints == [("any", ("title->en", "title->fr"))]


class TestQueryBuilderProtocol:
    """Tests for the QueryBuilder protocol."""

    def test_fake_query_satisfies_protocol(self):
        assert isinstance(FakeQuery(), QueryBuilder)

    def test_object_without_methods_does_not_satisfy_protocol(self):
        assert not isinstance(object(), QueryBuilder)

    def test_mock_builder_receives_column(self):
        """Any object with the protocol methods can be used."""
        query = MagicMock()

        not_null("meta", "title", "fr").apply(query)

        query.where_not_null.assert_called_once_with("meta->title->fr")
