"""
Tests for the Tag Expression Parser.
"""

import pytest

from backend.tagspec.errors import LimitConflictError, TagExpressionError
from backend.tagspec.logic.parser import (
    OrClause,
    TagExpressionParser,
    TagLiteral,
    split_limit,
    strip_negation,
)


class TestTokenHelpers:
    """Tests for token splitting helpers."""

    def test_split_limit_without_limit(self):
        """Test token without a limit suffix."""
        assert split_limit("@a") == ("@a", None)

    def test_split_limit_with_limit(self):
        """Test token with a limit suffix."""
        assert split_limit("~@a:2") == ("~@a", "2")

    def test_split_limit_stops_at_second_colon(self):
        """Test that the limit ends at the next ':'."""
        assert split_limit("@a:2:3") == ("@a", "2")

    def test_split_limit_strips_whitespace(self):
        assert split_limit("@a: 3 ") == ("@a", "3")

    def test_strip_negation(self):
        """Test negation prefix handling."""
        assert strip_negation("~@a") == ("@a", True)
        assert strip_negation("@a") == ("@a", False)


class TestTagLiteral:
    """Tests for TagLiteral."""

    def test_positive_matches_when_present(self):
        literal = TagLiteral("@a")
        assert literal.matches({"@a"}) is True
        assert literal.matches({"@b"}) is False

    def test_negated_matches_when_absent(self):
        literal = TagLiteral("@a", negated=True)
        assert literal.matches({"@b"}) is True
        assert literal.matches({"@a"}) is False

    def test_opposite_negation_is_distinct(self):
        """Test that @a and ~@a are different literals."""
        assert TagLiteral("@a") != TagLiteral("@a", negated=True)

    def test_str(self):
        assert str(TagLiteral("@a", negated=True)) == "~@a"
        assert str(TagLiteral("@a")) == "@a"


class TestTagExpressionParser:
    """Tests for TagExpressionParser."""

    @pytest.fixture
    def parser(self):
        return TagExpressionParser()

    def test_single_tag(self, parser):
        """Test parsing a single tag."""
        result = parser.parse(["@a"])
        assert result.clauses == [OrClause((TagLiteral("@a"),))]
        assert result.limits == {}

    def test_or_clause(self, parser):
        """Test that commas build one OR clause."""
        result = parser.parse(["@a,@b"])
        assert len(result.clauses) == 1
        assert list(result.clauses[0]) == [TagLiteral("@a"), TagLiteral("@b")]

    def test_each_string_is_one_and_term(self, parser):
        """Test that separate strings become separate clauses."""
        result = parser.parse(["@a", "@b"])
        assert len(result.clauses) == 2

    def test_whitespace_around_commas(self, parser):
        """Test that whitespace around commas and the string is ignored."""
        result = parser.parse(["  @a , @b  "])
        assert list(result.clauses[0]) == [TagLiteral("@a"), TagLiteral("@b")]

    def test_negatives_before_positives(self, parser):
        """Test that negated literals are placed first in a clause."""
        result = parser.parse(["@a,~@b,@c,~@d"])
        assert [str(lit) for lit in result.clauses[0]] == ["~@b", "~@d", "@a", "@c"]

    def test_limit_recorded(self, parser):
        """Test that a limit is recorded for the tag."""
        result = parser.parse(["@a:3"])
        assert result.limits == {"@a": 3}
        assert list(result.clauses[0]) == [TagLiteral("@a")]

    def test_negated_limit_recorded_under_base_name(self, parser):
        """Test that a negated token records its limit without '~'."""
        result = parser.parse(["~@a:2"])
        assert result.limits == {"@a": 2}
        assert list(result.clauses[0]) == [TagLiteral("@a", negated=True)]

    def test_repeated_same_limit(self, parser):
        """Test that repeating the same limit is accepted."""
        result = parser.parse(["@a:3", "@a:3"])
        assert result.limits == {"@a": 3}

    def test_limit_declared_once(self, parser):
        """Test that a tag may appear with and without its limit."""
        result = parser.parse(["@a:3", "~@a,@b"])
        assert result.limits == {"@a": 3}

    def test_zero_limit(self, parser):
        result = parser.parse(["@a:0"])
        assert result.limits == {"@a": 0}

    def test_conflicting_limits(self, parser):
        """Test that two different limits raise LimitConflictError."""
        with pytest.raises(LimitConflictError) as exc_info:
            parser.parse(["@a:3", "@a:4"])
        error = exc_info.value
        assert error.tag == "@a"
        assert error.existing_limit == 3
        assert error.given_limit == 4
        assert "@a" in str(error)
        assert "3" in str(error) and "4" in str(error)

    def test_conflict_between_negated_and_positive(self, parser):
        """Test that negated and positive tokens share one limit."""
        with pytest.raises(LimitConflictError):
            parser.parse(["~@a:1", "@a:2"])

    def test_conflict_within_one_string(self, parser):
        with pytest.raises(LimitConflictError):
            parser.parse(["@a:1,@a:2"])

    def test_conflict_is_value_error(self, parser):
        """Test that conflicts are catchable as ValueError."""
        with pytest.raises(ValueError):
            parser.parse(["@a:1", "@a:2"])
        assert issubclass(LimitConflictError, TagExpressionError)

    def test_empty_string_contributes_no_clause(self, parser):
        """Test that empty expressions are ignored."""
        result = parser.parse(["", "   ", "\t"])
        assert result.clauses == []

    def test_empty_tokens_skipped(self, parser):
        """Test that empty tokens between commas are skipped."""
        result = parser.parse([",@a,,@b,"])
        assert list(result.clauses[0]) == [TagLiteral("@a"), TagLiteral("@b")]

    def test_nameless_tokens_skipped(self, parser):
        """Test that tokens without a base name are skipped."""
        result = parser.parse(["~,:3"])
        assert result.clauses == []
        assert result.limits == {}

    def test_limit_before_second_colon_recorded(self, parser):
        """Test that extra ':' suffixes do not drop the limit."""
        result = parser.parse(["@a:2:3", "~@b: 4"])
        assert result.limits == {"@a": 2, "@b": 4}
        assert [list(c) for c in result.clauses] == [
            [TagLiteral("@a")],
            [TagLiteral("@b", negated=True)],
        ]

    def test_invalid_limit_ignored(self, parser):
        """Test that a non-numeric limit is ignored but the tag is kept."""
        result = parser.parse(["@a:x", "@b:-1"])
        assert result.limits == {}
        assert [list(c) for c in result.clauses] == [[TagLiteral("@a")], [TagLiteral("@b")]]

    def test_duplicate_literals_collapsed(self, parser):
        result = parser.parse(["@a,@a"])
        assert list(result.clauses[0]) == [TagLiteral("@a")]

    def test_tag_name_not_validated(self, parser):
        """Test that any token text is accepted as a tag name."""
        result = parser.parse(["smoke"])
        assert list(result.clauses[0]) == [TagLiteral("smoke")]
