"""Tests for query expression parsing."""

import pytest

from json_field_reader.errors import ExtractError, QuerySyntaxError
from json_field_reader.paths import (
    Index,
    Key,
    Slice,
    escape_path_segment,
    parse_query,
)


class TestParseQuery:
    """Tests for parse_query()."""

    def test_keys_and_index(self):
        query = parse_query(".STATS.[1].GHS 5s")
        assert query.steps == (Key("STATS"), Index(1), Key("GHS 5s"))
        assert query.expression == ".STATS.[1].GHS 5s"

    def test_leading_dot_is_optional(self):
        assert parse_query("STATS.[0]").steps == parse_query(".STATS.[0]").steps

    def test_identity(self):
        assert parse_query(".").steps == ()
        assert parse_query("").steps == ()

    def test_negative_index(self):
        assert parse_query(".[-1]").steps == (Index(-1),)

    def test_slices(self):
        assert parse_query(".[1:3]").steps == (Slice(1, 3),)
        assert parse_query(".[:2]").steps == (Slice(None, 2),)
        assert parse_query(".[2:]").steps == (Slice(2, None),)

    def test_escaped_dot_stays_in_key(self):
        assert parse_query(".responses.gpt-3\\.5-turbo").steps == (
            Key("responses"),
            Key("gpt-3.5-turbo"),
        )

    def test_escaped_bracket_is_a_key(self):
        assert parse_query(".\\[1]").steps == (Key("[1]"),)

    @pytest.mark.parametrize("expression", [".[1", ".[x]", ".[]", ".[1:2:3]", ".[[1]]", ".[1.5]"])
    def test_malformed_brackets(self, expression):
        with pytest.raises(QuerySyntaxError) as excinfo:
            parse_query(expression)
        assert excinfo.value.expression == expression

    def test_syntax_error_is_extract_error(self):
        with pytest.raises(ExtractError):
            parse_query(".[oops]")


class TestEscaping:
    """Tests for escape_path_segment()."""

    def test_escape_round_trip(self):
        for key in ["plain", "gpt-3.5-turbo", "back\\slash", "[0]"]:
            assert parse_query("." + escape_path_segment(key)).steps == (Key(key),)

    def test_empty_segments_are_dropped(self):
        assert parse_query(".a..b.").steps == (Key("a"), Key("b"))
