"""Tests for URI helpers: RFC 3986 escaping and query manipulation."""
from urllib.parse import unquote

import pytest

from openauth.utils.uri import (
    append_query_args,
    build_query_string,
    escape_rfc3986,
    get_left_part_path,
    get_query,
    normalize_hex_encoding,
    parse_query_string,
    strip_query_args_with_prefix,
)

PRINTABLE_ASCII = "".join(chr(c) for c in range(32, 127))


class TestEscapeRfc3986:
    def test_escapes_rfc2396_unreserved_marks(self):
        assert escape_rfc3986("!*'()") == "%21%2A%27%28%29"

    def test_printable_ascii_has_no_unescaped_delimiters(self):
        escaped = escape_rfc3986(PRINTABLE_ASCII)
        for ch in "!*'() &=?":
            assert ch not in escaped, f"{ch!r} left unescaped"
        assert unquote(escaped) == PRINTABLE_ASCII

    def test_each_printable_char_roundtrips(self):
        for ch in PRINTABLE_ASCII:
            assert unquote(escape_rfc3986(ch)) == ch

    def test_unreserved_characters_untouched(self):
        assert escape_rfc3986("AZaz09-._~") == "AZaz09-._~"

    def test_non_ascii_is_utf8_encoded(self):
        assert escape_rfc3986("é") == "%C3%A9"

    def test_empty_returns_same_object(self):
        empty = ""
        assert escape_rfc3986(empty) is empty

    def test_none_rejected(self):
        with pytest.raises(ValueError):
            escape_rfc3986(None)


class TestBuildQueryString:
    def test_empty(self):
        assert build_query_string([]) == ""

    def test_pairs_in_order(self):
        assert build_query_string([("a", "1"), ("b", "2")]) == "a=1&b=2"

    def test_mapping_input(self):
        assert build_query_string({"x": "1", "y": "2"}) == "x=1&y=2"

    def test_none_value_becomes_empty(self):
        assert build_query_string([("a", None), ("b", "2")]) == "a=&b=2"

    def test_none_key_skipped(self):
        assert build_query_string([(None, "x"), ("b", "2")]) == "b=2"

    def test_keys_and_values_escaped(self):
        assert build_query_string([("a b", "c&d=e")]) == "a%20b=c%26d%3De"


class TestAppendQueryArgs:
    def test_adds_query(self):
        assert append_query_args("https://example.com/cb", [("a", "1")]) == "https://example.com/cb?a=1"

    def test_keeps_existing_query_first(self):
        assert (
            append_query_args("https://example.com/cb?x=%2f", [("a", "1")])
            == "https://example.com/cb?x=%2f&a=1"
        )

    def test_no_pairs_returns_uri(self):
        uri = "https://example.com/cb?x=1"
        assert append_query_args(uri, []) is uri

    def test_keeps_fragment(self):
        assert append_query_args("https://example.com/cb#top", [("a", "1")]) == "https://example.com/cb?a=1#top"


class TestNormalizeHexEncoding:
    def test_uppercases_escapes(self):
        assert (
            normalize_hex_encoding("Login.aspx?ReturnUrl=%2fAccount%2fManage.aspx")
            == "Login.aspx?ReturnUrl=%2FAccount%2FManage.aspx"
        )

    def test_leaves_other_text_alone(self):
        assert normalize_hex_encoding("https://example.com/path?a=b") == "https://example.com/path?a=b"

    def test_skips_two_chars_after_percent(self):
        # The second "%" is consumed as a digit of the first escape
        assert normalize_hex_encoding("%%4a") == "%%4a"
        assert normalize_hex_encoding("%25%2f") == "%25%2F"

    def test_trailing_percent_untouched(self):
        assert normalize_hex_encoding("abc%a") == "abc%a"
        assert normalize_hex_encoding("abc%") == "abc%"


class TestStripQueryArgsWithPrefix:
    URI = "https://example.com/cb?__provider__=google&__sid__=1&keep=yes"

    def test_no_match_returns_same_object(self):
        assert strip_query_args_with_prefix(self.URI, "dnoa.") is self.URI

    def test_no_query_returns_same_object(self):
        uri = "https://example.com/cb"
        assert strip_query_args_with_prefix(uri, "__") is uri

    @pytest.mark.parametrize("prefix", ["__provider", "__PROVIDER", "__Provider__"])
    def test_removes_matching_keys_any_case(self, prefix):
        assert (
            strip_query_args_with_prefix(self.URI, prefix)
            == "https://example.com/cb?__sid__=1&keep=yes"
        )

    def test_removes_all_matches(self):
        assert strip_query_args_with_prefix(self.URI, "__") == "https://example.com/cb?keep=yes"

    def test_query_dropped_when_everything_removed(self):
        assert strip_query_args_with_prefix("https://example.com/cb?__a=1&__b=2", "__") == "https://example.com/cb"

    def test_empty_prefix_rejected(self):
        with pytest.raises(ValueError):
            strip_query_args_with_prefix(self.URI, "")


class TestParsing:
    def test_parse_keeps_blanks_and_order(self):
        assert parse_query_string("b=2&a=&c=%2F") == [("b", "2"), ("a", ""), ("c", "/")]

    def test_parse_strips_leading_question_mark(self):
        assert parse_query_string("?a=1") == [("a", "1")]

    def test_parse_empty(self):
        assert parse_query_string("") == []
        assert parse_query_string(None) == []

    def test_left_part_path(self):
        assert get_left_part_path("https://example.com/cb?a=1#frag") == "https://example.com/cb"
        assert get_left_part_path("https://example.com") == "https://example.com/"

    def test_get_query(self):
        assert get_query("https://example.com/cb?a=1&b=2") == "a=1&b=2"
        assert get_query("https://example.com/cb") == ""
