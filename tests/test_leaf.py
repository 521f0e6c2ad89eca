"""Tests for the leaf parsers: match_literal, character, identifier and the_letter_a."""

from __future__ import annotations

import pytest
from hypothesis import assume, example, given
from hypothesis import strategies as st

from combparse import (
    Failure,
    StringView,
    Success,
    character,
    identifier,
    match_literal,
    the_letter_a,
)


class TestMatchLiteral:
    def test_exact_match(self):
        parse_joe = match_literal("Hello Joe!")
        assert parse_joe.parse("Hello Joe!") == Success(StringView(""), None)

    def test_leaves_rest(self):
        parse_joe = match_literal("Hello Joe!")
        r = parse_joe.parse("Hello Joe! Hello Robert!")
        assert r
        assert r.remaining == " Hello Robert!"
        assert r.value is None

    def test_mismatch_returns_original_input(self):
        parse_joe = match_literal("Hello Joe!")
        view = StringView("Hello Mike!")
        r = parse_joe.parse(view)
        assert not r
        assert r.remaining is view

    @given(st.text())
    @example("")
    @example("Hello Joe!")
    def test_matches_itself(self, expected: str):
        r = match_literal(expected).parse(expected)
        assert r == Success(StringView(""), None)

    @given(st.text(), st.text())
    @example("<", "tag/>")
    def test_remaining_is_exact_suffix(self, expected: str, rest: str):
        assume(not rest.startswith(expected))
        view = StringView(expected + rest)
        r = match_literal(expected).parse(view)
        assert r
        assert r.remaining == rest
        assert r.remaining.is_suffix_of(view)
        assert r.remaining.pos == len(expected)

    @given(st.text(min_size=1), st.text())
    @example("abc", "ab")
    @example("abc", "ABC")
    def test_fails_without_prefix(self, expected: str, src: str):
        assume(not src.startswith(expected))
        view = StringView(src)
        r = match_literal(expected).parse(view)
        assert not r
        assert r.remaining is view

    def test_empty_literal_on_empty_input(self):
        view = StringView("")
        r = match_literal("").parse(view)
        assert r
        assert r.remaining is view

    def test_works_from_middle_of_buffer(self):
        view = StringView("xx<yy", 2)
        r = match_literal("<").parse(view)
        assert r
        assert r.remaining.pos == 3

    def test_codepoint_exact(self):
        r = match_literal("ü").parse("über")
        assert r
        assert r.remaining == "ber"

    def test_rejects_non_string(self):
        with pytest.raises(TypeError):
            match_literal(b"abc")  # type: ignore[arg-type]


class TestCharacter:
    def test_match(self):
        assert character("x").parse("xy") == Success(StringView("y"), None)

    def test_mismatch(self):
        assert not character("x").parse("yx")
        assert not character("x").parse("")

    @pytest.mark.parametrize("value", ["", "ab"])
    def test_requires_single_character(self, value: str):
        with pytest.raises(ValueError):
            character(value)

    def test_the_letter_a(self):
        assert the_letter_a.parse("abc") == Success(StringView("bc"), None)
        assert the_letter_a.parse("b") == Failure(StringView("b"))


class TestIdentifier:
    def test_whole_input(self):
        r = identifier("identifier-with-dash")
        assert r == Success(StringView(""), "identifier-with-dash")

    def test_stops_at_space(self):
        r = identifier("not entirely an identifier")
        assert r == Success(StringView(" entirely an identifier"), "not")

    def test_leading_punctuation_fails(self):
        r = identifier("!not-and-identifier")
        assert r == Failure(StringView("!not-and-identifier"))

    @pytest.mark.parametrize("src", ["", " abc", "1abc", "-abc", "_abc", "\nabc"])
    def test_non_alphabetic_start_fails(self, src: str):
        view = StringView(src)
        r = identifier.parse(view)
        assert not r
        assert r.remaining is view

    @given(st.text(alphabet="abzAZéßÅⅫिह-_ 19!/<>\t"))
    @example("a-")
    @example("abc123")
    @example("my-first-element/>")
    @example("x--y z")
    @example("naïve-café!")
    def test_value_and_rest_rebuild_input(self, src: str):
        view = StringView(src)
        r = identifier.parse(view)
        assert r or not src[:1].isalpha()
        if not r:
            assert r.remaining is view
            return
        assert r.value
        assert r.value + str(r.remaining) == src
        assert r.remaining.is_suffix_of(view)
        next_char = r.remaining.peek(1)
        assert next_char is None or (next_char != "-" and not next_char.isalpha())

    @pytest.mark.parametrize(
        ("src", "value", "rest"),
        [
            ("Ⅻ-x", "Ⅻ-x", ""),
            ("हि ", "हि", " "),
            ("x२", "x", "२"),
        ],
    )
    def test_unicode_alphabetic_property(self, src: str, value: str, rest: str):
        assert identifier.parse(src) == Success(StringView(rest), value)

    def test_value_is_independent_string(self):
        view = StringView("name rest")
        r = identifier.parse(view)
        assert r
        assert type(r.value) is str
        assert r.remaining.is_suffix_of(view)
