"""Unit tests for identifier legalization and word handling (typegraph.codegen.core.strings).

Tests cover:
- Character predicates
- legalize_characters
- split_into_words and casing detection
- combine_words placeholder and prefix handling
"""

from __future__ import annotations

import pytest

from typegraph.codegen.core.strings import (
    EMPTY_WORD,
    Word,
    WordCasing,
    all_lower_word_style,
    all_upper_word_style,
    combine_words,
    detect_casing,
    first_upper_word_style,
    is_ascii_letter_or_underscore_or_digit,
    is_part_character,
    is_start_character,
    legalize_characters,
    original_word_style,
    split_into_words,
)


def _texts(label: str) -> list[str]:
    return [word.text for word in split_into_words(label)]


def _pascal(words, legalize=None) -> str:
    legalize = legalize or legalize_characters(is_ascii_letter_or_underscore_or_digit)
    return combine_words(
        words,
        legalize,
        first_upper_word_style,
        first_upper_word_style,
        all_upper_word_style,
        all_upper_word_style,
        "",
        is_start_character,
    )


# ---------------------------------------------------------------------------
# Character predicates
# ---------------------------------------------------------------------------


class TestCharacterPredicates:
    @pytest.mark.unit
    def test_start_characters(self):
        assert is_start_character("a")
        assert is_start_character("Z")
        assert is_start_character("_")
        assert is_start_character("\u00e9")
        assert not is_start_character("1")
        assert not is_start_character("-")

    @pytest.mark.unit
    def test_part_characters(self):
        assert is_part_character("1")
        assert is_part_character("a")
        assert is_part_character("_")
        assert is_part_character("\u0301")  # combining acute accent
        assert not is_part_character(" ")
        assert not is_part_character("$")

    @pytest.mark.unit
    def test_ascii_predicate(self):
        assert is_ascii_letter_or_underscore_or_digit("a")
        assert is_ascii_letter_or_underscore_or_digit("9")
        assert is_ascii_letter_or_underscore_or_digit("_")
        assert not is_ascii_letter_or_underscore_or_digit("\u00e9")
        assert not is_ascii_letter_or_underscore_or_digit("-")


# ---------------------------------------------------------------------------
# legalize_characters
# ---------------------------------------------------------------------------


class TestLegalize:
    @pytest.mark.unit
    def test_drops_illegal_characters(self):
        legalize = legalize_characters(is_ascii_letter_or_underscore_or_digit)
        assert legalize("a-b c$d") == "abcd"

    @pytest.mark.unit
    def test_all_illegal_gives_empty_string(self):
        legalize = legalize_characters(is_ascii_letter_or_underscore_or_digit)
        assert legalize("$%&") == ""

    @pytest.mark.unit
    def test_unicode_legalizer_keeps_letters(self):
        legalize = legalize_characters(is_part_character)
        assert legalize("caf\u00e9!") == "caf\u00e9"


# ---------------------------------------------------------------------------
# split_into_words
# ---------------------------------------------------------------------------


class TestSplitIntoWords:
    @pytest.mark.unit
    def test_separators(self):
        assert _texts("user_name") == ["user", "name"]
        assert _texts("user-name  id") == ["user", "name", "id"]

    @pytest.mark.unit
    def test_camel_case(self):
        assert _texts("userName") == ["user", "Name"]
        assert _texts("UserName") == ["User", "Name"]

    @pytest.mark.unit
    def test_acronym_followed_by_word(self):
        assert _texts("HTTPServer") == ["HTTP", "Server"]
        assert _texts("parseXMLFile") == ["parse", "XML", "File"]

    @pytest.mark.unit
    def test_trailing_acronym(self):
        assert _texts("userID") == ["user", "ID"]

    @pytest.mark.unit
    def test_digits_are_their_own_words(self):
        assert _texts("abc123def") == ["abc", "123", "def"]

    @pytest.mark.unit
    def test_empty_and_separator_only_labels(self):
        assert split_into_words("") == []
        assert split_into_words("--__  ") == []

    @pytest.mark.unit
    def test_casing_is_recorded(self):
        words = split_into_words("HTTPServer")
        assert words == [
            Word("HTTP", WordCasing.UPPER),
            Word("Server", WordCasing.CAPITALIZED),
        ]
        assert words[0].is_acronym
        assert not words[1].is_acronym


class TestDetectCasing:
    @pytest.mark.unit
    def test_values(self):
        assert detect_casing("abc") == WordCasing.LOWER
        assert detect_casing("ABC") == WordCasing.UPPER
        assert detect_casing("Abc") == WordCasing.CAPITALIZED
        assert detect_casing("iOS") == WordCasing.MIXED

    @pytest.mark.unit
    def test_caseless_text_is_lower(self):
        assert detect_casing("123") == WordCasing.LOWER


# ---------------------------------------------------------------------------
# Word styles
# ---------------------------------------------------------------------------


class TestWordStyles:
    @pytest.mark.unit
    def test_styles(self):
        assert first_upper_word_style("hELLO") == "Hello"
        assert all_upper_word_style("hello") == "HELLO"
        assert all_lower_word_style("HeLLo") == "hello"
        assert original_word_style("HeLLo") == "HeLLo"


# ---------------------------------------------------------------------------
# combine_words
# ---------------------------------------------------------------------------


class TestCombineWords:
    @pytest.mark.unit
    def test_pascal_case(self):
        assert _pascal(split_into_words("user_name")) == "UserName"

    @pytest.mark.unit
    def test_acronyms_keep_upper_case(self):
        assert _pascal(split_into_words("http_server")) == "HttpServer"
        assert _pascal(split_into_words("HTTPServer")) == "HTTPServer"

    @pytest.mark.unit
    def test_underflow_uses_placeholder(self):
        assert _pascal(split_into_words("")) == "Empty"
        assert _pascal(split_into_words("$$$")) == "Empty"
        assert EMPTY_WORD == "empty"

    @pytest.mark.unit
    def test_illegal_start_gets_prefix(self):
        assert _pascal(split_into_words("123abc")) == "The123Abc"

    @pytest.mark.unit
    def test_words_emptied_by_legalizer_are_dropped(self):
        words = [Word("\u00e9\u00e9", WordCasing.LOWER), Word("name", WordCasing.LOWER)]
        assert _pascal(words) == "Name"

    @pytest.mark.unit
    def test_separator(self):
        legalize = legalize_characters(is_ascii_letter_or_underscore_or_digit)
        result = combine_words(
            split_into_words("HTTPServer port"),
            legalize,
            all_lower_word_style,
            all_lower_word_style,
            all_lower_word_style,
            all_lower_word_style,
            "_",
            is_start_character,
        )
        assert result == "http_server_port"

    @pytest.mark.unit
    def test_placeholder_must_be_legal(self):
        legalize = legalize_characters(str.isdigit)
        with pytest.raises(ValueError):
            _pascal([], legalize)
