"""Tests for free-text input validation."""

import pytest

from passph.conversation import MAX_SEPARATOR_BYTES, MAX_WORD_COUNT, parse_separator, parse_word_count
from passph.errors import (
    InvalidArgument,
    NumberOfWordsLessThanZero,
    NumberOfWordsTooBig,
    SeparatorTooLong,
)


class TestParseWordCount:
    @pytest.mark.parametrize(
        "text,expected", [("1", 1), ("5", 5), ("200", 200), (" 12 ", 12), ("+7", 7), ("007", 7)]
    )
    def test_valid(self, text: str, expected: int):
        assert parse_word_count(text) == expected

    @pytest.mark.parametrize(
        "text", ["0", "-1", "-200", "abc", "", "5 words", "1.5", "1_0", "٥", "５", "+-5"]
    )
    def test_not_positive(self, text: str):
        with pytest.raises(NumberOfWordsLessThanZero):
            parse_word_count(text)

    @pytest.mark.parametrize("text", ["201", "1000"])
    def test_too_big(self, text: str):
        with pytest.raises(NumberOfWordsTooBig):
            parse_word_count(text)

    def test_limit(self):
        assert MAX_WORD_COUNT == 200

    def test_errors_are_invalid_arguments(self):
        with pytest.raises(InvalidArgument):
            parse_word_count("0")
        with pytest.raises(InvalidArgument):
            parse_word_count("201")


class TestParseSeparator:
    def test_plain(self):
        assert parse_separator("=") == "="
        assert parse_separator("abc") == "abc"

    def test_lone_backslash_is_space(self):
        assert parse_separator("\\") == " "

    def test_backslash_n_is_newline(self):
        assert parse_separator("\\n") == "\n"

    def test_leading_backslash_stripped(self):
        assert parse_separator("\\\\x") == "\\x"
        assert parse_separator("\\\\") == "\\"
        assert parse_separator("\\t") == "t"

    def test_only_first_backslash_stripped(self):
        assert parse_separator("\\\\\\") == "\\\\"

    def test_seven_bytes_allowed(self):
        assert parse_separator("1234567") == "1234567"

    @pytest.mark.parametrize("text", ["12345678", "123456789", "a" * 20])
    def test_too_long(self, text: str):
        with pytest.raises(SeparatorTooLong):
            parse_separator(text)

    def test_length_counts_bytes(self):
        # 4 characters, 8 bytes in UTF-8
        with pytest.raises(SeparatorTooLong):
            parse_separator("éééé")
        assert parse_separator("ééé") == "ééé"

    def test_limit(self):
        assert MAX_SEPARATOR_BYTES == 8
