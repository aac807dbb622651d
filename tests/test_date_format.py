"""Unit tests for token-pattern formatting and parsing."""

from datetime import date

import pytest

from date_format import DEFAULT_PATTERN, format_date, parse_date


class TestFormatDate:
    def test_default_pattern(self):
        assert DEFAULT_PATTERN == "yyyy-mm-dd"
        assert format_date(date(2024, 6, 3)) == "2024-06-03"

    def test_reordered_tokens(self):
        assert format_date(date(2024, 6, 3), "dd/mm/yyyy") == "03/06/2024"

    def test_short_tokens(self):
        assert format_date(date(2024, 6, 3), "m/d/yy") == "6/3/24"
        assert format_date(date(2024, 11, 23), "m/d/yy") == "11/23/24"

    def test_unrecognized_characters_pass_through(self):
        assert format_date(date(2024, 6, 3), "yyyy年mm月dd日") == "2024年06月03日"
        assert format_date(date(2024, 6, 3), "[yyyy.mm.dd] #1") == "[2024.06.03] #1"

    def test_quoted_text_is_literal(self):
        assert format_date(date(2024, 6, 3), "'Today is' dd") == "Today is 03"

    def test_small_years_are_padded(self):
        assert format_date(date(7, 1, 2)) == "0007-01-02"

    def test_same_input_same_output(self):
        d = date(2023, 12, 31)
        assert format_date(d, "dd.mm.yyyy") == format_date(d, "dd.mm.yyyy")


class TestParseDate:
    @pytest.mark.parametrize("pattern", ["yyyy-mm-dd", "dd.mm.yyyy", "m/d/yyyy", "'on' d m yyyy"])
    def test_round_trip(self, pattern):
        for d in (date(2024, 2, 29), date(1999, 12, 31), date(2030, 1, 1)):
            assert parse_date(format_date(d, pattern), pattern) == d

    def test_two_digit_year(self):
        assert parse_date("6/3/24", "m/d/yy") == date(2024, 6, 3)

    def test_surrounding_whitespace_is_ignored(self):
        assert parse_date(" 2024-06-03\n") == date(2024, 6, 3)

    def test_mismatch_raises(self):
        with pytest.raises(ValueError, match="does not match"):
            parse_date("03/06/2024")

    def test_impossible_date_raises(self):
        with pytest.raises(ValueError):
            parse_date("2023-02-29")

    def test_pattern_without_day_raises(self):
        with pytest.raises(ValueError, match="no day"):
            parse_date("2024-06", "yyyy-mm")

    def test_conflicting_fields_raise(self):
        with pytest.raises(ValueError, match="Conflicting"):
            parse_date("2024-06-03 07", "yyyy-mm-dd mm")
