"""Tests for calendar values."""

from datetime import date

import pytest

from ledgerit.domain.calendar import Date, DateTime, Time, days_in_month, is_leap_year
from ledgerit.domain.errors import ParseError


def test_leap_years():
    assert is_leap_year(2024)
    assert is_leap_year(2000)
    assert not is_leap_year(1900)
    assert not is_leap_year(2023)


def test_days_in_month():
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2023, 2) == 28
    assert days_in_month(2023, 4) == 30
    assert days_in_month(2023, 12) == 31


class TestDate:
    """Tests for Date."""

    def test_parse_unpadded(self):
        assert Date.parse("2023-8-6") == Date(2023, 8, 6)

    def test_parse_padded(self):
        assert Date.parse("2023-08-16") == Date(2023, 8, 16)

    @pytest.mark.parametrize(
        "text", ["2023-08", "2023/08/16", "2023-13-01", "2023-02-29", "2023-08-32", "2023-0-1", "a-b-c", "2023-08-16-1"]
    )
    def test_parse_invalid(self, text):
        with pytest.raises(ParseError):
            Date.parse(text)

    def test_constructor_validates(self):
        with pytest.raises(ValueError):
            Date(2023, 4, 31)

    def test_next_day_rolls_over(self):
        assert Date(2023, 12, 31).next_day() == Date(2024, 1, 1)
        assert Date(2024, 2, 28).next_day() == Date(2024, 2, 29)
        assert Date(2023, 2, 28).next_day() == Date(2023, 3, 1)

    def test_prev_day_rolls_back(self):
        assert Date(2024, 1, 1).prev_day() == Date(2023, 12, 31)
        assert Date(2024, 3, 1).prev_day() == Date(2024, 2, 29)

    def test_add_and_sub_days(self):
        assert Date(2023, 8, 30) + 3 == Date(2023, 9, 2)
        assert Date(2023, 9, 2) - 3 == Date(2023, 8, 30)

    def test_ordering(self):
        assert Date(2023, 8, 16) < Date(2023, 9, 1) < Date(2024, 1, 1)

    def test_date_conversion(self):
        assert Date.from_date(date(2023, 8, 16)).to_date() == date(2023, 8, 16)

    def test_str(self):
        assert str(Date(2023, 8, 6)) == "2023-08-06"


class TestTime:
    """Tests for Time."""

    def test_parse(self):
        assert Time.parse("9:05") == Time(9, 5)

    @pytest.mark.parametrize("text", ["24:00", "12:60", "12", "12:00:00", "ab:cd"])
    def test_parse_invalid(self, text):
        with pytest.raises(ParseError):
            Time.parse(text)

    def test_str(self):
        assert str(Time(9, 5)) == "09:05"


class TestDateTime:
    """Tests for DateTime."""

    def test_parse_date_only(self):
        assert DateTime.parse("2023-8-16") == DateTime(Date(2023, 8, 16))

    def test_parse_with_space(self):
        assert DateTime.parse("2023-08-16 14:54") == DateTime.of(2023, 8, 16, 14, 54)

    def test_parse_with_t(self):
        assert DateTime.parse("2023-08-16T14:54") == DateTime.of(2023, 8, 16, 14, 54)

    def test_parse_invalid(self):
        with pytest.raises(ParseError):
            DateTime.parse("2023-08-16 14:54 extra")

    def test_untimed_sorts_first_on_same_date(self):
        untimed = DateTime.of(2023, 8, 16)
        midnight = DateTime.of(2023, 8, 16, 0, 0)
        assert untimed < midnight
        assert untimed != midnight
        assert midnight < DateTime.of(2023, 8, 17)

    def test_ordering_by_time(self):
        assert DateTime.of(2023, 8, 16, 9, 0) < DateTime.of(2023, 8, 16, 14, 54)
        assert DateTime.of(2023, 8, 16, 14, 54) <= DateTime.of(2023, 8, 16, 14, 54)
        assert DateTime.of(2023, 8, 17) > DateTime.of(2023, 8, 16, 23, 59)

    def test_sorting(self):
        values = [
            DateTime.of(2023, 8, 16, 12, 0),
            DateTime.of(2023, 8, 15),
            DateTime.of(2023, 8, 16),
        ]
        assert sorted(values) == [
            DateTime.of(2023, 8, 15),
            DateTime.of(2023, 8, 16),
            DateTime.of(2023, 8, 16, 12, 0),
        ]

    def test_str(self):
        assert str(DateTime.of(2023, 8, 6)) == "2023-08-06"
        assert str(DateTime.of(2023, 8, 6, 9, 5)) == "2023-08-06 09:05"
