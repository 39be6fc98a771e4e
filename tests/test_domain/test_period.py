"""Tests for CalendarMonth / QueryPeriod"""
import pytest
from datetime import date

from app.domain.period import CalendarMonth, QueryPeriod, InvalidArgument, months_between


class TestParse:
    def test_parse_valid(self):
        assert CalendarMonth.parse("07-2025") == CalendarMonth(2025, 7)

    def test_parse_strips_whitespace(self):
        assert CalendarMonth.parse(" 12-2025 ") == CalendarMonth(2025, 12)

    @pytest.mark.parametrize("raw", ["13-2025", "00-2025"])
    def test_month_out_of_range(self, raw):
        with pytest.raises(InvalidArgument) as exc_info:
            CalendarMonth.parse(raw, "start_period")
        assert exc_info.value.field == "start_period"
        assert exc_info.value.value == raw

    @pytest.mark.parametrize("raw", ["2025-07", "7-2025", "07/2025", "07-25", "", "July 2025"])
    def test_wrong_shape(self, raw):
        with pytest.raises(InvalidArgument, match="end_period"):
            CalendarMonth.parse(raw, "end_period")

    def test_year_zero_has_its_own_reason(self):
        with pytest.raises(InvalidArgument) as exc_info:
            CalendarMonth.parse("01-0000", "start_date")
        assert exc_info.value.reason == "year must be in 1..9999"

    @pytest.mark.parametrize("raw", ["\u0660\u0667-\u0662\u0660\u0662\u0665", "0\uff17-2025"])
    def test_non_ascii_digits_rejected(self, raw):
        with pytest.raises(InvalidArgument, match="expected MM-YYYY"):
            CalendarMonth.parse(raw, "start_date")

    def test_non_string_rejected(self):
        with pytest.raises(InvalidArgument):
            CalendarMonth.parse(None, "start_date")

    def test_format(self):
        assert CalendarMonth(2025, 3).format() == "03-2025"
        assert str(CalendarMonth(2025, 11)) == "11-2025"


class TestCalendarMonth:
    def test_constructor_validates_month(self):
        with pytest.raises(InvalidArgument):
            CalendarMonth(2025, 13)

    def test_ordering(self):
        assert CalendarMonth(2024, 12) < CalendarMonth(2025, 1)
        assert CalendarMonth(2025, 2) > CalendarMonth(2025, 1)
        assert max(CalendarMonth(2025, 7), CalendarMonth(2025, 1)) == CalendarMonth(2025, 7)

    def test_date_roundtrip(self):
        m = CalendarMonth.from_date(date(2025, 7, 23))
        assert m == CalendarMonth(2025, 7)
        assert m.to_date() == date(2025, 7, 1)


class TestMonthsBetween:
    def test_same_month(self):
        assert months_between(CalendarMonth(2025, 5), CalendarMonth(2025, 5)) == 0

    def test_within_year(self):
        assert months_between(CalendarMonth(2025, 1), CalendarMonth(2025, 12)) == 11

    def test_across_years(self):
        # 11.2024 -> 02.2025
        assert months_between(CalendarMonth(2024, 11), CalendarMonth(2025, 2)) == 3

    def test_negative(self):
        assert months_between(CalendarMonth(2025, 12), CalendarMonth(2025, 1)) == -11


class TestQueryPeriod:
    def test_parse(self):
        p = QueryPeriod.parse("01-2025", "12-2025")
        assert p.start == CalendarMonth(2025, 1)
        assert p.end == CalendarMonth(2025, 12)
        assert p.is_reversed is False

    def test_reversed_is_not_an_error(self):
        p = QueryPeriod.parse("12-2025", "01-2025")
        assert p.is_reversed is True

    def test_parse_names_offending_field(self):
        with pytest.raises(InvalidArgument) as exc_info:
            QueryPeriod.parse("01-2025", "2025-12")
        assert exc_info.value.field == "end_period"
