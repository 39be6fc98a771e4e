"""
Calendar-month periods.

A CalendarMonth is a (year, month) pair without a day component, the unit of
billing. On the wire it is encoded as "MM-YYYY", in storage as the 1st day of
the month.

QueryPeriod is a closed month range [start, end]. Its ordering is not
validated: a reversed period is legal and simply overlaps nothing.
"""
import re
from dataclasses import dataclass
from datetime import date
from typing import Any

_MONTH_RE = re.compile(r"^(\d{2})-(\d{4})$", re.ASCII)


class InvalidArgument(ValueError):
    """Malformed input value; names the offending field."""

    def __init__(self, field: str, value: Any, reason: str | None = None):
        self.field = field
        self.value = value
        self.reason = reason
        message = f"invalid {field}: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


@dataclass(frozen=True, order=True)
class CalendarMonth:
    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise InvalidArgument("month", self.month, "month must be in 1..12")
        if not 1 <= self.year <= 9999:
            raise InvalidArgument("year", self.year, "year must be in 1..9999")

    def __str__(self) -> str:
        return self.format()

    @classmethod
    def parse(cls, raw: str, field: str = "period") -> "CalendarMonth":
        """
        Parse "MM-YYYY".

        Raises:
            InvalidArgument: wrong shape or month outside 1..12

        Example:
            >>> CalendarMonth.parse("07-2025")
            CalendarMonth(year=2025, month=7)
        """
        if not isinstance(raw, str):
            raise InvalidArgument(field, raw, "expected MM-YYYY")
        m = _MONTH_RE.match(raw.strip())
        if not m:
            raise InvalidArgument(field, raw, "expected MM-YYYY")
        month, year = int(m.group(1)), int(m.group(2))
        if not 1 <= month <= 12:
            raise InvalidArgument(field, raw, "month must be in 1..12")
        if year < 1:
            raise InvalidArgument(field, raw, "year must be in 1..9999")
        return cls(year, month)

    def format(self) -> str:
        return f"{self.month:02d}-{self.year:04d}"

    @classmethod
    def from_date(cls, d: date) -> "CalendarMonth":
        return cls(d.year, d.month)

    def to_date(self) -> date:
        """First day of the month."""
        return date(self.year, self.month, 1)


def months_between(a: CalendarMonth, b: CalendarMonth) -> int:
    """Signed number of months from a to b (0 for the same month)."""
    return (b.year - a.year) * 12 + (b.month - a.month)


@dataclass(frozen=True)
class QueryPeriod:
    start: CalendarMonth
    end: CalendarMonth

    @property
    def is_reversed(self) -> bool:
        return self.start > self.end

    @classmethod
    def parse(cls, start: str, end: str) -> "QueryPeriod":
        return cls(
            start=CalendarMonth.parse(start, "start_period"),
            end=CalendarMonth.parse(end, "end_period"),
        )
