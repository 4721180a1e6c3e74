"""Calendar values used to date transactions.

Accepted literal forms:
    2023-08-15
    2023-08-15 15:23
    2023-08-15T15:23
"""

import datetime as dt
from dataclasses import dataclass
from functools import total_ordering
from typing import Optional

from ledgerit.domain.errors import ParseError

MONTH_DAYS = (0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    return year % 400 == 0 or (year % 4 == 0 and year % 100 != 0)


def days_in_month(year: int, month: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return MONTH_DAYS[month]


def _parse_field(segment: str, text: str, what: str) -> int:
    if not segment.isascii() or not segment.isdigit():
        raise ParseError(f"Could not parse {what} '{text}': '{segment}' is not a number")
    return int(segment)


@dataclass(frozen=True, order=True)
class Date:
    year: int
    month: int
    day: int

    def __post_init__(self):
        if not dt.MINYEAR <= self.year <= dt.MAXYEAR:
            raise ValueError(f"Year {self.year} out of range")
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month {self.month} out of range")
        if not 1 <= self.day <= days_in_month(self.year, self.month):
            raise ValueError(f"Day {self.day} out of range for {self.year}-{self.month:02d}")

    @classmethod
    def parse(cls, text: str) -> "Date":
        """Parse ``YYYY-MM-DD`` (zero padding optional)."""
        parts = text.split("-")
        if len(parts) != 3:
            raise ParseError(f"Could not parse date '{text}': expected YYYY-MM-DD")
        year, month, day = (_parse_field(part, text, "date") for part in parts)
        try:
            return cls(year, month, day)
        except ValueError as e:
            raise ParseError(f"Could not parse date '{text}': {e}") from e

    @classmethod
    def from_date(cls, value: dt.date) -> "Date":
        return cls(value.year, value.month, value.day)

    def to_date(self) -> dt.date:
        return dt.date(self.year, self.month, self.day)

    def next_day(self) -> "Date":
        if self.day < days_in_month(self.year, self.month):
            return Date(self.year, self.month, self.day + 1)
        if self.month < 12:
            return Date(self.year, self.month + 1, 1)
        return Date(self.year + 1, 1, 1)

    def prev_day(self) -> "Date":
        if self.day > 1:
            return Date(self.year, self.month, self.day - 1)
        if self.month > 1:
            return Date(self.year, self.month - 1, days_in_month(self.year, self.month - 1))
        return Date(self.year - 1, 12, 31)

    def __add__(self, days: int) -> "Date":
        if not isinstance(days, int):
            return NotImplemented
        return Date.from_date(self.to_date() + dt.timedelta(days=days))

    def __sub__(self, days: int) -> "Date":
        if not isinstance(days, int):
            return NotImplemented
        return self + (-days)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


@dataclass(frozen=True, order=True)
class Time:
    hour: int
    minute: int

    def __post_init__(self):
        if not 0 <= self.hour <= 23:
            raise ValueError(f"Hour {self.hour} out of range")
        if not 0 <= self.minute <= 59:
            raise ValueError(f"Minute {self.minute} out of range")

    @classmethod
    def parse(cls, text: str) -> "Time":
        """Parse ``HH:MM`` (zero padding optional)."""
        parts = text.split(":")
        if len(parts) != 2:
            raise ParseError(f"Could not parse time '{text}': expected HH:MM")
        hour, minute = (_parse_field(part, text, "time") for part in parts)
        try:
            return cls(hour, minute)
        except ValueError as e:
            raise ParseError(f"Could not parse time '{text}': {e}") from e

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@total_ordering
@dataclass(frozen=True)
class DateTime:
    """A Date with an optional Time of day.

    A DateTime without a time sorts before every timed DateTime on the same
    date.
    """

    date: Date
    time: Optional[Time] = None

    @classmethod
    def parse(cls, text: str) -> "DateTime":
        if "T" in text:
            separator = "T"
        elif " " in text:
            separator = " "
        else:
            return cls(Date.parse(text))

        parts = text.split(separator)
        if len(parts) != 2:
            raise ParseError(f"Could not parse datetime '{text}'")
        return cls(Date.parse(parts[0]), Time.parse(parts[1]))

    @classmethod
    def of(
        cls, year: int, month: int, day: int, hour: Optional[int] = None, minute: int = 0
    ) -> "DateTime":
        time = Time(hour, minute) if hour is not None else None
        return cls(Date(year, month, day), time)

    def _sort_key(self) -> tuple:
        if self.time is None:
            return (self.date, 0, 0, 0)
        return (self.date, 1, self.time.hour, self.time.minute)

    def __lt__(self, other: "DateTime") -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        if self.time is None:
            return str(self.date)
        return f"{self.date} {self.time}"
