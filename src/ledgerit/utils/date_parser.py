"""Date parsing utilities for command-line input."""

from datetime import date, timedelta

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from ledgerit.domain.calendar import Date, DateTime
from ledgerit.domain.errors import ParseError

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
PERIODS = ("this-month", "this-year", "this-week", "last-month", "last-year", "last-week")


def _resolve_relative(phrase: str, today: date) -> date | None:
    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if phrase in relative_dates:
        return relative_dates[phrase]

    if phrase.startswith("last "):
        period = phrase[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            # Monday of last week
            return today - timedelta(days=today.weekday() + 7)
        elif period in WEEKDAYS:
            days_ago = (today.weekday() - WEEKDAYS.index(period)) % 7
            return today - timedelta(days=days_ago or 7)

    elif phrase.startswith("this "):
        period = phrase[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    elif phrase.startswith("next "):
        period = phrase[5:]
        if period == "month":
            return (today + relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) + relativedelta(years=1)
        elif period == "week":
            return today + timedelta(days=(7 - today.weekday()))

    return None


def parse_datetime(text: str) -> DateTime:
    """Parse a date string into a DateTime.

    Supports:
    - Absolute dates: "2024-01-15", "2024-01-15 09:30", "2024-01-15T09:30"
    - Other absolute formats understood by dateutil: "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Relative dates, and free-form dates read as midnight, carry no time of day.

    Args:
        text: Date string

    Returns:
        DateTime

    Raises:
        ParseError: If the string cannot be parsed
    """
    phrase = " ".join(text.strip().lower().split())
    resolved = _resolve_relative(phrase, date.today())
    if resolved is not None:
        return DateTime(Date.from_date(resolved))

    try:
        return DateTime.parse(text.strip())
    except ParseError as e:
        iso_error = e

    # Try parsing as a free-form absolute date
    try:
        parsed = date_parser.parse(phrase)
    except (ValueError, OverflowError):
        raise iso_error from None
    day = Date.from_date(parsed.date())
    if parsed.hour == 0 and parsed.minute == 0:
        return DateTime(day)
    return DateTime.of(day.year, day.month, day.day, parsed.hour, parsed.minute)


def _period_bounds(period: str, today: date) -> tuple[date, date] | None:
    first_of_month = today.replace(day=1)
    first_of_year = today.replace(month=1, day=1)
    monday = today - timedelta(days=today.weekday())

    if period == "this-month":
        return first_of_month, today
    if period == "this-year":
        return first_of_year, today
    if period == "this-week":
        return monday, today
    if period == "last-month":
        return first_of_month - relativedelta(months=1), first_of_month - timedelta(days=1)
    if period == "last-year":
        return first_of_year - relativedelta(years=1), first_of_year - timedelta(days=1)
    if period == "last-week":
        return monday - timedelta(days=7), monday - timedelta(days=1)
    return None


def get_date_range(period: str) -> tuple[DateTime, DateTime]:
    """Get inclusive start and end bounds for a named period.

    The end bound is the last minute of the period's final day, so timed
    transactions on that day are included. Periods that contain today end
    today.

    Raises:
        ParseError: If period is not one of PERIODS
    """
    bounds = _period_bounds(period.strip().lower(), date.today())
    if bounds is None:
        raise ParseError(f"Unknown period: '{period}'. Expected one of: {', '.join(PERIODS)}")

    first, last = bounds
    return DateTime(Date.from_date(first)), end_of_day(Date.from_date(last))


def end_of_day(day: Date) -> DateTime:
    """Latest DateTime on ``day``."""
    return DateTime.of(day.year, day.month, day.day, 23, 59)
