"""Date range options shared by the reporting commands."""

import click

from ledgerit.domain.calendar import DateTime
from ledgerit.utils.date_parser import PERIODS, end_of_day, get_date_range, parse_datetime

_PERIOD_HELP = {
    "this-month": "Limit to the current month",
    "this-year": "Limit to the current year",
    "this-week": "Limit to the current week",
    "last-month": "Limit to the previous month",
    "last-year": "Limit to the previous year",
    "last-week": "Limit to the previous week",
}


def date_range_options(func):
    """Attach --start-date, --end-date and one flag per named period.

    The decorated command receives the flags as keyword arguments named
    after the period (``this_month``, ``last_week``, ...); pass them to
    :func:`period_flags_from` to get the mapping expected by
    :func:`resolve_cli_date_range`.
    """
    for period in reversed(PERIODS):
        func = click.option(f"--{period}", is_flag=True, help=_PERIOD_HELP[period])(func)
    func = click.option(
        "--end-date",
        help="Last day to include (YYYY-MM-DD [HH:MM] or relative like 'today')",
    )(func)
    func = click.option(
        "--start-date",
        help="First day to include (YYYY-MM-DD [HH:MM] or relative like 'this year')",
    )(func)
    return func


def period_flags_from(options: dict) -> dict[str, bool]:
    """Pick the period flags out of a command's keyword arguments."""
    return {period: bool(options.get(period.replace("-", "_"))) for period in PERIODS}


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
) -> tuple[DateTime | None, DateTime | None]:
    """Turn the date options of a command into inclusive (start, end) bounds.

    An end date given without a time of day covers that whole day.
    """
    chosen = [period for period, is_set in period_flags.items() if is_set]
    flag_list = ", ".join(f"--{period}" for period in PERIODS)

    if len(chosen) > 1:
        click.echo(f"Error: Only one period option ({flag_list}) may be given.", err=True)
        ctx.exit(1)

    if chosen and (start_date or end_date):
        click.echo(
            "Error: Period options cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if chosen:
        return get_date_range(chosen[0])

    start = None
    end = None

    if start_date:
        try:
            start = parse_datetime(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    if end_date:
        try:
            end = parse_datetime(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)
        if end.time is None:
            end = end_of_day(end.date)

    return start, end
