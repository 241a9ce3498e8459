"""Daily closing commands."""

from datetime import timedelta

import click
from cashbook.cli.date_filters import resolve_cli_date_range
from cashbook.cli.error_handling import handle_domain_error
from cashbook.domain.balances import BalanceService
from cashbook.domain.errors import DomainError, NotFoundError, opening_not_found
from cashbook.domain.summary import DailySummaryService
from cashbook.utils.amount_parser import parse_amount
from cashbook.utils.date_parser import business_today
from cashbook.utils.money import format_currency


@click.command("close")
@click.option("--counted", required=True, help="Cash physically counted in the drawer")
@click.option("--date", "target_date", default="today", help="Business day (YYYY-MM-DD, 'today')")
@click.option("--notes", help="Notes about the closing")
@click.pass_context
def close_day(ctx, counted: str, target_date: str, notes: str | None):
    """Close a business day.

    Computes the day's summary, compares expected and counted cash, and
    stores the closing. The day needs an opening balance first.

    Examples:
        cashbook close --counted 480.25
        cashbook close --counted 1200 --date yesterday --notes "Late count"
    """
    db = ctx.obj["db"]
    balances = BalanceService(db)
    summaries = DailySummaryService(db)

    try:
        counted_cash = parse_amount(counted)
    except ValueError as e:
        click.echo(f"Error: Invalid counted amount: {e}", err=True)
        ctx.exit(1)
        return

    try:
        summary = summaries.compute(target_date)
        day = summary.period.date
        opening = balances.get_opening(day)
        if opening is None:
            raise NotFoundError(opening_not_found(day))

        prior = balances.has_prior_closing(day)
        previous_day = day - timedelta(days=1)
        if prior.exists and prior.record.date != previous_day:
            click.echo(
                f"Warning: the previous day ({previous_day.isoformat()}) was not closed; "
                f"last closing is {prior.record.date.isoformat()}.",
                err=True,
            )

        draft = balances.build_closing(
            summary,
            opening,
            counted_cash,
            notes=notes,
            closed_by=ctx.obj["session"].identity(),
        )
        record = balances.create_closing(draft)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Closed {record.date.isoformat()}")
    click.echo(f"  Opening cash:    {format_currency(opening.amount):>14}")
    click.echo(f"  Cash movement:   {format_currency(record.physical_cash_movement):>14}")
    click.echo(f"  Expected cash:   {format_currency(record.physical_cash_expected):>14}")
    click.echo(f"  Counted cash:    {format_currency(record.physical_cash_counted):>14}")
    click.echo(f"  Difference:      {format_currency(record.difference):>14}")


@click.command("closings")
@click.option("--start-date", help="Start date (YYYY-MM-DD or 'yesterday')")
@click.option("--end-date", help="End date (YYYY-MM-DD or 'today')")
@click.option("--this-month", is_flag=True, help="Closings of the current month")
@click.option("--this-week", is_flag=True, help="Closings of the current week")
@click.option("--last-month", is_flag=True, help="Closings of the previous month")
@click.option("--last-week", is_flag=True, help="Closings of the previous week")
@click.pass_context
def list_closings(
    ctx,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    this_week: bool,
    last_month: bool,
    last_week: bool,
):
    """List daily closings (defaults to the last 30 days)."""
    db = ctx.obj["db"]
    service = BalanceService(db)

    today = business_today()
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-month": this_month,
            "this-week": this_week,
            "last-month": last_month,
            "last-week": last_week,
        },
        default_range=(today - timedelta(days=30), today),
    )

    try:
        records = service.get_closing_range(start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not records:
        click.echo("No closings found.")
        return

    click.echo(f"\nClosings from {start.isoformat()} to {end.isoformat()}:")
    click.echo("-" * 78)
    click.echo(
        f"{'Date':<12} {'Income':>14} {'Outflows':>14} {'Expected':>12} {'Counted':>12} {'Diff':>10}"
    )
    click.echo("-" * 78)
    for record in records:
        click.echo(
            f"{record.date.isoformat():<12} {format_currency(record.income_total):>14} "
            f"{format_currency(record.outflow_total):>14} "
            f"{format_currency(record.physical_cash_expected):>12} "
            f"{format_currency(record.physical_cash_counted):>12} "
            f"{format_currency(record.difference):>10}"
        )


def register_commands(cli):
    """Register closing commands with main CLI."""
    cli.add_command(close_day)
    cli.add_command(list_closings)
