"""Opening balance commands."""

import click
from cashbook.cli.error_handling import handle_domain_error
from cashbook.domain.balances import BalanceService
from cashbook.domain.errors import DomainError
from cashbook.utils.amount_parser import parse_amount
from cashbook.utils.money import format_currency


@click.group("opening")
def opening_group():
    """Manage the opening cash of a day."""
    pass


@opening_group.command("set")
@click.argument("amount", metavar="AMOUNT")
@click.option("--date", "target_date", default="today", help="Business day (YYYY-MM-DD, 'today')")
@click.option("--notes", help="Notes about the opening count")
@click.pass_context
def set_opening(ctx, amount: str, target_date: str, notes: str | None):
    """Record the opening cash for a day.

    Running it again for the same day replaces the previous value.

    Examples:
        cashbook opening set 150.00
        cashbook opening set "$1,200" --date 2024-03-15 --notes "Two safes"
    """
    db = ctx.obj["db"]
    service = BalanceService(db)

    try:
        value = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
        return

    try:
        record = service.upsert_opening(
            target_date,
            value,
            notes=notes,
            recorded_by=ctx.obj["session"].identity(),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"Opening cash for {record.date.isoformat()} set to {format_currency(record.amount)}"
    )


@opening_group.command("show")
@click.option("--date", "target_date", default="today", help="Business day (YYYY-MM-DD, 'today')")
@click.pass_context
def show_opening(ctx, target_date: str):
    """Show the opening cash for a day."""
    db = ctx.obj["db"]
    service = BalanceService(db)

    try:
        record = service.get_opening(target_date)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if record is None:
        click.echo("No opening balance recorded.")
        return

    click.echo(f"Date:     {record.date.isoformat()}")
    click.echo(f"Amount:   {format_currency(record.amount)}")
    if record.notes:
        click.echo(f"Notes:    {record.notes}")
    if record.recorded_by is not None:
        who = record.recorded_by.name or record.recorded_by.email or record.recorded_by.id
        click.echo(f"Recorded: {who}")


def register_commands(cli):
    """Register opening commands with main CLI."""
    cli.add_command(opening_group)
