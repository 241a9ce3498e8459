"""CLI error handling helpers."""

import click

from cashbook.domain.errors import DomainError, InvalidDateError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, InvalidDateError):
        click.echo("Check the date and run the command again.", err=True)
    ctx.exit(1)
