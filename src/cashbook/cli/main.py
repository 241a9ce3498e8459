"""Main CLI entry point."""

import logging

import click
from cashbook.database.factories import create_sqlite_database
from cashbook.domain.session import (
    SessionContext,
    environment_identity_provider,
    overriding_identity_provider,
)

# Import and register all commands at module level
from cashbook.cli.commands import summary, opening, closing


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides CASHBOOK_DB_PATH environment variable)",
    envvar="CASHBOOK_DB_PATH",
)
@click.option("--user-id", help="Id of the user recording entries (overrides CASHBOOK_USER_ID)")
@click.option("--user-name", help="Display name of the user (overrides CASHBOOK_USER_NAME)")
@click.option("--user-email", help="Email of the user (overrides CASHBOOK_USER_EMAIL)")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(
    ctx,
    db_path: str | None,
    user_id: str | None,
    user_name: str | None,
    user_email: str | None,
    verbose: bool,
):
    """Cashbook - Daily cash reconciliation.

    Summarize a business day's sales, receivables, payables, expenses and
    transfers, and record opening cash and daily closings.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Options win over CASHBOOK_USER_* variables; the role only comes from the environment
    provider = overriding_identity_provider(
        environment_identity_provider(), id=user_id, email=user_email, first_name=user_name
    )
    session = SessionContext(provider)
    session.refresh()
    ctx.obj["session"] = session

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
summary.register_commands(cli)
opening.register_commands(cli)
closing.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
