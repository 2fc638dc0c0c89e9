"""Main CLI entry point."""

import click
from loguru import logger

from valecashback.database.factories import create_database

# Import and register all commands at module level
from valecashback.cli.commands import (
    user,
    merchant,
    referral,
    rates,
    sale,
    balance,
    transaction,
    notification,
    audit,
)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr, DEBUG and up when verbose, else WARNING and up."""
    logger.remove()
    logger.add(
        lambda message: click.echo(message, err=True, nl=False),
        level="DEBUG" if verbose else "WARNING",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}",
    )


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides VALE_DB_PATH environment variable)",
    envvar="VALE_DB_PATH",
)
@click.option(
    "--database-url",
    help="SQLAlchemy database URL, e.g. postgresql://... (overrides VALE_DATABASE_URL)",
    envvar="VALE_DATABASE_URL",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging on stderr")
@click.pass_context
def cli(ctx, db_path: str | None, database_url: str | None, verbose: bool):
    """Vale Cashback - fee and settlement engine.

    Register users, merchants and referrals, configure rates and settle
    sales into platform fee, merchant commission, client cashback and
    referral bonus.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_database(database_url=database_url, database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
user.register_commands(cli)
merchant.register_commands(cli)
referral.register_commands(cli)
rates.register_commands(cli)
sale.register_commands(cli)
balance.register_commands(cli)
transaction.register_commands(cli)
notification.register_commands(cli)
audit.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
