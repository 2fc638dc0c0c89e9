"""Cashback balance commands."""

import click

from valecashback.cli.user_resolution import resolve_user_or_exit
from valecashback.domain.ledger import LedgerService
from valecashback.domain.user import UserService


@click.group()
def balance_group():
    """View cashback balances."""
    pass


@balance_group.command("show")
@click.argument("user", metavar="USER")
@click.pass_context
def show_balance(ctx, user: str):
    """Show the cashback balance of USER (ID or email)."""
    db = ctx.obj["db"]
    user_id = resolve_user_or_exit(ctx, UserService(db), user)

    balance = LedgerService(db).get_balance(user_id)
    click.echo(f"User {user_id}")
    click.echo(f"  Balance:      ${balance.balance:,.2f}")
    click.echo(f"  Total earned: ${balance.total_earned:,.2f}")


def register_commands(cli):
    """Register balance commands with main CLI."""
    cli.add_command(balance_group, name="balance")
