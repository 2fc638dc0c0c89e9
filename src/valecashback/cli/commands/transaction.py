"""Transaction listing commands."""

import click

from valecashback.cli.user_resolution import resolve_user_or_exit
from valecashback.domain.ledger import LedgerService
from valecashback.domain.user import UserService
from valecashback.utils.date_parser import parse_date


@click.group()
def transaction_group():
    """View settled transactions."""
    pass


@transaction_group.command("list")
@click.option("--user", help="Purchasing user ID or email")
@click.option("--merchant", "merchant_id", type=int, help="Merchant ID")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'this month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--verbose", "-v", is_flag=True, help="Show the full settlement breakdown")
@click.pass_context
def list_transactions(
    ctx,
    user: str | None,
    merchant_id: int | None,
    start_date: str | None,
    end_date: str | None,
    verbose: bool,
):
    """View settled transactions with optional filters."""
    db = ctx.obj["db"]
    user_id = resolve_user_or_exit(ctx, UserService(db), user) if user else None

    # Parse dates
    start = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    end = None
    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    transactions = LedgerService(db).list_transactions(
        user_id=user_id, merchant_id=merchant_id, start_date=start, end_date=end
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    if verbose:
        click.echo("=" * 80)
        for txn in transactions:
            click.echo(f"\nTransaction ID: {txn.id}")
            click.echo(f"  Date: {txn.created_at:%Y-%m-%d %H:%M:%S}")
            click.echo(f"  User: {txn.user_id}  Merchant: {txn.merchant_id}")
            click.echo(f"  Amount: ${txn.amount:,.2f} ({txn.payment_method.value})")
            click.echo(f"  Platform fee: ${txn.platform_fee:,.2f}")
            click.echo(f"  Merchant commission: ${txn.merchant_commission:,.2f}")
            click.echo(f"  Merchant net: ${txn.merchant_net:,.2f}")
            click.echo(f"  Cashback: ${txn.cashback_amount:,.2f}")
            if txn.referrer_id is not None:
                click.echo(f"  Referral bonus: ${txn.referral_bonus:,.2f} to user {txn.referrer_id}")
            if txn.description:
                click.echo(f"  Description: {txn.description}")
            if txn.idempotency_key:
                click.echo(f"  Idempotency key: {txn.idempotency_key}")
        return

    click.echo("-" * 80)
    for txn in transactions:
        click.echo(
            f"ID: {txn.id:4d} | {txn.created_at:%Y-%m-%d} | user {txn.user_id:3d} | "
            f"merchant {txn.merchant_id:3d} | ${txn.amount:>10,.2f} | cashback ${txn.cashback_amount:,.2f}"
        )


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
