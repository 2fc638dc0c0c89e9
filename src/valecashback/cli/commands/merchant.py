"""Merchant management commands."""

import click

from valecashback.cli.error_handling import handle_domain_error
from valecashback.cli.user_resolution import resolve_admin_or_exit, resolve_user_or_exit
from valecashback.domain.errors import DomainError
from valecashback.domain.merchant import MerchantService
from valecashback.domain.user import UserService


@click.group()
def merchant_group():
    """Manage merchants."""
    pass


@merchant_group.command("create")
@click.argument("user", metavar="USER")
@click.argument("store_name")
@click.option("--category", default="general", show_default=True, help="Store category")
@click.option("--commission", help="Commission percentage overriding the global rate")
@click.pass_context
def create_merchant(ctx, user: str, store_name: str, category: str, commission: str | None):
    """Register a store for a merchant user.

    USER can be a user ID or email. New stores must be approved before
    they can register sales.

    Examples:
        vale merchant create azul@example.com "Loja Azul" --category fashion
        vale merchant create 3 "Padaria" --commission 1.5
    """
    db = ctx.obj["db"]
    user_id = resolve_user_or_exit(ctx, UserService(db), user)

    try:
        merchant_id = MerchantService(db).create_merchant(
            user_id=user_id,
            store_name=store_name,
            category=category,
            commission_rate=commission,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created merchant '{store_name}' (ID: {merchant_id})")


@merchant_group.command("list")
@click.option("--pending", is_flag=True, help="Only list merchants awaiting approval")
@click.pass_context
def list_merchants(ctx, pending: bool):
    """List merchants."""
    service = MerchantService(ctx.obj["db"])

    merchants = service.list_merchants(approved=False if pending else None)
    if not merchants:
        click.echo("No merchants found.")
        return

    click.echo("\nMerchants:")
    click.echo("-" * 80)
    for m in merchants:
        commission = f"{m.commission_rate}%" if m.commission_rate is not None else "global"
        status = "approved" if m.approved else "pending"
        click.echo(
            f"ID: {m.id:3d} | {m.store_name:20s} | {m.category:12s} | "
            f"owner {m.user_id:3d} | {status:8s} | commission {commission}"
        )


@merchant_group.command("approve")
@click.argument("merchant_id", type=int)
@click.option("--suspend", is_flag=True, help="Suspend the merchant instead")
@click.pass_context
def approve_merchant(ctx, merchant_id: int, suspend: bool):
    """Approve (or suspend) a merchant."""
    service = MerchantService(ctx.obj["db"])

    try:
        service.set_approved(merchant_id, approved=not suspend)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Merchant {merchant_id} {'suspended' if suspend else 'approved'}")


@merchant_group.command("commission")
@click.argument("merchant_id", type=int)
@click.argument("rate", required=False)
@click.option("--clear", is_flag=True, help="Remove the override and use the global rate")
@click.option("--admin", help="Admin user ID or email recorded in the audit log")
@click.pass_context
def set_commission(ctx, merchant_id: int, rate: str | None, clear: bool, admin: str | None):
    """Set a merchant's commission override.

    Examples:
        vale merchant commission 1 1.5
        vale merchant commission 1 --clear
    """
    if clear == (rate is not None):
        click.echo("Error: Give either RATE or --clear", err=True)
        ctx.exit(1)

    db = ctx.obj["db"]
    changed_by = resolve_admin_or_exit(ctx, UserService(db), admin)

    try:
        stored = MerchantService(db).set_commission_rate(
            merchant_id, None if clear else rate, changed_by=changed_by
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if stored is None:
        click.echo(f"Merchant {merchant_id} now uses the global commission rate")
    else:
        click.echo(f"Merchant {merchant_id} commission set to {stored}%")


def register_commands(cli):
    """Register merchant commands with main CLI."""
    cli.add_command(merchant_group, name="merchant")
