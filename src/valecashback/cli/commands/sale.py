"""Sale registration command."""

import click

from valecashback.cli.error_handling import handle_domain_error
from valecashback.cli.user_resolution import resolve_user_or_exit
from valecashback.domain.entities import PaymentMethod
from valecashback.domain.errors import DomainError
from valecashback.domain.notification import NotificationService
from valecashback.domain.sale import SaleService
from valecashback.domain.user import UserService
from valecashback.utils.amount_parser import parse_amount


@click.group()
def sale_group():
    """Register sales."""
    pass


@sale_group.command("register")
@click.argument("user", metavar="USER")
@click.argument("merchant_id", type=int)
@click.argument("amount")
@click.option(
    "--payment-method",
    type=click.Choice([m.value for m in PaymentMethod]),
    default=PaymentMethod.PIX.value,
    show_default=True,
    help="How the client paid",
)
@click.option("--description", help="Sale description")
@click.option("--idempotency-key", help="Key identifying this sale; retries with the same key are not credited twice")
@click.pass_context
def register_sale(
    ctx,
    user: str,
    merchant_id: int,
    amount: str,
    payment_method: str,
    description: str | None,
    idempotency_key: str | None,
):
    """Register a sale by USER at MERCHANT_ID and settle it.

    USER can be a user ID or email.

    Examples:
        vale sale register ana@example.com 1 100.00
        vale sale register 2 1 "R$ 49.90" --payment-method credit_card --idempotency-key pos-1234
    """
    db = ctx.obj["db"]
    user_id = resolve_user_or_exit(ctx, UserService(db), user)

    try:
        sale_amount = parse_amount(amount)
    except DomainError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    service = SaleService(db, listeners=[NotificationService(db)])
    try:
        result = service.register_sale(
            user_id=user_id,
            merchant_id=merchant_id,
            amount=sale_amount,
            payment_method=payment_method,
            description=description,
            idempotency_key=idempotency_key,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    txn = result.transaction
    if result.replayed:
        click.echo(f"Sale already registered as transaction {txn.id}; nothing credited again")
    else:
        click.echo(f"Registered sale {txn.id}: ${txn.amount:,.2f} at merchant {txn.merchant_id}")

    s = result.settlement
    click.echo(f"  Platform fee:        ${s.platform_fee:,.2f}")
    click.echo(f"  Merchant commission: ${s.merchant_commission:,.2f}")
    click.echo(f"  Merchant net:        ${s.merchant_net:,.2f}")
    click.echo(f"  Client cashback:     ${s.client_cashback:,.2f}")
    if result.referrer_id is not None:
        click.echo(f"  Referral bonus:      ${s.referral_bonus:,.2f} to user {result.referrer_id}")
    else:
        click.echo("  Referral bonus:      none")


def register_commands(cli):
    """Register sale commands with main CLI."""
    cli.add_command(sale_group, name="sale")
