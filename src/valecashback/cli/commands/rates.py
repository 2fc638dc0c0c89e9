"""Rate configuration commands."""

import click

from valecashback.cli.error_handling import handle_domain_error
from valecashback.cli.user_resolution import resolve_admin_or_exit
from valecashback.domain.errors import DomainError
from valecashback.domain.rates import DEFAULT_RATES, RateService
from valecashback.domain.user import UserService


@click.group()
def rates_group():
    """Configure settlement rates."""
    pass


@rates_group.command("init")
@click.option("--admin", help="Admin user ID or email recorded in the audit log")
@click.pass_context
def init_rates(ctx, admin: str | None):
    """Store the default rates for any rate that is not configured yet.

    Defaults: platform fee 2%, merchant commission 1%, client cashback 2%,
    referral bonus 1%. Existing rates are left untouched.
    """
    db = ctx.obj["db"]
    changed_by = resolve_admin_or_exit(ctx, UserService(db), admin)

    if RateService(db).initialize_defaults(changed_by=changed_by):
        click.echo("Initialized default rates:")
        _echo_rates(DEFAULT_RATES)
    else:
        click.echo("Rates are already configured.")


@rates_group.command("show")
@click.option("--merchant", "merchant_id", type=int, help="Show the rates applied at this merchant")
@click.pass_context
def show_rates(ctx, merchant_id: int | None):
    """Show the configured rates."""
    service = RateService(ctx.obj["db"])

    try:
        rates = service.get_rates(merchant_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if merchant_id is None:
        click.echo("Global rates:")
    else:
        click.echo(f"Rates at merchant {merchant_id}:")
    _echo_rates(rates)
    enabled = service.is_merchant_override_enabled()
    click.echo(f"Merchant commission overrides: {'enabled' if enabled else 'disabled'}")


@rates_group.command("set")
@click.option("--platform-fee", help="Platform fee percentage")
@click.option("--merchant-commission", help="Merchant commission percentage")
@click.option("--client-cashback", help="Client cashback percentage")
@click.option("--referral-bonus", help="Referral bonus percentage")
@click.option("--admin", help="Admin user ID or email recorded in the audit log")
@click.pass_context
def set_rates(
    ctx,
    platform_fee: str | None,
    merchant_commission: str | None,
    client_cashback: str | None,
    referral_bonus: str | None,
    admin: str | None,
):
    """Update one or more global rates.

    Examples:
        vale rates set --client-cashback 3
        vale rates set --platform-fee 2.5 --referral-bonus 0.5
    """
    db = ctx.obj["db"]
    changed_by = resolve_admin_or_exit(ctx, UserService(db), admin)

    try:
        rates = RateService(db).set_global_rates(
            platform_fee_pct=platform_fee,
            merchant_commission_pct=merchant_commission,
            client_cashback_pct=client_cashback,
            referral_bonus_pct=referral_bonus,
            changed_by=changed_by,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("Updated global rates:")
    _echo_rates(rates)


@rates_group.command("override")
@click.argument("state", type=click.Choice(["on", "off"]))
@click.option("--admin", help="Admin user ID or email recorded in the audit log")
@click.pass_context
def set_override(ctx, state: str, admin: str | None):
    """Turn per-merchant commission overrides on or off."""
    db = ctx.obj["db"]
    changed_by = resolve_admin_or_exit(ctx, UserService(db), admin)

    RateService(db).set_merchant_override_enabled(state == "on", changed_by=changed_by)
    click.echo(f"Merchant commission overrides {'enabled' if state == 'on' else 'disabled'}")


def _echo_rates(rates) -> None:
    click.echo(f"  Platform fee:        {rates.platform_fee_pct}%")
    click.echo(f"  Merchant commission: {rates.merchant_commission_pct}%")
    click.echo(f"  Client cashback:     {rates.client_cashback_pct}%")
    click.echo(f"  Referral bonus:      {rates.referral_bonus_pct}%")


def register_commands(cli):
    """Register rate commands with main CLI."""
    cli.add_command(rates_group, name="rates")
