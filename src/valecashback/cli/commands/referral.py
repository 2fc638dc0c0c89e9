"""Referral commands."""

import click

from valecashback.cli.error_handling import handle_domain_error
from valecashback.cli.user_resolution import resolve_user_or_exit
from valecashback.domain.errors import DomainError
from valecashback.domain.referral import ReferralService
from valecashback.domain.user import UserService


@click.group()
def referral_group():
    """Manage referrals."""
    pass


@referral_group.command("add")
@click.argument("referrer", metavar="REFERRER")
@click.argument("referred", metavar="REFERRED")
@click.pass_context
def add_referral(ctx, referrer: str, referred: str):
    """Record that REFERRER invited REFERRED (user IDs or emails)."""
    db = ctx.obj["db"]
    user_service = UserService(db)
    referrer_id = resolve_user_or_exit(ctx, user_service, referrer)
    referred_id = resolve_user_or_exit(ctx, user_service, referred)

    try:
        referral_id = ReferralService(db).create_referral(referrer_id, referred_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created referral {referral_id}: user {referrer_id} referred user {referred_id}")


@referral_group.command("list")
@click.option("--referrer", help="Only referrals sent by this user (ID or email)")
@click.option("--referred", help="Only referrals received by this user (ID or email)")
@click.pass_context
def list_referrals(ctx, referrer: str | None, referred: str | None):
    """List referrals and the bonus each has earned."""
    db = ctx.obj["db"]
    user_service = UserService(db)
    referrer_id = resolve_user_or_exit(ctx, user_service, referrer) if referrer else None
    referred_id = resolve_user_or_exit(ctx, user_service, referred) if referred else None

    referrals = ReferralService(db).list_referrals(referrer_id=referrer_id, referred_id=referred_id)
    if not referrals:
        click.echo("No referrals found.")
        return

    click.echo("\nReferrals:")
    click.echo("-" * 70)
    for r in referrals:
        click.echo(
            f"ID: {r.id:3d} | referrer {r.referrer_id:3d} -> referred {r.referred_id:3d} | "
            f"bonus ${r.bonus:,.2f} | {r.status.value}"
        )


def register_commands(cli):
    """Register referral commands with main CLI."""
    cli.add_command(referral_group, name="referral")
