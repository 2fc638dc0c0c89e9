"""User management commands."""

import click

from valecashback.cli.error_handling import handle_domain_error
from valecashback.cli.user_resolution import resolve_user_or_exit
from valecashback.domain.entities import UserType
from valecashback.domain.errors import DomainError
from valecashback.domain.user import UserService


@click.group()
def user_group():
    """Manage users."""
    pass


@user_group.command("create")
@click.argument("name")
@click.argument("email")
@click.option(
    "--type",
    "user_type",
    type=click.Choice([t.value for t in UserType]),
    default=UserType.CLIENT.value,
    show_default=True,
    help="User type",
)
@click.option("--invitation-code", help="Invitation code of the user who referred this one")
@click.pass_context
def create_user(ctx, name: str, email: str, user_type: str, invitation_code: str | None):
    """Create a new user.

    Clients and merchants get their own invitation code to share.

    Examples:
        vale user create "Ana Souza" ana@example.com
        vale user create "Bruno" bruno@example.com --invitation-code CL0001
        vale user create "Loja Azul" azul@example.com --type merchant
    """
    service = UserService(ctx.obj["db"])

    try:
        user = service.create_user(
            name=name, email=email, user_type=user_type, invitation_code=invitation_code
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created {user.type.value} '{user.name}' (ID: {user.id})")
    if user.invitation_code:
        click.echo(f"Invitation code: {user.invitation_code}")
    if invitation_code:
        click.echo(f"Referred by invitation code {invitation_code.strip().upper()}")


@user_group.command("list")
@click.option(
    "--type",
    "user_type",
    type=click.Choice([t.value for t in UserType]),
    help="Only list users of this type",
)
@click.pass_context
def list_users(ctx, user_type: str | None):
    """List users."""
    service = UserService(ctx.obj["db"])

    users = service.list_users(user_type=user_type)
    if not users:
        click.echo("No users found.")
        return

    click.echo("\nUsers:")
    click.echo("-" * 80)
    for u in users:
        code = u.invitation_code or "-"
        click.echo(
            f"ID: {u.id:3d} | {u.name:20s} | {u.email:28s} | {u.type.value:8s} | "
            f"{u.status.value:8s} | {code}"
        )


@user_group.command("deactivate")
@click.argument("user", metavar="USER")
@click.pass_context
def deactivate_user(ctx, user: str):
    """Deactivate a user.

    USER can be a user ID or email. Inactive users cannot make purchases
    and no longer earn referral bonuses.
    """
    service = UserService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, service, user)

    try:
        service.set_active(user_id, False)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deactivated user {user_id}")


@user_group.command("activate")
@click.argument("user", metavar="USER")
@click.pass_context
def activate_user(ctx, user: str):
    """Reactivate a user. USER can be a user ID or email."""
    service = UserService(ctx.obj["db"])
    user_id = resolve_user_or_exit(ctx, service, user)

    try:
        service.set_active(user_id, True)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Activated user {user_id}")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
