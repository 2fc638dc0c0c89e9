"""Notification commands."""

import click

from valecashback.cli.user_resolution import resolve_user_or_exit
from valecashback.domain.notification import NotificationService
from valecashback.domain.user import UserService


@click.group()
def notification_group():
    """View notifications."""
    pass


@notification_group.command("list")
@click.argument("user", metavar="USER")
@click.option("--unread", is_flag=True, help="Only unread notifications")
@click.pass_context
def list_notifications(ctx, user: str, unread: bool):
    """List notifications for USER (ID or email)."""
    db = ctx.obj["db"]
    user_id = resolve_user_or_exit(ctx, UserService(db), user)

    notifications = NotificationService(db).list_notifications(user_id, unread_only=unread)
    if not notifications:
        click.echo("No notifications found.")
        return

    for n in notifications:
        marker = " " if n.read else "*"
        click.echo(f"{marker} [{n.created_at:%Y-%m-%d %H:%M}] {n.title}: {n.message}")


def register_commands(cli):
    """Register notification commands with main CLI."""
    cli.add_command(notification_group, name="notification")
