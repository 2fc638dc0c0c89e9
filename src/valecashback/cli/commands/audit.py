"""Audit log commands."""

import click

from valecashback.cli.error_handling import handle_domain_error
from valecashback.domain.audit import AuditService
from valecashback.domain.errors import DomainError


@click.group()
def audit_group():
    """View the audit log."""
    pass


@audit_group.command("list")
@click.option("--limit", type=int, help="Show only the newest N entries")
@click.pass_context
def list_entries(ctx, limit: int | None):
    """List audit entries, newest first."""
    try:
        entries = AuditService(ctx.obj["db"]).list_entries(limit=limit)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not entries:
        click.echo("No audit entries found.")
        return

    for entry in entries:
        who = f"user {entry.user_id}" if entry.user_id is not None else "system"
        click.echo(f"ID: {entry.id:4d} | {entry.created_at:%Y-%m-%d %H:%M:%S} | {who} | {entry.action}")
        if entry.details:
            click.echo(f"       {entry.details}")


def register_commands(cli):
    """Register audit commands with main CLI."""
    cli.add_command(audit_group, name="audit")
