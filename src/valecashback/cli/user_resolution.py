"""CLI helpers for user resolution."""

from __future__ import annotations

import click

from valecashback.domain.errors import DomainError
from valecashback.domain.user import UserService
from valecashback.utils.user_resolver import resolve_user

from valecashback.cli.error_handling import handle_domain_error


def resolve_user_or_exit(ctx: click.Context, user_service: UserService, user: str | int) -> int:
    """Resolve a user ID or email, or exit with a CLI error."""
    try:
        return resolve_user(user_service, user)
    except DomainError as exc:
        handle_domain_error(ctx, exc)


def resolve_admin_or_exit(ctx: click.Context, user_service: UserService, admin: str | None) -> int | None:
    """Resolve the optional ``--admin`` option used for audit entries."""
    if admin is None:
        return None
    return resolve_user_or_exit(ctx, user_service, admin)
