"""Utility for resolving user emails to IDs."""

from valecashback.domain.errors import NotFoundError, user_not_found
from valecashback.domain.user import UserService


def resolve_user(user_service: UserService, user: str | int) -> int:
    """Resolve a user ID or email address to a user ID.

    Args:
        user_service: UserService instance
        user: User ID (int or its string form) or email address

    Returns:
        User ID

    Raises:
        NotFoundError: If no such user exists
    """
    if isinstance(user, int):
        user_id = user
    else:
        try:
            user_id = int(user)
        except ValueError:
            found = user_service.get_user_by_email(user)
            if found is None:
                raise NotFoundError(f"User '{user}' not found")
            return found.id

    if user_service.get_user(user_id) is None:
        raise NotFoundError(user_not_found(user_id))
    return user_id
