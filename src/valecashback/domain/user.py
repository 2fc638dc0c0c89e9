"""User domain service."""

import re
from typing import Optional, Union

from loguru import logger

from valecashback.database.base import Database
from valecashback.domain.entities import User, UserStatus, UserType
from valecashback.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_email,
    invitation_code_not_found,
    user_not_found,
)

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def parse_user_type(value: Union[str, UserType]) -> UserType:
    """Parse a user type name.

    Raises:
        ValidationError: If the type is unknown
    """
    if isinstance(value, UserType):
        return value
    try:
        return UserType(str(value).strip().lower())
    except ValueError:
        valid = ", ".join(t.value for t in UserType)
        raise ValidationError(f"Unknown user type '{value}'. Valid types: {valid}")


class UserService:
    """Service for managing users."""

    def __init__(self, db: Database):
        """Initialize user service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_user(
        self,
        name: str,
        email: str,
        user_type: Union[str, UserType] = UserType.CLIENT,
        invitation_code: Optional[str] = None,
    ) -> User:
        """Create a new user and give them their own invitation code.

        Args:
            name: Display name
            email: Unique email address
            user_type: client, merchant or admin
            invitation_code: Code of the user who invited this one; records
                a referral from that user

        Returns:
            The created user

        Raises:
            ValidationError: If name, email or type are invalid
            NotFoundError: If ``invitation_code`` matches no user
            ConflictError: If the email is already registered
        """
        name = name.strip()
        email = email.strip().lower()
        if not name:
            raise ValidationError("Name cannot be empty")
        if not _EMAIL_PATTERN.match(email):
            raise ValidationError(f"Invalid email address '{email}'")
        kind = parse_user_type(user_type)

        inviter = None
        if invitation_code:
            inviter = self.db.get_user_by_invitation_code(invitation_code.strip().upper())
            if inviter is None:
                raise NotFoundError(invitation_code_not_found(invitation_code))

        if self.db.get_user_by_email(email) is not None:
            raise ConflictError(duplicate_email(email))

        user_id = self.db.create_user(
            name=name,
            email=email,
            user_type=kind.value,
            referrer_id=inviter.id if inviter is not None else None,
        )
        logger.info("Created {} user {} ({})", kind.value, user_id, email)
        return self.db.get_user(user_id)

    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity or None if not found
        """
        return self.db.get_user(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email address."""
        return self.db.get_user_by_email(email.strip().lower())

    def list_users(self, user_type: Union[str, UserType, None] = None) -> list[User]:
        """List users, optionally only those of one type."""
        if user_type is None:
            return self.db.list_users()
        return self.db.list_users(user_type=parse_user_type(user_type).value)

    def set_active(self, user_id: int, active: bool) -> None:
        """Activate or deactivate a user.

        Inactive users cannot purchase and their referrals stop earning.

        Raises:
            NotFoundError: If user not found
        """
        if self.db.get_user(user_id) is None:
            raise NotFoundError(user_not_found(user_id))
        status = UserStatus.ACTIVE if active else UserStatus.INACTIVE
        self.db.update_user_status(user_id, status.value)
        logger.info("User {} is now {}", user_id, status.value)
