"""Referral domain service."""

from typing import Optional

from loguru import logger

from valecashback.database.base import Database
from valecashback.domain.entities import Referral
from valecashback.domain.errors import (
    ConflictError,
    NotFoundError,
    ReferrerNotFoundError,
    ValidationError,
    duplicate_referral,
    referrer_unavailable,
    user_not_found,
)


class ReferralService:
    """Service for managing referrals and resolving who earns a bonus."""

    def __init__(self, db: Database):
        """Initialize referral service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_referral(self, referrer_id: int, referred_id: int) -> int:
        """Record that ``referrer_id`` invited ``referred_id``.

        Args:
            referrer_id: User who sent the invitation
            referred_id: User who joined through it

        Returns:
            Referral ID

        Raises:
            ValidationError: If a user refers themselves
            NotFoundError: If either user does not exist
            ConflictError: If the pair is already recorded
        """
        if referrer_id == referred_id:
            raise ValidationError("A user cannot refer themselves")

        for user_id in (referrer_id, referred_id):
            if self.db.get_user(user_id) is None:
                raise NotFoundError(user_not_found(user_id))

        if self.db.referral_exists(referrer_id, referred_id):
            raise ConflictError(duplicate_referral(referrer_id, referred_id))

        referral_id = self.db.create_referral(referrer_id=referrer_id, referred_id=referred_id)
        logger.info("User {} referred by user {}", referred_id, referrer_id)
        return referral_id

    def resolve_referrer(self, user_id: int) -> Optional[int]:
        """Find the referrer who earns a bonus on ``user_id``'s purchases.

        Eligibility depends only on a referral row existing, not on how many
        purchases the referred user has made. If the user was referred more
        than once, the most recent referral wins.

        Args:
            user_id: Purchasing user

        Returns:
            Referrer's user ID, or None if the user was not referred

        Raises:
            ReferrerNotFoundError: If the referral points at a referrer that
                no longer exists or is inactive
        """
        referral = self.db.get_latest_referral_for(user_id)
        if referral is None:
            return None

        referrer = self.db.get_user(referral.referrer_id)
        if referrer is None or not referrer.is_active:
            raise ReferrerNotFoundError(referrer_unavailable(referral.referrer_id, user_id))
        return referrer.id

    def list_referrals(
        self, referrer_id: Optional[int] = None, referred_id: Optional[int] = None
    ) -> list[Referral]:
        """List referrals, newest first.

        Args:
            referrer_id: Only referrals sent by this user
            referred_id: Only referrals received by this user

        Returns:
            List of referral entities
        """
        return self.db.list_referrals(referrer_id=referrer_id, referred_id=referred_id)
