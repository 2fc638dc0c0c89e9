"""Merchant domain service."""

from decimal import Decimal
from typing import Optional

from loguru import logger

from valecashback.database.base import Database
from valecashback.domain.entities import Merchant, UserType
from valecashback.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    merchant_not_found,
    user_not_found,
)
from valecashback.domain.rates import parse_percentage


class MerchantService:
    """Service for managing merchants and their commission overrides."""

    def __init__(self, db: Database):
        """Initialize merchant service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_merchant(
        self,
        user_id: int,
        store_name: str,
        category: str,
        commission_rate: object = None,
    ) -> int:
        """Register a store for a merchant user.

        New merchants start unapproved and cannot take sales until approved.

        Args:
            user_id: Owning user (must be of type merchant)
            store_name: Store name
            category: Store category
            commission_rate: Optional commission percentage overriding the
                global rate

        Returns:
            Merchant ID

        Raises:
            NotFoundError: If the user does not exist
            ValidationError: If the user is not a merchant or inputs are invalid
            ConflictError: If the user already owns a store
        """
        user = self.db.get_user(user_id)
        if user is None:
            raise NotFoundError(user_not_found(user_id))
        if user.type != UserType.MERCHANT:
            raise ValidationError(f"User {user_id} is a {user.type.value}, not a merchant")
        if not store_name.strip():
            raise ValidationError("Store name cannot be empty")
        if self.db.get_merchant_by_user(user_id) is not None:
            raise ConflictError(f"User {user_id} already has a merchant")

        rate = None
        if commission_rate is not None:
            rate = parse_percentage(commission_rate, name="commission rate")

        merchant_id = self.db.create_merchant(
            user_id=user_id,
            store_name=store_name.strip(),
            category=category.strip(),
            commission_rate=rate,
        )
        logger.info("Created merchant {} '{}' for user {}", merchant_id, store_name, user_id)
        return merchant_id

    def get_merchant(self, merchant_id: int) -> Optional[Merchant]:
        """Get merchant by ID."""
        return self.db.get_merchant(merchant_id)

    def list_merchants(self, approved: Optional[bool] = None) -> list[Merchant]:
        """List merchants ordered by store name."""
        return self.db.list_merchants(approved=approved)

    def set_approved(self, merchant_id: int, approved: bool = True) -> None:
        """Approve or suspend a merchant.

        Raises:
            NotFoundError: If merchant not found
        """
        if self.db.get_merchant(merchant_id) is None:
            raise NotFoundError(merchant_not_found(merchant_id))
        self.db.update_merchant_approval(merchant_id, approved)
        logger.info("Merchant {} {}", merchant_id, "approved" if approved else "suspended")

    def set_commission_rate(
        self,
        merchant_id: int,
        commission_rate: object,
        changed_by: Optional[int] = None,
    ) -> Optional[Decimal]:
        """Set or clear a merchant's commission override.

        Args:
            merchant_id: Merchant ID
            commission_rate: Percentage between 0 and 100, or None to fall
                back to the global merchant commission
            changed_by: Admin user ID recorded in the audit log

        Returns:
            The stored override (None when cleared)

        Raises:
            NotFoundError: If merchant not found
            ValidationError: If the rate is not between 0 and 100
        """
        if self.db.get_merchant(merchant_id) is None:
            raise NotFoundError(merchant_not_found(merchant_id))

        rate = None
        if commission_rate is not None:
            rate = parse_percentage(commission_rate, name="commission rate")

        self.db.update_merchant_commission(merchant_id, rate, changed_by=changed_by)
        logger.info("Merchant {} commission override set to {}", merchant_id, rate)
        return rate
