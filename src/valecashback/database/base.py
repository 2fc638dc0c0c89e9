"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from valecashback.domain.entities import (
    User,
    Merchant,
    CashbackBalance,
    Transaction,
    Referral,
    AuditLogEntry,
    Notification,
    Sale,
    Settlement,
)


class Database(ABC):
    """Abstract database interface for Vale Cashback."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # User operations
    @abstractmethod
    def create_user(
        self, name: str, email: str, user_type: str, referrer_id: Optional[int] = None
    ) -> int:
        """Create a user with their own invitation code. Returns user ID.

        If ``referrer_id`` is given, a pending referral from that user is
        recorded in the same transaction.

        Raises:
            ConflictError: If the email is already registered
        """
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email address."""
        pass

    @abstractmethod
    def get_user_by_invitation_code(self, code: str) -> Optional[User]:
        """Get user by their invitation code."""
        pass

    @abstractmethod
    def list_users(self, user_type: Optional[str] = None) -> list[User]:
        """List users, optionally filtered by type."""
        pass

    @abstractmethod
    def update_user_status(self, user_id: int, status: str) -> None:
        """Set a user's status."""
        pass

    # Merchant operations
    @abstractmethod
    def create_merchant(
        self,
        user_id: int,
        store_name: str,
        category: str,
        commission_rate: Optional[Decimal] = None,
    ) -> int:
        """Create a merchant. Returns merchant ID."""
        pass

    @abstractmethod
    def get_merchant(self, merchant_id: int) -> Optional[Merchant]:
        """Get merchant by ID."""
        pass

    @abstractmethod
    def get_merchant_by_user(self, user_id: int) -> Optional[Merchant]:
        """Get merchant owned by a user."""
        pass

    @abstractmethod
    def list_merchants(self, approved: Optional[bool] = None) -> list[Merchant]:
        """List merchants, optionally filtered by approval."""
        pass

    @abstractmethod
    def update_merchant_approval(self, merchant_id: int, approved: bool) -> None:
        """Approve or suspend a merchant."""
        pass

    @abstractmethod
    def update_merchant_commission(
        self,
        merchant_id: int,
        commission_rate: Optional[Decimal],
        changed_by: Optional[int] = None,
    ) -> None:
        """Set or clear a merchant's commission override and audit the change."""
        pass

    # Settings operations
    @abstractmethod
    def get_settings(self, keys: list[str]) -> dict[str, str]:
        """Get the stored values for the given keys (missing keys are omitted)."""
        pass

    @abstractmethod
    def set_settings(
        self, values: dict[str, str], changed_by: Optional[int] = None
    ) -> None:
        """Upsert settings atomically and write an audit entry."""
        pass

    # Audit log operations
    @abstractmethod
    def list_audit_logs(self, limit: Optional[int] = None) -> list[AuditLogEntry]:
        """List audit log entries, newest first."""
        pass

    # Referral operations
    @abstractmethod
    def create_referral(self, referrer_id: int, referred_id: int) -> int:
        """Create a pending referral. Returns referral ID."""
        pass

    @abstractmethod
    def get_referral(self, referral_id: int) -> Optional[Referral]:
        """Get referral by ID."""
        pass

    @abstractmethod
    def referral_exists(self, referrer_id: int, referred_id: int) -> bool:
        """Check if a referral between the two users exists."""
        pass

    @abstractmethod
    def get_latest_referral_for(self, referred_id: int) -> Optional[Referral]:
        """Get the most recent referral whose referred user is ``referred_id``."""
        pass

    @abstractmethod
    def list_referrals(
        self, referrer_id: Optional[int] = None, referred_id: Optional[int] = None
    ) -> list[Referral]:
        """List referrals with optional filters."""
        pass

    # Cashback operations
    @abstractmethod
    def get_cashback_balance(self, user_id: int) -> Optional[CashbackBalance]:
        """Get a user's cashback balance row, if one exists."""
        pass

    # Transaction operations
    @abstractmethod
    def apply_settlement(
        self,
        sale: Sale,
        settlement: Settlement,
        referrer_id: Optional[int] = None,
        idempotency_key: Optional[str] = None,
    ) -> Transaction:
        """Store a settled sale and its balance credits in one transaction.

        Inserts the completed transaction, credits the purchaser with the
        client cashback and, if ``referrer_id`` is given, credits the
        referrer with the referral bonus and accumulates it on the
        referral row. Either everything is committed or nothing is.

        Raises:
            ConflictError: If ``idempotency_key`` is already used
            ReferrerNotFoundError: If ``referrer_id`` is missing or inactive
                when the settlement is stored (everything rolled back)
            PersistenceError: If storage fails (everything rolled back)
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def get_transaction_by_idempotency_key(self, key: str) -> Optional[Transaction]:
        """Get the transaction stored under an idempotency key."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        user_id: Optional[int] = None,
        merchant_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters, newest first."""
        pass

    # Notification operations
    @abstractmethod
    def create_notification(
        self,
        user_id: int,
        notification_type: str,
        title: str,
        message: str,
        data: Optional[dict[str, Any]] = None,
    ) -> int:
        """Create an unread notification. Returns notification ID."""
        pass

    @abstractmethod
    def list_notifications(
        self, user_id: int, unread_only: bool = False
    ) -> list[Notification]:
        """List a user's notifications, newest first."""
        pass
