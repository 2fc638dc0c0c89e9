"""Domain model entities for Vale Cashback.

These are pure data classes representing business concepts, independent of
database schema. Monetary fields are always ``Decimal`` with two places.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class UserType(str, Enum):
    """Role of a platform user."""

    CLIENT = "client"
    MERCHANT = "merchant"
    ADMIN = "admin"


class UserStatus(str, Enum):
    """Whether a user may take part in settlements."""

    ACTIVE = "active"
    INACTIVE = "inactive"


INVITATION_CODE_PREFIXES = {
    UserType.CLIENT: "CL",
    UserType.MERCHANT: "LJ",
}


def invitation_code_for(user_id: int, user_type: UserType) -> Optional[str]:
    """Build a user's own invitation code, e.g. ``CL0007`` or ``LJ0003``.

    Admins do not get one.
    """
    prefix = INVITATION_CODE_PREFIXES.get(user_type)
    if prefix is None:
        return None
    return f"{prefix}{user_id:04d}"


class TransactionStatus(str, Enum):
    """Transaction lifecycle state."""

    COMPLETED = "completed"
    PENDING = "pending"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    """How the client paid for a sale."""

    CASH = "cash"
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    CASHBACK = "cashback"
    PIX = "pix"


class ReferralStatus(str, Enum):
    """Referral state; ``completed`` once a bonus has been credited."""

    PENDING = "pending"
    COMPLETED = "completed"


@dataclass(frozen=True)
class User:
    """Platform user domain entity."""

    id: int
    name: str
    email: str
    type: UserType
    status: UserStatus
    invitation_code: Optional[str]
    created_at: datetime

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE


@dataclass(frozen=True)
class Merchant:
    """Merchant (store) domain entity.

    ``commission_rate`` is a percentage overriding the global merchant
    commission, or None to use the global rate.
    """

    id: int
    user_id: int
    store_name: str
    category: str
    commission_rate: Optional[Decimal]
    approved: bool
    created_at: datetime


@dataclass(frozen=True)
class RateConfig:
    """Percentages of the gross amount applied by a settlement."""

    platform_fee_pct: Decimal
    merchant_commission_pct: Decimal
    client_cashback_pct: Decimal
    referral_bonus_pct: Decimal


@dataclass(frozen=True)
class Settlement:
    """Four-way split of a transaction amount."""

    platform_fee: Decimal
    merchant_commission: Decimal
    client_cashback: Decimal
    referral_bonus: Decimal
    merchant_net: Decimal


@dataclass(frozen=True)
class Sale:
    """Sale data handed to the ledger together with its settlement."""

    user_id: int
    merchant_id: int
    amount: Decimal
    payment_method: PaymentMethod
    description: Optional[str] = None


@dataclass(frozen=True)
class Transaction:
    """Settled transaction domain entity, including its stored breakdown."""

    id: int
    user_id: int
    merchant_id: int
    amount: Decimal
    cashback_amount: Decimal
    status: TransactionStatus
    payment_method: PaymentMethod
    description: Optional[str]
    platform_fee: Decimal
    merchant_commission: Decimal
    referral_bonus: Decimal
    merchant_net: Decimal
    referrer_id: Optional[int]
    idempotency_key: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class CashbackBalance:
    """Cashback balance of a single user."""

    user_id: int
    balance: Decimal
    total_earned: Decimal
    updated_at: Optional[datetime]


@dataclass(frozen=True)
class Referral:
    """Referral domain entity linking a referrer to the user they invited."""

    id: int
    referrer_id: int
    referred_id: int
    bonus: Decimal
    status: ReferralStatus
    created_at: datetime


@dataclass(frozen=True)
class AuditLogEntry:
    """Audit log domain entity."""

    id: int
    user_id: Optional[int]
    action: str
    details: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Notification:
    """User-facing notification recorded after a settlement."""

    id: int
    user_id: int
    type: str
    title: str
    message: str
    data: Optional[dict[str, Any]]
    read: bool
    created_at: datetime


@dataclass(frozen=True)
class SettlementEvent:
    """Payload emitted after a settlement is committed."""

    transaction_id: int
    user_id: int
    merchant_id: int
    amount: Decimal
    cashback_amount: Decimal


@dataclass(frozen=True)
class SettlementResult:
    """Outcome of applying a settlement.

    ``referrer_id`` is set only when a referral bonus was credited.
    ``replayed`` is True when an idempotency key matched an earlier
    settlement and nothing was credited again.
    """

    transaction: Transaction
    settlement: Settlement
    referrer_id: Optional[int]
    replayed: bool = False

    @property
    def referral_credited(self) -> Decimal:
        if self.referrer_id is None:
            return Decimal("0.00")
        return self.settlement.referral_bonus
