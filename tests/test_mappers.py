"""Tests for database mappers."""

from datetime import datetime, UTC
from decimal import Decimal

from valecashback.database.models import (
    User as ORMUser,
    Merchant as ORMMerchant,
    Cashback as ORMCashback,
    Transaction as ORMTransaction,
    Referral as ORMReferral,
    Notification as ORMNotification,
)
from valecashback.database.mappers import (
    user_to_domain,
    merchant_to_domain,
    cashback_to_domain,
    transaction_to_domain,
    referral_to_domain,
    notification_to_domain,
)
from valecashback.domain.entities import (
    Merchant,
    PaymentMethod,
    ReferralStatus,
    TransactionStatus,
    User,
    UserStatus,
    UserType,
)


class TestUserMapper:
    """Tests for User mapper."""

    def test_user_to_domain(self):
        """Test converting ORM User to domain User."""
        orm_user = ORMUser(
            id=1,
            name="Ana",
            email="ana@example.com",
            type="client",
            status="active",
            invitation_code="CL0001",
            created_at=datetime.now(UTC),
        )
        user = user_to_domain(orm_user)

        assert isinstance(user, User)
        assert user.type == UserType.CLIENT
        assert user.status == UserStatus.ACTIVE
        assert user.invitation_code == "CL0001"
        assert user.created_at == orm_user.created_at


class TestMerchantMapper:
    """Tests for Merchant mapper."""

    def test_merchant_to_domain(self):
        """Test converting ORM Merchant to domain Merchant."""
        orm_merchant = ORMMerchant(
            id=4,
            user_id=1,
            store_name="Loja Azul",
            category="fashion",
            commission_rate=Decimal("1.5"),
            approved=True,
            created_at=datetime.now(UTC),
        )
        merchant = merchant_to_domain(orm_merchant)

        assert isinstance(merchant, Merchant)
        assert merchant.commission_rate == Decimal("1.5")
        assert merchant.approved is True


class TestLedgerMappers:
    """Tests for balance, transaction and referral mappers."""

    def test_cashback_to_domain(self):
        """Test converting ORM Cashback to domain CashbackBalance."""
        balance = cashback_to_domain(
            ORMCashback(
                id=1,
                user_id=2,
                balance=Decimal("3.50"),
                total_earned=Decimal("7.00"),
                updated_at=datetime.now(UTC),
            )
        )
        assert balance.user_id == 2
        assert balance.balance == Decimal("3.50")
        assert balance.total_earned == Decimal("7.00")

    def test_transaction_to_domain(self):
        """Test converting ORM Transaction keeps the breakdown and enums."""
        txn = transaction_to_domain(
            ORMTransaction(
                id=10,
                user_id=2,
                merchant_id=4,
                amount=Decimal("100.00"),
                cashback_amount=Decimal("2.00"),
                status="completed",
                payment_method="debit_card",
                description="Shoes",
                platform_fee=Decimal("2.00"),
                merchant_commission=Decimal("1.00"),
                referral_bonus=Decimal("1.00"),
                merchant_net=Decimal("97.00"),
                referrer_id=None,
                idempotency_key="pos-1",
                created_at=datetime.now(UTC),
            )
        )
        assert txn.status == TransactionStatus.COMPLETED
        assert txn.payment_method == PaymentMethod.DEBIT_CARD
        assert txn.merchant_net == Decimal("97.00")
        assert txn.idempotency_key == "pos-1"

    def test_referral_to_domain(self):
        """Test converting ORM Referral to domain Referral."""
        referral = referral_to_domain(
            ORMReferral(
                id=1,
                referrer_id=1,
                referred_id=2,
                bonus=Decimal("0.00"),
                status="pending",
                created_at=datetime.now(UTC),
            )
        )
        assert referral.status == ReferralStatus.PENDING
        assert referral.bonus == Decimal("0.00")


class TestNotificationMapper:
    """Tests for Notification mapper."""

    def test_data_is_decoded(self):
        """Test JSON data is decoded into a dict."""
        notification = notification_to_domain(
            ORMNotification(
                id=1,
                user_id=2,
                type="transaction",
                title="New purchase",
                message="...",
                data='{"amount": "10.00"}',
                read=False,
                created_at=datetime.now(UTC),
            )
        )
        assert notification.data == {"amount": "10.00"}

    def test_missing_data(self):
        """Test notifications without data map to None."""
        notification = notification_to_domain(
            ORMNotification(
                id=1,
                user_id=2,
                type="system",
                title="Welcome",
                message="Hello",
                data=None,
                read=True,
                created_at=datetime.now(UTC),
            )
        )
        assert notification.data is None
        assert notification.read is True
