"""SQLAlchemy models for the Vale Cashback database."""

from datetime import datetime, UTC
from decimal import Decimal, ROUND_HALF_UP
from sqlalchemy import (
    Column,
    Integer,
    BigInteger,
    String,
    Text,
    ForeignKey,
    DateTime,
    Boolean,
    UniqueConstraint,
    Index,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session
from sqlalchemy.types import TypeDecorator

Base = declarative_base()

_CENTS = Decimal("100")
_CENT = Decimal("0.01")


class Money(TypeDecorator):
    """Decimal amount stored as an integer number of cents."""

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        cents = (Decimal(value) * _CENTS).to_integral_value(rounding=ROUND_HALF_UP)
        return int(cents)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return (Decimal(int(value)) / _CENTS).quantize(_CENT)


class Percentage(TypeDecorator):
    """Decimal percentage stored as its exact string representation."""

    impl = String(32)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(Decimal(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


def _now() -> datetime:
    return datetime.now(UTC)


class User(Base):
    """Platform user model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False)
    type = Column(String, nullable=False)
    status = Column(String, nullable=False, default="active")
    invitation_code = Column(String, unique=True, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    merchant = relationship("Merchant", back_populates="user", uselist=False)


class Merchant(Base):
    """Merchant (store) model."""

    __tablename__ = "merchants"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    store_name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    commission_rate = Column(Percentage, nullable=True)
    approved = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    user = relationship("User", back_populates="merchant")
    transactions = relationship("Transaction", back_populates="merchant")


class Cashback(Base):
    """Cashback balance model, one row per user."""

    __tablename__ = "cashbacks"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    balance = Column(Money, nullable=False, default=Decimal("0.00"))
    total_earned = Column(Money, nullable=False, default=Decimal("0.00"))
    updated_at = Column(DateTime, default=_now, nullable=False)


class Transaction(Base):
    """Settled transaction model with its settlement breakdown."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    merchant_id = Column(Integer, ForeignKey("merchants.id"), nullable=False)
    amount = Column(Money, nullable=False)
    cashback_amount = Column(Money, nullable=False)
    status = Column(String, nullable=False, default="completed")
    payment_method = Column(String, nullable=False)
    description = Column(String, nullable=True)
    platform_fee = Column(Money, nullable=False)
    merchant_commission = Column(Money, nullable=False)
    referral_bonus = Column(Money, nullable=False)
    merchant_net = Column(Money, nullable=False)
    referrer_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    idempotency_key = Column(String, unique=True, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)

    __table_args__ = (Index("ix_transactions_user_created", "user_id", "created_at"),)

    # Relationships
    merchant = relationship("Merchant", back_populates="transactions")


class Referral(Base):
    """Referral model linking a referrer to the user they invited."""

    __tablename__ = "referrals"

    id = Column(Integer, primary_key=True)
    referrer_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    referred_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    bonus = Column(Money, nullable=False, default=Decimal("0.00"))
    status = Column(String, nullable=False, default="pending")
    created_at = Column(DateTime, default=_now, nullable=False)

    __table_args__ = (
        UniqueConstraint("referrer_id", "referred_id", name="uq_referrer_referred"),
    )


class Setting(Base):
    """Key/value system setting."""

    __tablename__ = "settings"

    id = Column(Integer, primary_key=True)
    key = Column(String, unique=True, nullable=False)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)


class AuditLog(Base):
    """Audit log model."""

    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    action = Column(String, nullable=False)
    details = Column(Text, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)


class Notification(Base):
    """Notification model."""

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    type = Column(String, nullable=False)
    title = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    data = Column(Text, nullable=True)
    read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)


def _serialize_sqlite_writers(engine: Engine) -> None:
    """Make every SQLite transaction take the write lock up front.

    SQLite has no row locks, so ``BEGIN IMMEDIATE`` is what serializes
    concurrent read-modify-write settlements on the same balance.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    if database_url.startswith("sqlite"):
        engine = create_engine(database_url, echo=False, connect_args={"timeout": 30})
        _serialize_sqlite_writers(engine)
    else:
        engine = create_engine(database_url, echo=False, pool_pre_ping=True)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
