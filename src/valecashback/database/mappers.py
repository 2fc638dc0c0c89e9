"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the ORM schema can change
without touching the settlement rules.
"""

import json

from valecashback.domain import entities as domain
from valecashback.database.models import (
    User as ORMUser,
    Merchant as ORMMerchant,
    Cashback as ORMCashback,
    Transaction as ORMTransaction,
    Referral as ORMReferral,
    AuditLog as ORMAuditLog,
    Notification as ORMNotification,
)


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        name=orm_user.name,
        email=orm_user.email,
        type=domain.UserType(orm_user.type),
        status=domain.UserStatus(orm_user.status),
        invitation_code=orm_user.invitation_code,
        created_at=orm_user.created_at,
    )


def merchant_to_domain(orm_merchant: ORMMerchant) -> domain.Merchant:
    """Convert SQLAlchemy Merchant model to domain Merchant entity."""
    return domain.Merchant(
        id=orm_merchant.id,
        user_id=orm_merchant.user_id,
        store_name=orm_merchant.store_name,
        category=orm_merchant.category,
        commission_rate=orm_merchant.commission_rate,
        approved=orm_merchant.approved,
        created_at=orm_merchant.created_at,
    )


def cashback_to_domain(orm_cashback: ORMCashback) -> domain.CashbackBalance:
    """Convert SQLAlchemy Cashback model to domain CashbackBalance entity."""
    return domain.CashbackBalance(
        user_id=orm_cashback.user_id,
        balance=orm_cashback.balance,
        total_earned=orm_cashback.total_earned,
        updated_at=orm_cashback.updated_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        user_id=orm_transaction.user_id,
        merchant_id=orm_transaction.merchant_id,
        amount=orm_transaction.amount,
        cashback_amount=orm_transaction.cashback_amount,
        status=domain.TransactionStatus(orm_transaction.status),
        payment_method=domain.PaymentMethod(orm_transaction.payment_method),
        description=orm_transaction.description,
        platform_fee=orm_transaction.platform_fee,
        merchant_commission=orm_transaction.merchant_commission,
        referral_bonus=orm_transaction.referral_bonus,
        merchant_net=orm_transaction.merchant_net,
        referrer_id=orm_transaction.referrer_id,
        idempotency_key=orm_transaction.idempotency_key,
        created_at=orm_transaction.created_at,
    )


def referral_to_domain(orm_referral: ORMReferral) -> domain.Referral:
    """Convert SQLAlchemy Referral model to domain Referral entity."""
    return domain.Referral(
        id=orm_referral.id,
        referrer_id=orm_referral.referrer_id,
        referred_id=orm_referral.referred_id,
        bonus=orm_referral.bonus,
        status=domain.ReferralStatus(orm_referral.status),
        created_at=orm_referral.created_at,
    )


def audit_log_to_domain(orm_log: ORMAuditLog) -> domain.AuditLogEntry:
    """Convert SQLAlchemy AuditLog model to domain AuditLogEntry entity."""
    return domain.AuditLogEntry(
        id=orm_log.id,
        user_id=orm_log.user_id,
        action=orm_log.action,
        details=orm_log.details,
        created_at=orm_log.created_at,
    )


def notification_to_domain(orm_notification: ORMNotification) -> domain.Notification:
    """Convert SQLAlchemy Notification model to domain Notification entity."""
    data = None
    if orm_notification.data is not None:
        data = json.loads(orm_notification.data)
    return domain.Notification(
        id=orm_notification.id,
        user_id=orm_notification.user_id,
        type=orm_notification.type,
        title=orm_notification.title,
        message=orm_notification.message,
        data=data,
        read=orm_notification.read,
        created_at=orm_notification.created_at,
    )
