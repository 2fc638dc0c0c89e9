"""Balance ledger domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from loguru import logger

from valecashback.database.base import Database
from valecashback.domain.entities import (
    CashbackBalance,
    Sale,
    Settlement,
    SettlementResult,
    Transaction,
)
from valecashback.domain.errors import (
    ConflictError,
    ReferrerNotFoundError,
    idempotency_key_mismatch,
)
from valecashback.domain.referral import ReferralService


def _stored_settlement(transaction: Transaction) -> Settlement:
    return Settlement(
        platform_fee=transaction.platform_fee,
        merchant_commission=transaction.merchant_commission,
        client_cashback=transaction.cashback_amount,
        referral_bonus=transaction.referral_bonus,
        merchant_net=transaction.merchant_net,
    )


class LedgerService:
    """Service applying settlements to cashback balances.

    The transaction row, the purchaser's credit, the referrer's credit and
    the referral bonus accrual are written in a single database transaction.
    """

    def __init__(self, db: Database, referral_service: Optional[ReferralService] = None):
        """Initialize ledger service.

        Args:
            db: Database instance
            referral_service: Resolver for referrers (defaults to one on ``db``)
        """
        self.db = db
        self.referral_service = referral_service or ReferralService(db)

    def apply_settlement(
        self,
        sale: Sale,
        settlement: Settlement,
        idempotency_key: Optional[str] = None,
    ) -> SettlementResult:
        """Store a sale and credit the balances its settlement produces.

        Args:
            sale: The sale being settled
            settlement: Settlement computed for ``sale.amount``
            idempotency_key: Caller-supplied key identifying this sale; a
                retry with the same key returns the first result unchanged

        Returns:
            SettlementResult (``replayed`` is True for a deduplicated retry)

        Raises:
            ConflictError: If ``idempotency_key`` was used for a different sale
            PersistenceError: If storage fails; nothing was written and the
                caller should retry the whole operation
        """
        if idempotency_key is not None:
            existing = self.db.get_transaction_by_idempotency_key(idempotency_key)
            if existing is not None:
                return self._replay(existing, sale, idempotency_key)

        try:
            referrer_id = self.referral_service.resolve_referrer(sale.user_id)
        except ReferrerNotFoundError as e:
            logger.warning("Skipping referral bonus for user {}: {}", sale.user_id, e)
            referrer_id = None

        try:
            transaction, referrer_id = self._store(sale, settlement, referrer_id, idempotency_key)
        except ConflictError:
            if idempotency_key is None:
                raise
            # A concurrent call with the same key won the race
            existing = self.db.get_transaction_by_idempotency_key(idempotency_key)
            if existing is None:
                raise
            return self._replay(existing, sale, idempotency_key)

        logger.debug(
            "Transaction {} stored: cashback {} to user {}, referral bonus {} to {}",
            transaction.id,
            settlement.client_cashback,
            sale.user_id,
            settlement.referral_bonus if referrer_id is not None else Decimal("0.00"),
            referrer_id,
        )
        return SettlementResult(
            transaction=transaction,
            settlement=settlement,
            referrer_id=referrer_id,
        )

    def _store(
        self,
        sale: Sale,
        settlement: Settlement,
        referrer_id: Optional[int],
        idempotency_key: Optional[str],
    ) -> tuple[Transaction, Optional[int]]:
        try:
            transaction = self.db.apply_settlement(
                sale, settlement, referrer_id=referrer_id, idempotency_key=idempotency_key
            )
            return transaction, referrer_id
        except ReferrerNotFoundError as e:
            if referrer_id is None:
                raise
            # Referrer was deactivated after it was resolved
            logger.warning("Skipping referral bonus for user {}: {}", sale.user_id, e)
        transaction = self.db.apply_settlement(
            sale, settlement, referrer_id=None, idempotency_key=idempotency_key
        )
        return transaction, None

    def _replay(
        self, existing: Transaction, sale: Sale, idempotency_key: str
    ) -> SettlementResult:
        if (
            existing.user_id != sale.user_id
            or existing.merchant_id != sale.merchant_id
            or existing.amount != sale.amount
        ):
            raise ConflictError(idempotency_key_mismatch(idempotency_key))

        logger.warning(
            "Idempotency key '{}' already settled as transaction {}; not crediting again",
            idempotency_key,
            existing.id,
        )
        return SettlementResult(
            transaction=existing,
            settlement=_stored_settlement(existing),
            referrer_id=existing.referrer_id,
            replayed=True,
        )

    def get_balance(self, user_id: int) -> CashbackBalance:
        """Get a user's cashback balance (zero if nothing was credited yet)."""
        balance = self.db.get_cashback_balance(user_id)
        if balance is None:
            return CashbackBalance(
                user_id=user_id,
                balance=Decimal("0.00"),
                total_earned=Decimal("0.00"),
                updated_at=None,
            )
        return balance

    def list_transactions(
        self,
        user_id: Optional[int] = None,
        merchant_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List settled transactions, newest first.

        Args:
            user_id: Only transactions by this purchaser
            merchant_id: Only transactions at this merchant
            start_date: Earliest date (inclusive)
            end_date: Latest date (inclusive)

        Returns:
            List of transaction entities
        """
        return self.db.list_transactions(
            user_id=user_id,
            merchant_id=merchant_id,
            start_date=start_date,
            end_date=end_date,
        )
