"""Sale registration domain service."""

from typing import Callable, Iterable, Optional, Union

from loguru import logger

from valecashback.database.base import Database
from valecashback.domain.entities import (
    PaymentMethod,
    Sale,
    SettlementEvent,
    SettlementResult,
)
from valecashback.domain.errors import (
    NotFoundError,
    ValidationError,
    merchant_not_found,
    user_not_found,
)
from valecashback.domain.ledger import LedgerService
from valecashback.domain.rates import RateService
from valecashback.domain.settlement import compute_settlement, validate_amount

SettlementListener = Callable[[SettlementEvent], None]


def parse_payment_method(value: Union[str, PaymentMethod]) -> PaymentMethod:
    """Parse a payment method name such as ``"pix"`` or ``"credit_card"``.

    Raises:
        ValidationError: If the method is unknown
    """
    if isinstance(value, PaymentMethod):
        return value
    try:
        return PaymentMethod(str(value).strip().lower().replace("-", "_"))
    except ValueError:
        valid = ", ".join(m.value for m in PaymentMethod)
        raise ValidationError(f"Unknown payment method '{value}'. Valid methods: {valid}")


class SaleService:
    """Service registering sales and running them through settlement.

    Listeners are called with a :class:`SettlementEvent` after the
    settlement is committed. A failing listener is logged and does not
    undo the settlement.
    """

    def __init__(
        self,
        db: Database,
        listeners: Optional[Iterable[SettlementListener]] = None,
        rate_service: Optional[RateService] = None,
        ledger_service: Optional[LedgerService] = None,
    ):
        """Initialize sale service.

        Args:
            db: Database instance
            listeners: Callables notified after each new settlement
            rate_service: Rate resolver (defaults to one on ``db``)
            ledger_service: Ledger (defaults to one on ``db``)
        """
        self.db = db
        self.listeners = list(listeners or [])
        self.rate_service = rate_service or RateService(db)
        self.ledger_service = ledger_service or LedgerService(db)

    def add_listener(self, listener: SettlementListener) -> None:
        """Register a callable notified after each new settlement."""
        self.listeners.append(listener)

    def register_sale(
        self,
        user_id: int,
        merchant_id: int,
        amount: object,
        payment_method: Union[str, PaymentMethod],
        description: Optional[str] = None,
        idempotency_key: Optional[str] = None,
    ) -> SettlementResult:
        """Register a sale, settle it and credit the resulting balances.

        Args:
            user_id: Purchasing client
            merchant_id: Merchant where the purchase happened
            amount: Gross amount as Decimal, int or numeric string
            payment_method: Payment method name or enum
            description: Optional free-text description
            idempotency_key: Optional key deduplicating retried calls

        Returns:
            SettlementResult with the stored transaction and its breakdown

        Raises:
            InvalidAmountError: If the amount is not a positive monetary value
            ValidationError: If the payment method is unknown, the user is
                inactive or the merchant is not approved
            NotFoundError: If the user or merchant does not exist
            ConfigurationError: If rates are not configured
            ConflictError: If the idempotency key belongs to another sale
            PersistenceError: If storage fails
        """
        gross = validate_amount(amount)
        method = parse_payment_method(payment_method)

        user = self.db.get_user(user_id)
        if user is None:
            raise NotFoundError(user_not_found(user_id))
        if not user.is_active:
            raise ValidationError(f"User {user_id} is inactive")

        merchant = self.db.get_merchant(merchant_id)
        if merchant is None:
            raise NotFoundError(merchant_not_found(merchant_id))
        if not merchant.approved:
            raise ValidationError(f"Merchant {merchant_id} is not approved")

        rates = self.rate_service.get_rates(merchant_id)
        settlement = compute_settlement(gross, rates)
        sale = Sale(
            user_id=user_id,
            merchant_id=merchant_id,
            amount=gross,
            payment_method=method,
            description=description,
        )

        result = self.ledger_service.apply_settlement(
            sale, settlement, idempotency_key=idempotency_key
        )
        if result.replayed:
            return result

        logger.info(
            "Sale {} settled: amount {} at merchant {}, cashback {} to user {}",
            result.transaction.id,
            gross,
            merchant_id,
            settlement.client_cashback,
            user_id,
        )
        self._emit(
            SettlementEvent(
                transaction_id=result.transaction.id,
                user_id=user_id,
                merchant_id=merchant_id,
                amount=gross,
                cashback_amount=settlement.client_cashback,
            )
        )
        return result

    def _emit(self, event: SettlementEvent) -> None:
        for listener in self.listeners:
            try:
                listener(event)
            except Exception:
                logger.exception(
                    "Settlement listener failed for transaction {}", event.transaction_id
                )
