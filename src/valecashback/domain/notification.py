"""Notification domain service."""

from loguru import logger

from valecashback.database.base import Database
from valecashback.domain.entities import Notification, SettlementEvent

SALE_NOTIFICATION_TYPE = "transaction"


class NotificationService:
    """Records user-facing notifications for settled sales.

    Instances are callable so they can be registered directly as a
    settlement listener.
    """

    def __init__(self, db: Database):
        self.db = db

    def __call__(self, event: SettlementEvent) -> None:
        self.record_settlement(event)

    def record_settlement(self, event: SettlementEvent) -> list[int]:
        """Create the purchase and sale notifications for a settlement.

        The client gets a "New purchase" notification; the merchant's owner
        gets a "New sale" one. A merchant that no longer exists is skipped.

        Returns:
            IDs of the created notifications
        """
        data = {
            "transaction_id": event.transaction_id,
            "merchant_id": event.merchant_id,
            "amount": str(event.amount),
            "cashback_amount": str(event.cashback_amount),
        }
        ids = []

        merchant = self.db.get_merchant(event.merchant_id)
        store_name = merchant.store_name if merchant is not None else f"merchant {event.merchant_id}"

        ids.append(
            self.db.create_notification(
                user_id=event.user_id,
                notification_type=SALE_NOTIFICATION_TYPE,
                title="New purchase",
                message=(
                    f"Purchase of R$ {event.amount} at {store_name}. "
                    f"You earned R$ {event.cashback_amount} in cashback."
                ),
                data=data,
            )
        )

        if merchant is None:
            logger.warning("Merchant {} not found; skipping sale notification", event.merchant_id)
            return ids

        ids.append(
            self.db.create_notification(
                user_id=merchant.user_id,
                notification_type=SALE_NOTIFICATION_TYPE,
                title="New sale",
                message=f"New sale of R$ {event.amount} registered.",
                data=dict(data, user_id=event.user_id),
            )
        )
        return ids

    def list_notifications(self, user_id: int, unread_only: bool = False) -> list[Notification]:
        """List a user's notifications, newest first."""
        return self.db.list_notifications(user_id, unread_only=unread_only)
