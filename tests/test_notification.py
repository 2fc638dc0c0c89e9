"""Tests for settlement notifications."""

from decimal import Decimal

from valecashback.domain.entities import SettlementEvent
from valecashback.domain.sale import SaleService


def test_sale_creates_purchase_and_sale_notifications(
    temp_db, notification_service, sample_client, sample_merchant, default_rates
):
    """Test the client and the merchant owner are both notified."""
    service = SaleService(temp_db, listeners=[notification_service])
    result = service.register_sale(sample_client.id, sample_merchant.id, "100", "pix")

    client_notes = notification_service.list_notifications(sample_client.id)
    assert len(client_notes) == 1
    assert client_notes[0].title == "New purchase"
    assert "Loja Azul" in client_notes[0].message
    assert "2.00" in client_notes[0].message
    assert client_notes[0].read is False
    assert client_notes[0].data["transaction_id"] == result.transaction.id
    assert client_notes[0].data["cashback_amount"] == "2.00"

    merchant_notes = notification_service.list_notifications(sample_merchant.user_id)
    assert [n.title for n in merchant_notes] == ["New sale"]
    assert merchant_notes[0].data["user_id"] == sample_client.id


def test_unknown_merchant_only_notifies_client(notification_service, sample_client):
    """Test a missing merchant still notifies the client."""
    event = SettlementEvent(
        transaction_id=1,
        user_id=sample_client.id,
        merchant_id=999,
        amount=Decimal("10.00"),
        cashback_amount=Decimal("0.20"),
    )
    ids = notification_service.record_settlement(event)
    assert len(ids) == 1


def test_unread_filter(temp_db, notification_service, sample_client):
    """Test listing only unread notifications."""
    temp_db.create_notification(sample_client.id, "system", "Welcome", "Hello")
    assert len(notification_service.list_notifications(sample_client.id, unread_only=True)) == 1
