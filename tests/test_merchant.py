"""Tests for merchant service."""

import json
import pytest
from decimal import Decimal

from valecashback.domain.errors import ConflictError, NotFoundError, ValidationError


@pytest.fixture
def merchant_owner(user_service):
    """Create a merchant-type user without a store."""
    return user_service.create_user(name="Padaria", email="padaria@example.com", user_type="merchant")


def test_create_merchant_starts_unapproved(merchant_service, merchant_owner):
    """Test new merchants need approval."""
    merchant_id = merchant_service.create_merchant(
        user_id=merchant_owner.id, store_name="Padaria Sol", category="food"
    )
    merchant = merchant_service.get_merchant(merchant_id)
    assert merchant.store_name == "Padaria Sol"
    assert merchant.approved is False
    assert merchant.commission_rate is None


def test_create_merchant_with_commission(merchant_service, merchant_owner):
    """Test a commission override given at creation."""
    merchant_id = merchant_service.create_merchant(
        user_id=merchant_owner.id, store_name="Padaria Sol", category="food", commission_rate="1.25"
    )
    assert merchant_service.get_merchant(merchant_id).commission_rate == Decimal("1.25")


def test_client_cannot_own_store(merchant_service, sample_client):
    """Test only merchant users can register a store."""
    with pytest.raises(ValidationError, match="not a merchant"):
        merchant_service.create_merchant(user_id=sample_client.id, store_name="X", category="y")


def test_one_store_per_user(merchant_service, sample_merchant):
    """Test a merchant user owns at most one store."""
    with pytest.raises(ConflictError, match="already has a merchant"):
        merchant_service.create_merchant(
            user_id=sample_merchant.user_id, store_name="Second", category="fashion"
        )


def test_unknown_owner(merchant_service):
    """Test the owning user must exist."""
    with pytest.raises(NotFoundError):
        merchant_service.create_merchant(user_id=999, store_name="X", category="y")


def test_approve_and_suspend(merchant_service, merchant_owner):
    """Test approving and suspending a merchant."""
    merchant_id = merchant_service.create_merchant(
        user_id=merchant_owner.id, store_name="Padaria Sol", category="food"
    )
    merchant_service.set_approved(merchant_id)
    assert merchant_service.get_merchant(merchant_id).approved is True
    assert [m.id for m in merchant_service.list_merchants(approved=False)] == []

    merchant_service.set_approved(merchant_id, approved=False)
    assert merchant_service.get_merchant(merchant_id).approved is False


def test_set_commission_rate_is_audited(merchant_service, temp_db, sample_merchant):
    """Test commission overrides are stored exactly and audited."""
    stored = merchant_service.set_commission_rate(sample_merchant.id, "0.75", changed_by=None)
    assert stored == Decimal("0.75")
    assert merchant_service.get_merchant(sample_merchant.id).commission_rate == Decimal("0.75")

    entry = temp_db.list_audit_logs(limit=1)[0]
    assert entry.action == "merchant_commission_updated"
    details = json.loads(entry.details)
    assert details["merchant_id"] == sample_merchant.id
    assert details["previous"] is None
    assert details["commission_rate"] == "0.75"


@pytest.mark.parametrize("rate", ["-0.5", "100.01", "lots"])
def test_invalid_commission_rate(merchant_service, sample_merchant, rate):
    """Test commission overrides must be between 0 and 100."""
    with pytest.raises(ValidationError):
        merchant_service.set_commission_rate(sample_merchant.id, rate)


def test_commission_unknown_merchant(merchant_service):
    """Test setting commission on a missing merchant."""
    with pytest.raises(NotFoundError, match="Merchant 999 not found"):
        merchant_service.set_commission_rate(999, "1")
