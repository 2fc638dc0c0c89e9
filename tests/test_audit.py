"""Tests for the audit log service."""

import json
import pytest

from valecashback.domain.audit import AuditService
from valecashback.domain.errors import ValidationError


@pytest.fixture
def audit_service(temp_db):
    return AuditService(temp_db)


def test_no_entries(audit_service):
    """Test a fresh database has an empty audit log."""
    assert audit_service.list_entries() == []


def test_entries_newest_first(audit_service, rate_service, merchant_service, sample_merchant, sample_client):
    """Test rate and commission changes are recorded in order."""
    rate_service.initialize_defaults()
    rate_service.set_global_rates(referral_bonus_pct="1.5", changed_by=sample_client.id)
    merchant_service.set_commission_rate(sample_merchant.id, "3")

    entries = audit_service.list_entries()

    assert [e.action for e in entries] == [
        "merchant_commission_updated",
        "settings_updated",
        "settings_updated",
    ]
    assert entries[1].user_id == sample_client.id
    assert json.loads(entries[1].details) == {"rates.referral_bonus_pct": "1.5"}


def test_limit(audit_service, rate_service):
    """Test the limit keeps only the newest entries."""
    rate_service.initialize_defaults()
    rate_service.set_global_rates(client_cashback_pct="3")

    entries = audit_service.list_entries(limit=1)

    assert len(entries) == 1
    assert json.loads(entries[0].details) == {"rates.client_cashback_pct": "3"}


@pytest.mark.parametrize("limit", [0, -5])
def test_rejects_non_positive_limit(audit_service, limit):
    """Test limits below one are rejected."""
    with pytest.raises(ValidationError):
        audit_service.list_entries(limit=limit)
