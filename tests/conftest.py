"""Shared pytest fixtures for Vale Cashback tests."""

import tempfile
import os
import pytest

from valecashback.database.factories import create_sqlite_database
from valecashback.domain.ledger import LedgerService
from valecashback.domain.merchant import MerchantService
from valecashback.domain.notification import NotificationService
from valecashback.domain.rates import RateService
from valecashback.domain.referral import ReferralService
from valecashback.domain.sale import SaleService
from valecashback.domain.user import UserService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def user_service(temp_db):
    """Create a UserService with a temporary database."""
    return UserService(temp_db)


@pytest.fixture
def merchant_service(temp_db):
    """Create a MerchantService with a temporary database."""
    return MerchantService(temp_db)


@pytest.fixture
def referral_service(temp_db):
    """Create a ReferralService with a temporary database."""
    return ReferralService(temp_db)


@pytest.fixture
def rate_service(temp_db):
    """Create a RateService with a temporary database."""
    return RateService(temp_db)


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def notification_service(temp_db):
    """Create a NotificationService with a temporary database."""
    return NotificationService(temp_db)


@pytest.fixture
def sale_service(temp_db):
    """Create a SaleService with a temporary database and no listeners."""
    return SaleService(temp_db)


@pytest.fixture
def default_rates(rate_service):
    """Store the default rates (2% fee, 1% commission, 2% cashback, 1% bonus)."""
    rate_service.initialize_defaults()
    return rate_service.get_global_rates()


@pytest.fixture
def sample_client(user_service):
    """Create a client with no referrer."""
    return user_service.create_user(name="Ana Souza", email="ana@example.com")


@pytest.fixture
def sample_referrer(user_service):
    """Create a client who invites others."""
    return user_service.create_user(name="Carla Lima", email="carla@example.com")


@pytest.fixture
def referred_client(user_service, sample_referrer):
    """Create a client who joined with the referrer's invitation code."""
    return user_service.create_user(
        name="Bruno Reis",
        email="bruno@example.com",
        invitation_code=sample_referrer.invitation_code,
    )


@pytest.fixture
def sample_merchant(user_service, merchant_service):
    """Create an approved merchant without a commission override."""
    owner = user_service.create_user(
        name="Loja Azul", email="azul@example.com", user_type="merchant"
    )
    merchant_id = merchant_service.create_merchant(
        user_id=owner.id, store_name="Loja Azul", category="fashion"
    )
    merchant_service.set_approved(merchant_id)
    return merchant_service.get_merchant(merchant_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
