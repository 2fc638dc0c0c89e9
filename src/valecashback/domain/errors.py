"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class InvalidAmountError(ValidationError):
    """Transaction amount is not a positive number of currency units."""


class ConfigurationError(DomainError):
    """Rate configuration is missing or inconsistent."""


class PersistenceError(DomainError):
    """Storage failed while applying a settlement.

    The whole operation was rolled back; callers retry it from the start.
    """


class ReferrerNotFoundError(NotFoundError):
    """A referral points at a referrer that cannot receive a bonus."""


def user_not_found(user_id: int) -> str:
    """Return message for missing user."""
    return f"User {user_id} not found"


def merchant_not_found(merchant_id: int) -> str:
    """Return message for missing merchant."""
    return f"Merchant {merchant_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def invitation_code_not_found(code: str) -> str:
    """Return message for an unknown invitation code."""
    return f"Invitation code '{code}' not found"


def duplicate_email(email: str) -> str:
    """Return message for an email that is already registered."""
    return f"User with email '{email}' already exists"


def duplicate_referral(referrer_id: int, referred_id: int) -> str:
    """Return message for an existing referrer/referred pair."""
    return f"User {referred_id} was already referred by user {referrer_id}"


def duplicate_idempotency_key(key: str) -> str:
    """Return message for an idempotency key that is already used."""
    return f"A transaction with idempotency key '{key}' already exists"


def idempotency_key_mismatch(key: str) -> str:
    """Return message when a key is replayed with different sale data."""
    return f"Idempotency key '{key}' was already used for a different sale"


def invalid_amount(amount: object, reason: str) -> str:
    """Return message for a rejected transaction amount."""
    return f"Invalid amount '{amount}': {reason}"


def missing_rate_setting(key: str) -> str:
    """Return message for a rate that has not been configured."""
    return (
        f"Rate setting '{key}' is not configured. "
        "Run 'vale rates init' or set the rates explicitly."
    )


def referrer_unavailable(referrer_id: int, referred_id: int) -> str:
    """Return message for a referral whose referrer cannot be credited."""
    return f"Referrer {referrer_id} of user {referred_id} is missing or inactive"


def settlement_failed(detail: str) -> str:
    """Return message when storage fails during settlement."""
    return f"Settlement could not be stored and was rolled back: {detail}"


def rates_exceed_total(total: Decimal) -> str:
    """Return message when the split percentages add up to more than 100."""
    return (
        "Platform fee, merchant commission and client cashback add up to "
        f"{total}%, which exceeds 100%"
    )
