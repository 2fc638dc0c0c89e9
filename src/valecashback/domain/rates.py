"""Rate configuration domain service."""

from decimal import Decimal, InvalidOperation
from typing import Optional

from loguru import logger

from valecashback.database.base import Database
from valecashback.domain.entities import RateConfig
from valecashback.domain.errors import (
    ConfigurationError,
    NotFoundError,
    ValidationError,
    merchant_not_found,
    missing_rate_setting,
    rates_exceed_total,
)

PLATFORM_FEE_KEY = "rates.platform_fee_pct"
MERCHANT_COMMISSION_KEY = "rates.merchant_commission_pct"
CLIENT_CASHBACK_KEY = "rates.client_cashback_pct"
REFERRAL_BONUS_KEY = "rates.referral_bonus_pct"
MERCHANT_OVERRIDE_KEY = "rates.merchant_override_enabled"

RATE_KEYS = {
    "platform_fee_pct": PLATFORM_FEE_KEY,
    "merchant_commission_pct": MERCHANT_COMMISSION_KEY,
    "client_cashback_pct": CLIENT_CASHBACK_KEY,
    "referral_bonus_pct": REFERRAL_BONUS_KEY,
}

DEFAULT_RATES = RateConfig(
    platform_fee_pct=Decimal("2"),
    merchant_commission_pct=Decimal("1"),
    client_cashback_pct=Decimal("2"),
    referral_bonus_pct=Decimal("1"),
)

_HUNDRED = Decimal("100")


def parse_percentage(value: object, name: str = "rate") -> Decimal:
    """Parse a percentage given as Decimal, int or numeric string.

    Raises:
        ValidationError: If the value is not a number between 0 and 100
    """
    if isinstance(value, (bool, float)):
        raise ValidationError(f"Invalid {name} '{value}': use Decimal or a numeric string")
    try:
        pct = value if isinstance(value, Decimal) else Decimal(str(value).strip().rstrip("%"))
    except InvalidOperation:
        raise ValidationError(f"Invalid {name} '{value}': not a number")
    if not pct.is_finite() or pct < 0 or pct > _HUNDRED:
        raise ValidationError(f"Invalid {name} '{value}': must be between 0 and 100")
    return pct


def rate_config_problems(rates: RateConfig) -> list[str]:
    """Return the reasons a rate configuration is invalid (empty if valid)."""
    problems = []
    for field, key in RATE_KEYS.items():
        pct = getattr(rates, field)
        if pct < 0 or pct > _HUNDRED:
            problems.append(f"{key} must be between 0 and 100 (got {pct})")
    split_total = rates.platform_fee_pct + rates.merchant_commission_pct + rates.client_cashback_pct
    if split_total > _HUNDRED:
        problems.append(rates_exceed_total(split_total))
    return problems


def _stored_rate(stored: dict[str, str], key: str) -> Decimal:
    try:
        return Decimal(stored[key])
    except InvalidOperation:
        raise ConfigurationError(f"Rate setting '{key}' has invalid value '{stored[key]}'")

class RateService:
    """Service resolving and updating the rates used by settlements.

    Rates live in the settings store and are read once per settlement; a
    merchant's ``commission_rate`` replaces the global merchant commission
    while merchant overrides are enabled.
    """

    def __init__(self, db: Database):
        """Initialize rate service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_global_rates(self) -> RateConfig:
        """Get the global rate configuration.

        Raises:
            ConfigurationError: If any rate is missing or unreadable
        """
        stored = self.db.get_settings(list(RATE_KEYS.values()))
        values = {}
        for field, key in RATE_KEYS.items():
            if key not in stored:
                raise ConfigurationError(missing_rate_setting(key))
            values[field] = _stored_rate(stored, key)
        return RateConfig(**values)

    def is_merchant_override_enabled(self) -> bool:
        """Whether merchant commission overrides are honored (default True)."""
        stored = self.db.get_settings([MERCHANT_OVERRIDE_KEY])
        return stored.get(MERCHANT_OVERRIDE_KEY, "true").lower() == "true"

    def get_rates(self, merchant_id: Optional[int] = None) -> RateConfig:
        """Resolve the rates for a settlement at ``merchant_id``.

        Args:
            merchant_id: Merchant the sale belongs to, or None for global rates

        Returns:
            RateConfig to pass to the settlement calculator

        Raises:
            ConfigurationError: If global rates are missing or the resolved
                configuration violates the rate invariants
            NotFoundError: If the merchant does not exist
        """
        rates = self.get_global_rates()

        if merchant_id is not None:
            merchant = self.db.get_merchant(merchant_id)
            if merchant is None:
                raise NotFoundError(merchant_not_found(merchant_id))
            if merchant.commission_rate is not None and self.is_merchant_override_enabled():
                rates = RateConfig(
                    platform_fee_pct=rates.platform_fee_pct,
                    merchant_commission_pct=merchant.commission_rate,
                    client_cashback_pct=rates.client_cashback_pct,
                    referral_bonus_pct=rates.referral_bonus_pct,
                )

        problems = rate_config_problems(rates)
        if problems:
            raise ConfigurationError("; ".join(problems))
        return rates

    def set_global_rates(
        self,
        platform_fee_pct: object = None,
        merchant_commission_pct: object = None,
        client_cashback_pct: object = None,
        referral_bonus_pct: object = None,
        changed_by: Optional[int] = None,
    ) -> RateConfig:
        """Update some or all global rates.

        Rates that are not given keep their stored value. When nothing is
        stored yet, all four must be given.

        Args:
            platform_fee_pct: New platform fee percentage
            merchant_commission_pct: New merchant commission percentage
            client_cashback_pct: New client cashback percentage
            referral_bonus_pct: New referral bonus percentage
            changed_by: Admin user ID recorded in the audit log

        Returns:
            The new global RateConfig

        Raises:
            ValidationError: If a value is invalid, missing, or the split
                would exceed 100%
            ConfigurationError: If a stored rate kept as is cannot be read
        """
        updates = {
            "platform_fee_pct": platform_fee_pct,
            "merchant_commission_pct": merchant_commission_pct,
            "client_cashback_pct": client_cashback_pct,
            "referral_bonus_pct": referral_bonus_pct,
        }
        given = {field: value for field, value in updates.items() if value is not None}
        if not given:
            raise ValidationError("No rates given to update")

        stored = self.db.get_settings(list(RATE_KEYS.values()))
        values = {}
        for field, key in RATE_KEYS.items():
            if field in given:
                values[field] = parse_percentage(given[field], name=field)
            elif key in stored:
                values[field] = _stored_rate(stored, key)
            else:
                raise ValidationError(f"Rate '{field}' is not configured yet and must be given")

        rates = RateConfig(**values)
        problems = rate_config_problems(rates)
        if problems:
            raise ValidationError("; ".join(problems))

        self.db.set_settings(
            {RATE_KEYS[field]: str(values[field]) for field in given},
            changed_by=changed_by,
        )
        logger.info("Global rates updated: {}", rates)
        return rates

    def initialize_defaults(self, changed_by: Optional[int] = None) -> bool:
        """Store the default rates for any rate that is not configured.

        Returns:
            True if any default was written, False if all rates existed
        """
        stored = self.db.get_settings(list(RATE_KEYS.values()))
        missing = {
            key: str(getattr(DEFAULT_RATES, field))
            for field, key in RATE_KEYS.items()
            if key not in stored
        }
        if not missing:
            return False

        self.db.set_settings(missing, changed_by=changed_by)
        logger.info("Initialized default rates: {}", missing)
        return True

    def set_merchant_override_enabled(
        self, enabled: bool, changed_by: Optional[int] = None
    ) -> None:
        """Turn honoring of merchant commission overrides on or off."""
        self.db.set_settings(
            {MERCHANT_OVERRIDE_KEY: "true" if enabled else "false"},
            changed_by=changed_by,
        )
        logger.info("Merchant commission overrides {}", "enabled" if enabled else "disabled")
