"""Settlement calculator.

Splits a gross transaction amount into platform fee, merchant commission,
client cashback and referral bonus:

    component = round_half_up(amount * pct / 100, 2)
    merchant_net = amount - platform_fee - merchant_commission

Cashback and referral bonus are funded from the platform margin and are not
subtracted from ``merchant_net``. All arithmetic runs in a fixed decimal
context so results do not depend on the caller's context.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, Context, localcontext

from valecashback.domain.entities import RateConfig, Settlement
from valecashback.domain.errors import InvalidAmountError, invalid_amount

CENT = Decimal("0.01")
HUNDRED = Decimal("100")
ZERO = Decimal("0.00")
# Largest amount whose cents fit a signed 64-bit column
MAX_AMOUNT = Decimal(2**63 - 1) / HUNDRED

_CONTEXT = Context(prec=28, rounding=ROUND_HALF_UP)


def to_money(value: Decimal) -> Decimal:
    """Round a Decimal to currency minor units (half-up)."""
    with localcontext(_CONTEXT):
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


def validate_amount(amount: object) -> Decimal:
    """Validate a transaction amount and return it as a 2-place Decimal.

    Accepts Decimal, int or a numeric string. Floats are rejected so that
    binary floating point never enters a monetary computation.

    Raises:
        InvalidAmountError: If the amount is not numeric, not positive, too
            large to store, or has more than two decimal places.
    """
    if isinstance(amount, bool) or isinstance(amount, float):
        raise InvalidAmountError(
            invalid_amount(amount, "use Decimal or a numeric string, not float")
        )
    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, (int, str)):
        try:
            value = Decimal(str(amount).strip())
        except InvalidOperation:
            raise InvalidAmountError(invalid_amount(amount, "not a number"))
    else:
        raise InvalidAmountError(invalid_amount(amount, "not a number"))

    if not value.is_finite():
        raise InvalidAmountError(invalid_amount(amount, "not a finite number"))
    if value <= 0:
        raise InvalidAmountError(invalid_amount(amount, "must be greater than zero"))

    if value > MAX_AMOUNT:
        raise InvalidAmountError(invalid_amount(amount, f"must not exceed {MAX_AMOUNT}"))

    try:
        rounded = to_money(value)
    except InvalidOperation:
        raise InvalidAmountError(invalid_amount(amount, "too many digits"))
    if rounded != value:
        raise InvalidAmountError(
            invalid_amount(amount, "more than two decimal places")
        )
    return rounded


def _portion(amount: Decimal, pct: Decimal) -> Decimal:
    with localcontext(_CONTEXT):
        return (amount * pct / HUNDRED).quantize(CENT, rounding=ROUND_HALF_UP)


def compute_settlement(amount: object, rates: RateConfig) -> Settlement:
    """Compute the four-way split of ``amount`` under ``rates``.

    Pure function: no I/O and no state, so identical inputs always give
    identical outputs.

    Rounding each component half-up can, on sub-cent portions, push the
    fee, commission and cashback past the gross amount. Components are
    therefore capped at what is left of the amount in that order, which
    keeps ``merchant_net >= 0`` and the three parts summing to at most the
    amount.

    Args:
        amount: Gross transaction amount (must be > 0)
        rates: Resolved rate configuration

    Returns:
        Settlement with all fields quantized to cents

    Raises:
        InvalidAmountError: If amount is not a positive monetary value
    """
    gross = validate_amount(amount)

    with localcontext(_CONTEXT):
        platform_fee = min(_portion(gross, rates.platform_fee_pct), gross)
        remaining = gross - platform_fee
        merchant_commission = min(_portion(gross, rates.merchant_commission_pct), remaining)
        remaining -= merchant_commission
        client_cashback = min(_portion(gross, rates.client_cashback_pct), remaining)
        referral_bonus = _portion(gross, rates.referral_bonus_pct)
        merchant_net = to_money(gross - platform_fee - merchant_commission)

    return Settlement(
        platform_fee=platform_fee,
        merchant_commission=merchant_commission,
        client_cashback=client_cashback,
        referral_bonus=referral_bonus,
        merchant_net=merchant_net,
    )
