"""Tests for the settlement calculator."""

import pytest
from decimal import Decimal, localcontext, ROUND_DOWN

from valecashback.domain.entities import RateConfig
from valecashback.domain.errors import InvalidAmountError, ValidationError
from valecashback.domain.settlement import MAX_AMOUNT, compute_settlement, validate_amount


DEFAULT = RateConfig(
    platform_fee_pct=Decimal("2"),
    merchant_commission_pct=Decimal("1"),
    client_cashback_pct=Decimal("2"),
    referral_bonus_pct=Decimal("1"),
)


class TestComputeSettlement:
    """Tests for compute_settlement."""

    def test_documented_example(self):
        """Test 100.00 at 2/1/2/1 splits into 2/1/2/1 with 97 net."""
        s = compute_settlement(Decimal("100.00"), DEFAULT)
        assert s.platform_fee == Decimal("2.00")
        assert s.merchant_commission == Decimal("1.00")
        assert s.client_cashback == Decimal("2.00")
        assert s.referral_bonus == Decimal("1.00")
        assert s.merchant_net == Decimal("97.00")

    def test_fifty_gives_one_cashback(self):
        """Test 2% cashback on 50.00 is exactly 1.00."""
        s = compute_settlement(Decimal("50"), DEFAULT)
        assert s.client_cashback == Decimal("1.00")

    def test_smallest_amount(self):
        """Test 0.01 rounds every component to zero and keeps the cent for the merchant."""
        s = compute_settlement(Decimal("0.01"), DEFAULT)
        assert s.platform_fee == Decimal("0.00")
        assert s.merchant_commission == Decimal("0.00")
        assert s.client_cashback == Decimal("0.00")
        assert s.referral_bonus == Decimal("0.00")
        assert s.merchant_net == Decimal("0.01")

    def test_half_cent_rounds_up(self):
        """Test a component of exactly half a cent rounds up."""
        # 0.25 * 2% = 0.005
        s = compute_settlement(Decimal("0.25"), DEFAULT)
        assert s.platform_fee == Decimal("0.01")
        assert s.client_cashback == Decimal("0.01")
        assert s.merchant_net == Decimal("0.24")

    def test_just_below_half_cent_rounds_down(self):
        """Test 0.0049 rounds to zero."""
        # 0.49 * 1% = 0.0049
        s = compute_settlement(Decimal("0.49"), DEFAULT)
        assert s.merchant_commission == Decimal("0.00")
        assert s.referral_bonus == Decimal("0.00")

    def test_components_are_quantized_to_cents(self):
        """Test every field has exactly two decimal places."""
        s = compute_settlement(Decimal("123.45"), DEFAULT)
        for value in (
            s.platform_fee,
            s.merchant_commission,
            s.client_cashback,
            s.referral_bonus,
            s.merchant_net,
        ):
            assert value.as_tuple().exponent == -2

    def test_fee_commission_and_net_sum_to_amount(self):
        """Test platform fee + merchant commission + merchant net == amount."""
        for raw in ["0.01", "0.33", "1.99", "10.05", "99.99", "12345.67", "1000000.00"]:
            amount = Decimal(raw)
            s = compute_settlement(amount, DEFAULT)
            assert s.platform_fee + s.merchant_commission + s.merchant_net == amount
            assert s.merchant_net >= 0

    def test_cashback_and_bonus_not_subtracted_from_net(self):
        """Test cashback and referral bonus are funded by the platform."""
        rates = RateConfig(
            platform_fee_pct=Decimal("2"),
            merchant_commission_pct=Decimal("1"),
            client_cashback_pct=Decimal("10"),
            referral_bonus_pct=Decimal("5"),
        )
        s = compute_settlement(Decimal("100"), rates)
        assert s.merchant_net == Decimal("97.00")
        assert s.client_cashback == Decimal("10.00")
        assert s.referral_bonus == Decimal("5.00")

    def test_components_capped_at_remaining_amount(self):
        """Test fee, commission and cashback never exceed the gross amount."""
        rates = RateConfig(
            platform_fee_pct=Decimal("60"),
            merchant_commission_pct=Decimal("50"),
            client_cashback_pct=Decimal("10"),
            referral_bonus_pct=Decimal("1"),
        )
        s = compute_settlement(Decimal("1.00"), rates)
        assert s.platform_fee == Decimal("0.60")
        assert s.merchant_commission == Decimal("0.40")
        assert s.client_cashback == Decimal("0.00")
        assert s.merchant_net == Decimal("0.00")

    def test_zero_rates(self):
        """Test all-zero rates leave the full amount to the merchant."""
        zero = RateConfig(Decimal("0"), Decimal("0"), Decimal("0"), Decimal("0"))
        s = compute_settlement(Decimal("42.42"), zero)
        assert s.merchant_net == Decimal("42.42")
        assert s.client_cashback == Decimal("0.00")

    def test_same_inputs_same_output(self):
        """Test the calculator holds no state between calls."""
        first = compute_settlement(Decimal("77.77"), DEFAULT)
        second = compute_settlement(Decimal("77.77"), DEFAULT)
        assert first == second

    def test_ignores_caller_decimal_context(self):
        """Test a caller's rounding mode does not change the result."""
        expected = compute_settlement(Decimal("0.25"), DEFAULT)
        with localcontext() as ctx:
            ctx.rounding = ROUND_DOWN
            ctx.prec = 3
            assert compute_settlement(Decimal("0.25"), DEFAULT) == expected

    def test_accepts_numeric_string(self):
        """Test a numeric string is accepted as amount."""
        s = compute_settlement("100", DEFAULT)
        assert s.merchant_net == Decimal("97.00")

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-10.00"), "0.00", -1])
    def test_rejects_non_positive(self, amount):
        """Test amounts <= 0 are rejected."""
        with pytest.raises(InvalidAmountError):
            compute_settlement(amount, DEFAULT)

    def test_rejects_float(self):
        """Test floats are rejected."""
        with pytest.raises(InvalidAmountError, match="float"):
            compute_settlement(10.5, DEFAULT)


class TestValidateAmount:
    """Tests for validate_amount."""

    def test_quantizes_integer(self):
        """Test an integer amount gets two decimal places."""
        assert validate_amount(5) == Decimal("5.00")
        assert str(validate_amount(5)) == "5.00"

    def test_rejects_sub_cent_precision(self):
        """Test more than two decimal places is rejected."""
        with pytest.raises(InvalidAmountError, match="two decimal places"):
            validate_amount(Decimal("1.005"))

    @pytest.mark.parametrize("amount", ["1e30", "100000000000000000000", Decimal("92233720368547758.08")])
    def test_rejects_amount_too_large_to_store(self, amount):
        """Test amounts whose cents overflow a 64-bit column are rejected."""
        with pytest.raises(InvalidAmountError):
            validate_amount(amount)

    def test_accepts_largest_storable_amount(self):
        """Test the largest amount that fits in cents is accepted."""
        assert validate_amount("92233720368547758.07") == MAX_AMOUNT

    def test_accepts_trailing_zeros(self):
        """Test 1.500 is the same as 1.50."""
        assert validate_amount("1.500") == Decimal("1.50")

    @pytest.mark.parametrize("amount", ["abc", "", "NaN", "Infinity", None, True, [1]])
    def test_rejects_non_numeric(self, amount):
        """Test non-numeric and non-finite values are rejected."""
        with pytest.raises(InvalidAmountError):
            validate_amount(amount)

    def test_is_validation_error(self):
        """Test InvalidAmountError is a ValidationError and a ValueError."""
        with pytest.raises(ValidationError):
            validate_amount("-1")
        with pytest.raises(ValueError):
            validate_amount("-1")
