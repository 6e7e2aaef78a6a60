"""
Unit tests for the basis-point fee and checked arithmetic helpers.
"""

import pytest

from pumpswap.core.constants import U64_MAX, U128_MAX
from pumpswap.core.errors import (
    AdditionOverflow,
    ArithmeticFailure,
    CastOverflow,
    DivisionByZero,
    InvalidInputError,
    MultiplicationOverflow,
    SlippageOutOfRangeError,
    SubtractionUnderflow,
)
from pumpswap.services.fees import (
    apply_slippage_down,
    apply_slippage_up,
    ceil_div,
    checked_add,
    checked_div,
    checked_mul,
    checked_sub,
    fee,
    require_fee_bps,
    require_slippage,
    require_u64,
    to_u64,
)


class TestFee:
    def test_exact_division(self) -> None:
        assert fee(10_000, 30) == 30

    def test_rounds_up(self) -> None:
        assert fee(1002, 30) == 4
        assert fee(1002, 5) == 1
        assert fee(1, 1) == 1

    def test_zero_amount_or_zero_bps(self) -> None:
        assert fee(0, 30) == 0
        assert fee(1000, 0) == 0

    def test_full_fee_is_amount(self) -> None:
        assert fee(U64_MAX, 10_000) == U64_MAX

    def test_never_exceeds_amount(self) -> None:
        for amount in (0, 1, 7, 999, 1_000_003, U64_MAX):
            for bps in (0, 1, 30, 9_999, 10_000):
                assert fee(amount, bps) <= amount

    def test_monotonic_in_both_arguments(self) -> None:
        amounts = [0, 1, 2, 50, 333, 10_000, 123_456_789]
        bps_values = [0, 1, 5, 25, 30, 100, 10_000]
        for bps in bps_values:
            results = [fee(a, bps) for a in amounts]
            assert results == sorted(results)
        for amount in amounts:
            results = [fee(amount, b) for b in bps_values]
            assert results == sorted(results)


class TestCheckedArithmetic:
    def test_add_overflow(self) -> None:
        with pytest.raises(AdditionOverflow):
            checked_add(U64_MAX, 1, limit=U64_MAX)
        assert checked_add(U64_MAX, 1) == U64_MAX + 1

    def test_sub_underflow(self) -> None:
        with pytest.raises(SubtractionUnderflow):
            checked_sub(1, 2, context="lp fee")
        assert checked_sub(2, 2) == 0

    def test_mul_overflow(self) -> None:
        with pytest.raises(MultiplicationOverflow):
            checked_mul(U128_MAX, 2)

    def test_div_by_zero(self) -> None:
        with pytest.raises(DivisionByZero):
            checked_div(1, 0)
        with pytest.raises(DivisionByZero):
            ceil_div(1, 0)

    def test_ceil_div(self) -> None:
        assert ceil_div(6, 2) == 3
        assert ceil_div(7, 2) == 4
        assert ceil_div(0, 5) == 0

    def test_cast_overflow(self) -> None:
        assert to_u64(U64_MAX) == U64_MAX
        with pytest.raises(CastOverflow):
            to_u64(U64_MAX + 1)

    def test_errors_carry_context(self) -> None:
        with pytest.raises(ArithmeticFailure) as exc_info:
            checked_sub(0, 1, context="protocol fee")
        assert exc_info.value.operation == "Subtraction underflow"
        assert exc_info.value.context == "protocol fee"
        assert isinstance(exc_info.value, ArithmeticError)


class TestValidation:
    def test_require_u64_bounds(self) -> None:
        assert require_u64("amount", 0) == 0
        assert require_u64("amount", U64_MAX) == U64_MAX
        with pytest.raises(InvalidInputError):
            require_u64("amount", -1)
        with pytest.raises(InvalidInputError):
            require_u64("amount", U64_MAX + 1)

    def test_require_u64_rejects_non_integers(self) -> None:
        for value in (1.5, "10", True, None):
            with pytest.raises(InvalidInputError):
                require_u64("amount", value)

    def test_require_fee_bps(self) -> None:
        assert require_fee_bps("lp_fee_bps", 10_000) == 10_000
        with pytest.raises(InvalidInputError):
            require_fee_bps("lp_fee_bps", 10_001)

    def test_require_slippage(self) -> None:
        assert require_slippage(0) == 0
        assert require_slippage(100) == 100
        with pytest.raises(SlippageOutOfRangeError) as exc_info:
            require_slippage(101)
        assert exc_info.value.slippage == 101
        with pytest.raises(SlippageOutOfRangeError):
            require_slippage(-1)


class TestSlippage:
    def test_up_one_percent(self) -> None:
        assert apply_slippage_up(1007, 1) == 1017

    def test_down_one_percent(self) -> None:
        assert apply_slippage_down(995, 1) == 985

    def test_zero_slippage_is_identity(self) -> None:
        for amount in (0, 1, 1007, U64_MAX):
            assert apply_slippage_up(amount, 0) == amount
            assert apply_slippage_down(amount, 0) == amount

    def test_full_slippage(self) -> None:
        assert apply_slippage_up(500, 100) == 1000
        assert apply_slippage_down(500, 100) == 0

    def test_bounds_bracket_amount(self) -> None:
        for amount in (1, 99, 12_345, 10 ** 12):
            for slippage in (0, 1, 5, 50):
                assert apply_slippage_up(amount, slippage) >= amount
                assert apply_slippage_down(amount, slippage) <= amount

    def test_upper_bound_must_fit_u64(self) -> None:
        with pytest.raises(CastOverflow):
            apply_slippage_up(U64_MAX, 1)
