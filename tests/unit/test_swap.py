"""
Unit tests for the constant-product swap quotes.

Pool used throughout: 1_000_000 / 1_000_000 reserves, 30 bps LP fee and
5 bps protocol fee.
"""

import pytest
from solders.pubkey import Pubkey

from pumpswap.core.constants import NO_COIN_CREATOR
from pumpswap.core.errors import (
    DivisionByZero,
    InvalidInputError,
    PoolDepletedError,
    SlippageOutOfRangeError,
    SubtractionUnderflow,
)
from pumpswap.services.swap import (
    buy_base_input,
    buy_quote_input,
    sell_base_input,
    sell_quote_input,
)

RESERVES = (1_000_000, 1_000_000)
FEES = (30, 5)
COIN_CREATOR = Pubkey.from_string("6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBEwF6P")


class TestBuyBaseInput:
    def test_concrete_scenario(self) -> None:
        quote = buy_base_input(1000, 1, *RESERVES, *FEES)

        assert quote.quote_amount_in == -(-1_000_000 * 1000 // 999_000)
        assert quote.quote_amount_in == 1002
        # lp fee 4, protocol fee 1
        assert quote.total_quote == 1007
        assert quote.max_quote == 1017

    def test_creator_fee_added_for_real_creator(self) -> None:
        quote = buy_base_input(
            1000, 1, *RESERVES, *FEES, coin_creator_fee_bps=5, coin_creator=COIN_CREATOR
        )
        assert quote.total_quote == 1008
        assert quote.max_quote == 1018

    def test_creator_fee_ignored_for_sentinel(self) -> None:
        quote = buy_base_input(
            1000, 1, *RESERVES, *FEES, coin_creator_fee_bps=5, coin_creator=NO_COIN_CREATOR
        )
        assert quote.total_quote == 1007

    def test_zero_slippage_collapses(self) -> None:
        quote = buy_base_input(1000, 0, *RESERVES, *FEES)
        assert quote.max_quote == quote.total_quote

    def test_zero_base(self) -> None:
        with pytest.raises(InvalidInputError):
            buy_base_input(0, 1, *RESERVES, *FEES)

    def test_whole_reserve(self) -> None:
        with pytest.raises(PoolDepletedError):
            buy_base_input(1_000_000, 1, *RESERVES, *FEES)
        with pytest.raises(PoolDepletedError):
            buy_base_input(2_000_000, 1, *RESERVES, *FEES)

    def test_zero_reserve(self) -> None:
        with pytest.raises(InvalidInputError):
            buy_base_input(10, 1, 0, 1_000_000, *FEES)
        with pytest.raises(InvalidInputError):
            buy_base_input(10, 1, 1_000_000, 0, *FEES)

    def test_slippage_out_of_range(self) -> None:
        with pytest.raises(SlippageOutOfRangeError):
            buy_base_input(1000, 101, *RESERVES, *FEES)


class TestBuyQuoteInput:
    def test_concrete_scenario(self) -> None:
        quote = buy_quote_input(1007, 1, *RESERVES, *FEES)

        assert quote.effective_quote == 1003
        assert quote.base_amount_out == 1001
        assert quote.max_quote == 1017

    def test_round_trip_with_buy_base_input(self) -> None:
        spent = 1007
        base_out = buy_quote_input(spent, 1, *RESERVES, *FEES).base_amount_out
        cost = buy_base_input(base_out, 1, *RESERVES, *FEES).total_quote
        assert abs(cost - spent) <= 1

    def test_creator_fee_reduces_effective_quote(self) -> None:
        without = buy_quote_input(100_000, 1, *RESERVES, *FEES)
        with_creator = buy_quote_input(
            100_000, 1, *RESERVES, *FEES, coin_creator_fee_bps=5, coin_creator=COIN_CREATOR
        )
        assert with_creator.effective_quote < without.effective_quote
        assert with_creator.max_quote == without.max_quote

    def test_zero_quote(self) -> None:
        with pytest.raises(InvalidInputError):
            buy_quote_input(0, 1, *RESERVES, *FEES)

    def test_zero_slippage_collapses(self) -> None:
        quote = buy_quote_input(1007, 0, *RESERVES, *FEES)
        assert quote.max_quote == 1007


class TestSellBaseInput:
    def test_concrete_scenario(self) -> None:
        quote = sell_base_input(1000, 1, *RESERVES, *FEES)

        assert quote.quote_amount_out == 999
        assert quote.final_quote == 995
        assert quote.min_quote == 985

    def test_creator_fee_subtracted_for_real_creator(self) -> None:
        quote = sell_base_input(
            1000, 1, *RESERVES, *FEES, coin_creator_fee_bps=5, coin_creator=COIN_CREATOR
        )
        assert quote.final_quote == 994
        assert quote.min_quote == 984

    def test_fees_larger_than_output(self) -> None:
        with pytest.raises(SubtractionUnderflow):
            sell_base_input(
                1000, 1, *RESERVES, 5000, 5000, coin_creator_fee_bps=5000, coin_creator=COIN_CREATOR
            )

    def test_zero_slippage_collapses(self) -> None:
        quote = sell_base_input(1000, 0, *RESERVES, *FEES)
        assert quote.min_quote == quote.final_quote

    def test_min_never_above_final(self) -> None:
        for slippage in (0, 1, 10, 100):
            quote = sell_base_input(50_000, slippage, *RESERVES, *FEES)
            assert quote.min_quote <= quote.final_quote


class TestSellQuoteInput:
    def test_concrete_scenario(self) -> None:
        quote = sell_quote_input(995, 1, *RESERVES, *FEES)

        assert quote.raw_quote == 999
        assert quote.base_amount_in == 1000
        assert quote.min_quote == 985

    def test_more_than_reserve(self) -> None:
        with pytest.raises(PoolDepletedError):
            sell_quote_input(2_000_000, 1, *RESERVES, *FEES)

    def test_raw_quote_exhausts_reserve(self) -> None:
        with pytest.raises(PoolDepletedError):
            sell_quote_input(999_000, 1, *RESERVES, *FEES)

    def test_total_fee_of_hundred_percent(self) -> None:
        with pytest.raises(DivisionByZero):
            sell_quote_input(100, 1, *RESERVES, 5000, 5000)

    def test_total_fee_above_hundred_percent(self) -> None:
        with pytest.raises(SubtractionUnderflow):
            sell_quote_input(100, 1, *RESERVES, 6000, 5000)

    def test_sentinel_creator_fee_not_counted(self) -> None:
        # 5000 + 5000 would divide by zero if the creator fee were counted
        quote = sell_quote_input(
            100, 1, *RESERVES, 4000, 1000, coin_creator_fee_bps=5000, coin_creator=NO_COIN_CREATOR
        )
        assert quote.raw_quote == 200

    def test_zero_slippage_collapses(self) -> None:
        quote = sell_quote_input(995, 0, *RESERVES, *FEES)
        assert quote.min_quote == 995
