from typing import Optional

from solders.pubkey import Pubkey

from ..core.constants import MAX_FEE_BASIS_POINTS, NO_COIN_CREATOR, U64_MAX
from ..core.dto import (
    BuyBaseInputQuote,
    BuyQuoteInputQuote,
    SellBaseInputQuote,
    SellQuoteInputQuote,
)
from ..core.errors import InvalidInputError, PoolDepletedError
from .fees import (
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


def _has_coin_creator(coin_creator: Optional[Pubkey]) -> bool:
    return coin_creator is not None and coin_creator != NO_COIN_CREATOR


def _validate_reserves(base_reserve: int, quote_reserve: int) -> None:
    require_u64("base_reserve", base_reserve)
    require_u64("quote_reserve", quote_reserve)
    if base_reserve == 0 or quote_reserve == 0:
        raise InvalidInputError(
            "Invalid input: 'base_reserve' or 'quote_reserve' cannot be zero"
        )


def _validate_fees(lp_fee_bps: int, protocol_fee_bps: int, coin_creator_fee_bps: int) -> None:
    require_fee_bps("lp_fee_bps", lp_fee_bps)
    require_fee_bps("protocol_fee_bps", protocol_fee_bps)
    require_fee_bps("coin_creator_fee_bps", coin_creator_fee_bps)


def buy_base_input(
    base: int,
    slippage: int,
    base_reserve: int,
    quote_reserve: int,
    lp_fee_bps: int,
    protocol_fee_bps: int,
    *,
    coin_creator_fee_bps: int = 0,
    coin_creator: Optional[Pubkey] = None,
) -> BuyBaseInputQuote:
    """
    Quote tokens needed to buy exactly ``base`` tokens out of the pool.

    Fees are charged on top of the raw constant-product amount, so
    ``total_quote`` is what the buyer actually pays and ``max_quote`` is that
    amount raised by ``slippage`` percent.
    """
    require_u64("base", base)
    require_slippage(slippage)
    _validate_reserves(base_reserve, quote_reserve)
    _validate_fees(lp_fee_bps, protocol_fee_bps, coin_creator_fee_bps)
    if base == 0:
        raise InvalidInputError("Invalid input: 'base' cannot be zero")
    if base >= base_reserve:
        raise PoolDepletedError("Cannot buy the whole base reserve of the pool")

    numerator = checked_mul(quote_reserve, base, context="raw quote numerator")
    denominator = checked_sub(base_reserve, base, context="raw quote denominator")
    quote_amount_in = to_u64(
        ceil_div(numerator, denominator, context="raw quote"),
        context="raw quote",
    )

    lp_fee = fee(quote_amount_in, lp_fee_bps)
    protocol_fee = fee(quote_amount_in, protocol_fee_bps)
    coin_creator_fee = fee(quote_amount_in, coin_creator_fee_bps) if _has_coin_creator(coin_creator) else 0

    total_quote = checked_add(quote_amount_in, lp_fee, limit=U64_MAX, context="lp fee")
    total_quote = checked_add(total_quote, protocol_fee, limit=U64_MAX, context="protocol fee")
    total_quote = checked_add(total_quote, coin_creator_fee, limit=U64_MAX, context="coin creator fee")

    return BuyBaseInputQuote(
        quote_amount_in=quote_amount_in,
        total_quote=total_quote,
        max_quote=apply_slippage_up(total_quote, slippage),
    )


def buy_quote_input(
    quote: int,
    slippage: int,
    base_reserve: int,
    quote_reserve: int,
    lp_fee_bps: int,
    protocol_fee_bps: int,
    *,
    coin_creator_fee_bps: int = 0,
    coin_creator: Optional[Pubkey] = None,
) -> BuyQuoteInputQuote:
    """
    Base tokens received for spending ``quote`` (fees included).

    ``max_quote`` is derived from the input ``quote``, not from the
    fee-stripped ``effective_quote``.
    """
    require_u64("quote", quote)
    require_slippage(slippage)
    _validate_reserves(base_reserve, quote_reserve)
    _validate_fees(lp_fee_bps, protocol_fee_bps, coin_creator_fee_bps)
    if quote == 0:
        raise InvalidInputError("Invalid input: 'quote' cannot be zero")

    if not _has_coin_creator(coin_creator):
        coin_creator_fee_bps = 0
    total_fee_bps = checked_add(lp_fee_bps, protocol_fee_bps, limit=U64_MAX, context="total fee bps")
    total_fee_bps = checked_add(total_fee_bps, coin_creator_fee_bps, limit=U64_MAX, context="total fee bps")
    denominator = checked_add(MAX_FEE_BASIS_POINTS, total_fee_bps, limit=U64_MAX, context="fee denominator")

    effective_quote = to_u64(
        checked_div(
            checked_mul(quote, MAX_FEE_BASIS_POINTS, context="effective quote"),
            denominator,
            context="effective quote",
        ),
        context="effective quote",
    )

    numerator = checked_mul(base_reserve, effective_quote, context="base out numerator")
    denominator_effective = checked_add(quote_reserve, effective_quote, context="base out denominator")
    base_amount_out = to_u64(
        checked_div(numerator, denominator_effective, context="base out"),
        context="base out",
    )

    return BuyQuoteInputQuote(
        effective_quote=effective_quote,
        base_amount_out=base_amount_out,
        max_quote=apply_slippage_up(quote, slippage),
    )


def sell_base_input(
    base: int,
    slippage: int,
    base_reserve: int,
    quote_reserve: int,
    lp_fee_bps: int,
    protocol_fee_bps: int,
    *,
    coin_creator_fee_bps: int = 0,
    coin_creator: Optional[Pubkey] = None,
) -> SellBaseInputQuote:
    """
    Quote tokens received for selling exactly ``base`` tokens.

    Returns ``(final_quote, quote_amount_out, min_quote)`` where fees have
    already been taken out of ``final_quote``.
    """
    require_u64("base", base)
    require_slippage(slippage)
    _validate_reserves(base_reserve, quote_reserve)
    _validate_fees(lp_fee_bps, protocol_fee_bps, coin_creator_fee_bps)

    numerator = checked_mul(quote_reserve, base, context="raw quote numerator")
    denominator = checked_add(base_reserve, base, context="raw quote denominator")
    quote_amount_out = to_u64(
        checked_div(numerator, denominator, context="raw quote"),
        context="raw quote",
    )

    lp_fee = fee(quote_amount_out, lp_fee_bps)
    protocol_fee = fee(quote_amount_out, protocol_fee_bps)
    coin_creator_fee = fee(quote_amount_out, coin_creator_fee_bps) if _has_coin_creator(coin_creator) else 0

    final_quote = checked_sub(quote_amount_out, lp_fee, context="lp fee")
    final_quote = checked_sub(final_quote, protocol_fee, context="protocol fee")
    final_quote = checked_sub(final_quote, coin_creator_fee, context="coin creator fee")

    return SellBaseInputQuote(
        final_quote=final_quote,
        quote_amount_out=quote_amount_out,
        min_quote=apply_slippage_down(final_quote, slippage),
    )


def _quote_amount_out_with_fees(
    user_quote_amount_out: int,
    lp_fee_bps: int,
    protocol_fee_bps: int,
    coin_creator_fee_bps: int,
) -> int:
    total_fee_bps = checked_add(lp_fee_bps, protocol_fee_bps, limit=U64_MAX, context="total fee bps")
    total_fee_bps = checked_add(total_fee_bps, coin_creator_fee_bps, limit=U64_MAX, context="total fee bps")
    denominator = checked_sub(MAX_FEE_BASIS_POINTS, total_fee_bps, context="fee denominator")
    numerator = checked_mul(user_quote_amount_out, MAX_FEE_BASIS_POINTS, context="raw quote numerator")
    return to_u64(ceil_div(numerator, denominator, context="raw quote"), context="raw quote")


def sell_quote_input(
    quote: int,
    slippage: int,
    base_reserve: int,
    quote_reserve: int,
    lp_fee_bps: int,
    protocol_fee_bps: int,
    *,
    coin_creator_fee_bps: int = 0,
    coin_creator: Optional[Pubkey] = None,
) -> SellQuoteInputQuote:
    """Base tokens that must be sold to receive ``quote`` after fees."""
    require_u64("quote", quote)
    require_slippage(slippage)
    _validate_reserves(base_reserve, quote_reserve)
    _validate_fees(lp_fee_bps, protocol_fee_bps, coin_creator_fee_bps)
    if quote > quote_reserve:
        raise PoolDepletedError("Cannot receive more quote tokens than the pool quote reserve")

    if not _has_coin_creator(coin_creator):
        coin_creator_fee_bps = 0
    raw_quote = _quote_amount_out_with_fees(quote, lp_fee_bps, protocol_fee_bps, coin_creator_fee_bps)

    if raw_quote >= quote_reserve:
        raise PoolDepletedError("Desired quote amount exceeds available reserve")

    numerator = checked_mul(base_reserve, raw_quote, context="base in numerator")
    denominator = checked_sub(quote_reserve, raw_quote, context="base in denominator")
    base_amount_in = to_u64(
        ceil_div(numerator, denominator, context="base in"),
        context="base in",
    )

    return SellQuoteInputQuote(
        raw_quote=raw_quote,
        base_amount_in=base_amount_in,
        min_quote=apply_slippage_down(quote, slippage),
    )
