from ..core.dto import DepositQuote, DepositToken0Quote, WithdrawQuote
from ..core.errors import InvalidInputError
from .fees import (
    apply_slippage_down,
    apply_slippage_up,
    ceil_div,
    checked_div,
    checked_mul,
    require_slippage,
    require_u64,
    to_u64,
)


def _validate_pool(base_reserve: int, quote_reserve: int, total_lp_tokens: int) -> None:
    require_u64("base_reserve", base_reserve)
    require_u64("quote_reserve", quote_reserve)
    require_u64("total_lp_tokens", total_lp_tokens)
    if total_lp_tokens == 0:
        raise InvalidInputError("Total LP tokens cannot be zero")
    if base_reserve == 0 or quote_reserve == 0:
        raise InvalidInputError(
            "Invalid input: 'base_reserve' or 'quote_reserve' cannot be zero"
        )


def deposit_lp_token(
    lp_token: int,
    slippage: int,
    base_reserve: int,
    quote_reserve: int,
    total_lp_tokens: int,
) -> DepositQuote:
    """
    Base and quote amounts required to mint ``lp_token`` LP tokens.

    Both amounts are rounded up so the depositor never gets a share for free;
    ``max_base``/``max_quote`` add ``slippage`` percent on top.
    """
    require_u64("lp_token", lp_token)
    _validate_pool(base_reserve, quote_reserve, total_lp_tokens)
    require_slippage(slippage)

    base_amount_in = to_u64(
        ceil_div(
            checked_mul(base_reserve, lp_token, context="deposit base"),
            total_lp_tokens,
            context="deposit base",
        ),
        context="deposit base",
    )
    quote_amount_in = to_u64(
        ceil_div(
            checked_mul(quote_reserve, lp_token, context="deposit quote"),
            total_lp_tokens,
            context="deposit quote",
        ),
        context="deposit quote",
    )

    return DepositQuote(
        base_amount_in=base_amount_in,
        quote_amount_in=quote_amount_in,
        max_base=apply_slippage_up(base_amount_in, slippage),
        max_quote=apply_slippage_up(quote_amount_in, slippage),
    )


def deposit_token0(
    token0: int,
    slippage: int,
    token0_reserve: int,
    token1_reserve: int,
    total_lp_tokens: int,
) -> DepositToken0Quote:
    """Matching token1 amount and LP tokens minted for a ``token0`` deposit."""
    require_u64("token0", token0)
    _validate_pool(token0_reserve, token1_reserve, total_lp_tokens)
    require_slippage(slippage)

    token1 = to_u64(
        checked_div(
            checked_mul(token0, token1_reserve, context="deposit token1"),
            token0_reserve,
            context="deposit token1",
        ),
        context="deposit token1",
    )
    lp_token = to_u64(
        checked_div(
            checked_mul(token0, total_lp_tokens, context="deposit lp"),
            token0_reserve,
            context="deposit lp",
        ),
        context="deposit lp",
    )

    return DepositToken0Quote(
        token1=token1,
        lp_token=lp_token,
        max_token0=apply_slippage_up(token0, slippage),
        max_token1=apply_slippage_up(token1, slippage),
    )


def withdraw_lp_token(
    lp_token: int,
    slippage: int,
    base_reserve: int,
    quote_reserve: int,
    total_lp_tokens: int,
) -> WithdrawQuote:
    """
    Proportional base and quote returned for burning ``lp_token``.

    Outputs are rounded down; ``min_base``/``min_quote`` take ``slippage``
    percent off.
    """
    require_u64("lp_token", lp_token)
    if lp_token == 0 or total_lp_tokens == 0:
        raise InvalidInputError("LP token or total LP tokens cannot be zero")
    _validate_pool(base_reserve, quote_reserve, total_lp_tokens)
    require_slippage(slippage)

    base = to_u64(
        checked_div(
            checked_mul(base_reserve, lp_token, context="withdraw base"),
            total_lp_tokens,
            context="withdraw base",
        ),
        context="withdraw base",
    )
    quote = to_u64(
        checked_div(
            checked_mul(quote_reserve, lp_token, context="withdraw quote"),
            total_lp_tokens,
            context="withdraw quote",
        ),
        context="withdraw quote",
    )

    return WithdrawQuote(
        base=base,
        quote=quote,
        min_base=apply_slippage_down(base, slippage),
        min_quote=apply_slippage_down(quote, slippage),
    )
