import random
from typing import Optional, Union

from solders.instruction import Instruction
from solders.pubkey import Pubkey

from ..core.config import settings
from ..core.constants import NO_COIN_CREATOR, POOL_ACCOUNT_SIZE, SOL_WRAPPED_MINT, ZERO_PUBKEY
from ..core.dto import (
    BuyBaseInputQuote,
    BuyQuoteInputQuote,
    DepositQuote,
    GlobalConfig,
    Pool,
    PoolReserves,
    PoolTokenPrograms,
    SellBaseInputQuote,
    SellQuoteInputQuote,
    WithdrawQuote,
)
from ..core.enums import DisableFlag, SwapDirection, SwapInput
from ..core.errors import InvalidInputError, OperationDisabledError
from ..core.ix_builders import (
    DEFAULT_TOKEN_PROGRAMS,
    build_buy_ix,
    build_create_pool_ix,
    build_deposit_ix,
    build_extend_account_ix,
    build_sell_ix,
    build_withdraw_ix,
    wrap_sol_instructions,
)
from ..core.logger import get_logger
from ..core.utils import get_associated_token_address
from .fees import require_slippage
from .liquidity import deposit_lp_token, withdraw_lp_token
from .swap import buy_base_input, buy_quote_input, sell_base_input, sell_quote_input

logger = get_logger("amm")

SwapQuote = Union[BuyBaseInputQuote, BuyQuoteInputQuote, SellBaseInputQuote, SellQuoteInputQuote]


class PumpAmm:
    """
    Quote-then-encode helper for one PumpSwap global config.

    Pool, reserves and mint owner programs are read by the caller; nothing
    here talks to the network.
    """

    def __init__(
        self,
        global_config: GlobalConfig,
        *,
        default_slippage: Optional[int] = None,
    ) -> None:
        self.global_config = global_config
        self.default_slippage = require_slippage(
            settings.default_slippage if default_slippage is None else default_slippage
        )

    def _slippage(self, slippage: Optional[int]) -> int:
        return self.default_slippage if slippage is None else require_slippage(slippage)

    def _ensure_enabled(self, flag: DisableFlag) -> None:
        if self.global_config.is_disabled(flag):
            raise OperationDisabledError(flag.name)

    def protocol_fee_recipient(self) -> Pubkey:
        recipients = [r for r in self.global_config.protocol_fee_recipients if r != ZERO_PUBKEY]
        if not recipients:
            raise InvalidInputError("Global config has no protocol fee recipients")
        return random.choice(recipients)

    def swap_quote(
        self,
        pool: Pool,
        reserves: PoolReserves,
        amount: int,
        *,
        swap_input: SwapInput,
        direction: SwapDirection,
        slippage: Optional[int] = None,
    ) -> SwapQuote:
        slippage = self._slippage(slippage)
        args = (
            amount,
            slippage,
            reserves.base_reserve,
            reserves.quote_reserve,
            self.global_config.lp_fee_basis_points,
            self.global_config.protocol_fee_basis_points,
        )
        kwargs = dict(
            coin_creator_fee_bps=self.global_config.coin_creator_fee_basis_points,
            coin_creator=pool.coin_creator,
        )

        if direction is SwapDirection.quote_to_base:
            if swap_input is SwapInput.base:
                return buy_base_input(*args, **kwargs)
            return buy_quote_input(*args, **kwargs)
        if swap_input is SwapInput.base:
            return sell_base_input(*args, **kwargs)
        return sell_quote_input(*args, **kwargs)

    def swap_instruction(
        self,
        pool_address: Pubkey,
        pool: Pool,
        reserves: PoolReserves,
        user: Pubkey,
        amount: int,
        *,
        swap_input: SwapInput,
        direction: SwapDirection,
        slippage: Optional[int] = None,
        token_programs: PoolTokenPrograms = DEFAULT_TOKEN_PROGRAMS,
        protocol_fee_recipient: Optional[Pubkey] = None,
    ) -> Instruction:
        """
        Quote a swap and build the matching Buy or Sell instruction.

        ``amount`` is in base units when ``swap_input`` is ``base`` and in
        quote units otherwise.
        """
        ix, _ = self._swap(
            pool_address,
            pool,
            reserves,
            user,
            amount,
            swap_input=swap_input,
            direction=direction,
            slippage=slippage,
            token_programs=token_programs,
            protocol_fee_recipient=protocol_fee_recipient,
        )
        return ix

    def swap_instructions(
        self,
        pool_address: Pubkey,
        pool: Pool,
        reserves: PoolReserves,
        user: Pubkey,
        amount: int,
        *,
        swap_input: SwapInput,
        direction: SwapDirection,
        slippage: Optional[int] = None,
        token_programs: PoolTokenPrograms = DEFAULT_TOKEN_PROGRAMS,
        protocol_fee_recipient: Optional[Pubkey] = None,
        pool_data_len: Optional[int] = None,
    ) -> list[Instruction]:
        """
        Everything a swap transaction needs, in order: WSOL wrap of the
        input side when its mint is native, ExtendAccount when the pool
        account is short, then Buy or Sell.

        The user's WSOL token account must already exist.
        """
        swap_ix, wrap_amount = self._swap(
            pool_address,
            pool,
            reserves,
            user,
            amount,
            swap_input=swap_input,
            direction=direction,
            slippage=slippage,
            token_programs=token_programs,
            protocol_fee_recipient=protocol_fee_recipient,
        )

        if direction is SwapDirection.quote_to_base:
            input_mint, input_program = pool.quote_mint, token_programs.quote_token_program
        else:
            input_mint, input_program = pool.base_mint, token_programs.base_token_program

        instructions = []
        if input_mint == SOL_WRAPPED_MINT:
            instructions.extend(
                wrap_sol_instructions(user, get_associated_token_address(user, input_mint, input_program), wrap_amount)
            )
        if pool_data_len is not None and self.needs_extend(pool_data_len):
            instructions.append(self.extend_account_instruction(pool_address, user))
        instructions.append(swap_ix)
        return instructions

    def _swap(
        self,
        pool_address: Pubkey,
        pool: Pool,
        reserves: PoolReserves,
        user: Pubkey,
        amount: int,
        *,
        swap_input: SwapInput,
        direction: SwapDirection,
        slippage: Optional[int],
        token_programs: PoolTokenPrograms,
        protocol_fee_recipient: Optional[Pubkey],
    ) -> tuple[Instruction, int]:
        # second item is the most the user can spend on the input side
        is_buy = direction is SwapDirection.quote_to_base
        self._ensure_enabled(DisableFlag.buy if is_buy else DisableFlag.sell)

        quote = self.swap_quote(
            pool, reserves, amount, swap_input=swap_input, direction=direction, slippage=slippage
        )
        logger.debug(
            "Swap quote",
            pool=str(pool_address),
            direction=direction.value,
            swap_input=swap_input.value,
            amount=amount,
            quote=repr(quote),
        )

        recipient = protocol_fee_recipient if protocol_fee_recipient is not None else self.protocol_fee_recipient()
        if is_buy:
            base_amount_out = amount if swap_input is SwapInput.base else quote.base_amount_out
            ix = build_buy_ix(
                pool_address=pool_address,
                pool=pool,
                user=user,
                protocol_fee_recipient=recipient,
                base_amount_out=base_amount_out,
                max_quote_amount_in=quote.max_quote,
                token_programs=token_programs,
            )
            return ix, quote.max_quote

        base_amount_in = amount if swap_input is SwapInput.base else quote.base_amount_in
        ix = build_sell_ix(
            pool_address=pool_address,
            pool=pool,
            user=user,
            protocol_fee_recipient=recipient,
            base_amount_in=base_amount_in,
            min_quote_amount_out=quote.min_quote,
            token_programs=token_programs,
        )
        return ix, base_amount_in

    def deposit_instruction(
        self,
        pool_address: Pubkey,
        pool: Pool,
        reserves: PoolReserves,
        user: Pubkey,
        lp_token: int,
        *,
        slippage: Optional[int] = None,
        token_programs: PoolTokenPrograms = DEFAULT_TOKEN_PROGRAMS,
    ) -> Instruction:
        self._ensure_enabled(DisableFlag.deposit)
        quote: DepositQuote = deposit_lp_token(
            lp_token,
            self._slippage(slippage),
            reserves.base_reserve,
            reserves.quote_reserve,
            _lp_supply(pool, reserves),
        )
        logger.debug("Deposit quote", pool=str(pool_address), lp_token=lp_token, quote=repr(quote))
        return build_deposit_ix(
            pool_address=pool_address,
            pool=pool,
            user=user,
            lp_token_amount_out=lp_token,
            max_base_amount_in=quote.max_base,
            max_quote_amount_in=quote.max_quote,
            token_programs=token_programs,
        )

    def withdraw_instruction(
        self,
        pool_address: Pubkey,
        pool: Pool,
        reserves: PoolReserves,
        user: Pubkey,
        lp_token: int,
        *,
        slippage: Optional[int] = None,
        token_programs: PoolTokenPrograms = DEFAULT_TOKEN_PROGRAMS,
    ) -> Instruction:
        self._ensure_enabled(DisableFlag.withdraw)
        quote: WithdrawQuote = withdraw_lp_token(
            lp_token,
            self._slippage(slippage),
            reserves.base_reserve,
            reserves.quote_reserve,
            _lp_supply(pool, reserves),
        )
        logger.debug("Withdraw quote", pool=str(pool_address), lp_token=lp_token, quote=repr(quote))
        return build_withdraw_ix(
            pool_address=pool_address,
            pool=pool,
            user=user,
            lp_token_amount_in=lp_token,
            min_base_amount_out=quote.min_base,
            min_quote_amount_out=quote.min_quote,
            token_programs=token_programs,
        )

    def create_pool_instruction(
        self,
        creator: Pubkey,
        base_mint: Pubkey,
        quote_mint: Pubkey,
        base_amount_in: int,
        quote_amount_in: int,
        *,
        index: int = 0,
        coin_creator: Pubkey = NO_COIN_CREATOR,
        token_programs: PoolTokenPrograms = DEFAULT_TOKEN_PROGRAMS,
    ) -> Instruction:
        self._ensure_enabled(DisableFlag.create_pool)
        if base_amount_in == 0 or quote_amount_in == 0:
            raise InvalidInputError("Initial pool liquidity cannot be zero")
        logger.debug(
            "Create pool",
            creator=str(creator),
            base_mint=str(base_mint),
            quote_mint=str(quote_mint),
            index=index,
        )
        return build_create_pool_ix(
            creator=creator,
            base_mint=base_mint,
            quote_mint=quote_mint,
            index=index,
            base_amount_in=base_amount_in,
            quote_amount_in=quote_amount_in,
            coin_creator=coin_creator,
            token_programs=token_programs,
        )

    @staticmethod
    def needs_extend(pool_data_len: int) -> bool:
        return pool_data_len < POOL_ACCOUNT_SIZE

    @staticmethod
    def extend_account_instruction(account: Pubkey, user: Pubkey) -> Instruction:
        return build_extend_account_ix(account=account, user=user)


def _lp_supply(pool: Pool, reserves: PoolReserves) -> int:
    return pool.lp_supply if reserves.lp_supply is None else reserves.lp_supply
