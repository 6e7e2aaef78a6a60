from dataclasses import dataclass
from typing import Optional

from solders.pubkey import Pubkey

from .constants import NO_COIN_CREATOR
from .enums import DisableFlag


@dataclass(frozen=True, slots=True)
class DerivedAddress:
    address: Pubkey
    bump: int
    seeds: tuple[bytes, ...]
    program_id: Pubkey


@dataclass(frozen=True, slots=True)
class BuyBaseInputQuote:
    quote_amount_in: int
    total_quote: int
    max_quote: int


@dataclass(frozen=True, slots=True)
class BuyQuoteInputQuote:
    effective_quote: int
    base_amount_out: int
    max_quote: int


@dataclass(frozen=True, slots=True)
class SellBaseInputQuote:
    final_quote: int
    quote_amount_out: int
    min_quote: int


@dataclass(frozen=True, slots=True)
class SellQuoteInputQuote:
    raw_quote: int
    base_amount_in: int
    min_quote: int


@dataclass(frozen=True, slots=True)
class DepositQuote:
    base_amount_in: int
    quote_amount_in: int
    max_base: int
    max_quote: int


@dataclass(frozen=True, slots=True)
class DepositToken0Quote:
    token1: int
    lp_token: int
    max_token0: int
    max_token1: int


@dataclass(frozen=True, slots=True)
class WithdrawQuote:
    base: int
    quote: int
    min_base: int
    min_quote: int


@dataclass(frozen=True, slots=True)
class GlobalConfig:
    admin: Pubkey
    lp_fee_basis_points: int
    protocol_fee_basis_points: int
    disable_flags: int
    protocol_fee_recipients: tuple[Pubkey, ...]
    coin_creator_fee_basis_points: int = 0

    def is_disabled(self, flag: DisableFlag) -> bool:
        return bool(self.disable_flags >> flag.value & 1)


@dataclass(frozen=True, slots=True)
class Pool:
    pool_bump: int
    index: int
    creator: Pubkey
    base_mint: Pubkey
    quote_mint: Pubkey
    lp_mint: Pubkey
    pool_base_token_account: Pubkey
    pool_quote_token_account: Pubkey
    lp_supply: int
    coin_creator: Pubkey = NO_COIN_CREATOR


@dataclass(frozen=True, slots=True)
class PoolTokenPrograms:
    """Owner programs of the pool mints, read by the caller from the mint accounts."""
    base_token_program: Pubkey
    quote_token_program: Pubkey


@dataclass(frozen=True, slots=True)
class PoolReserves:
    base_reserve: int
    quote_reserve: int
    lp_supply: Optional[int] = None
