from typing import Sequence

from solders.pubkey import Pubkey
from spl.token.instructions import get_associated_token_address as _spl_associated_token_address

from .constants import (
    PUMP_AMM_PROGRAM_ID,
    PUMP_PROGRAM_ID,
    GLOBAL_CONFIG_SEED,
    POOL_SEED,
    POOL_LP_MINT_SEED,
    POOL_AUTHORITY_SEED,
    EVENT_AUTHORITY_SEED,
    CREATOR_VAULT_SEED,
    USER_VOLUME_ACCUMULATOR_SEED,
    TOKEN_PROGRAM_ID,
    U16_MAX,
)
from .dto import DerivedAddress
from .errors import InvalidInputError


def u16_to_le_bytes(value: int) -> bytes:
    if not 0 <= value <= U16_MAX:
        raise InvalidInputError(f"Invalid input: pool index must fit into u16, got {value}")
    return value.to_bytes(2, "little")


def derive_address(seeds: Sequence[bytes], program_id: Pubkey) -> DerivedAddress:
    """
    Off-curve address for ``seeds`` under ``program_id``.

    The bump is searched from 255 downwards, the first one that lands off the
    ed25519 curve wins.
    """
    seeds = tuple(bytes(seed) for seed in seeds)
    address, bump = Pubkey.find_program_address(list(seeds), program_id)
    return DerivedAddress(address=address, bump=bump, seeds=seeds, program_id=program_id)


def get_global_config_pda(program_id: Pubkey = PUMP_AMM_PROGRAM_ID) -> Pubkey:
    return derive_address([GLOBAL_CONFIG_SEED], program_id).address


def get_pool_pda(
    index: int,
    creator: Pubkey,
    base_mint: Pubkey,
    quote_mint: Pubkey,
    program_id: Pubkey = PUMP_AMM_PROGRAM_ID,
) -> Pubkey:
    return derive_address(
        [POOL_SEED, u16_to_le_bytes(index), bytes(creator), bytes(base_mint), bytes(quote_mint)],
        program_id,
    ).address


def get_lp_mint_pda(pool: Pubkey, program_id: Pubkey = PUMP_AMM_PROGRAM_ID) -> Pubkey:
    return derive_address([POOL_LP_MINT_SEED, bytes(pool)], program_id).address


def get_pool_authority_pda(mint: Pubkey, program_id: Pubkey = PUMP_PROGRAM_ID) -> Pubkey:
    """Authority of a pool migrated from the bonding curve; derived on the Pump.fun program."""
    return derive_address([POOL_AUTHORITY_SEED, bytes(mint)], program_id).address


def get_event_authority_pda(program_id: Pubkey = PUMP_AMM_PROGRAM_ID) -> Pubkey:
    return derive_address([EVENT_AUTHORITY_SEED], program_id).address


def get_coin_creator_vault_authority_pda(
    coin_creator: Pubkey,
    program_id: Pubkey = PUMP_AMM_PROGRAM_ID,
) -> Pubkey:
    return derive_address([CREATOR_VAULT_SEED, bytes(coin_creator)], program_id).address


def get_user_volume_accumulator_pda(user: Pubkey, program_id: Pubkey = PUMP_AMM_PROGRAM_ID) -> Pubkey:
    return derive_address([USER_VOLUME_ACCUMULATOR_SEED, bytes(user)], program_id).address


def get_associated_token_address(
    owner: Pubkey,
    mint: Pubkey,
    token_program: Pubkey = TOKEN_PROGRAM_ID,
) -> Pubkey:
    return _spl_associated_token_address(owner=owner, mint=mint, token_program_id=token_program)
