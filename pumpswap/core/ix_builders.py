from typing import Final

from construct import ConstructError, Struct
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer
from spl.token.instructions import sync_native
from spl.token.models import SyncNativeParams

from .constants import (
    PUMP_AMM_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
    TOKEN_PROGRAM_2022_ID,
    ASSOCIATED_TOKEN_ACCOUNT_PROGRAM,
    SYS_PROGRAM_ID,
    NO_COIN_CREATOR,
    CREATE_POOL_DISCRIMINATOR,
    BUY_DISCRIMINATOR,
    SELL_DISCRIMINATOR,
    DEPOSIT_DISCRIMINATOR,
    WITHDRAW_DISCRIMINATOR,
    EXTEND_ACCOUNT_DISCRIMINATOR,
)
from .dto import Pool, PoolTokenPrograms
from .errors import InvalidInputError
from .layouts import BuyArgs, CreatePoolArgs, DepositArgs, SellArgs, WithdrawArgs
from .utils import (
    get_associated_token_address,
    get_coin_creator_vault_authority_pda,
    get_event_authority_pda,
    get_global_config_pda,
    get_lp_mint_pda,
    get_pool_pda,
)

DEFAULT_TOKEN_PROGRAMS: Final[PoolTokenPrograms] = PoolTokenPrograms(
    base_token_program=TOKEN_PROGRAM_ID,
    quote_token_program=TOKEN_PROGRAM_ID,
)


class AccountMetaBuilder:
    """Ordered account list; the order is part of the program's contract."""

    def __init__(self) -> None:
        self._metas: list[AccountMeta] = []

    def signer(self, pubkey: Pubkey, writable: bool = True) -> "AccountMetaBuilder":
        self._metas.append(AccountMeta(pubkey=pubkey, is_signer=True, is_writable=writable))
        return self

    def writable(self, pubkey: Pubkey) -> "AccountMetaBuilder":
        self._metas.append(AccountMeta(pubkey=pubkey, is_signer=False, is_writable=True))
        return self

    def readonly(self, pubkey: Pubkey) -> "AccountMetaBuilder":
        self._metas.append(AccountMeta(pubkey=pubkey, is_signer=False, is_writable=False))
        return self

    def build(self) -> list[AccountMeta]:
        return list(self._metas)

    def __len__(self) -> int:
        return len(self._metas)


def encode_instruction_data(discriminator: bytes, layout: Struct | None = None, **args) -> bytes:
    if layout is None:
        return bytes(discriminator)
    try:
        return bytes(discriminator) + layout.build(args)
    except ConstructError as e:
        raise InvalidInputError(f"Invalid instruction arguments {args}: {e}") from e


def build_create_pool_ix(
    *,
    creator: Pubkey,
    base_mint: Pubkey,
    quote_mint: Pubkey,
    index: int,
    base_amount_in: int,
    quote_amount_in: int,
    coin_creator: Pubkey = NO_COIN_CREATOR,
    token_programs: PoolTokenPrograms = DEFAULT_TOKEN_PROGRAMS,
) -> Instruction:
    data = encode_instruction_data(
        CREATE_POOL_DISCRIMINATOR,
        CreatePoolArgs,
        index=index,
        base_amount_in=base_amount_in,
        quote_amount_in=quote_amount_in,
        coin_creator=coin_creator,
    )
    pool = get_pool_pda(index, creator, base_mint, quote_mint)
    lp_mint = get_lp_mint_pda(pool)

    accounts = (
        AccountMetaBuilder()
        .writable(pool)  # pool
        .readonly(get_global_config_pda())  # global_config
        .signer(creator)  # creator
        .readonly(base_mint)  # base_mint
        .readonly(quote_mint)  # quote_mint
        .writable(lp_mint)  # lp_mint
        .writable(get_associated_token_address(creator, base_mint, token_programs.base_token_program))
        .writable(get_associated_token_address(creator, quote_mint, token_programs.quote_token_program))
        .writable(get_associated_token_address(creator, lp_mint, TOKEN_PROGRAM_2022_ID))  # user_pool_token_account
        .writable(get_associated_token_address(pool, base_mint, token_programs.base_token_program))
        .writable(get_associated_token_address(pool, quote_mint, token_programs.quote_token_program))
        .readonly(SYS_PROGRAM_ID)
        .readonly(TOKEN_PROGRAM_2022_ID)
        .readonly(token_programs.base_token_program)
        .readonly(token_programs.quote_token_program)
        .readonly(ASSOCIATED_TOKEN_ACCOUNT_PROGRAM)
        .readonly(get_event_authority_pda())
        .readonly(PUMP_AMM_PROGRAM_ID)
        .build()
    )
    return Instruction(program_id=PUMP_AMM_PROGRAM_ID, data=data, accounts=accounts)


def _swap_accounts(
    *,
    pool_address: Pubkey,
    pool: Pool,
    user: Pubkey,
    protocol_fee_recipient: Pubkey,
    token_programs: PoolTokenPrograms,
) -> list[AccountMeta]:
    base_program = token_programs.base_token_program
    quote_program = token_programs.quote_token_program
    vault_authority = get_coin_creator_vault_authority_pda(pool.coin_creator)

    return (
        AccountMetaBuilder()
        .writable(pool_address)  # pool
        .signer(user)  # user
        .readonly(get_global_config_pda())  # global_config
        .readonly(pool.base_mint)  # base_mint
        .readonly(pool.quote_mint)  # quote_mint
        .writable(get_associated_token_address(user, pool.base_mint, base_program))  # user_base_token_account
        .writable(get_associated_token_address(user, pool.quote_mint, quote_program))  # user_quote_token_account
        .writable(pool.pool_base_token_account)
        .writable(pool.pool_quote_token_account)
        .readonly(protocol_fee_recipient)
        .writable(get_associated_token_address(protocol_fee_recipient, pool.quote_mint, quote_program))
        .readonly(base_program)
        .readonly(quote_program)
        .readonly(SYS_PROGRAM_ID)
        .readonly(ASSOCIATED_TOKEN_ACCOUNT_PROGRAM)
        .readonly(get_event_authority_pda())
        .readonly(PUMP_AMM_PROGRAM_ID)
        .writable(get_associated_token_address(vault_authority, pool.quote_mint, quote_program))  # coin_creator_vault_ata
        .readonly(vault_authority)  # coin_creator_vault_authority
        .build()
    )


def build_buy_ix(
    *,
    pool_address: Pubkey,
    pool: Pool,
    user: Pubkey,
    protocol_fee_recipient: Pubkey,
    base_amount_out: int,
    max_quote_amount_in: int,
    token_programs: PoolTokenPrograms = DEFAULT_TOKEN_PROGRAMS,
) -> Instruction:
    data = encode_instruction_data(
        BUY_DISCRIMINATOR,
        BuyArgs,
        base_amount_out=base_amount_out,
        max_quote_amount_in=max_quote_amount_in,
    )
    accounts = _swap_accounts(
        pool_address=pool_address,
        pool=pool,
        user=user,
        protocol_fee_recipient=protocol_fee_recipient,
        token_programs=token_programs,
    )
    return Instruction(program_id=PUMP_AMM_PROGRAM_ID, data=data, accounts=accounts)


def build_sell_ix(
    *,
    pool_address: Pubkey,
    pool: Pool,
    user: Pubkey,
    protocol_fee_recipient: Pubkey,
    base_amount_in: int,
    min_quote_amount_out: int,
    token_programs: PoolTokenPrograms = DEFAULT_TOKEN_PROGRAMS,
) -> Instruction:
    data = encode_instruction_data(
        SELL_DISCRIMINATOR,
        SellArgs,
        base_amount_in=base_amount_in,
        min_quote_amount_out=min_quote_amount_out,
    )
    accounts = _swap_accounts(
        pool_address=pool_address,
        pool=pool,
        user=user,
        protocol_fee_recipient=protocol_fee_recipient,
        token_programs=token_programs,
    )
    return Instruction(program_id=PUMP_AMM_PROGRAM_ID, data=data, accounts=accounts)


def _liquidity_accounts(
    *,
    pool_address: Pubkey,
    pool: Pool,
    user: Pubkey,
    token_programs: PoolTokenPrograms,
) -> list[AccountMeta]:
    return (
        AccountMetaBuilder()
        .writable(pool_address)  # pool
        .readonly(get_global_config_pda())  # global_config
        .signer(user)  # user
        .readonly(pool.base_mint)
        .readonly(pool.quote_mint)
        .writable(pool.lp_mint)
        .writable(get_associated_token_address(user, pool.base_mint, token_programs.base_token_program))
        .writable(get_associated_token_address(user, pool.quote_mint, token_programs.quote_token_program))
        .writable(get_associated_token_address(user, pool.lp_mint, TOKEN_PROGRAM_2022_ID))  # user_pool_token_account
        .writable(pool.pool_base_token_account)
        .writable(pool.pool_quote_token_account)
        .readonly(TOKEN_PROGRAM_ID)
        .readonly(TOKEN_PROGRAM_2022_ID)
        .readonly(get_event_authority_pda())
        .readonly(PUMP_AMM_PROGRAM_ID)
        .build()
    )


def build_deposit_ix(
    *,
    pool_address: Pubkey,
    pool: Pool,
    user: Pubkey,
    lp_token_amount_out: int,
    max_base_amount_in: int,
    max_quote_amount_in: int,
    token_programs: PoolTokenPrograms = DEFAULT_TOKEN_PROGRAMS,
) -> Instruction:
    data = encode_instruction_data(
        DEPOSIT_DISCRIMINATOR,
        DepositArgs,
        lp_token_amount_out=lp_token_amount_out,
        max_base_amount_in=max_base_amount_in,
        max_quote_amount_in=max_quote_amount_in,
    )
    accounts = _liquidity_accounts(
        pool_address=pool_address, pool=pool, user=user, token_programs=token_programs
    )
    return Instruction(program_id=PUMP_AMM_PROGRAM_ID, data=data, accounts=accounts)


def build_withdraw_ix(
    *,
    pool_address: Pubkey,
    pool: Pool,
    user: Pubkey,
    lp_token_amount_in: int,
    min_base_amount_out: int,
    min_quote_amount_out: int,
    token_programs: PoolTokenPrograms = DEFAULT_TOKEN_PROGRAMS,
) -> Instruction:
    data = encode_instruction_data(
        WITHDRAW_DISCRIMINATOR,
        WithdrawArgs,
        lp_token_amount_in=lp_token_amount_in,
        min_base_amount_out=min_base_amount_out,
        min_quote_amount_out=min_quote_amount_out,
    )
    accounts = _liquidity_accounts(
        pool_address=pool_address, pool=pool, user=user, token_programs=token_programs
    )
    return Instruction(program_id=PUMP_AMM_PROGRAM_ID, data=data, accounts=accounts)


def build_extend_account_ix(*, account: Pubkey, user: Pubkey) -> Instruction:
    accounts = (
        AccountMetaBuilder()
        .writable(account)  # account
        .signer(user)  # user
        .readonly(SYS_PROGRAM_ID)
        .readonly(get_event_authority_pda())
        .readonly(PUMP_AMM_PROGRAM_ID)
        .build()
    )
    return Instruction(
        program_id=PUMP_AMM_PROGRAM_ID,
        data=encode_instruction_data(EXTEND_ACCOUNT_DISCRIMINATOR),
        accounts=accounts,
    )


def wrap_sol_instructions(user: Pubkey, wsol_account: Pubkey, lamports: int) -> list[Instruction]:
    """Top up an existing WSOL token account: system transfer, then SyncNative."""
    if lamports == 0:
        return []
    return [
        transfer(TransferParams(from_pubkey=user, to_pubkey=wsol_account, lamports=lamports)),
        # WSOL always lives under the classic token program
        sync_native(SyncNativeParams(program_id=TOKEN_PROGRAM_ID, account=wsol_account)),
    ]
