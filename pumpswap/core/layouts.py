from construct import (
    Adapter,
    Array,
    Bytes,
    ConstructError,
    ExprValidator,
    Int8ul,
    Int16ul,
    Int32ul,
    Int64sl,
    Int64ul,
    PascalString,
    Struct,
    obj_,
)
from construct import Optional as OptionalField
from solders.pubkey import Pubkey

from .constants import (
    GLOBAL_CONFIG_ACCOUNT_DISCRIMINATOR,
    NO_COIN_CREATOR,
    POOL_ACCOUNT_DISCRIMINATOR,
    PROTOCOL_FEE_RECIPIENTS_COUNT,
)
from .dto import GlobalConfig, Pool
from .errors import AccountDecodeError


class PubkeyAdapter(Adapter):
    def _decode(self, obj, context, path):
        return Pubkey.from_bytes(obj)

    def _encode(self, obj, context, path):
        return bytes(obj)


class BoolAdapter(Adapter):
    def _decode(self, obj, context, path):
        return obj == 1

    def _encode(self, obj, context, path):
        return 1 if obj else 0


PUBKEY_LAYOUT = PubkeyAdapter(Bytes(32))
# borsh bool, any byte other than 0 or 1 is rejected
BORSH_BOOL = BoolAdapter(ExprValidator(Int8ul, obj_ <= 1))
BORSH_STRING = PascalString(Int32ul, "utf8")

# instruction args, discriminator excluded

CreatePoolArgs = Struct(
    "index" / Int16ul,
    "base_amount_in" / Int64ul,
    "quote_amount_in" / Int64ul,
    "coin_creator" / PUBKEY_LAYOUT,
)

BuyArgs = Struct(
    "base_amount_out" / Int64ul,
    "max_quote_amount_in" / Int64ul,
)

SellArgs = Struct(
    "base_amount_in" / Int64ul,
    "min_quote_amount_out" / Int64ul,
)

DepositArgs = Struct(
    "lp_token_amount_out" / Int64ul,
    "max_base_amount_in" / Int64ul,
    "max_quote_amount_in" / Int64ul,
)

WithdrawArgs = Struct(
    "lp_token_amount_in" / Int64ul,
    "min_base_amount_out" / Int64ul,
    "min_quote_amount_out" / Int64ul,
)

# event bodies, discriminator excluded

CreateEventLayout = Struct(
    "name" / BORSH_STRING,
    "symbol" / BORSH_STRING,
    "uri" / BORSH_STRING,
    "mint" / PUBKEY_LAYOUT,
    "bonding_curve" / PUBKEY_LAYOUT,
    "user" / PUBKEY_LAYOUT,
    "creator" / PUBKEY_LAYOUT,
    "timestamp" / Int64sl,
    "virtual_sol_reserves" / Int64ul,
    "virtual_token_reserves" / Int64ul,
    "real_sol_reserves" / Int64ul,
    "real_token_reserves" / Int64ul,
)

TradeEventLayout = Struct(
    "mint" / PUBKEY_LAYOUT,
    "sol_amount" / Int64ul,
    "token_amount" / Int64ul,
    "is_buy" / BORSH_BOOL,
    "user" / PUBKEY_LAYOUT,
    "timestamp" / Int64sl,
    "virtual_sol_reserves" / Int64ul,
    "virtual_token_reserves" / Int64ul,
    "real_sol_reserves" / Int64ul,
    "real_token_reserves" / Int64ul,
    "fee_recipient" / PUBKEY_LAYOUT,
    "fee_basis_points" / Int64ul,
    "fee" / Int64ul,
    "creator" / PUBKEY_LAYOUT,
    "creator_fee_basis_points" / Int64ul,
    "creator_fee" / Int64ul,
)

CompleteEventLayout = Struct(
    "user" / PUBKEY_LAYOUT,
    "mint" / PUBKEY_LAYOUT,
    "bonding_curve" / PUBKEY_LAYOUT,
    "timestamp" / Int64sl,
)

SetParamsEventLayout = Struct(
    "fee_recipient" / PUBKEY_LAYOUT,
    "initial_virtual_token_reserves" / Int64ul,
    "initial_virtual_sol_reserves" / Int64ul,
    "initial_real_token_reserves" / Int64ul,
    "token_total_supply" / Int64ul,
    "fee_basis_points" / Int64ul,
)

# accounts; trailing fields are missing on accounts created before the coin-creator upgrade

GlobalConfigLayout = Struct(
    "admin" / PUBKEY_LAYOUT,
    "lp_fee_basis_points" / Int64ul,
    "protocol_fee_basis_points" / Int64ul,
    "disable_flags" / Int8ul,
    "protocol_fee_recipients" / Array(PROTOCOL_FEE_RECIPIENTS_COUNT, PUBKEY_LAYOUT),
    "coin_creator_fee_basis_points" / OptionalField(Int64ul),
)

PoolLayout = Struct(
    "pool_bump" / Int8ul,
    "index" / Int16ul,
    "creator" / PUBKEY_LAYOUT,
    "base_mint" / PUBKEY_LAYOUT,
    "quote_mint" / PUBKEY_LAYOUT,
    "lp_mint" / PUBKEY_LAYOUT,
    "pool_base_token_account" / PUBKEY_LAYOUT,
    "pool_quote_token_account" / PUBKEY_LAYOUT,
    "lp_supply" / Int64ul,
    "coin_creator" / OptionalField(PUBKEY_LAYOUT),
)


def _account_body(data: bytes, discriminator: bytes, name: str) -> bytes:
    data = bytes(data)
    if len(data) < 8:
        raise AccountDecodeError(f"{name} account data is too short: {len(data)} bytes")
    if data[:8] != discriminator:
        raise AccountDecodeError(f"Invalid {name} account discriminator: {data[:8].hex()}")
    return data[8:]


def decode_global_config(data: bytes) -> GlobalConfig:
    body = _account_body(data, GLOBAL_CONFIG_ACCOUNT_DISCRIMINATOR, "GlobalConfig")
    try:
        parsed = GlobalConfigLayout.parse(body)
    except ConstructError as e:
        raise AccountDecodeError(f"Failed to decode GlobalConfig: {e}") from e

    return GlobalConfig(
        admin=parsed.admin,
        lp_fee_basis_points=parsed.lp_fee_basis_points,
        protocol_fee_basis_points=parsed.protocol_fee_basis_points,
        disable_flags=parsed.disable_flags,
        protocol_fee_recipients=tuple(parsed.protocol_fee_recipients),
        coin_creator_fee_basis_points=(
            parsed.coin_creator_fee_basis_points
            if parsed.coin_creator_fee_basis_points is not None
            else 0
        ),
    )


def decode_pool(data: bytes) -> Pool:
    body = _account_body(data, POOL_ACCOUNT_DISCRIMINATOR, "Pool")
    try:
        parsed = PoolLayout.parse(body)
    except ConstructError as e:
        raise AccountDecodeError(f"Failed to decode Pool: {e}") from e

    return Pool(
        pool_bump=parsed.pool_bump,
        index=parsed.index,
        creator=parsed.creator,
        base_mint=parsed.base_mint,
        quote_mint=parsed.quote_mint,
        lp_mint=parsed.lp_mint,
        pool_base_token_account=parsed.pool_base_token_account,
        pool_quote_token_account=parsed.pool_quote_token_account,
        lp_supply=parsed.lp_supply,
        coin_creator=parsed.coin_creator if parsed.coin_creator is not None else NO_COIN_CREATOR,
    )
