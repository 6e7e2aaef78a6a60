from typing import Final

from solders.pubkey import Pubkey

PUMP_AMM_PROGRAM_ID = Pubkey.from_string("pAMMBay6oceH9fJKBRHGP5D4bD4sWpmSwMn52FMfXEA")
PUMP_PROGRAM_ID = Pubkey.from_string("6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBEwF6P")

TOKEN_PROGRAM_ID = Pubkey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
TOKEN_PROGRAM_2022_ID = Pubkey.from_string("TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb")
ASSOCIATED_TOKEN_ACCOUNT_PROGRAM = Pubkey.from_string("ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL")
SYS_PROGRAM_ID = Pubkey.from_string("11111111111111111111111111111111")

SOL_WRAPPED_MINT = Pubkey.from_string("So11111111111111111111111111111111111111112")

# all-zero key, same bytes as the system program id; unused protocol fee recipient slots hold it
ZERO_PUBKEY: Final[Pubkey] = Pubkey.default()
# pool field value for "no coin creator fee"
NO_COIN_CREATOR: Final[Pubkey] = ZERO_PUBKEY

GLOBAL_CONFIG_SEED: Final[bytes] = b"global_config"
POOL_SEED: Final[bytes] = b"pool"
POOL_LP_MINT_SEED: Final[bytes] = b"pool_lp_mint"
POOL_AUTHORITY_SEED: Final[bytes] = b"pool-authority"
EVENT_AUTHORITY_SEED: Final[bytes] = b"__event_authority"
CREATOR_VAULT_SEED: Final[bytes] = b"creator_vault"
USER_VOLUME_ACCUMULATOR_SEED: Final[bytes] = b"user_volume_accumulator"

CREATE_POOL_DISCRIMINATOR: Final[bytes] = bytes([233, 146, 209, 142, 207, 104, 64, 188])
BUY_DISCRIMINATOR: Final[bytes] = bytes([102, 6, 61, 18, 1, 218, 235, 234])
SELL_DISCRIMINATOR: Final[bytes] = bytes([51, 230, 133, 164, 1, 127, 131, 173])
DEPOSIT_DISCRIMINATOR: Final[bytes] = bytes([242, 35, 198, 137, 82, 225, 242, 182])
WITHDRAW_DISCRIMINATOR: Final[bytes] = bytes([183, 18, 70, 156, 148, 109, 161, 34])
EXTEND_ACCOUNT_DISCRIMINATOR: Final[bytes] = bytes([234, 102, 194, 203, 150, 72, 62, 229])

CREATE_EVENT_DISCRIMINATOR: Final[bytes] = bytes([27, 114, 169, 77, 222, 235, 99, 118])
TRADE_EVENT_DISCRIMINATOR: Final[bytes] = bytes([189, 219, 127, 211, 78, 230, 97, 238])
COMPLETE_EVENT_DISCRIMINATOR: Final[bytes] = bytes([95, 114, 97, 156, 212, 46, 152, 8])
SET_PARAMS_EVENT_DISCRIMINATOR: Final[bytes] = bytes([223, 195, 159, 246, 62, 48, 143, 131])

POOL_ACCOUNT_DISCRIMINATOR: Final[bytes] = bytes.fromhex("f19a6d0411b16dbc")
GLOBAL_CONFIG_ACCOUNT_DISCRIMINATOR: Final[bytes] = bytes.fromhex("95089ccaa0fcb0d9")

PROGRAM_DATA_PREFIX: Final[str] = "Program data: "

MAX_FEE_BASIS_POINTS: Final[int] = 10_000
SLIPPAGE_PRECISION: Final[int] = 1_000_000_000
MAX_SLIPPAGE: Final[int] = 100

U16_MAX: Final[int] = 2 ** 16 - 1
U64_MAX: Final[int] = 2 ** 64 - 1
U128_MAX: Final[int] = 2 ** 128 - 1

# pools created before the coin-creator upgrade must be extended to this size
POOL_ACCOUNT_SIZE: Final[int] = 300

PROTOCOL_FEE_RECIPIENTS_COUNT: Final[int] = 8
