from .core.dto import (
    BuyBaseInputQuote,
    BuyQuoteInputQuote,
    DepositQuote,
    DepositToken0Quote,
    GlobalConfig,
    Pool,
    PoolReserves,
    PoolTokenPrograms,
    SellBaseInputQuote,
    SellQuoteInputQuote,
    WithdrawQuote,
)
from .core.enums import DisableFlag, SwapDirection, SwapInput
from .core.events import (
    CompleteEvent,
    CreateEvent,
    PumpFunEvent,
    SetParamsEvent,
    TradeEvent,
    parse_event,
    parse_program_logs,
)
from .core.layouts import decode_global_config, decode_pool
from .services.amm import PumpAmm
from .services.fees import fee
from .services.liquidity import deposit_lp_token, deposit_token0, withdraw_lp_token
from .services.swap import buy_base_input, buy_quote_input, sell_base_input, sell_quote_input
