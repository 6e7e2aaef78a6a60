from enum import Enum


class SwapInput(str, Enum):
    base = "base"
    quote = "quote"


class SwapDirection(str, Enum):
    quote_to_base = "quote_to_base"  # buy
    base_to_quote = "base_to_quote"  # sell


class DisableFlag(int, Enum):
    create_pool = 0
    deposit = 1
    withdraw = 2
    buy = 3
    sell = 4
