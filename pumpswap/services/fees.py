"""
Checked integer arithmetic and the basis-point fee shared by every quote.

Python ints never overflow, so the u64/u128 widths used on-chain are enforced
explicitly: each helper raises a named ArithmeticFailure instead of wrapping,
saturating or truncating.
"""
from ..core.constants import (
    MAX_FEE_BASIS_POINTS,
    MAX_SLIPPAGE,
    SLIPPAGE_PRECISION,
    U64_MAX,
    U128_MAX,
)
from ..core.errors import (
    AdditionOverflow,
    CastOverflow,
    DivisionByZero,
    InvalidInputError,
    MultiplicationOverflow,
    SlippageOutOfRangeError,
    SubtractionUnderflow,
)


def checked_add(a: int, b: int, *, limit: int = U128_MAX, context: str = "") -> int:
    result = a + b
    if result > limit:
        raise AdditionOverflow(context)
    return result


def checked_sub(a: int, b: int, *, context: str = "") -> int:
    if b > a:
        raise SubtractionUnderflow(context)
    return a - b


def checked_mul(a: int, b: int, *, limit: int = U128_MAX, context: str = "") -> int:
    result = a * b
    if result > limit:
        raise MultiplicationOverflow(context)
    return result


def checked_div(a: int, b: int, *, context: str = "") -> int:
    if b == 0:
        raise DivisionByZero(context)
    return a // b


def ceil_div(a: int, b: int, *, context: str = "") -> int:
    if b == 0:
        raise DivisionByZero(context)
    return -(-a // b)


def to_u64(value: int, *, context: str = "") -> int:
    if value > U64_MAX:
        raise CastOverflow(context)
    return value


def require_u64(name: str, value: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidInputError(f"Invalid input: '{name}' must be an integer")
    if value < 0 or value > U64_MAX:
        raise InvalidInputError(f"Invalid input: '{name}' must fit into u64, got {value}")
    return value


def require_fee_bps(name: str, value: int) -> int:
    require_u64(name, value)
    if value > MAX_FEE_BASIS_POINTS:
        raise InvalidInputError(
            f"Invalid input: '{name}' must be at most {MAX_FEE_BASIS_POINTS} bps, got {value}"
        )
    return value


def require_slippage(slippage: int) -> int:
    if not isinstance(slippage, int) or isinstance(slippage, bool):
        raise InvalidInputError("Invalid input: 'slippage' must be an integer")
    if slippage < 0 or slippage > MAX_SLIPPAGE:
        raise SlippageOutOfRangeError(slippage)
    return slippage


def fee(amount: int, fee_bps: int) -> int:
    """Fee on ``amount`` in basis points, rounded up."""
    product = checked_mul(amount, fee_bps, context="fee calculation")
    return to_u64(
        ceil_div(product, MAX_FEE_BASIS_POINTS, context="fee denominator"),
        context="fee",
    )


def apply_slippage_up(amount: int, slippage: int) -> int:
    """Upper bound the caller is willing to pay."""
    factor = (MAX_SLIPPAGE + slippage) * SLIPPAGE_PRECISION // MAX_SLIPPAGE
    scaled = checked_mul(amount, factor, context="slippage calculation")
    return to_u64(
        checked_div(scaled, SLIPPAGE_PRECISION, context="slippage division"),
        context="slippage bound",
    )


def apply_slippage_down(amount: int, slippage: int) -> int:
    """Lower bound the caller is willing to accept."""
    factor = (MAX_SLIPPAGE - slippage) * SLIPPAGE_PRECISION // MAX_SLIPPAGE
    scaled = checked_mul(amount, factor, context="slippage calculation")
    return checked_div(scaled, SLIPPAGE_PRECISION, context="slippage division")
