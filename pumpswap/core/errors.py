from __future__ import annotations


class PumpSwapError(Exception):
    """Base class for every error raised by pumpswap."""


class InvalidInputError(PumpSwapError, ValueError):
    pass


class SlippageOutOfRangeError(InvalidInputError):
    def __init__(self, slippage: int):
        super().__init__(f"Slippage must be between 0 and 100, got {slippage}")
        self.slippage = slippage


class PoolDepletedError(PumpSwapError):
    """Requested amount would consume the whole reserve."""


class ArithmeticFailure(PumpSwapError, ArithmeticError):
    def __init__(self, operation: str, context: str = ""):
        message = operation if not context else f"{operation}: {context}"
        super().__init__(message)
        self.operation = operation
        self.context = context


class MultiplicationOverflow(ArithmeticFailure):
    def __init__(self, context: str = ""):
        super().__init__("Multiplication overflow", context)


class AdditionOverflow(ArithmeticFailure):
    def __init__(self, context: str = ""):
        super().__init__("Addition overflow", context)


class SubtractionUnderflow(ArithmeticFailure):
    def __init__(self, context: str = ""):
        super().__init__("Subtraction underflow", context)


class DivisionByZero(ArithmeticFailure):
    def __init__(self, context: str = ""):
        super().__init__("Division by zero", context)


class CastOverflow(ArithmeticFailure):
    def __init__(self, context: str = ""):
        super().__init__("Value does not fit into u64", context)


class EventDecodeError(PumpSwapError):
    def __init__(self, message: str, *, signature: str = "", data: str = ""):
        super().__init__(message)
        self.signature = signature
        self.data = data


class InvalidBase64Error(EventDecodeError):
    pass


class DataTooShortError(EventDecodeError):
    pass


class UnknownEventError(EventDecodeError):
    pass


class RecordDecodeError(EventDecodeError):
    def __init__(self, record_name: str, reason: str, *, signature: str = "", data: str = ""):
        super().__init__(
            f"Failed to decode {record_name}: {reason}",
            signature=signature,
            data=data,
        )
        self.record_name = record_name


class AccountDecodeError(PumpSwapError, ValueError):
    pass


class OperationDisabledError(PumpSwapError):
    def __init__(self, operation: str):
        super().__init__(f"'{operation}' is disabled in the global config")
        self.operation = operation
