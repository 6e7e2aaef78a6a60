import base64
import binascii
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Union

from construct import ConstructError, Struct, Terminated
from solders.pubkey import Pubkey

from .constants import (
    COMPLETE_EVENT_DISCRIMINATOR,
    CREATE_EVENT_DISCRIMINATOR,
    PROGRAM_DATA_PREFIX,
    SET_PARAMS_EVENT_DISCRIMINATOR,
    TRADE_EVENT_DISCRIMINATOR,
)
from .errors import (
    DataTooShortError,
    EventDecodeError,
    InvalidBase64Error,
    RecordDecodeError,
    UnknownEventError,
)
from .layouts import (
    CompleteEventLayout,
    CreateEventLayout,
    SetParamsEventLayout,
    TradeEventLayout,
)
from .logger import get_logger

logger = get_logger("events")


@dataclass(frozen=True, slots=True)
class CreateEvent:
    name: str
    symbol: str
    uri: str
    mint: Pubkey
    bonding_curve: Pubkey
    user: Pubkey
    creator: Pubkey
    timestamp: int
    virtual_sol_reserves: int
    virtual_token_reserves: int
    real_sol_reserves: int
    real_token_reserves: int


@dataclass(frozen=True, slots=True)
class TradeEvent:
    mint: Pubkey
    sol_amount: int
    token_amount: int
    is_buy: bool
    user: Pubkey
    timestamp: int
    virtual_sol_reserves: int
    virtual_token_reserves: int
    real_sol_reserves: int
    real_token_reserves: int
    fee_recipient: Pubkey
    fee_basis_points: int
    fee: int
    creator: Pubkey
    creator_fee_basis_points: int
    creator_fee: int


@dataclass(frozen=True, slots=True)
class CompleteEvent:
    user: Pubkey
    mint: Pubkey
    bonding_curve: Pubkey
    timestamp: int


@dataclass(frozen=True, slots=True)
class SetParamsEvent:
    fee_recipient: Pubkey
    initial_virtual_token_reserves: int
    initial_virtual_sol_reserves: int
    initial_real_token_reserves: int
    token_total_supply: int
    fee_basis_points: int


PumpFunEvent = Union[CreateEvent, TradeEvent, CompleteEvent, SetParamsEvent]


def _whole_record(layout: Struct) -> Struct:
    return Struct("body" / layout, Terminated)


_EVENTS: dict[bytes, tuple[str, Struct, type]] = {
    CREATE_EVENT_DISCRIMINATOR: ("CreateEvent", _whole_record(CreateEventLayout), CreateEvent),
    TRADE_EVENT_DISCRIMINATOR: ("TradeEvent", _whole_record(TradeEventLayout), TradeEvent),
    COMPLETE_EVENT_DISCRIMINATOR: ("CompleteEvent", _whole_record(CompleteEventLayout), CompleteEvent),
    SET_PARAMS_EVENT_DISCRIMINATOR: ("SetParamsEvent", _whole_record(SetParamsEventLayout), SetParamsEvent),
}


def parse_event(signature: str, data: str) -> PumpFunEvent:
    """
    Decode one base64 ``Program data`` record into a typed event.

    The first 8 bytes select the record type, the rest is its Borsh body.
    Bytes left over after the body make the record invalid.
    """
    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidBase64Error(
            f"Invalid base64 in event data: {e}", signature=signature, data=data
        ) from e

    if len(raw) < 8:
        raise DataTooShortError(
            f"Event data is too short: {len(raw)} bytes", signature=signature, data=data
        )

    entry = _EVENTS.get(raw[:8])
    if entry is None:
        raise UnknownEventError(
            f"Unknown event discriminator {raw[:8].hex()} in transaction {signature}",
            signature=signature,
            data=data,
        )

    record_name, layout, event_cls = entry
    try:
        parsed = layout.parse(raw[8:]).body
    except (ConstructError, UnicodeDecodeError) as e:
        raise RecordDecodeError(record_name, str(e), signature=signature, data=data) from e

    fields = {k: v for k, v in parsed.items() if not k.startswith("_")}
    return event_cls(**fields)


def parse_program_logs(
    signature: str, logs: Iterable[str]
) -> Iterator[tuple[str, Optional[PumpFunEvent], Optional[EventDecodeError]]]:
    """
    Yield ``(signature, event, error)`` for every ``Program data:`` line.

    Exactly one of ``event``/``error`` is set. Undecodable records are logged
    and handed back so a stream consumer can keep going.
    """
    for line in logs:
        if not line.startswith(PROGRAM_DATA_PREFIX):
            continue
        payload = line[len(PROGRAM_DATA_PREFIX):].strip()
        try:
            event = parse_event(signature, payload)
        except EventDecodeError as e:
            logger.warning(
                "Skipping undecodable program data",
                signature=signature,
                error_type=type(e).__name__,
                error=str(e),
            )
            yield signature, None, e
        else:
            yield signature, event, None
