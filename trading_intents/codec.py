"""JSON wire encoding for intents and trade messages.

Transports call ``encode`` to serialise any intent model and the ``decode_*``
helpers to read one back. Malformed payloads surface as ``DecodeError``,
never as a partially populated value.
"""

from __future__ import annotations

from typing import TypeVar

from loguru import logger
from pydantic import BaseModel, TypeAdapter, ValidationError

from trading_intents.errors import DecodeError, IntentError
from trading_intents.position_intents import (
    Amount,
    Identifier,
    PositionIntent,
    validate_position_constraints,
)
from trading_intents.trade_intents import TradeIntent, TradeMessage

T = TypeVar("T")

_AMOUNT: TypeAdapter[Amount] = TypeAdapter(Amount)
_IDENTIFIER: TypeAdapter[Identifier] = TypeAdapter(Identifier)
_POSITION_INTENT = TypeAdapter(PositionIntent)
_TRADE_INTENT = TypeAdapter(TradeIntent)
_TRADE_MESSAGE: TypeAdapter[TradeMessage] = TypeAdapter(TradeMessage)


def encode(value: BaseModel) -> str:
    """Serialise an intent model to compact JSON."""
    return value.model_dump_json()


def _decode(adapter: TypeAdapter[T], raw: str | bytes, kind: str) -> T:
    try:
        return adapter.validate_json(raw)
    except ValidationError as exc:
        logger.warning(f"Failed to decode {kind}: {exc.error_count()} validation error(s)")
        raise DecodeError(f"Invalid {kind} payload: {exc}") from exc


def decode_amount(raw: str | bytes) -> Amount:
    return _decode(_AMOUNT, raw, "amount")


def decode_identifier(raw: str | bytes) -> Identifier:
    return _decode(_IDENTIFIER, raw, "identifier")


def decode_position_intent(raw: str | bytes) -> PositionIntent:
    """Decode a position intent and hold it to the builder's rules.

    Raises:
        DecodeError: If the payload does not match the schema
        InvalidBeforeAfter: If the decoded bounds are inverted
        InvalidCombination: If ``All`` is paired with a non-zero amount
    """
    intent = _decode(_POSITION_INTENT, raw, "position intent")
    try:
        validate_position_constraints(
            intent.identifier, intent.amount, intent.before, intent.after
        )
    except IntentError as exc:
        logger.warning(f"Rejected decoded position intent {intent.id}: {exc}")
        raise
    return intent


def decode_trade_intent(raw: str | bytes) -> TradeIntent:
    return _decode(_TRADE_INTENT, raw, "trade intent")


def decode_trade_message(raw: str | bytes) -> TradeMessage:
    return _decode(_TRADE_MESSAGE, raw, "trade message")
