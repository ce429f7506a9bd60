"""Trading Intents - message schema between strategies, order management and execution."""

__version__ = "0.1.0"

from trading_intents.codec import (
    decode_amount,
    decode_identifier,
    decode_position_intent,
    decode_trade_intent,
    decode_trade_message,
    encode,
)
from trading_intents.errors import (
    DecodeError,
    IncompatibleAmountError,
    IntentError,
    InvalidBeforeAfter,
    InvalidCombination,
)
from trading_intents.position_intents import (
    All,
    Amount,
    Dollars,
    Identifier,
    PositionIntent,
    PositionIntentBuilder,
    Shares,
    Ticker,
    UpdatePolicy,
    Zero,
)
from trading_intents.trade_intents import (
    CancelTrade,
    Limit,
    Market,
    NewTrade,
    OrderType,
    Stop,
    StopLimit,
    TimeInForce,
    TradeIntent,
    TradeMessage,
    cancel_trade,
    new_trade,
)

__all__ = [
    "encode",
    "decode_amount",
    "decode_identifier",
    "decode_position_intent",
    "decode_trade_intent",
    "decode_trade_message",
    "IntentError",
    "IncompatibleAmountError",
    "InvalidBeforeAfter",
    "InvalidCombination",
    "DecodeError",
    "Amount",
    "Dollars",
    "Shares",
    "Zero",
    "Identifier",
    "Ticker",
    "All",
    "UpdatePolicy",
    "PositionIntent",
    "PositionIntentBuilder",
    "OrderType",
    "Market",
    "Limit",
    "Stop",
    "StopLimit",
    "TimeInForce",
    "TradeIntent",
    "TradeMessage",
    "NewTrade",
    "CancelTrade",
    "new_trade",
    "cancel_trade",
]
