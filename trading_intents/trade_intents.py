"""Trade intents: concrete order requests and the messages that carry them."""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Literal, Union
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)


class Market(BaseModel):
    """Market order."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    order_type: Literal["market"] = "market"


class Limit(BaseModel):
    """Limit order."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    order_type: Literal["limit"] = "limit"
    limit_price: Decimal


class Stop(BaseModel):
    """Stop order."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    order_type: Literal["stop"] = "stop"
    stop_price: Decimal


class StopLimit(BaseModel):
    """Stop order that becomes a limit order once triggered."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    order_type: Literal["stop_limit"] = "stop_limit"
    stop_price: Decimal
    limit_price: Decimal


OrderType = Annotated[Union[Market, Limit, Stop, StopLimit], Field(discriminator="order_type")]

_ORDER_PRICE_FIELDS = ("limit_price", "stop_price")


class TimeInForce(str, Enum):
    """Order time-in-force, valued by its wire code."""

    GOOD_TIL_CANCELED = "gtc"
    DAY = "day"
    IMMEDIATE_OR_CANCEL = "ioc"
    FILL_OR_KILL = "fok"
    ON_OPEN = "opg"
    ON_CLOSE = "cls"


class TradeIntent(BaseModel):
    """A concrete order request.

    ``qty`` is signed: positive buys, negative sells. No venue rules are
    checked here, that is left to the execution layer.

    On the wire the order type is flattened into the intent, so a stop-limit
    order reads ``{"order_type": "stop_limit", "stop_price": ..., "limit_price": ...}``
    alongside the other fields.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    ticker: str
    qty: int = Field(
        ..., strict=True, description="Signed quantity (positive=buy, negative=sell)"
    )
    order_type: OrderType
    time_in_force: TimeInForce

    @model_validator(mode="before")
    @classmethod
    def nest_order_type(cls, data: Any) -> Any:
        if not isinstance(data, dict) or not isinstance(data.get("order_type"), str):
            return data
        data = dict(data)
        order: dict[str, Any] = {"order_type": data.pop("order_type")}
        for key in _ORDER_PRICE_FIELDS:
            if key in data:
                order[key] = data.pop(key)
        data["order_type"] = order
        return data

    @model_serializer(mode="wrap")
    def flatten_order_type(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        order = data.pop("order_type")
        time_in_force = data.pop("time_in_force")
        data.update(order)
        data["time_in_force"] = time_in_force
        return data

    @classmethod
    def new(
        cls, ticker: str, qty: int, *, id_factory: Callable[[], UUID] = uuid4
    ) -> TradeIntent:
        """Create a market order good for the day."""
        return cls(
            id=id_factory(),
            ticker=ticker,
            qty=qty,
            order_type=Market(),
            time_in_force=TimeInForce.DAY,
        )

    def with_id(self, intent_id: UUID) -> TradeIntent:
        return self.model_copy(update={"id": intent_id})

    def with_order_type(self, order_type: OrderType) -> TradeIntent:
        return self.model_copy(update={"order_type": order_type})

    def with_time_in_force(self, time_in_force: TimeInForce) -> TradeIntent:
        return self.model_copy(update={"time_in_force": time_in_force})

    @property
    def is_buy(self) -> bool:
        return self.qty > 0

    @property
    def is_sell(self) -> bool:
        return self.qty < 0


class NewTrade(BaseModel):
    """Submit a trade intent to the execution layer."""

    model_config = ConfigDict(frozen=True)

    action: Literal["new"] = "new"
    intent: TradeIntent

    @property
    def intent_id(self) -> UUID:
        return self.intent.id


class CancelTrade(BaseModel):
    """Cancel a previously submitted trade intent."""

    model_config = ConfigDict(frozen=True)

    action: Literal["cancel"] = "cancel"
    id: UUID

    @property
    def intent_id(self) -> UUID:
        return self.id


TradeMessage = Annotated[Union[NewTrade, CancelTrade], Field(discriminator="action")]


def new_trade(intent: TradeIntent) -> NewTrade:
    """Wrap ``intent`` for submission."""
    return NewTrade(intent=intent)


def cancel_trade(intent_id: UUID) -> CancelTrade:
    """Build a cancel message for a submitted intent."""
    return CancelTrade(id=intent_id)
