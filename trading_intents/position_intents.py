"""Position intents: a strategy's request to hold a target position.

A ``PositionIntent`` is produced by a strategy and consumed by the
order-manager, which reconciles it against open positions. Sizes are
expressed through the ``Amount`` union and merged with ``Amount.merge``,
which never mixes dollars with shares.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from decimal import MAX_PREC, Decimal, localcontext
from enum import Enum
from typing import Annotated, Any, ClassVar, Union
from uuid import UUID, uuid4

from loguru import logger
from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    RootModel,
    SerializerFunctionWrapHandler,
    Tag,
    field_validator,
    model_serializer,
    model_validator,
)

from trading_intents.errors import (
    IncompatibleAmountError,
    IntentError,
    InvalidBeforeAfter,
    InvalidCombination,
)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Normalise a datetime to UTC, treating naive values as UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _exact_sum(left: Decimal, right: Decimal) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = MAX_PREC
        return left + right


class UpdatePolicy(str, Enum):
    """How a new intent reconciles with an existing position for the same target."""

    RETAIN = "retain"
    RETAIN_LONG = "retain_long"
    RETAIN_SHORT = "retain_short"
    UPDATE = "update"


# Amount ---------------------------------------------------------------------


class _AmountBase:
    """Shared behaviour of the ``Amount`` variants."""

    def merge(self, other: Amount) -> Amount:
        """Combine two amounts of the same unit.

        ``Zero`` is the identity on either side. Merging ``Dollars`` with
        ``Shares`` raises ``IncompatibleAmountError``.
        """
        if isinstance(self, Zero):
            return other
        if isinstance(other, Zero):
            return self  # type: ignore[return-value]
        if isinstance(self, _QuantityAmount) and type(self) is type(other):
            return type(self)(_exact_sum(self.root, other.root))  # type: ignore[attr-defined]
        raise IncompatibleAmountError(self, other)  # type: ignore[arg-type]


class _QuantityAmount(_AmountBase, RootModel[Decimal]):
    model_config = ConfigDict(frozen=True)

    tag: ClassVar[str]

    @model_validator(mode="before")
    @classmethod
    def unwrap_tag(cls, data: Any) -> Any:
        if isinstance(data, dict) and cls.tag in data:
            return data[cls.tag]
        return data

    @model_serializer(mode="plain")
    def wrap_tag(self) -> dict[str, Decimal]:
        return {self.tag: self.root}

    @property
    def value(self) -> Decimal:
        return self.root

    def is_zero(self) -> bool:
        return self.root.is_zero()

    def is_sign_positive(self) -> bool:
        return not self.root.is_signed()

    def is_sign_negative(self) -> bool:
        return self.root.is_signed()


class Dollars(_QuantityAmount):
    """Target size expressed as dollar exposure."""

    tag: ClassVar[str] = "dollars"


class Shares(_QuantityAmount):
    """Target size expressed as a share count."""

    tag: ClassVar[str] = "shares"


class Zero(_AmountBase, BaseModel):
    """No position. Identity element for ``merge`` and carries no sign."""

    model_config = ConfigDict(frozen=True)

    tag: ClassVar[str] = "zero"

    @model_validator(mode="before")
    @classmethod
    def from_tag(cls, data: Any) -> Any:
        if data == cls.tag:
            return {}
        return data

    @model_serializer(mode="plain")
    def to_tag(self) -> str:
        return self.tag

    def is_zero(self) -> bool:
        return True

    def is_sign_positive(self) -> bool:
        return False

    def is_sign_negative(self) -> bool:
        return False


def _external_tag(base: type) -> Callable[[Any], str | None]:
    """Build a discriminator for externally tagged unions.

    Unit variants travel as a bare string tag, payload variants as a
    single-key object keyed by the tag.
    """

    def discriminate(value: Any) -> str | None:
        if isinstance(value, base):
            return value.tag  # type: ignore[attr-defined]
        if isinstance(value, str):
            return value
        if isinstance(value, dict) and len(value) == 1:
            return next(iter(value))
        return None

    return discriminate


Amount = Annotated[
    Union[
        Annotated[Dollars, Tag("dollars")],
        Annotated[Shares, Tag("shares")],
        Annotated[Zero, Tag("zero")],
    ],
    Discriminator(_external_tag(_AmountBase)),
]


# Identifier -----------------------------------------------------------------


class _IdentifierBase:
    """Marker shared by the ``Identifier`` variants."""


class Ticker(_IdentifierBase, RootModel[str]):
    """A single symbol."""

    model_config = ConfigDict(frozen=True)

    tag: ClassVar[str] = "ticker"

    @model_validator(mode="before")
    @classmethod
    def unwrap_tag(cls, data: Any) -> Any:
        if isinstance(data, dict) and cls.tag in data:
            return data[cls.tag]
        return data

    @model_serializer(mode="plain")
    def wrap_tag(self) -> dict[str, str]:
        return {self.tag: self.root}

    @property
    def symbol(self) -> str:
        return self.root


class All(_IdentifierBase, BaseModel):
    """Every position held by the strategy."""

    model_config = ConfigDict(frozen=True)

    tag: ClassVar[str] = "all"

    @model_validator(mode="before")
    @classmethod
    def from_tag(cls, data: Any) -> Any:
        if data == cls.tag:
            return {}
        return data

    @model_serializer(mode="plain")
    def to_tag(self) -> str:
        return self.tag


Identifier = Annotated[
    Union[Annotated[Ticker, Tag("ticker")], Annotated[All, Tag("all")]],
    Discriminator(_external_tag(_IdentifierBase)),
]


def as_identifier(value: Identifier | str) -> Identifier:
    """Return ``value`` if it is an identifier, otherwise wrap it as a ``Ticker``."""
    if isinstance(value, _IdentifierBase):
        return value  # type: ignore[return-value]
    return Ticker(str(value))


# Position intent ------------------------------------------------------------

_OMIT_WHEN_ABSENT = frozenset(
    {"sub_strategy", "decision_price", "limit_price", "stop_price", "before", "after"}
)


def validate_position_constraints(
    identifier: Identifier,
    amount: Amount,
    before: datetime | None,
    after: datetime | None,
) -> None:
    """Check the cross-field rules every position intent must satisfy.

    Raises:
        InvalidBeforeAfter: If both bounds are set and ``before`` precedes ``after``
        InvalidCombination: If ``All`` is paired with ``Dollars`` or ``Shares``
    """
    if before is not None and after is not None and before < after:
        raise InvalidBeforeAfter(before, after)
    if isinstance(identifier, All) and not isinstance(amount, Zero):
        raise InvalidCombination()


class PositionIntent(BaseModel):
    """A validated request to hold a position.

    Build instances through ``PositionIntent.builder`` so the cross-field
    rules are checked before anything is handed to a consumer.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    strategy: str = Field(
        ...,
        description="Requesting strategy. Dollar limits are shared by all its positions",
    )
    sub_strategy: str | None = Field(
        default=None,
        description="Leg of the strategy tracked separately, still bound by strategy limits",
    )
    timestamp: datetime
    identifier: Identifier
    amount: Amount
    update_policy: UpdatePolicy
    decision_price: Decimal | None = Field(
        default=None,
        description="Price when the decision was made, for execution analysis",
    )
    limit_price: Decimal | None = None
    stop_price: Decimal | None = None
    before: datetime | None = None
    after: datetime | None = None

    @field_validator("timestamp", "before", "after")
    @classmethod
    def normalise_utc(cls, value: datetime | None) -> datetime | None:
        return None if value is None else as_utc(value)

    @model_serializer(mode="wrap")
    def omit_absent(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        return {
            key: value
            for key, value in data.items()
            if not (value is None and key in _OMIT_WHEN_ABSENT)
        }

    @classmethod
    def builder(
        cls, strategy: str, identifier: Identifier | str, amount: Amount
    ) -> PositionIntentBuilder:
        """Start building an intent for ``strategy`` targeting ``identifier``."""
        return PositionIntentBuilder(strategy, identifier, amount)


class PositionIntentBuilder:
    """Stages the optional fields of a ``PositionIntent`` before validation.

    Every setter returns the builder so calls can be chained. Nothing is
    validated until ``build``.
    """

    def __init__(self, strategy: str, identifier: Identifier | str, amount: Amount) -> None:
        self._strategy = strategy
        self._identifier = as_identifier(identifier)
        self._amount = amount
        self._update_policy = UpdatePolicy.UPDATE
        self._sub_strategy: str | None = None
        self._decision_price: Decimal | None = None
        self._limit_price: Decimal | None = None
        self._stop_price: Decimal | None = None
        self._before: datetime | None = None
        self._after: datetime | None = None

    def sub_strategy(self, sub_strategy: str) -> PositionIntentBuilder:
        self._sub_strategy = sub_strategy
        return self

    def decision_price(self, decision_price: Decimal) -> PositionIntentBuilder:
        self._decision_price = decision_price
        return self

    def limit_price(self, limit_price: Decimal) -> PositionIntentBuilder:
        self._limit_price = limit_price
        return self

    def stop_price(self, stop_price: Decimal) -> PositionIntentBuilder:
        self._stop_price = stop_price
        return self

    def before(self, before: datetime) -> PositionIntentBuilder:
        """Latest time the consumer may act on the intent."""
        self._before = as_utc(before)
        return self

    def after(self, after: datetime) -> PositionIntentBuilder:
        """Earliest time the consumer may act on the intent."""
        self._after = as_utc(after)
        return self

    def update_policy(self, policy: UpdatePolicy) -> PositionIntentBuilder:
        self._update_policy = policy
        return self

    def build(
        self,
        *,
        id_factory: Callable[[], UUID] = uuid4,
        clock: Callable[[], datetime] = utc_now,
    ) -> PositionIntent:
        """Validate the staged fields and produce the intent.

        Args:
            id_factory: Source of the intent id
            clock: Source of the creation timestamp

        Raises:
            InvalidBeforeAfter: If ``before`` precedes ``after``
            InvalidCombination: If ``All`` is paired with a non-zero amount
        """
        try:
            validate_position_constraints(
                self._identifier, self._amount, self._before, self._after
            )
        except IntentError as exc:
            logger.warning(f"Rejected position intent for strategy {self._strategy}: {exc}")
            raise

        intent = PositionIntent(
            id=id_factory(),
            strategy=self._strategy,
            sub_strategy=self._sub_strategy,
            timestamp=clock(),
            identifier=self._identifier,
            amount=self._amount,
            update_policy=self._update_policy,
            decision_price=self._decision_price,
            limit_price=self._limit_price,
            stop_price=self._stop_price,
            before=self._before,
            after=self._after,
        )
        logger.debug(
            "Built position intent {} for {}/{}", intent.id, intent.strategy, intent.identifier
        )
        return intent
