"""
Trigger configuration: which security to watch, the level, the direction,
and the order to place when the level is crossed.

Immutable and validated on construction. Anything that is not a recognised
direction, side or a positive whole volume is rejected outright.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import TypeVar

from mytrader.order import Side


E = TypeVar("E", bound=Enum)


class InvalidTriggerConfigError(ValueError):
    """Raised when a trigger configuration cannot be built."""


class TriggerDirection(Enum):
    """ABOVE fires when the price rises strictly above the level; BELOW when it falls strictly below."""

    ABOVE = "above"
    BELOW = "below"


def _coerce_enum(value: object, enum_cls: type[E], field_name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    allowed = ", ".join(m.value for m in enum_cls)
    raise InvalidTriggerConfigError(f"{field_name} must be one of: {allowed} (got {value!r})")


def _require_number(value: object, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidTriggerConfigError(f"{field_name} must be a number (got {value!r})")
    return float(value)


@dataclass(frozen=True)
class TriggerConfig:
    """
    Trigger level and order parameters for one security.

    order_price is the price submitted with the order; it is independent of
    the observed market price that caused the trigger.
    """

    security: str
    trigger_level: float
    direction: TriggerDirection
    order_side: Side
    order_price: float
    order_volume: int

    def __post_init__(self) -> None:
        if not isinstance(self.security, str) or not self.security:
            raise InvalidTriggerConfigError(f"security must be a non-empty string (got {self.security!r})")
        object.__setattr__(self, "trigger_level", _require_number(self.trigger_level, "trigger_level"))
        object.__setattr__(self, "order_price", _require_number(self.order_price, "order_price"))
        object.__setattr__(self, "direction", _coerce_enum(self.direction, TriggerDirection, "direction"))
        object.__setattr__(self, "order_side", _coerce_enum(self.order_side, Side, "order_side"))
        volume = self.order_volume
        if isinstance(volume, bool) or not isinstance(volume, int) or volume <= 0:
            raise InvalidTriggerConfigError(f"order_volume must be a positive integer (got {volume!r})")

    def is_satisfied(self, price: float) -> bool:
        """True when price is strictly on the triggering side of the level."""
        if self.direction is TriggerDirection.ABOVE:
            return price > self.trigger_level
        return price < self.trigger_level
