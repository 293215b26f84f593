"""
TradingStrategy: watches one security and places an order when its price
crosses a trigger level.

Edge-triggered: the order fires once when the price first moves to the
triggering side of the level, and the strategy re-arms only after the price
comes back across. A price equal to the level is never on the triggering side.

The strategy is also the subscription handle on its price source: it registers
itself as a listener, replaces any earlier subscription, and unsubscribes on
close() or when used as a context manager.
"""

from __future__ import annotations

import logging
import threading
from types import TracebackType

from mytrader.execution.service import ExecutionService
from mytrader.order import Side
from mytrader.price import PriceSource
from mytrader.trigger import TriggerConfig, TriggerDirection

logger = logging.getLogger(__name__)


class TradingStrategy:
    """
    Price listener that executes orders automatically when the price of its
    security breaches the trigger level.

    State and subscription changes are guarded by one re-entrant lock, so two
    observations delivered from different threads cannot both fire.
    """

    def __init__(self, config: TriggerConfig) -> None:
        self._config = config
        self._last_price: float | None = None
        self._armed = False
        self._price_source: PriceSource | None = None
        self._execution_service: ExecutionService | None = None
        self._lock = threading.RLock()

    @classmethod
    def from_parameters(
        cls,
        security: str,
        trigger_level: float,
        direction: TriggerDirection | str,
        order_side: Side | str,
        order_price: float,
        order_volume: int,
    ) -> TradingStrategy:
        """Build the config and the strategy in one step. Invalid values raise InvalidTriggerConfigError."""
        return cls(
            TriggerConfig(
                security=security,
                trigger_level=trigger_level,
                direction=direction,
                order_side=order_side,
                order_price=order_price,
                order_volume=order_volume,
            )
        )

    @classmethod
    def place_buy_order_when_price_below(
        cls, security: str, trigger_level: float, buy_price: float, buy_volume: int
    ) -> TradingStrategy:
        return cls.from_parameters(security, trigger_level, TriggerDirection.BELOW, Side.BUY, buy_price, buy_volume)

    @classmethod
    def place_buy_order_when_price_above(
        cls, security: str, trigger_level: float, buy_price: float, buy_volume: int
    ) -> TradingStrategy:
        return cls.from_parameters(security, trigger_level, TriggerDirection.ABOVE, Side.BUY, buy_price, buy_volume)

    @classmethod
    def place_sell_order_when_price_below(
        cls, security: str, trigger_level: float, sell_price: float, sell_volume: int
    ) -> TradingStrategy:
        return cls.from_parameters(security, trigger_level, TriggerDirection.BELOW, Side.SELL, sell_price, sell_volume)

    @classmethod
    def place_sell_order_when_price_above(
        cls, security: str, trigger_level: float, sell_price: float, sell_volume: int
    ) -> TradingStrategy:
        return cls.from_parameters(security, trigger_level, TriggerDirection.ABOVE, Side.SELL, sell_price, sell_volume)

    # --- Price observations ---

    def on_price_observation(self, security: str, price: float) -> None:
        """
        Consume one observation. Observations for other securities are ignored.
        Errors raised by the execution service propagate to the caller; the
        crossing is recorded before the order is sent.
        """
        if security != self._config.security:
            return
        with self._lock:
            self._last_price = price
            satisfied = self._config.is_satisfied(price)
            if satisfied and not self._armed:
                self._armed = True
                self._execute_order(price)
            elif not satisfied and self._armed:
                self._armed = False
                logger.debug("%s: price %s back across %s, trigger reset", security, price, self._config.trigger_level)

    def _execute_order(self, observed_price: float) -> None:
        cfg = self._config
        service = self._execution_service
        if service is None:
            logger.warning(
                "%s: trigger %s %s crossed at %s but no execution service attached; %s order dropped",
                cfg.security,
                cfg.direction.value,
                cfg.trigger_level,
                observed_price,
                cfg.order_side.value,
            )
            return
        logger.info(
            "%s: trigger %s %s crossed at %s; placing %s %s @ %s",
            cfg.security,
            cfg.direction.value,
            cfg.trigger_level,
            observed_price,
            cfg.order_side.value,
            cfg.order_volume,
            cfg.order_price,
        )
        if cfg.order_side is Side.BUY:
            service.buy(cfg.security, cfg.order_price, cfg.order_volume)
        else:
            service.sell(cfg.security, cfg.order_price, cfg.order_volume)

    @property
    def current_price(self) -> float | None:
        """Last observed price for the security, or None before the first observation."""
        return self._last_price

    @property
    def armed(self) -> bool:
        """True after a crossing fired and before the price retreated back across the level."""
        return self._armed

    # --- Configuration (read-only) ---

    @property
    def config(self) -> TriggerConfig:
        return self._config

    @property
    def security(self) -> str:
        return self._config.security

    @property
    def trigger_level(self) -> float:
        return self._config.trigger_level

    @property
    def direction(self) -> TriggerDirection:
        return self._config.direction

    @property
    def order_side(self) -> Side:
        return self._config.order_side

    @property
    def order_price(self) -> float:
        return self._config.order_price

    @property
    def order_volume(self) -> int:
        return self._config.order_volume

    # --- Subscription ---

    @property
    def price_source(self) -> PriceSource | None:
        """The source currently subscribed to, if any."""
        return self._price_source

    @property
    def execution_service(self) -> ExecutionService | None:
        return self._execution_service

    def subscribe(self, price_source: PriceSource) -> None:
        """Subscribe to price_source. Any existing subscription, including to the same source, is dropped first."""
        with self._lock:
            self.unsubscribe()
            price_source.add_listener(self)
            self._price_source = price_source
            logger.debug("%s: subscribed to %r", self._config.security, price_source)

    def unsubscribe(self) -> None:
        """Deregister from the current source. No-op when not subscribed."""
        with self._lock:
            source = self._price_source
            if source is None:
                return
            self._price_source = None
            source.remove_listener(self)
            logger.debug("%s: unsubscribed from %r", self._config.security, source)

    def attach_execution_service(self, execution_service: ExecutionService | None) -> None:
        """Set the service used for subsequent orders. None drops future orders."""
        with self._lock:
            self._execution_service = execution_service

    def subscribe_and_execute(self, price_source: PriceSource, execution_service: ExecutionService) -> None:
        """Attach execution_service, then subscribe to price_source."""
        self.attach_execution_service(execution_service)
        self.subscribe(price_source)

    def close(self) -> None:
        self.unsubscribe()

    def __enter__(self) -> TradingStrategy:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        cfg = self._config
        return (
            f"TradingStrategy({cfg.security!r}, {cfg.direction.value} {cfg.trigger_level}: "
            f"{cfg.order_side.value} {cfg.order_volume} @ {cfg.order_price})"
        )
