"""
Price feed contract: listeners and sources.

A PriceSource pushes (security, price) observations to every registered
PriceListener, synchronously, on the publishing thread. InMemoryPriceSource is
the in-process implementation used by the replay harness and the examples.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Protocol

logger = logging.getLogger(__name__)


class PriceListener(Protocol):
    """Receives a price observation for any security the source publishes."""

    def on_price_observation(self, security: str, price: float) -> None:
        ...


class PriceSource(ABC):
    """
    Base class for quote sources. Delivery to one listener is sequential;
    no ordering is promised across listeners.
    """

    @abstractmethod
    def add_listener(self, listener: PriceListener) -> None:
        """Register a listener for every future observation."""
        ...

    @abstractmethod
    def remove_listener(self, listener: PriceListener) -> None:
        """Stop delivering observations to listener."""
        ...


class InMemoryPriceSource(PriceSource):
    """
    Single-threaded quote source. Listeners are called in registration order
    for each published price. No I/O, no buffering.
    """

    def __init__(self) -> None:
        self._listeners: list[PriceListener] = []

    def add_listener(self, listener: PriceListener) -> None:
        self._listeners.append(listener)
        logger.debug("Listener added: %r (total=%d)", listener, len(self._listeners))

    def remove_listener(self, listener: PriceListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            logger.debug("remove_listener: %r was not registered", listener)
            return
        logger.debug("Listener removed: %r (total=%d)", listener, len(self._listeners))

    def listeners(self) -> list[PriceListener]:
        """Return the current registrations."""
        return list(self._listeners)

    def publish(self, security: str, price: float) -> None:
        """Deliver one observation to every listener. Listener errors propagate."""
        for listener in list(self._listeners):
            listener.on_price_observation(security, price)

    def replay(self, ticks: Iterable[tuple[str, float]]) -> int:
        """Publish (security, price) pairs in order. Returns the number published."""
        count = 0
        for security, price in ticks:
            self.publish(security, price)
            count += 1
        return count
