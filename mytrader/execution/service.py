"""
Execution service abstraction.

ExecutionService ABC: buy, sell. Fire-and-forget: callers do not wait for or
inspect a confirmation. PaperExecutionService implements it for simulation;
broker integrations implement the same two methods.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class ExecutionService(ABC):
    """
    Abstract execution collaborator. Same interface for paper and live execution.
    Errors raised by an implementation propagate to whoever placed the order.
    """

    @abstractmethod
    def buy(self, security: str, price: float, volume: int) -> None:
        """Place a buy instruction for volume lots of security at price."""
        ...

    @abstractmethod
    def sell(self, security: str, price: float, volume: int) -> None:
        """Place a sell instruction for volume lots of security at price."""
        ...
