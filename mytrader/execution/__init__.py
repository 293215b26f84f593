"""
Execution layer: execution-service abstraction, paper execution and safety guard.

ExecutionService interface; paper execution service; guard (kill switch, max volume).
"""

from mytrader.execution.service import ExecutionService
from mytrader.execution.paper import PaperExecutionService
from mytrader.execution.guard import GuardedExecutionService, RejectedOrderLog

__all__ = [
    "ExecutionService",
    "PaperExecutionService",
    "GuardedExecutionService",
    "RejectedOrderLog",
]
