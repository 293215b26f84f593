"""
Tests for execution layer: PaperExecutionService, GuardedExecutionService.
"""

from unittest.mock import Mock

import pytest

from mytrader import Side
from mytrader.execution import ExecutionService, GuardedExecutionService, PaperExecutionService


def test_paper_execution_initial_state():
    paper = PaperExecutionService(initial_cash=50_000.0)
    assert paper.cash == 50_000.0
    assert paper.positions == {}
    assert paper.position("IBM") == 0
    assert paper.get_order_log() == []


def test_paper_execution_buy_then_sell():
    paper = PaperExecutionService(initial_cash=10_000.0)
    paper.buy("CGI", 44.0, 100)
    assert paper.position("CGI") == 100
    assert paper.cash == 10_000.0 - 4_400.0

    paper.sell("CGI", 52.0, 100)
    assert paper.position("CGI") == 0
    assert "CGI" not in paper.positions
    assert paper.cash == 10_000.0 + 800.0

    log = paper.get_order_log()
    assert [(o.side, o.price, o.volume) for o in log] == [(Side.BUY, 44.0, 100), (Side.SELL, 52.0, 100)]
    assert all(o.timestamp is not None for o in log)


def test_paper_execution_allows_short_positions():
    paper = PaperExecutionService()
    paper.sell("CGI", 52.0, 10)
    assert paper.position("CGI") == -10
    assert paper.cash == 520.0


def test_guard_forwards_allowed_orders():
    inner = Mock(spec=ExecutionService)
    guard = GuardedExecutionService(inner, max_volume=100)
    guard.buy("IBM", 101.0, 50)
    guard.sell("IBM", 99.0, 100)
    inner.buy.assert_called_once_with("IBM", 101.0, 50)
    inner.sell.assert_called_once_with("IBM", 99.0, 100)
    assert guard.get_rejected_log() == []


def test_guard_blocks_orders_above_max_volume():
    inner = Mock(spec=ExecutionService)
    guard = GuardedExecutionService(inner, max_volume=10)
    guard.buy("IBM", 101.0, 11)
    inner.buy.assert_not_called()
    rejected = guard.get_rejected_log()
    assert len(rejected) == 1
    assert rejected[0].reason == "max_volume"
    assert rejected[0].order.volume == 11


def test_guard_kill_switch_blocks_orders():
    paper = PaperExecutionService()
    guard = GuardedExecutionService(paper)
    guard.set_kill_switch(True)
    guard.sell("IBM", 99.0, 1)
    assert paper.get_order_log() == []
    assert [r.reason for r in guard.get_rejected_log()] == ["kill_switch"]

    guard.set_kill_switch(False)
    guard.sell("IBM", 99.0, 1)
    assert len(paper.get_order_log()) == 1


def test_guard_does_not_swallow_inner_errors():
    inner = Mock(spec=ExecutionService)
    inner.sell.side_effect = ConnectionError("no route")
    guard = GuardedExecutionService(inner)
    with pytest.raises(ConnectionError):
        guard.sell("IBM", 99.0, 1)
