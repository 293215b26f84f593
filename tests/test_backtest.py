"""
Tests for backtesting: BacktestEngine, summarize_orders, print_report.
"""

from unittest.mock import Mock

import pandas as pd
import pytest

from backtesting import BacktestEngine, load_dataframe, print_report, summarize_orders
from mytrader import InMemoryPriceSource, Order, Side, TradingStrategy
from mytrader.execution import ExecutionService, PaperExecutionService


def _make_tape(prices: list[float], security: str = "CGI") -> pd.DataFrame:
    """Minimal tape with a one-minute DatetimeIndex."""
    df = pd.DataFrame(
        {"price": prices},
        index=pd.date_range("2024-01-02 09:30", periods=len(prices), freq="min"),
    )
    return load_dataframe(df, security=security)


def _cgi_strategies() -> list[TradingStrategy]:
    return [
        TradingStrategy.place_sell_order_when_price_above("CGI", 50, 52, 10),
        TradingStrategy.place_buy_order_when_price_below("CGI", 45, 44, 100),
    ]


# --- BacktestEngine ---


def test_backtest_engine_oscillation():
    strategies = _cgi_strategies()
    engine = BacktestEngine(strategies)
    result = engine.run(_make_tape([40, 44, 51, 48, 42, 48, 52, 55, 46]))

    assert result.ticks_processed == 9
    assert result.last_prices == {"CGI": 46.0}
    sells = [o for o in result.orders if o.side == Side.SELL]
    buys = [o for o in result.orders if o.side == Side.BUY]
    assert [(o.price, o.volume) for o in sells] == [(52, 10), (52, 10)]
    assert [(o.price, o.volume) for o in buys] == [(44, 100), (44, 100)]
    for s in strategies:
        assert s.current_price == 46.0
        assert s.price_source is None


def test_backtest_engine_order_sequence():
    engine = BacktestEngine(_cgi_strategies())
    result = engine.run(_make_tape([40, 44, 51, 48, 42, 48, 52, 55, 46]))
    assert [o.side for o in result.orders] == [Side.BUY, Side.SELL, Side.BUY, Side.SELL]


def test_backtest_engine_ignores_other_securities():
    engine = BacktestEngine(_cgi_strategies())
    result = engine.run(_make_tape([10, 100, 10], security="IBM"))
    assert result.orders == []
    assert result.last_prices == {"IBM": 10.0}


def test_backtest_engine_reuses_execution_service():
    paper = PaperExecutionService(initial_cash=1_000.0)
    engine = BacktestEngine(_cgi_strategies(), execution=paper)
    first = engine.run(_make_tape([40]))
    second = engine.run(_make_tape([50, 40]))
    assert len(first.orders) == 1
    # strategies keep their armed state between runs; 50 re-arms the buyer
    assert len(second.orders) == 1
    assert len(paper.get_order_log()) == 2
    assert paper.position("CGI") == 200


def test_backtest_engine_restores_strategy_wiring():
    live = Mock(spec=ExecutionService)
    feed = InMemoryPriceSource()
    strategy = TradingStrategy.place_buy_order_when_price_below("CGI", 45, 44, 100)
    strategy.subscribe_and_execute(feed, live)

    result = BacktestEngine([strategy]).run(_make_tape([40]))

    assert len(result.orders) == 1
    live.buy.assert_not_called()
    assert strategy.execution_service is live
    assert strategy.price_source is feed
    assert feed.listeners() == [strategy]


def test_backtest_engine_unsubscribes_on_execution_error():
    class Failing(ExecutionService):
        def buy(self, security, price, volume):
            raise RuntimeError("rejected")

        def sell(self, security, price, volume):
            raise RuntimeError("rejected")

    strategies = _cgi_strategies()
    engine = BacktestEngine(strategies, execution=Failing())
    with pytest.raises(RuntimeError):
        engine.run(_make_tape([40]))
    assert all(s.price_source is None for s in strategies)


# --- Report ---


def test_summarize_orders():
    orders = [
        Order(security="CGI", side=Side.SELL, price=52.0, volume=10),
        Order(security="CGI", side=Side.BUY, price=44.0, volume=100),
        Order(security="CGI", side=Side.SELL, price=52.0, volume=10),
    ]
    summary = summarize_orders(orders)
    assert list(summary.columns) == ["security", "side", "orders", "volume", "notional"]
    sell = summary[summary["side"] == "sell"].iloc[0]
    assert sell["orders"] == 2
    assert sell["volume"] == 20
    assert sell["notional"] == 1040.0
    buy = summary[summary["side"] == "buy"].iloc[0]
    assert buy["notional"] == 4400.0


def test_summarize_orders_empty():
    summary = summarize_orders([])
    assert summary.empty
    assert list(summary.columns) == ["security", "side", "orders", "volume", "notional"]


def test_print_report(capsys):
    engine = BacktestEngine(_cgi_strategies())
    result = engine.run(_make_tape([40, 51]))
    summary = print_report(result)
    out = capsys.readouterr().out
    assert "Ticks:           2" in out
    assert "Orders:          2" in out
    assert len(summary) == 2
