import json
import math
from datetime import date

import pytest

from trade_analytics.metrics.report import build_analytics_report


@pytest.fixture
def trades(make_trade):
    return [
        make_trade(pnl=100.0, trade_date=date(2024, 3, 4), mistakes=["FOMO"], rr_ratio=2.0),
        make_trade(pnl=-50.0, trade_date=date(2024, 3, 5), setup="Breakout", emotion="neutral"),
        make_trade(pnl=20.0, trade_date=date(2024, 4, 2), tags=["asia"]),
        make_trade(pnl=None, status="open", trade_date=date(2024, 4, 3)),
    ]


def test_report_bundles_every_aggregate(trades):
    report = build_analytics_report(trades, year=2024, month=3)

    assert report.stats.total_trades == 3
    assert report.portfolio.open_positions == 1
    assert len(report.equity_curve) == 3
    assert len(report.drawdown_curve) == 3
    assert len(report.weekly_pnl) == 2
    assert [m.month for m in report.monthly_returns] == ["2024-03", "2024-04"]
    assert len(report.day_of_week) == 7
    assert len(report.hour_of_day) == 24
    assert len(report.direction) == 2
    assert [e.emotion for e in report.emotion] == ["neutral"]
    assert [s.setup for s in report.setup] == ["Breakout"]
    assert [m.mistake for m in report.mistakes] == ["FOMO"]
    assert [t.tag for t in report.tags] == ["asia"]
    assert [p.pair for p in report.pairs] == ["EURUSD"]
    assert len(report.rr_distribution) == 4
    assert [d.date for d in report.heatmap] == [date(2024, 3, 4), date(2024, 3, 5)]


def test_report_without_month_has_no_heatmap(trades):
    assert build_analytics_report(trades).heatmap == []


def test_report_json_is_serializable(make_trade):
    report = build_analytics_report([make_trade(pnl=10.0)])

    payload = json.loads(report.model_dump_json())

    assert payload["stats"]["profit_factor"] == "Infinity"
    assert payload["equity_curve"][0]["date"] == "2024-03-04"


def test_report_is_idempotent(trades):
    assert build_analytics_report(trades) == build_analytics_report(trades)


def test_report_empty_input():
    report = build_analytics_report([])
    assert report.stats.total_trades == 0
    assert report.equity_curve == []
    assert report.portfolio.max_drawdown == 0.0


def test_report_tolerates_non_finite_pnl(make_trade):
    trades = [
        make_trade(pnl=math.inf, trade_date=date(2024, 3, 4), rr_ratio=math.nan),
        make_trade(pnl=-math.inf, trade_date=date(2024, 3, 5)),
        make_trade(pnl=math.nan, trade_date=date(2024, 3, 6)),
        make_trade(pnl=40.0, trade_date=date(2024, 3, 7), rr_ratio=2.0),
    ]

    report = build_analytics_report(trades)

    assert report.stats.total_trades == 1
    assert report.stats.avg_rr == pytest.approx(2.0)
    assert [p.drawdown for p in report.drawdown_curve] == [0.0]
    assert report.portfolio.closed_positions == 1
