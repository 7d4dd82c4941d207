from datetime import date, timedelta

import pytest

from trade_analytics.metrics.periods import compute_monthly_returns, compute_weekly_pnl


def test_weekly_pnl_buckets_by_monday(make_trade):
    trades = [
        make_trade(pnl=10.0, trade_date=date(2024, 3, 10)),  # Sunday, week of 3/4
        make_trade(pnl=-4.0, trade_date=date(2024, 3, 4)),  # Monday
        make_trade(pnl=7.0, trade_date=date(2024, 3, 11)),  # next Monday
        make_trade(pnl=3.0, trade_date=date(2024, 2, 29)),  # Thursday, week of 2/26
    ]

    weeks = compute_weekly_pnl(trades)

    assert [w.week_start for w in weeks] == [date(2024, 2, 26), date(2024, 3, 4), date(2024, 3, 11)]
    assert [w.pnl for w in weeks] == pytest.approx([3.0, 6.0, 7.0])
    assert [w.trade_count for w in weeks] == [1, 2, 1]
    assert weeks[1].win_rate == pytest.approx(50.0)


def test_weekly_pnl_does_not_synthesize_empty_weeks(make_trade):
    trades = [
        make_trade(pnl=1.0, trade_date=date(2024, 1, 1)),
        make_trade(pnl=1.0, trade_date=date(2024, 3, 1)),
    ]
    assert len(compute_weekly_pnl(trades)) == 2


def test_weekly_pnl_spans_year_boundary(make_trade):
    weeks = compute_weekly_pnl([make_trade(pnl=5.0, trade_date=date(2025, 1, 1))])
    assert weeks[0].week_start == date(2024, 12, 30)


def test_weekly_pnl_skips_open_and_missing_pnl(make_trade):
    trades = [
        make_trade(pnl=None),
        make_trade(pnl=12.0, status="open"),
    ]
    assert compute_weekly_pnl(trades) == []


def test_trailing_window_is_a_tail_slice(make_trade):
    trades = [make_trade(pnl=1.0, trade_date=date(2024, 1, 1) + timedelta(weeks=i)) for i in range(15)]
    last_12 = compute_weekly_pnl(trades)[-12:]
    assert len(last_12) == 12
    assert last_12[0].week_start == date(2024, 1, 22)


def test_monthly_returns(make_trade):
    trades = [
        make_trade(pnl=20.0, trade_date=date(2024, 2, 3)),
        make_trade(pnl=-5.0, trade_date=date(2024, 1, 15)),
        make_trade(pnl=15.0, trade_date=date(2024, 1, 20)),
    ]

    months = compute_monthly_returns(trades)

    assert [m.month for m in months] == ["2024-01", "2024-02"]
    assert months[0].pnl == pytest.approx(10.0)
    assert months[0].trade_count == 2
    assert months[0].win_rate == pytest.approx(50.0)
    assert months[1].win_rate == pytest.approx(100.0)
