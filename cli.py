import math
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from loguru import logger

from config.settings import get_settings
from trade_analytics.utils.logging import setup_logging
from trade_analytics.utils.exceptions import ConfigError, TradeAnalyticsError
from trade_analytics.data.sources.json_file import load_trades
from trade_analytics.data.storage.sqlite_client import SQLiteTradeStore
from trade_analytics.metrics import (
    build_analytics_report,
    compute_day_of_week_stats,
    compute_direction_stats,
    compute_drawdown_curve,
    compute_emotion_stats,
    compute_equity_curve,
    compute_hour_of_day_stats,
    compute_mistake_stats,
    compute_monthly_returns,
    compute_pair_stats,
    compute_portfolio_summary,
    compute_rr_distribution,
    compute_setup_stats,
    compute_tag_stats,
    compute_trade_heatmap,
    compute_trade_stats,
    compute_weekly_pnl,
)
from trade_analytics.models import Trade, TradeFilter

app = typer.Typer(no_args_is_help=True)

BREAKDOWNS = {
    "day": compute_day_of_week_stats,
    "hour": compute_hour_of_day_stats,
    "direction": compute_direction_stats,
    "emotion": compute_emotion_stats,
    "setup": compute_setup_stats,
    "mistake": compute_mistake_stats,
    "tag": compute_tag_stats,
    "pair": compute_pair_stats,
}
FIXED_BREAKDOWNS = {"day", "hour", "direction"}


@app.callback()
def main(
    ctx: typer.Context,
    file: Optional[Path] = typer.Option(None, "--file", help="Read trades from a JSON file instead of the journal"),
    date_from: Optional[datetime] = typer.Option(None, formats=["%Y-%m-%d"], help="First trade date to include"),
    date_to: Optional[datetime] = typer.Option(None, formats=["%Y-%m-%d"], help="Last trade date to include"),
    pair: Optional[str] = typer.Option(None, help="Only include this instrument"),
) -> None:
    """Trade journal analytics."""
    ctx.obj = {
        "file": file,
        "filter": TradeFilter(
            pair=pair,
            date_from=date_from.date() if date_from else None,
            date_to=date_to.date() if date_to else None,
        ),
    }


def _settings():
    try:
        return get_settings()
    except ValidationError as e:
        fields = ", ".join(".".join(str(part) for part in err["loc"]) for err in e.errors())
        raise ConfigError(f"invalid value for {fields}") from e


def _load(ctx: typer.Context) -> list[Trade]:
    settings = _settings()
    setup_logging(settings.log_level, settings.database.log_dir)

    trade_filter: TradeFilter = ctx.obj["filter"]
    file: Optional[Path] = ctx.obj["file"]
    if file is not None:
        return load_trades(file, trade_filter)

    with SQLiteTradeStore(settings.database.journal_path) as store:
        store.initialize_schema()
        return store.get_trades(trade_filter)


def _money(value: float) -> str:
    return f"{value:+,.2f}"


def _ratio(value: float) -> str:
    return "∞" if math.isinf(value) else f"{value:.2f}"


def _run(ctx: typer.Context, name: str, render) -> None:
    try:
        with logger.contextualize(command=name):
            render(_load(ctx))
    except TradeAnalyticsError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        logger.exception(f"{name} command failed")
        raise typer.Exit(code=1)


@app.command()
def init() -> None:
    """Create the data directory and the trade journal schema."""
    try:
        settings = _settings()
        setup_logging(settings.log_level, settings.database.log_dir)

        settings.database.db_dir.mkdir(parents=True, exist_ok=True)
        typer.echo(f"Created directory: {settings.database.db_dir}")

        with SQLiteTradeStore(settings.database.journal_path) as store:
            store.initialize_schema()
            typer.echo(f"Initialized trade journal: {settings.database.journal_path}")

        logger.info("Trade analytics initialized")

    except Exception as e:
        typer.echo(f"Initialization failed: {e}", err=True)
        raise typer.Exit(code=1)


@app.command("import-trades")
def import_trades(file: Path = typer.Argument(..., help="JSON file of trade records")) -> None:
    """Load trades from a JSON file into the journal."""
    try:
        settings = _settings()
        setup_logging(settings.log_level, settings.database.log_dir)

        trades = load_trades(file)
        with SQLiteTradeStore(settings.database.journal_path) as store:
            store.initialize_schema()
            count = store.insert_trades(trades)
            total = store.count_trades()

        typer.echo(f"Imported {count} trades ({total} in journal)")

    except TradeAnalyticsError as e:
        typer.echo(f"Import failed: {e}", err=True)
        raise typer.Exit(code=1)


@app.command()
def stats(ctx: typer.Context) -> None:
    """Show headline trade statistics."""

    def render(trades: list[Trade]) -> None:
        s = compute_trade_stats(trades)
        typer.echo("\nTrade Statistics")
        typer.echo("=" * 50)
        typer.echo(f"Trades: {s.total_trades} ({s.win_count}W / {s.loss_count}L / {s.breakeven_count}BE)")
        typer.echo(f"Win rate: {s.win_rate:.1f}%")
        typer.echo(f"Total P&L: {_money(s.total_pnl)}")
        typer.echo(f"Average P&L: {_money(s.avg_pnl)}")
        typer.echo(f"Average win: {_money(s.avg_win)}")
        typer.echo(f"Average loss: {s.avg_loss:,.2f}")
        typer.echo(f"Profit factor: {_ratio(s.profit_factor)}")
        typer.echo(f"Average R:R: {s.avg_rr:.2f}")
        typer.echo(f"Best trade: {_money(s.best_trade)}")
        typer.echo(f"Worst trade: {_money(s.worst_trade)}")

    _run(ctx, "Stats", render)


@app.command()
def equity(ctx: typer.Context) -> None:
    """Show the daily equity curve."""

    def render(trades: list[Trade]) -> None:
        curve = compute_equity_curve(trades)
        if len(curve) < 2:
            typer.echo("Not enough trading days to chart an equity curve")
        typer.echo(f"\n{'Date':<12} | {'Trades':<6} | {'Cumulative P&L':>15}")
        typer.echo("=" * 40)
        for point in curve:
            typer.echo(f"{point.date.isoformat():<12} | {point.trade_count:<6} | {_money(point.cumulative_pnl):>15}")

    _run(ctx, "Equity", render)


@app.command()
def drawdown(ctx: typer.Context) -> None:
    """Show the daily drawdown curve."""

    def render(trades: list[Trade]) -> None:
        curve = compute_drawdown_curve(trades)
        typer.echo(f"\n{'Date':<12} | {'Drawdown':>12} | {'Drawdown %':>10}")
        typer.echo("=" * 40)
        for point in curve:
            typer.echo(f"{point.date.isoformat():<12} | {point.drawdown:>12,.2f} | {point.drawdown_pct:>9.1f}%")
        typer.echo(f"\nMax drawdown: {max((p.drawdown for p in curve), default=0.0):,.2f}")

    _run(ctx, "Drawdown", render)


@app.command()
def weekly(
    ctx: typer.Context,
    weeks: Optional[int] = typer.Option(None, help="Number of trailing weeks to show"),
) -> None:
    """Show P&L per ISO week."""

    def render(trades: list[Trade]) -> None:
        window = weeks or _settings().analytics.weekly_window
        rows = compute_weekly_pnl(trades)[-window:]
        typer.echo(f"\n{'Week of':<12} | {'Trades':<6} | {'Win %':>6} | {'P&L':>12}")
        typer.echo("=" * 46)
        for row in rows:
            typer.echo(
                f"{row.week_start.isoformat():<12} | {row.trade_count:<6} | "
                f"{row.win_rate:>5.1f}% | {_money(row.pnl):>12}"
            )

    _run(ctx, "Weekly", render)


@app.command()
def monthly(ctx: typer.Context) -> None:
    """Show P&L per calendar month."""

    def render(trades: list[Trade]) -> None:
        typer.echo(f"\n{'Month':<8} | {'Trades':<6} | {'Win %':>6} | {'P&L':>12}")
        typer.echo("=" * 42)
        for row in compute_monthly_returns(trades):
            typer.echo(f"{row.month:<8} | {row.trade_count:<6} | {row.win_rate:>5.1f}% | {_money(row.pnl):>12}")

    _run(ctx, "Monthly", render)


@app.command()
def breakdown(
    ctx: typer.Context,
    dimension: str = typer.Argument(..., help=f"One of: {', '.join(BREAKDOWNS)}"),
) -> None:
    """Show performance split by a trade attribute."""
    if dimension not in BREAKDOWNS:
        typer.echo(f"Unknown dimension '{dimension}'. Choose from: {', '.join(BREAKDOWNS)}", err=True)
        raise typer.Exit(code=1)

    def render(trades: list[Trade]) -> None:
        rows = BREAKDOWNS[dimension](trades)
        if dimension not in FIXED_BREAKDOWNS:
            rows = rows[: _settings().analytics.top_n]

        typer.echo(f"\n{'Bucket':<24} | {'Trades':<6} | {'Win %':>6} | {'Total P&L':>12} | {'Avg P&L':>10}")
        typer.echo("=" * 72)
        for row in rows:
            label = str(_bucket_label(dimension, row))[:24]
            typer.echo(
                f"{label:<24} | {row.trade_count:<6} | {row.win_rate:>5.1f}% | "
                f"{_money(row.total_pnl):>12} | {_money(row.avg_pnl):>10}"
            )

    _run(ctx, "Breakdown", render)


def _bucket_label(dimension: str, row) -> str:
    if dimension == "day":
        return row.day_name
    if dimension == "hour":
        return f"{row.hour:02d}:00"
    return getattr(row, dimension)


@app.command()
def rr(ctx: typer.Context) -> None:
    """Show the risk:reward distribution."""

    def render(trades: list[Trade]) -> None:
        typer.echo(f"\n{'R:R':<12} | {'Trades':<6} | {'Win %':>6}")
        typer.echo("=" * 32)
        for bucket in compute_rr_distribution(trades):
            typer.echo(f"{bucket.bucket:<12} | {bucket.count:<6} | {bucket.win_rate:>5.1f}%")

    _run(ctx, "R:R", render)


@app.command()
def heatmap(
    ctx: typer.Context,
    year: int = typer.Argument(..., help="Calendar year"),
    month: int = typer.Argument(..., min=1, max=12, help="Calendar month (1-12)"),
) -> None:
    """Show daily P&L for one month."""

    def render(trades: list[Trade]) -> None:
        days = compute_trade_heatmap(trades, year, month)
        if not days:
            typer.echo(f"No trades in {year}-{month:02d}")
            return
        typer.echo(f"\n{'Date':<12} | {'Trades':<6} | {'P&L':>12}")
        typer.echo("=" * 36)
        for day in days:
            typer.echo(f"{day.date.isoformat():<12} | {day.trade_count:<6} | {_money(day.pnl):>12}")

    _run(ctx, "Heatmap", render)


@app.command()
def portfolio(ctx: typer.Context) -> None:
    """Show the portfolio summary."""

    def render(trades: list[Trade]) -> None:
        p = compute_portfolio_summary(trades)
        typer.echo("\nPortfolio Summary")
        typer.echo("=" * 50)
        typer.echo(f"Closed P&L: {_money(p.total_pnl)}")
        typer.echo(f"Positions: {p.closed_positions} closed, {p.open_positions} open")
        typer.echo(f"Max drawdown: {p.max_drawdown:,.2f} ({p.max_drawdown_pct:.1f}%)")
        typer.echo(f"Current drawdown: {p.current_drawdown:,.2f}")
        typer.echo(f"Current streak: {p.current_streak:+d}")
        typer.echo(f"Longest win streak: {p.longest_win_streak}")
        typer.echo(f"Longest loss streak: {p.longest_loss_streak}")
        first = p.first_trade_date.isoformat() if p.first_trade_date else "-"
        last = p.last_trade_date.isoformat() if p.last_trade_date else "-"
        typer.echo(f"Active days: {p.active_days} ({first} to {last})")

    _run(ctx, "Portfolio", render)


@app.command()
def report(
    ctx: typer.Context,
    year: Optional[int] = typer.Option(None, help="Heatmap year"),
    month: Optional[int] = typer.Option(None, min=1, max=12, help="Heatmap month"),
) -> None:
    """Print every aggregate as JSON."""

    def render(trades: list[Trade]) -> None:
        typer.echo(build_analytics_report(trades, year=year, month=month).model_dump_json(indent=2))

    _run(ctx, "Report", render)


if __name__ == "__main__":
    app()
