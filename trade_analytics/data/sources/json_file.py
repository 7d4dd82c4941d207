"""
JSON file trade source.

Accepts either a bare array of trade records or an object with a
"trades" array, as exported from the journal.
"""
import json
from pathlib import Path
from typing import Any, Optional

from loguru import logger
from pydantic import ValidationError

from trade_analytics.models import Trade, TradeFilter
from trade_analytics.utils.exceptions import InvalidTradeRecordError, TradeSourceError


def _read_records(path: Path) -> list[Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise TradeSourceError(str(e), source="json", path=str(path)) from e
    except json.JSONDecodeError as e:
        raise TradeSourceError(
            f"invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})",
            source="json",
            path=str(path),
        ) from e

    if isinstance(payload, dict):
        payload = payload.get("trades")
    if not isinstance(payload, list):
        raise TradeSourceError(
            'expected a JSON array or an object with a "trades" array',
            source="json",
            path=str(path),
        )
    return payload


def load_trades(path: Path, trade_filter: Optional[TradeFilter] = None) -> list[Trade]:
    """
    Load and validate trade records from a JSON file.

    Args:
        path: File to read
        trade_filter: Optional selection applied after validation

    Returns:
        Trades in file order

    Raises:
        TradeSourceError: File missing, unreadable or not the expected shape
        InvalidTradeRecordError: A record fails validation
    """
    records = _read_records(path)

    trades = []
    for index, record in enumerate(records):
        try:
            trades.append(Trade.model_validate(record))
        except ValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"])
            raise InvalidTradeRecordError(index, f"{location}: {first['msg']}") from e

    if trade_filter is not None:
        trades = [t for t in trades if trade_filter.matches(t)]

    logger.info(f"Loaded {len(trades)} trades from {path}")
    return trades
