import sqlite3
from datetime import date
from pathlib import Path
from typing import Any, Iterable, Optional

from loguru import logger
from pydantic import ValidationError

from trade_analytics.models import Trade, TradeFilter
from trade_analytics.utils.exceptions import InvalidTradeRecordError, TradeSourceError

TRADE_COLUMNS = [
    "id", "user_id", "pair", "direction", "entry_price", "exit_price", "lot_size",
    "stop_loss", "take_profit", "pnl", "pnl_pips", "rr_ratio", "commission", "swap",
    "status", "trade_date", "closed_at", "created_at", "emotion", "confidence",
    "setup", "mistakes", "tags", "notes", "screenshot_url",
]


class SQLiteTradeStore:
    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(str(db_path))
        self.conn.row_factory = sqlite3.Row
        logger.info(f"Connected to trade journal at {db_path}")

    def initialize_schema(self) -> None:
        cursor = self.conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS trades (
                id TEXT PRIMARY KEY,
                user_id TEXT,
                pair TEXT NOT NULL,
                direction TEXT NOT NULL,
                entry_price REAL NOT NULL,
                exit_price REAL,
                lot_size REAL NOT NULL,
                stop_loss REAL,
                take_profit REAL,
                pnl REAL,
                pnl_pips REAL,
                rr_ratio REAL,
                commission REAL NOT NULL DEFAULT 0,
                swap REAL NOT NULL DEFAULT 0,
                status TEXT NOT NULL,
                trade_date TEXT NOT NULL,
                closed_at TEXT,
                created_at TEXT,
                emotion TEXT,
                confidence INTEGER,
                setup TEXT,
                mistakes TEXT NOT NULL DEFAULT '[]',
                tags TEXT NOT NULL DEFAULT '[]',
                notes TEXT,
                screenshot_url TEXT
            )
        """)

        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_trades_trade_date ON trades (trade_date)"
        )

        self.conn.commit()
        logger.info("Trade journal schema initialized")

    def insert_trade(self, trade: Trade) -> str:
        self._upsert(self.conn.cursor(), trade)
        self.conn.commit()
        logger.debug(f"Stored trade {trade.id}")
        return trade.id

    def insert_trades(self, trades: Iterable[Trade]) -> int:
        cursor = self.conn.cursor()
        count = 0
        for trade in trades:
            self._upsert(cursor, trade)
            count += 1

        self.conn.commit()
        logger.info(f"Stored {count} trades")
        return count

    def get_trades(self, trade_filter: Optional[TradeFilter] = None) -> list[Trade]:
        clauses, params = self._where(trade_filter or TradeFilter())
        query = "SELECT * FROM trades"
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        query += " ORDER BY trade_date ASC, created_at ASC, rowid ASC"

        try:
            rows = self.conn.execute(query, params).fetchall()
        except sqlite3.Error as e:
            raise TradeSourceError(str(e), source="sqlite", path=str(self.db_path)) from e

        trades = []
        for index, row in enumerate(rows):
            try:
                trades.append(Trade.model_validate(dict(row)))
            except ValidationError as e:
                raise InvalidTradeRecordError(index, f"{row['id']}: {e.error_count()} validation errors") from e

        logger.debug(f"Loaded {len(trades)} trades from journal")
        return trades

    def get_closed_trades(
        self,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[Trade]:
        return self.get_trades(
            TradeFilter(status="closed", date_from=date_from, date_to=date_to)
        )

    def count_trades(self) -> int:
        row = self.conn.execute("SELECT COUNT(*) FROM trades").fetchone()
        return row[0]

    def _upsert(self, cursor: sqlite3.Cursor, trade: Trade) -> None:
        record = trade.to_db_dict()
        placeholders = ", ".join("?" for _ in TRADE_COLUMNS)
        updates = ", ".join(f"{col} = excluded.{col}" for col in TRADE_COLUMNS if col != "id")

        cursor.execute(
            f"INSERT INTO trades ({', '.join(TRADE_COLUMNS)}) VALUES ({placeholders}) "
            f"ON CONFLICT(id) DO UPDATE SET {updates}",
            [record[col] for col in TRADE_COLUMNS],
        )

    @staticmethod
    def _where(trade_filter: TradeFilter) -> tuple[list[str], list[Any]]:
        clauses: list[str] = []
        params: list[Any] = []

        if trade_filter.status is not None:
            clauses.append("status = ?")
            params.append(trade_filter.status)
        if trade_filter.pair is not None:
            clauses.append("pair = ?")
            params.append(trade_filter.pair)
        if trade_filter.direction is not None:
            clauses.append("direction = ?")
            params.append(trade_filter.direction)
        if trade_filter.date_from is not None:
            clauses.append("trade_date >= ?")
            params.append(trade_filter.date_from.isoformat())
        if trade_filter.date_to is not None:
            clauses.append("trade_date <= ?")
            params.append(trade_filter.date_to.isoformat())

        return clauses, params

    def close(self) -> None:
        self.conn.close()
        logger.info("Closed trade journal connection")

    def __enter__(self) -> "SQLiteTradeStore":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
