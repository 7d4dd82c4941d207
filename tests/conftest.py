"""Shared test fixtures for trade-analytics."""

import os
from datetime import date
from itertools import count

import pytest
from loguru import logger

# Keep tests off any real .env values
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("DB_DIR", "/tmp/trade-analytics-test-db")

from config.settings import get_settings  # noqa: E402
from trade_analytics.models import Trade  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_settings_and_logging():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    logger.remove()


@pytest.fixture
def make_trade():
    """Factory for closed trades with sensible defaults."""
    ids = count(1)

    def _make(**overrides) -> Trade:
        fields = {
            "id": f"t{next(ids)}",
            "pair": "EURUSD",
            "direction": "long",
            "entry_price": 1.1,
            "lot_size": 1.0,
            "pnl": 0.0,
            "status": "closed",
            "trade_date": date(2024, 3, 4),
        }
        fields.update(overrides)
        return Trade(**fields)

    return _make
