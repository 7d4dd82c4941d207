"""
Categorical breakdowns of qualifying trades.

Single-valued dimensions (weekday, hour, direction, emotion, setup, pair)
put each trade in exactly one bucket. Multi-valued dimensions (mistakes,
tags) put a trade in one bucket per distinct label it carries, so bucket
counts can add up to more than the number of trades.

Fixed dimensions (7 weekdays, 24 hours, 2 directions) always return every
bucket. Open-ended label dimensions omit empty buckets and are ranked by
total_pnl, highest first.
"""
from typing import Callable, Iterable, Optional, TypeVar

from trade_analytics.metrics.primitives import (
    average_rr,
    bucket_fields,
    qualifying_trades,
    to_naive_utc,
)
from trade_analytics.models import (
    BucketStats,
    DayOfWeekStats,
    DirectionStats,
    EmotionStats,
    HourOfDayStats,
    MistakeStats,
    PairStats,
    SetupStats,
    TagStats,
    Trade,
)

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
DIRECTIONS = ("long", "short")
DEFAULT_ENTRY_HOUR = 12

S = TypeVar("S", bound=BucketStats)


def day_of_week(trade: Trade) -> int:
    """Weekday index with 0 = Sunday, 6 = Saturday."""
    return (trade.trade_date.weekday() + 1) % 7


def entry_hour(trade: Trade) -> int:
    """UTC hour of entry from created_at, then closed_at, else midday."""
    ts = trade.created_at or trade.closed_at
    if ts is None:
        return DEFAULT_ENTRY_HOUR
    return to_naive_utc(ts).hour


def _group_single(
    trades: Iterable[Trade],
    key: Callable[[Trade], Optional[str]],
) -> dict[str, list[Trade]]:
    groups: dict[str, list[Trade]] = {}
    for trade in qualifying_trades(trades):
        label = key(trade)
        if label is None:
            continue
        groups.setdefault(label, []).append(trade)
    return groups


def _group_multi(
    trades: Iterable[Trade],
    labels: Callable[[Trade], list[str]],
) -> dict[str, list[Trade]]:
    groups: dict[str, list[Trade]] = {}
    for trade in qualifying_trades(trades):
        # a label repeated on one trade still counts once
        for label in dict.fromkeys(labels(trade)):
            groups.setdefault(label, []).append(trade)
    return groups


def _ranked(
    groups: dict[str, list[Trade]],
    build: Callable[[str, dict], S],
) -> list[S]:
    buckets = [build(label, bucket_fields(members)) for label, members in groups.items()]
    # stable sort keeps first-seen order on ties
    return sorted(buckets, key=lambda b: b.total_pnl, reverse=True)


def compute_day_of_week_stats(trades: Iterable[Trade]) -> list[DayOfWeekStats]:
    members: list[list[Trade]] = [[] for _ in range(7)]
    for trade in qualifying_trades(trades):
        members[day_of_week(trade)].append(trade)

    return [
        DayOfWeekStats(day=day, day_name=DAY_NAMES[day], **bucket_fields(bucket))
        for day, bucket in enumerate(members)
    ]


def compute_hour_of_day_stats(trades: Iterable[Trade]) -> list[HourOfDayStats]:
    members: list[list[Trade]] = [[] for _ in range(24)]
    for trade in qualifying_trades(trades):
        members[entry_hour(trade)].append(trade)

    return [
        HourOfDayStats(hour=hour, **bucket_fields(bucket))
        for hour, bucket in enumerate(members)
    ]


def compute_direction_stats(trades: Iterable[Trade]) -> list[DirectionStats]:
    groups = _group_single(trades, lambda t: t.direction)

    result = []
    for direction in DIRECTIONS:
        bucket = groups.get(direction, [])
        pnls = [t.pnl for t in bucket]
        result.append(
            DirectionStats(
                direction=direction,
                avg_rr=average_rr(bucket),
                best_trade=max(pnls, default=0.0),
                worst_trade=min(pnls, default=0.0),
                **bucket_fields(bucket),
            )
        )
    return result


def compute_emotion_stats(trades: Iterable[Trade]) -> list[EmotionStats]:
    groups = _group_single(trades, lambda t: t.emotion)
    return _ranked(groups, lambda label, fields: EmotionStats(emotion=label, **fields))


def compute_setup_stats(trades: Iterable[Trade]) -> list[SetupStats]:
    groups = _group_single(trades, lambda t: t.setup)
    return _ranked(groups, lambda label, fields: SetupStats(setup=label, **fields))


def compute_pair_stats(trades: Iterable[Trade]) -> list[PairStats]:
    groups = _group_single(trades, lambda t: t.pair)
    return _ranked(groups, lambda label, fields: PairStats(pair=label, **fields))


def compute_mistake_stats(trades: Iterable[Trade]) -> list[MistakeStats]:
    groups = _group_multi(trades, lambda t: t.mistakes)
    return _ranked(groups, lambda label, fields: MistakeStats(mistake=label, **fields))


def compute_tag_stats(trades: Iterable[Trade]) -> list[TagStats]:
    groups = _group_multi(trades, lambda t: t.tags)
    return _ranked(groups, lambda label, fields: TagStats(tag=label, **fields))
