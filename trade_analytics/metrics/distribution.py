"""
Risk:reward distribution over realized rr_ratio.
"""
import math
from typing import Iterable

from trade_analytics.metrics.primitives import bucket_fields, qualifying_trades, usable_rr
from trade_analytics.models import RiskRewardBucket, Trade

# (label, lower inclusive, upper exclusive)
RR_BUCKETS: tuple[tuple[str, float, float], ...] = (
    ("< 1:1", -math.inf, 1.0),
    ("1:1 – 2:1", 1.0, 2.0),
    ("2:1 – 3:1", 2.0, 3.0),
    ("3:1+", 3.0, math.inf),
)


def compute_rr_distribution(trades: Iterable[Trade]) -> list[RiskRewardBucket]:
    """
    Histogram of qualifying trades over fixed rr_ratio ranges.

    Trades without an rr_ratio are left out entirely rather than counted
    in an "unknown" bucket. Every range is always present.

    Args:
        trades: Trade records

    Returns:
        One RiskRewardBucket per range, in ascending order
    """
    members: list[list[Trade]] = [[] for _ in RR_BUCKETS]
    for trade in qualifying_trades(trades):
        rr = usable_rr(trade)
        if rr is None:
            continue
        for index, (_, lower, upper) in enumerate(RR_BUCKETS):
            if lower <= rr and (rr < upper or math.isinf(upper)):
                members[index].append(trade)
                break

    result = []
    for (label, lower, upper), bucket in zip(RR_BUCKETS, members):
        fields = bucket_fields(bucket)
        result.append(
            RiskRewardBucket(
                bucket=label,
                lower=None if math.isinf(lower) else lower,
                upper=None if math.isinf(upper) else upper,
                count=fields["trade_count"],
                win_count=fields["win_count"],
                win_rate=fields["win_rate"],
            )
        )
    return result
