"""
Timestamp bucketing helpers.

Middleware groupings report the timestamp of the last tuple in a bucket;
dashboards expect the bucket start, so grouped timestamps are rounded down.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY
MONTH = 30 * DAY
YEAR = 365 * DAY


class Bucket(str, Enum):
    """Grouping keywords understood by the middleware."""

    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


_PERIOD_THRESHOLDS = (
    (YEAR, Bucket.YEAR),
    (MONTH, Bucket.MONTH),
    (WEEK, Bucket.WEEK),
    (DAY, Bucket.DAY),
    (HOUR, Bucket.HOUR),
    (MINUTE, Bucket.MINUTE),
)


def round_timestamp(timestamp_ms: int, bucket: str) -> int:
    """
    Round a millisecond timestamp down to the start of its bucket.

    Truncation happens in local time. Only hour, day and month are rounded;
    any other keyword returns the timestamp unchanged.
    """
    moment = datetime.fromtimestamp(timestamp_ms // 1000)

    if bucket == Bucket.HOUR:
        moment = moment.replace(minute=0, second=0, microsecond=0)
    elif bucket == Bucket.DAY:
        moment = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    elif bucket == Bucket.MONTH:
        moment = moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    else:
        return timestamp_ms

    return int(moment.timestamp()) * 1000


def infer_bucket(span_seconds: int, target_points: int) -> Optional[Bucket]:
    """
    Pick a grouping for a range so it yields about `target_points` tuples.

    The average sample period (span / points) is classified with 365 day
    years and 30 day months. Returns None when no grouping is needed.
    """
    if target_points <= 0:
        return None

    period = span_seconds // target_points
    for threshold, bucket in _PERIOD_THRESHOLDS:
        if period > threshold:
            return bucket
    return None
