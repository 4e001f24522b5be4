"""
Centralized time utilities.

All timestamps in the document are integer milliseconds since the epoch.
"""

import time
from datetime import datetime, timezone
from src.config.constants import MS_PER_DAY


def now_ms() -> int:
    """
    Get current time in milliseconds since epoch
    
    Returns:
        Current timestamp
    """
    return int(time.time() * 1000)


def from_ms(timestamp: int) -> datetime:
    """Convert a millisecond timestamp into an aware UTC datetime"""
    return datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc)


def whole_days_between(earlier: int, later: int) -> int:
    """Number of whole days elapsed between two timestamps"""
    return max(0, (later - earlier) // MS_PER_DAY)
