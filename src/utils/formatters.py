"""
Display formatting utilities
"""

from typing import Optional
from src.config.constants import (
    MS_PER_MINUTE,
    MS_PER_HOUR,
    MS_PER_DAY,
    STALE_AGING_DAYS,
    STALE_DAYS,
)
from src.models.response import CardAge
from src.utils.date_utils import now_ms, from_ms, whole_days_between


def format_date(timestamp: int) -> str:
    """
    Format timestamp as a short UTC date
    
    Args:
        timestamp: Milliseconds since epoch
        
    Returns:
        Date like "Mar 5, 2025"
    """
    dt = from_ms(timestamp)
    return f"{dt.strftime('%b')} {dt.day}, {dt.year}"


def format_relative_date(timestamp: int, now: Optional[int] = None) -> str:
    """
    Format timestamp relative to now
    
    Args:
        timestamp: Milliseconds since epoch
        now: Reference time (defaults to current time)
        
    Returns:
        "Just now", "5m ago", "3h ago", "2d ago" or a short date after a week
    """
    if now is None:
        now = now_ms()
    diff = now - timestamp
    minutes = diff // MS_PER_MINUTE
    hours = diff // MS_PER_HOUR
    days = diff // MS_PER_DAY
    
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    if days < 7:
        return f"{days}d ago"
    return format_date(timestamp)


def format_days_in_column(column_changed_at: Optional[int], now: Optional[int] = None) -> CardAge:
    """
    Describe how long a card has been in its current column
    
    Args:
        column_changed_at: Timestamp of the card's last column change
        now: Reference time (defaults to current time)
        
    Returns:
        CardAge with day count, label and staleness level
    """
    if not column_changed_at:
        return CardAge()
    if now is None:
        now = now_ms()
    
    days = whole_days_between(column_changed_at, now)
    if days == 0:
        label = "today"
    elif days == 1:
        label = "1 day"
    else:
        label = f"{days} days"
    
    if days >= STALE_DAYS:
        level = "stale"
    elif days >= STALE_AGING_DAYS:
        level = "aging"
    else:
        level = "fresh"
    
    return CardAge(days=days, label=label, level=level)
