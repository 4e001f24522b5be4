"""
Ordering helpers for entities with an integer `order` field
"""

from typing import List, Sequence, TypeVar
from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


def sort_by_order(items: Sequence[T]) -> List[T]:
    """
    Return items ascending by order.
    
    sorted() is stable, so ties keep their incoming relative position.
    """
    return sorted(items, key=lambda item: item.order)


def reindex(items: Sequence[T]) -> List[T]:
    """
    Return copies of items with order set to 0..n-1 by position
    
    Args:
        items: Items already in the desired order
        
    Returns:
        New list of copied items with contiguous orders
    """
    return [item.model_copy(update={"order": index}) for index, item in enumerate(items)]


def clamp_index(index: int, length: int) -> int:
    """Clamp an insertion index into [0, length]"""
    return max(0, min(index, length))


def next_order(items: Sequence[BaseModel]) -> int:
    """Append-at-end order: max(existing) + 1, or 0 for an empty group"""
    return max((item.order for item in items), default=-1) + 1
