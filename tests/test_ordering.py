"""
Tests for ordering helpers
"""

from src.models.kanban import KanbanColumn
from src.utils.ordering import sort_by_order, reindex, clamp_index, next_order


def _column(column_id, order):
    return KanbanColumn(id=column_id, project_id="p", title=column_id, order=order, created_at=0)


def test_sort_by_order_is_stable():
    """Test ties keep incoming position"""
    items = [_column("a", 2), _column("b", 1), _column("c", 1)]
    
    assert [c.id for c in sort_by_order(items)] == ["b", "c", "a"]


def test_reindex_returns_copies():
    """Test reindex assigns 0..n-1 without mutating inputs"""
    items = [_column("a", 5), _column("b", 9)]
    
    result = reindex(items)
    
    assert [c.order for c in result] == [0, 1]
    assert [c.order for c in items] == [5, 9]


def test_clamp_index():
    """Test insertion index is clamped to the list bounds"""
    assert clamp_index(-3, 4) == 0
    assert clamp_index(2, 4) == 2
    assert clamp_index(10, 4) == 4


def test_next_order():
    """Test append order is max + 1"""
    assert next_order([]) == 0
    assert next_order([_column("a", 0), _column("b", 4)]) == 5
