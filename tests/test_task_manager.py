"""
Tests for TaskManager
"""

import pytest
from src.models.filters import TaskFilters
from src.models.task import LinkAttachment, TaskStatus


def test_create_task_defaults(task_manager, project, clock):
    """Test task defaults to todo / p2 with timestamps set"""
    task = task_manager.create_task(project.id, "Write docs")
    
    assert task.project_id == project.id
    assert task.status == "todo"
    assert task.priority == "p2"
    assert task.card_id is None
    assert task.order is None
    assert task.created_at == task.updated_at == clock()


def test_create_task_missing_project(task_manager, state):
    """Test creating a task in an unknown project is a no-op"""
    assert task_manager.create_task("missing", "Lost") is None
    assert state.tasks == []


def test_create_task_drops_unknown_card(task_manager, project):
    """Test dangling card link is not stored"""
    task = task_manager.create_task(project.id, "Task", {"cardId": "missing"})
    
    assert task.card_id is None


def test_weak_card_link_cleared_on_card_delete(task_manager, card_manager, project, columns, state):
    """Test unlinked task survives deletion of the card it was linked to"""
    task = task_manager.create_task(project.id, "Task")
    card = card_manager.create_card(columns[0].id, "X")
    task_manager.update_task(task.id, card_id=card.id)
    assert state.find("tasks", task.id).card_id == card.id
    
    card_manager.delete_card(card.id)
    
    stored = state.find("tasks", task.id)
    assert stored is not None
    assert stored.card_id is None


def test_update_task(task_manager, project, clock):
    """Test partial update merges fields and refreshes updatedAt"""
    task = task_manager.create_task(project.id, "Task", {"description": "Old"})
    clock.advance(1000)
    
    updated = task_manager.update_task(
        task.id,
        status=TaskStatus.DONE,
        links=[LinkAttachment(url="https://example.com", title="Example")],
    )
    
    assert updated.status == "done"
    assert updated.description == "Old"
    assert updated.links[0].url == "https://example.com"
    assert updated.updated_at == clock()
    assert updated.created_at == task.created_at


def test_update_task_ignores_none_for_required_fields(task_manager, project):
    """Test title cannot be cleared, optional fields can"""
    task = task_manager.create_task(project.id, "Task", {"description": "Text"})
    
    updated = task_manager.update_task(task.id, title=None, description=None)
    
    assert updated.title == "Task"
    assert updated.description is None


def test_update_missing_task(task_manager):
    """Test update of unknown task returns None"""
    assert task_manager.update_task("missing", title="X") is None


def test_delete_task(task_manager, project, state):
    """Test hard delete"""
    task = task_manager.create_task(project.id, "Task")
    
    assert task_manager.delete_task(task.id) is True
    assert state.tasks == []
    assert task_manager.delete_task(task.id) is False


def test_list_tasks_filters(task_manager, card_manager, project, columns):
    """Test status, priority, search and card filters"""
    card = card_manager.create_card(columns[0].id, "Card")
    task_manager.create_task(project.id, "Fix login bug", {"priority": "p0", "cardId": card.id})
    task_manager.create_task(project.id, "Write release notes", {"status": "done", "description": "Mention the login fix"})
    task_manager.create_task(project.id, "Plan sprint", {"status": "in-progress"})
    
    def titles(**kwargs):
        return sorted(t.title for t in task_manager.list_tasks(TaskFilters(**kwargs)))
    
    assert titles() == ["Fix login bug", "Plan sprint", "Write release notes"]
    assert titles(status="done") == ["Write release notes"]
    assert titles(priority="p0") == ["Fix login bug"]
    assert titles(search="LOGIN") == ["Fix login bug", "Write release notes"]
    assert titles(card_id=card.id) == ["Fix login bug"]
    assert titles(card_id=None) == ["Plan sprint", "Write release notes"]


def test_list_tasks_scoped_to_current_project(task_manager, project_manager, project):
    """Test tasks of other projects are not listed"""
    task_manager.create_task(project.id, "Mine")
    other = project_manager.create_project("Other")
    task_manager.create_task(other.id, "Theirs")
    
    assert [t.title for t in task_manager.list_tasks()] == ["Theirs"]
    assert [t.title for t in task_manager.list_tasks(project_id=project.id)] == ["Mine"]


def test_list_tasks_newest_first(task_manager, project, clock):
    """Test unordered tasks are listed newest first"""
    task_manager.create_task(project.id, "Old")
    clock.advance(1000)
    task_manager.create_task(project.id, "New")
    
    assert [t.title for t in task_manager.list_tasks()] == ["New", "Old"]


def test_card_filtered_list_sorted_by_priority(task_manager, card_manager, project, columns, clock):
    """Test card-filtered list sorts by priority then newest"""
    card = card_manager.create_card(columns[0].id, "Card")
    task_manager.create_task(project.id, "Low", {"cardId": card.id, "priority": "p3"})
    clock.advance(1000)
    task_manager.create_task(project.id, "Urgent", {"cardId": card.id, "priority": "p0"})
    clock.advance(1000)
    task_manager.create_task(project.id, "Normal old", {"cardId": card.id})
    clock.advance(1000)
    task_manager.create_task(project.id, "Normal new", {"cardId": card.id})
    
    listed = task_manager.list_tasks(TaskFilters(card_id=card.id))
    
    assert [t.title for t in listed] == ["Urgent", "Normal new", "Normal old", "Low"]


def test_reorder_tasks(task_manager, project, clock):
    """Test manual order is applied and used by the unfiltered list"""
    a = task_manager.create_task(project.id, "A")
    clock.advance(1000)
    b = task_manager.create_task(project.id, "B")
    clock.advance(1000)
    c = task_manager.create_task(project.id, "C")
    
    assert task_manager.reorder_tasks([a.id, c.id, b.id]) is True
    
    listed = task_manager.list_tasks()
    assert [t.title for t in listed] == ["A", "C", "B"]
    assert [t.order for t in listed] == [0, 1, 2]
    assert all(t.updated_at == t.created_at for t in listed)


def test_reorder_tasks_rejected_when_card_filtered(task_manager, project):
    """Test manual reorder is not allowed in a card-filtered list"""
    a = task_manager.create_task(project.id, "A")
    b = task_manager.create_task(project.id, "B")
    
    assert task_manager.reorder_tasks([b.id, a.id], card_filter_active=True) is False
    assert all(t.order is None for t in task_manager.list_tasks())


def test_task_counts_ignore_filters(task_manager, project):
    """Test counts cover the whole project"""
    task_manager.create_task(project.id, "A")
    task_manager.create_task(project.id, "B", {"status": "in-progress"})
    task_manager.create_task(project.id, "C", {"status": "done"})
    task_manager.create_task(project.id, "D", {"status": "done"})
    
    counts = task_manager.get_task_counts()
    
    assert (counts.total, counts.todo, counts.in_progress, counts.done) == (4, 1, 1, 2)


def test_card_progress(task_manager, card_manager, project, columns):
    """Test 2 of 4 done tasks gives 50 percent"""
    card = card_manager.create_card(columns[0].id, "Card")
    for status in ("done", "done", "todo", "in-progress"):
        task_manager.create_task(project.id, "T", {"cardId": card.id, "status": status})
    
    progress = task_manager.get_card_progress(card.id)
    
    assert (progress.total, progress.completed, progress.percentage) == (4, 2, 50)
    assert task_manager.get_card_progress("no-tasks").percentage == 0


def test_update_task_with_unknown_card_is_rejected(task_manager, card_manager, project, columns, clock):
    """Test linking to a missing card leaves the task and its current link unchanged"""
    card = card_manager.create_card(columns[0].id, "Card")
    task = task_manager.create_task(project.id, "Task", {"cardId": card.id})
    clock.advance(1000)
    
    assert task_manager.update_task(task.id, card_id="ghost", title="Renamed") is None
    
    stored = task_manager.list_tasks()[0]
    assert stored.card_id == card.id
    assert stored.title == "Task"
    assert stored.updated_at == task.updated_at
