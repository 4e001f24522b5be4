"""
Tests for the delete cascade policy
"""

from src.services.cascade_policy import CASCADE_RULES, CascadeAction, CascadePolicy


def test_card_rules_only_nullify():
    """Test cards never delete their tasks or notes"""
    assert {rule.action for rule in CASCADE_RULES["card"]} == {CascadeAction.NULLIFY}


def test_project_cascade_reaches_card_links(state, project_manager, column_manager, card_manager, task_manager, clock):
    """Test removing a project deletes nested cards and reports every change"""
    project = project_manager.create_project("Doomed")
    column = column_manager.get_project_columns(project.id)[0]
    card = card_manager.create_card(column.id, "Card")
    task = task_manager.create_task(project.id, "Task", {"cardId": card.id})
    
    result = CascadePolicy(state).delete("project", [project.id])
    
    assert result.removed["project"] == {project.id}
    assert len(result.removed["column"]) == 3
    assert result.removed["card"] == {card.id}
    assert result.removed["task"] == {task.id}
    assert state.projects == [] and state.cards == [] and state.tasks == []


def test_nullify_refreshes_updated_at(state, project, columns, card_manager, note_manager, clock):
    """Test unlinked notes get a new updatedAt"""
    card = card_manager.create_card(columns[0].id, "Card")
    note = note_manager.create_note(project.id, "Note", card_id=card.id)
    clock.advance(1000)
    
    result = CascadePolicy(state).delete("card", [card.id])
    
    stored = state.find("notes", note.id)
    assert result.unlinked["note"] == {note.id}
    assert stored.card_id is None
    assert stored.updated_at == clock()


def test_unknown_ids_change_nothing(state, project):
    """Test deleting unknown ids is a no-op"""
    result = CascadePolicy(state).delete("card", ["missing"])
    
    assert result.changed is False
