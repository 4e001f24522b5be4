"""
Tests for AppState
"""

from unittest.mock import MagicMock
from src.models.document import parse_document
from src.services.events import ChangeNotifier, DOCUMENT_CHANGED


def test_hydrate_does_not_emit(state):
    """Test loading a document is not treated as a change"""
    callback = MagicMock()
    state.notifier.subscribe(DOCUMENT_CHANGED, callback)
    
    state.hydrate(parse_document({
        "projects": [{"id": "p1", "name": "P", "createdAt": 1, "updatedAt": 1}],
        "currentProjectId": "p1",
    }))
    
    callback.assert_not_called()
    assert state.current_project_id == "p1"
    assert [p.id for p in state.projects] == ["p1"]


def test_to_document_is_a_snapshot(state, project):
    """Test later mutations do not leak into an earlier snapshot"""
    document = state.to_document()
    state.projects[0].name = "Changed"
    
    assert document.projects[0].name == "Test Project"
    assert document.current_project_id == project.id


def test_notifier_unsubscribe_and_failing_callback():
    """Test unsubscribe works and a failing subscriber does not break emit"""
    notifier = ChangeNotifier()
    received = []
    notifier.subscribe(DOCUMENT_CHANGED, MagicMock(side_effect=RuntimeError("boom")))
    unsubscribe = notifier.subscribe(DOCUMENT_CHANGED, lambda reason: received.append(reason))
    
    notifier.emit(DOCUMENT_CHANGED, reason="first")
    unsubscribe()
    notifier.emit(DOCUMENT_CHANGED, reason="second")
    
    assert received == ["first"]
