"""
Tests for document parsing and serialization
"""

import pytest
from src.models.document import AppDocument, parse_document, coerce_payload
from src.utils.error_handler import DocumentValidationError

PROJECT = {"id": "p1", "name": "P", "createdAt": 1, "updatedAt": 2}
COLUMN = {"id": "c1", "projectId": "p1", "title": "To Do", "order": 0, "createdAt": 1}
CARD = {
    "id": "k1", "title": "Card", "columnId": "c1", "order": 0,
    "createdAt": 1, "updatedAt": 1, "columnChangedAt": 1,
}
TASK = {
    "id": "t1", "projectId": "p1", "title": "Task", "status": "in-progress",
    "priority": "p1", "cardId": "k1", "createdAt": 1, "updatedAt": 1,
}
NOTE = {"id": "n1", "projectId": "p1", "title": "Note", "content": "<p>x</p>", "createdAt": 1, "updatedAt": 1}


def test_parse_document():
    """Test camelCase document is parsed into typed entities"""
    document = parse_document({
        "projects": [PROJECT], "columns": [COLUMN], "cards": [CARD],
        "tasks": [TASK], "notes": [NOTE], "currentProjectId": "p1",
    })
    
    assert document.current_project_id == "p1"
    assert document.cards[0].column_id == "c1"
    assert document.cards[0].priority == "p2"
    assert document.tasks[0].status == "in-progress"
    assert document.tasks[0].card_id == "k1"
    assert document.notes[0].content == "<p>x</p>"


def test_parse_document_coerces_bad_fields():
    """Test non-list collections and non-string current project fall back to defaults"""
    document = parse_document({"projects": "nope", "tasks": None, "currentProjectId": 42})
    
    assert document.projects == []
    assert document.tasks == []
    assert document.current_project_id is None


def test_parse_document_drops_malformed_items():
    """Test one broken item does not reject the document"""
    document = parse_document({"projects": [PROJECT, {"id": "broken"}]})
    
    assert [p.id for p in document.projects] == ["p1"]


def test_parse_document_rejects_non_object():
    """Test a JSON array is not a document"""
    with pytest.raises(DocumentValidationError):
        parse_document([1, 2, 3])


def test_to_payload_uses_wire_names():
    """Test serialization uses camelCase keys and omits unset optionals"""
    payload = parse_document({"projects": [PROJECT], "tasks": [TASK], "currentProjectId": "p1"}).to_payload()
    
    assert payload["currentProjectId"] == "p1"
    assert payload["tasks"][0]["projectId"] == "p1"
    assert payload["tasks"][0]["cardId"] == "k1"
    assert "dueDate" not in payload["tasks"][0]
    assert payload["columns"] == []


def test_empty_document_payload():
    """Test default document shape"""
    assert AppDocument().to_payload() == {
        "projects": [], "columns": [], "cards": [], "tasks": [], "notes": [],
        "currentProjectId": None,
    }


def test_coerce_payload():
    """Test save payload coercion keeps lists and drops bad values"""
    assert coerce_payload({"projects": [PROJECT], "notes": {"a": 1}, "currentProjectId": 7}) == {
        "projects": [PROJECT], "columns": [], "cards": [], "tasks": [], "notes": [],
        "currentProjectId": None,
    }
    with pytest.raises(DocumentValidationError):
        coerce_payload("text")
