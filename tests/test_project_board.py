"""
End-to-end tests for ProjectBoard
"""

import json
import pytest
from src.main import ProjectBoard
from src.models.filters import ViewType
from src.services.document_store import JsonFileDocumentStore


@pytest.mark.asyncio
async def test_board_persists_across_restarts(tmp_path):
    """Test state written on shutdown is loaded by the next board"""
    path = tmp_path / "app-data.json"
    
    async with ProjectBoard(store=JsonFileDocumentStore(path), debounce_seconds=0.01) as board:
        project = board.project_manager.create_project("Launch")
        todo = board.column_manager.get_project_columns()[0]
        card = board.card_manager.create_card(todo.id, "Landing page")
        board.task_manager.create_task(project.id, "Copy", {"cardId": card.id})
    
    stored = json.loads(path.read_text(encoding="utf-8"))
    assert stored["currentProjectId"] == project.id
    assert stored["tasks"][0]["cardId"] == card.id
    
    async with ProjectBoard(store=JsonFileDocumentStore(path)) as board:
        assert board.is_loading is False
        assert board.project_manager.get_current_project().name == "Launch"
        assert board.task_manager.get_card_progress(card.id).total == 1


@pytest.mark.asyncio
async def test_select_card_and_view(tmp_path):
    """Test selection only accepts existing cards"""
    async with ProjectBoard(store=JsonFileDocumentStore(tmp_path / "data.json")) as board:
        board.project_manager.create_project("P")
        column = board.column_manager.get_project_columns()[0]
        card = board.card_manager.create_card(column.id, "Card")
        
        assert board.select_card("missing") is False
        assert board.select_card(card.id) is True
        assert board.view.selected_card_id == card.id
        
        board.set_view(ViewType.TASKS)
        assert board.view.current_view == "tasks"
        
        board.card_manager.delete_card(card.id)
        assert board.view.selected_card_id is None
