"""
Main application entry point
"""

import asyncio
from typing import Callable, Optional
from src.api.document_client import DocumentClient
from src.config.settings import settings
from src.models.filters import ViewType
from src.services.app_state import AppState
from src.services.card_manager import CardManager
from src.services.column_manager import ColumnManager
from src.services.document_store import DocumentStore, JsonFileDocumentStore
from src.services.note_manager import NoteManager
from src.services.persistence import PersistenceGateway
from src.services.project_manager import ProjectManager
from src.services.task_manager import TaskManager
from src.utils.date_utils import now_ms
from src.utils.logger import logger


class ProjectBoard:
    """Wires state, entity managers and persistence together"""
    
    def __init__(
        self,
        store: Optional[DocumentStore] = None,
        clock: Callable[[], int] = now_ms,
        debounce_seconds: Optional[float] = None,
    ):
        """
        Initialize board
        
        Args:
            store: Document store (default: JSON file from settings)
            clock: Millisecond clock for timestamps
            debounce_seconds: Save debounce override
        """
        self.state = AppState(clock=clock)
        self.column_manager = ColumnManager(self.state)
        self.task_manager = TaskManager(self.state)
        self.card_manager = CardManager(self.state, self.task_manager)
        self.note_manager = NoteManager(self.state)
        self.project_manager = ProjectManager(self.state, self.column_manager)
        self.persistence = PersistenceGateway(
            self.state,
            store or JsonFileDocumentStore(settings.DATA_FILE_PATH),
            debounce_seconds=debounce_seconds,
        )
        self.logger = logger
    
    @property
    def view(self):
        return self.state.view
    
    @property
    def is_loading(self) -> bool:
        return not self.persistence.is_hydrated
    
    def set_view(self, view: ViewType) -> None:
        self.state.view.set_view(view)
    
    def select_card(self, card_id: Optional[str]) -> bool:
        """Select a card for filtering and detail views (None clears)"""
        if card_id is not None and not self.state.find("cards", card_id):
            self.logger.debug(f"[ProjectBoard] Selection ignored, card {card_id} not found")
            return False
        self.state.view.select_card(card_id)
        return True
    
    async def start(self) -> None:
        """Validate settings and load the stored document"""
        settings.validate()
        await self.persistence.load()
        self.logger.info(
            f"[ProjectBoard] Ready ({len(self.state.projects)} projects, "
            f"current={self.state.current_project_id})"
        )
    
    async def shutdown(self) -> bool:
        """Flush pending changes and release the store"""
        saved = await self.persistence.shutdown()
        close = getattr(self.persistence.store, "close", None)
        if close is not None:
            await close()
        self.logger.info("[ProjectBoard] Stopped")
        return saved
    
    async def __aenter__(self):
        await self.start()
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.shutdown()


async def main():
    """Main entry point: load the document from the storage service and print a summary"""
    board = ProjectBoard(store=DocumentClient())
    async with board:
        if board.persistence.load_error:
            logger.warning(f"Loaded with error: {board.persistence.load_error}")
        for project in board.project_manager.get_projects():
            columns = board.column_manager.get_project_columns(project.id)
            counts = board.task_manager.get_task_counts(project.id)
            print(f"{project.name}: {len(columns)} columns, {counts.total} tasks ({counts.done} done)")


if __name__ == "__main__":
    asyncio.run(main())
