"""
Note management service
"""

from typing import List, Optional
from src.models.filters import NoteFilters
from src.models.note import Note, NoteUpdate
from src.services.app_state import AppState
from src.services.cascade_policy import CascadePolicy
from src.utils.logger import logger


class NoteManager:
    """Service for managing notes"""
    
    def __init__(self, state: AppState):
        """
        Initialize note manager
        
        Args:
            state: Shared application state
        """
        self.state = state
        self.cascade = CascadePolicy(state)
        self.logger = logger
    
    def create_note(
        self,
        project_id: str,
        title: str,
        content: Optional[str] = None,
        card_id: Optional[str] = None,
    ) -> Optional[Note]:
        """
        Create a note
        
        Args:
            project_id: Owning project
            title: Note title
            content: Rich-text markup (defaults to empty)
            card_id: Optional card to link
            
        Returns:
            Created note, or None if the project does not exist
        """
        if not self.state.find("projects", project_id):
            self.logger.warning(f"[NoteManager] Project {project_id} not found, note not created")
            return None
        
        now = self.state.now()
        note = Note(
            id=self.state.new_id(),
            project_id=project_id,
            title=title,
            content=content or "",
            card_id=self._existing_card_id(card_id),
            created_at=now,
            updated_at=now,
        )
        self.state.notes.append(note)
        self.logger.debug(f"[NoteManager] Note created: {note.id} ('{title}')")
        self.state.mark_changed("note_created")
        return self.state.snapshot(note)
    
    def update_note(self, note_id: str, **changes) -> Optional[Note]:
        """
        Merge title/content/cardId/links changes into a note
        
        Returns:
            Updated note, or None if the note or the linked card does not exist
        """
        note = self.state.find("notes", note_id)
        if not note:
            self.logger.debug(f"[NoteManager] Update ignored, note {note_id} not found")
            return None
        
        fields = NoteUpdate(**changes).changes()
        card_id = fields.get("card_id")
        if card_id and not self.state.find("cards", card_id):
            self.logger.warning(f"[NoteManager] Card {card_id} not found, note {note_id} not updated")
            return None
        
        for name, value in fields.items():
            setattr(note, name, value)
        note.updated_at = self.state.now()
        self.state.mark_changed("note_updated")
        return self.state.snapshot(note)
    
    def delete_note(self, note_id: str) -> bool:
        """Hard-delete a note"""
        result = self.cascade.delete("note", [note_id])
        if not result.changed:
            self.logger.debug(f"[NoteManager] Delete ignored, note {note_id} not found")
            return False
        
        self.logger.debug(f"[NoteManager] Note deleted: {note_id}")
        self.state.mark_changed("note_deleted")
        return True
    
    def list_notes(
        self,
        filters: Optional[NoteFilters] = None,
        project_id: Optional[str] = None,
    ) -> List[Note]:
        """
        Filtered notes of a project (default: current project)
        
        Args:
            filters: Search and card filters
            project_id: Project to list
            
        Returns:
            Notes, most recently updated first
        """
        filters = filters or NoteFilters()
        project_id = project_id or self.state.current_project_id
        notes = [n for n in self.state.notes if n.project_id == project_id]
        
        if filters.filters_by_card:
            if filters.card_id is None:
                notes = [n for n in notes if not n.card_id]
            else:
                notes = [n for n in notes if n.card_id == filters.card_id]
        
        search = filters.search_term
        if search:
            notes = [n for n in notes if search in n.title.lower() or search in n.content.lower()]
        
        notes.sort(key=lambda n: n.updated_at, reverse=True)
        return self.state.snapshots(notes)
    
    def _existing_card_id(self, card_id: Optional[str]) -> Optional[str]:
        if card_id and not self.state.find("cards", card_id):
            self.logger.warning(f"[NoteManager] Card {card_id} not found, link dropped")
            return None
        return card_id
