"""
Ephemeral UI state: current view and selected card. Never persisted.
"""

from typing import Optional
from src.models.filters import ViewType
from src.utils.logger import logger


class ViewState:
    """Current view and card selection"""
    
    def __init__(self):
        self.current_view: str = ViewType.KANBAN.value
        self.selected_card_id: Optional[str] = None
        self.logger = logger
    
    def set_view(self, view: ViewType) -> None:
        self.current_view = ViewType(view).value
    
    def select_card(self, card_id: Optional[str]) -> None:
        self.selected_card_id = card_id
    
    def clear_selection(self) -> None:
        if self.selected_card_id is not None:
            self.logger.debug(f"[ViewState] Selection cleared (was {self.selected_card_id})")
        self.selected_card_id = None
    
    def forget_cards(self, card_ids) -> None:
        """Drop the selection if it points at any of the removed cards"""
        if self.selected_card_id in set(card_ids):
            self.clear_selection()
