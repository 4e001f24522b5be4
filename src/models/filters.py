"""
Filter models for derived task and note views
"""

from typing import Optional, Union, Literal
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from src.models.task import TaskStatus, Priority


class ViewType(str, Enum):
    """Top-level view of a project"""
    KANBAN = "kanban"
    TASKS = "tasks"
    NOTES = "notes"


class CardFilterMixin(BaseModel):
    """
    Card link filter shared by task and note views.
    
    Leaving card_id unset shows everything, card_id=None shows only unlinked
    items and a card id shows only items linked to that card.
    """
    
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)
    
    card_id: Optional[str] = Field(None, alias="cardId")
    search: Optional[str] = None
    
    @property
    def filters_by_card(self) -> bool:
        return "card_id" in self.model_fields_set
    
    @property
    def search_term(self) -> str:
        return (self.search or "").lower()


class TaskFilters(CardFilterMixin):
    """Task list filters"""
    status: Union[TaskStatus, Literal["all"]] = "all"
    priority: Union[Priority, Literal["all"]] = "all"


class NoteFilters(CardFilterMixin):
    """Note list filters"""
    pass
