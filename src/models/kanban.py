"""
Kanban board models (columns and cards)
"""

from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from src.models.task import Priority
from src.models.update import PartialUpdate


class ArchiveReason(str, Enum):
    """Why a card left the board"""
    ARCHIVED = "archived"
    DELETED = "deleted"


class KanbanColumn(BaseModel):
    """Named, ordered bucket of cards within a project's board"""
    
    model_config = ConfigDict(populate_by_name=True)
    
    id: str
    project_id: str = Field(..., alias="projectId")
    title: str
    order: int
    created_at: int = Field(..., alias="createdAt")


class KanbanCard(BaseModel):
    """Unit of board-tracked work (a deliverable)"""
    
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)
    
    id: str
    title: str
    description: Optional[str] = None
    priority: Optional[Priority] = Priority.P2
    column_id: str = Field(..., alias="columnId")
    order: int
    created_at: int = Field(..., alias="createdAt")
    updated_at: int = Field(..., alias="updatedAt")
    column_changed_at: int = Field(..., alias="columnChangedAt")
    due_date: Optional[int] = Field(None, alias="dueDate")
    archived: Optional[bool] = None
    archived_at: Optional[int] = Field(None, alias="archivedAt")
    archive_reason: Optional[ArchiveReason] = Field(None, alias="archiveReason")


class CardUpdate(PartialUpdate):
    """Card update model"""
    
    REQUIRED_FIELDS = ("title", "column_id", "order")
    
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)
    
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[Priority] = None
    due_date: Optional[int] = Field(None, alias="dueDate")
    column_id: Optional[str] = Field(None, alias="columnId")
    order: Optional[int] = None
