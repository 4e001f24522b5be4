"""
Note model
"""

from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict
from src.models.task import LinkAttachment
from src.models.update import PartialUpdate


class Note(BaseModel):
    """Free-form rich-text note, optionally linked to one card"""
    
    model_config = ConfigDict(populate_by_name=True)
    
    id: str
    project_id: str = Field(..., alias="projectId")
    title: str
    content: str = ""
    card_id: Optional[str] = Field(None, alias="cardId")  # weak link to a card
    links: Optional[List[LinkAttachment]] = None
    created_at: int = Field(..., alias="createdAt")
    updated_at: int = Field(..., alias="updatedAt")


class NoteUpdate(PartialUpdate):
    """Note update model"""
    
    REQUIRED_FIELDS = ("title", "content")
    
    model_config = ConfigDict(populate_by_name=True)
    
    title: Optional[str] = None
    content: Optional[str] = None
    card_id: Optional[str] = Field(None, alias="cardId")
    links: Optional[List[LinkAttachment]] = None
