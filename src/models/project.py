"""
Project model
"""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict
from src.models.update import PartialUpdate


class Project(BaseModel):
    """Root of a data partition: one board, one task list, one note collection"""
    
    model_config = ConfigDict(populate_by_name=True)
    
    id: str
    name: str
    description: Optional[str] = None
    created_at: int = Field(..., alias="createdAt")
    updated_at: int = Field(..., alias="updatedAt")


class ProjectUpdate(PartialUpdate):
    """Project update model"""
    
    REQUIRED_FIELDS = ("name",)
    
    name: Optional[str] = None
    description: Optional[str] = None
