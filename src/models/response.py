"""
Response models for derived views and persistence results
"""

from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict
from src.models.task import Task


class ErrorResponse(BaseModel):
    """Error response model"""
    message: str
    error_code: Optional[str] = None
    details: Optional[dict] = None


class TaskCounts(BaseModel):
    """Task totals for a project, independent of active filters"""
    
    model_config = ConfigDict(populate_by_name=True)
    
    total: int = 0
    todo: int = 0
    in_progress: int = Field(0, alias="inProgress")
    done: int = 0


class CardProgress(BaseModel):
    """Completion rollup of the tasks linked to one card"""
    total: int = 0
    completed: int = 0
    percentage: int = 0


class DeliverableStatus(BaseModel):
    """Status summary of a card and its linked tasks"""
    
    model_config = ConfigDict(populate_by_name=True)
    
    card_id: str = Field(..., alias="cardId")
    total: int = 0
    completed: int = 0
    in_progress: int = Field(0, alias="inProgress")
    todo: int = 0
    percentage: int = 0
    recently_completed: List[Task] = Field(default_factory=list, alias="recentlyCompleted")
    upcoming: List[Task] = Field(default_factory=list)
    overdue: List[Task] = Field(default_factory=list)
    high_priority: List[Task] = Field(default_factory=list, alias="highPriority")


class CardAge(BaseModel):
    """How long a card has been sitting in its current column"""
    days: int = 0
    label: str = "today"
    level: str = "fresh"
