"""
Task model
"""

from typing import Optional, List
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from src.models.update import PartialUpdate


class TaskStatus(str, Enum):
    """Task workflow status"""
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class Priority(str, Enum):
    """Priority shared by tasks and cards (p0 is the most urgent)"""
    P0 = "p0"
    P1 = "p1"
    P2 = "p2"
    P3 = "p3"
    P4 = "p4"


class LinkAttachment(BaseModel):
    """URL attached to a task or note"""
    url: str
    title: Optional[str] = None


class Task(BaseModel):
    """Task model"""
    
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)
    
    id: str
    project_id: str = Field(..., alias="projectId")
    title: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.TODO
    priority: Priority = Priority.P2
    due_date: Optional[int] = Field(None, alias="dueDate")
    card_id: Optional[str] = Field(None, alias="cardId")  # weak link to a card
    links: Optional[List[LinkAttachment]] = None
    comments: Optional[str] = None
    order: Optional[int] = None  # set only by manual reordering
    created_at: int = Field(..., alias="createdAt")
    updated_at: int = Field(..., alias="updatedAt")


class TaskCreate(BaseModel):
    """Optional data accepted when creating a task"""
    
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)
    
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.TODO
    priority: Priority = Priority.P2
    due_date: Optional[int] = Field(None, alias="dueDate")
    card_id: Optional[str] = Field(None, alias="cardId")
    links: Optional[List[LinkAttachment]] = None
    comments: Optional[str] = None


class TaskUpdate(PartialUpdate):
    """Task update model (id, projectId and createdAt are immutable)"""
    
    REQUIRED_FIELDS = ("title", "status", "priority")
    
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)
    
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[Priority] = None
    due_date: Optional[int] = Field(None, alias="dueDate")
    card_id: Optional[str] = Field(None, alias="cardId")
    links: Optional[List[LinkAttachment]] = None
    comments: Optional[str] = None
