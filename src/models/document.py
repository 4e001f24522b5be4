"""
Persisted document schema.

The whole application state is stored as one JSON object:

    {projects, columns, cards, tasks, notes, currentProjectId}

Two validation levels are provided:

* RawDocument - shape-only coercion used by the storage endpoint before
  writing (each collection must be a list, currentProjectId a string or null).
* AppDocument - typed document used by the in-memory state. Collections are
  parsed into entity models; items that fail validation are dropped with a
  warning instead of rejecting the whole document.
"""

from typing import Any, Dict, List, Optional, Type
from pydantic import BaseModel, Field, ConfigDict, ValidationError, field_validator
from src.models.project import Project
from src.models.kanban import KanbanColumn, KanbanCard
from src.models.task import Task
from src.models.note import Note
from src.utils.error_handler import DocumentValidationError
from src.utils.logger import logger

COLLECTION_FIELDS = ("projects", "columns", "cards", "tasks", "notes")


def _coerce_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _coerce_project_id(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _valid_items(model: Type[BaseModel], items: List[Any]) -> List[BaseModel]:
    """Parse items into model instances, skipping the malformed ones"""
    parsed = []
    for index, item in enumerate(items):
        if isinstance(item, model):
            parsed.append(item)
            continue
        try:
            parsed.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning(
                f"[Document] Dropping malformed {model.__name__} at index {index}: "
                f"{e.error_count()} error(s)"
            )
    return parsed


class RawDocument(BaseModel):
    """Untyped document, coerced field by field"""
    
    model_config = ConfigDict(populate_by_name=True)
    
    projects: List[Any] = Field(default_factory=list)
    columns: List[Any] = Field(default_factory=list)
    cards: List[Any] = Field(default_factory=list)
    tasks: List[Any] = Field(default_factory=list)
    notes: List[Any] = Field(default_factory=list)
    current_project_id: Optional[str] = Field(None, alias="currentProjectId")
    
    @field_validator(*COLLECTION_FIELDS, mode="before")
    @classmethod
    def _lists_only(cls, value: Any) -> List[Any]:
        return _coerce_list(value)
    
    @field_validator("current_project_id", mode="before")
    @classmethod
    def _string_or_none(cls, value: Any) -> Optional[str]:
        return _coerce_project_id(value)
    
    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class AppDocument(BaseModel):
    """Typed, validated document"""
    
    model_config = ConfigDict(populate_by_name=True)
    
    projects: List[Project] = Field(default_factory=list)
    columns: List[KanbanColumn] = Field(default_factory=list)
    cards: List[KanbanCard] = Field(default_factory=list)
    tasks: List[Task] = Field(default_factory=list)
    notes: List[Note] = Field(default_factory=list)
    current_project_id: Optional[str] = Field(None, alias="currentProjectId")
    
    @field_validator("projects", mode="before")
    @classmethod
    def _parse_projects(cls, value: Any) -> List[Project]:
        return _valid_items(Project, _coerce_list(value))
    
    @field_validator("columns", mode="before")
    @classmethod
    def _parse_columns(cls, value: Any) -> List[KanbanColumn]:
        return _valid_items(KanbanColumn, _coerce_list(value))
    
    @field_validator("cards", mode="before")
    @classmethod
    def _parse_cards(cls, value: Any) -> List[KanbanCard]:
        return _valid_items(KanbanCard, _coerce_list(value))
    
    @field_validator("tasks", mode="before")
    @classmethod
    def _parse_tasks(cls, value: Any) -> List[Task]:
        return _valid_items(Task, _coerce_list(value))
    
    @field_validator("notes", mode="before")
    @classmethod
    def _parse_notes(cls, value: Any) -> List[Note]:
        return _valid_items(Note, _coerce_list(value))
    
    @field_validator("current_project_id", mode="before")
    @classmethod
    def _string_or_none(cls, value: Any) -> Optional[str]:
        return _coerce_project_id(value)
    
    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the camelCase wire shape, omitting unset optionals"""
        payload: Dict[str, Any] = {
            name: [item.model_dump(by_alias=True, exclude_none=True) for item in getattr(self, name)]
            for name in COLLECTION_FIELDS
        }
        payload["currentProjectId"] = self.current_project_id
        return payload


def parse_document(data: Any) -> AppDocument:
    """
    Validate a loaded document
    
    Args:
        data: Decoded JSON value
        
    Returns:
        AppDocument with malformed fields coerced to defaults
        
    Raises:
        DocumentValidationError: If data is not a JSON object
    """
    if not isinstance(data, dict):
        raise DocumentValidationError(
            f"expected a JSON object, got {type(data).__name__}"
        )
    return AppDocument.model_validate(data)


def coerce_payload(data: Any) -> Dict[str, Any]:
    """Coerce an incoming save payload to the persisted shape"""
    if not isinstance(data, dict):
        raise DocumentValidationError(
            f"expected a JSON object, got {type(data).__name__}"
        )
    return RawDocument.model_validate(data).to_payload()
