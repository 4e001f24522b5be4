"""
Project management service
"""

from typing import List, Optional
from src.config.constants import DEFAULT_COLUMNS
from src.models.project import Project, ProjectUpdate
from src.services.app_state import AppState
from src.services.cascade_policy import CascadePolicy
from src.services.column_manager import ColumnManager
from src.utils.logger import logger


class ProjectManager:
    """Service for managing projects"""
    
    def __init__(self, state: AppState, column_manager: ColumnManager):
        """
        Initialize project manager
        
        Args:
            state: Shared application state
            column_manager: Column service used to seed the default board
        """
        self.state = state
        self.column_manager = column_manager
        self.cascade = CascadePolicy(state)
        self.logger = logger
    
    def create_project(self, name: str, description: Optional[str] = None) -> Project:
        """
        Create a project with the default To Do / In Progress / Done columns
        and make it the active project
        
        Args:
            name: Project name
            description: Optional description
            
        Returns:
            Created project
        """
        now = self.state.now()
        project = Project(
            id=self.state.new_id(),
            name=name,
            description=description,
            created_at=now,
            updated_at=now,
        )
        self.state.projects.append(project)
        
        for column in DEFAULT_COLUMNS:
            self.column_manager.create_column(project.id, column["title"])
        
        self.state.set_current_project_id(project.id)
        self.logger.info(f"[ProjectManager] Project created: {project.id} ('{name}')")
        self.state.mark_changed("project_created")
        return self.state.snapshot(project)
    
    def update_project(self, project_id: str, **changes) -> Optional[Project]:
        """
        Merge name/description changes and refresh updatedAt
        
        Returns:
            Updated project, or None if it does not exist
        """
        project = self.state.find("projects", project_id)
        if not project:
            self.logger.debug(f"[ProjectManager] Update ignored, project {project_id} not found")
            return None
        
        for name, value in ProjectUpdate(**changes).changes().items():
            setattr(project, name, value)
        project.updated_at = self.state.now()
        self.state.mark_changed("project_updated")
        return self.state.snapshot(project)
    
    def delete_project(self, project_id: str) -> bool:
        """
        Delete a project with all its columns, cards, tasks and notes
        
        If it was the active project, the first remaining project (store
        order) becomes active, or none.
        """
        result = self.cascade.delete("project", [project_id])
        if not result.changed:
            self.logger.debug(f"[ProjectManager] Delete ignored, project {project_id} not found")
            return False
        
        if self.state.current_project_id == project_id:
            remaining = self.state.projects
            self.state.set_current_project_id(remaining[0].id if remaining else None)
        
        summary = {kind: len(ids) for kind, ids in result.removed.items() if ids}
        self.logger.info(f"[ProjectManager] Project deleted: {project_id} {summary}")
        self.state.mark_changed("project_deleted")
        return True
    
    def set_current_project(self, project_id: Optional[str]) -> bool:
        """Switch the active project (None clears it); unknown ids are ignored"""
        if project_id is not None and not self.state.find("projects", project_id):
            self.logger.debug(f"[ProjectManager] Switch ignored, project {project_id} not found")
            return False
        if not self.state.set_current_project_id(project_id):
            return False
        self.state.mark_changed("current_project_changed")
        return True
    
    def get_projects(self) -> List[Project]:
        """All projects, most recently updated first"""
        return self.state.snapshots(sorted(self.state.projects, key=lambda p: p.updated_at, reverse=True))
    
    def get_project(self, project_id: str) -> Optional[Project]:
        project = self.state.find("projects", project_id)
        return self.state.snapshot(project) if project else None
    
    def get_current_project(self) -> Optional[Project]:
        if not self.state.current_project_id:
            return None
        return self.get_project(self.state.current_project_id)
