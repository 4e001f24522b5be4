"""
Column management service
"""

from typing import List, Optional, Sequence, Union
from src.models.kanban import KanbanColumn
from src.services.app_state import AppState
from src.services.cascade_policy import CascadePolicy
from src.utils.logger import logger
from src.utils.ordering import sort_by_order, reindex, next_order


class ColumnManager:
    """Service for managing board columns"""

    def __init__(self, state: AppState):
        """
        Initialize column manager

        Args:
            state: Shared application state
        """
        self.state = state
        self.cascade = CascadePolicy(state)
        self.logger = logger

    def create_column(self, project_id: str, title: str) -> Optional[KanbanColumn]:
        """
        Append a column at the right end of a project's board

        Args:
            project_id: Owning project
            title: Column title

        Returns:
            Created column, or None if the project does not exist
        """
        if not self.state.find("projects", project_id):
            self.logger.warning(f"[ColumnManager] Project {project_id} not found, column not created")
            return None

        column = KanbanColumn(
            id=self.state.new_id(),
            project_id=project_id,
            title=title,
            order=next_order(self._siblings(project_id)),
            created_at=self.state.now(),
        )
        self.state.columns.append(column)
        self.logger.debug(f"[ColumnManager] Column created: {column.id} ('{title}', order {column.order})")
        self.state.mark_changed("column_created")
        return self.state.snapshot(column)

    def update_column(self, column_id: str, title: str) -> Optional[KanbanColumn]:
        """Rename a column"""
        column = self.state.find("columns", column_id)
        if not column:
            self.logger.debug(f"[ColumnManager] Update ignored, column {column_id} not found")
            return None

        column.title = title
        self.state.mark_changed("column_updated")
        return self.state.snapshot(column)

    def delete_column(self, column_id: str) -> bool:
        """
        Delete a column and hard-delete its cards

        Tasks and notes linked to the removed cards are unlinked, not deleted.
        Remaining columns of the project are renumbered.
        """
        column = self.state.find("columns", column_id)
        if not column:
            self.logger.debug(f"[ColumnManager] Delete ignored, column {column_id} not found")
            return False

        project_id = column.project_id
        result = self.cascade.delete("column", [column_id])
        self.state.replace_items("columns", reindex(sort_by_order(self._siblings(project_id))))

        self.logger.info(
            f"[ColumnManager] Column deleted: {column_id} "
            f"({len(result.removed.get('card', ()))} cards removed)"
        )
        self.state.mark_changed("column_deleted")
        return True

    def reorder_columns(self, ordered: Sequence[Union[str, KanbanColumn]]) -> bool:
        """
        Assign orders 0..n-1 to the given columns in the given sequence

        Columns not listed are left untouched. All listed columns must belong
        to the same project as the first one; others are ignored.

        Args:
            ordered: Column ids (or columns) in the desired left-to-right order

        Returns:
            True if any column was reordered
        """
        columns: List[KanbanColumn] = []
        seen = set()
        for entry in ordered:
            column_id = entry.id if isinstance(entry, KanbanColumn) else entry
            column = self.state.find("columns", column_id)
            if column is None or column_id in seen:
                continue
            if columns and column.project_id != columns[0].project_id:
                self.logger.warning(
                    f"[ColumnManager] Column {column_id} belongs to another project, skipped in reorder"
                )
                continue
            seen.add(column_id)
            columns.append(column)

        if not columns:
            return False

        self.state.replace_items("columns", reindex(columns))
        self.state.mark_changed("columns_reordered")
        return True

    def get_project_columns(self, project_id: Optional[str] = None) -> List[KanbanColumn]:
        """Columns of a project (default: current project), left to right"""
        project_id = project_id or self.state.current_project_id
        if not project_id:
            return []
        return self.state.snapshots(sort_by_order(self._siblings(project_id)))

    def _siblings(self, project_id: str) -> List[KanbanColumn]:
        return [c for c in self.state.columns if c.project_id == project_id]
