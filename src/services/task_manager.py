"""
Task management service
"""

import math
from typing import Any, Dict, List, Optional, Sequence, Union
from src.config.constants import PRIORITY_RANK, UNKNOWN_PRIORITY_RANK
from src.models.filters import TaskFilters
from src.models.response import CardProgress, TaskCounts
from src.models.task import Task, TaskCreate, TaskStatus, TaskUpdate
from src.services.app_state import AppState
from src.services.cascade_policy import CascadePolicy
from src.utils.logger import logger
from src.utils.ordering import reindex


def priority_rank(priority: Optional[str]) -> int:
    """Sort rank of a priority, p0 first"""
    return PRIORITY_RANK.get(priority, UNKNOWN_PRIORITY_RANK)


def summarize_progress(tasks: List[Task]) -> CardProgress:
    """Done-task rollup; percentage rounds half up and is 0 for no tasks"""
    total = len(tasks)
    completed = sum(1 for t in tasks if t.status == TaskStatus.DONE)
    percentage = math.floor(100 * completed / total + 0.5) if total else 0
    return CardProgress(total=total, completed=completed, percentage=percentage)


class TaskManager:
    """Service for managing tasks"""

    def __init__(self, state: AppState):
        """
        Initialize task manager

        Args:
            state: Shared application state
        """
        self.state = state
        self.cascade = CascadePolicy(state)
        self.logger = logger

    # -------------------- mutations --------------------

    def create_task(
        self,
        project_id: str,
        title: str,
        data: Optional[Union[TaskCreate, Dict[str, Any]]] = None,
    ) -> Optional[Task]:
        """
        Create a task

        Args:
            project_id: Owning project
            title: Task title
            data: Optional fields (description, status, priority, dueDate, cardId, links, comments)

        Returns:
            Created task, or None if the project does not exist
        """
        if not self.state.find("projects", project_id):
            self.logger.warning(f"[TaskManager] Project {project_id} not found, task not created")
            return None

        if data is None:
            data = TaskCreate()
        elif isinstance(data, dict):
            data = TaskCreate(**data)

        now = self.state.now()
        fields = data.model_dump()
        fields["card_id"] = self._existing_card_id(fields.get("card_id"))
        task = Task(
            id=self.state.new_id(),
            project_id=project_id,
            title=title,
            created_at=now,
            updated_at=now,
            **fields,
        )
        self.state.tasks.append(task)
        self.logger.debug(f"[TaskManager] Task created: {task.id} ('{title}')")
        self.state.mark_changed("task_created")
        return self.state.snapshot(task)

    def update_task(self, task_id: str, **changes) -> Optional[Task]:
        """
        Merge field changes into a task and refresh updatedAt

        Only fields explicitly passed are applied; card_id=None unlinks the
        task from its card.

        Returns:
            Updated task, or None if the task or the linked card does not exist
        """
        task = self.state.find("tasks", task_id)
        if not task:
            self.logger.debug(f"[TaskManager] Update ignored, task {task_id} not found")
            return None

        fields = TaskUpdate(**changes).changes()
        card_id = fields.get("card_id")
        if card_id and not self.state.find("cards", card_id):
            self.logger.warning(f"[TaskManager] Card {card_id} not found, task {task_id} not updated")
            return None

        for name, value in fields.items():
            setattr(task, name, value)
        task.updated_at = self.state.now()
        self.state.mark_changed("task_updated")
        return self.state.snapshot(task)

    def delete_task(self, task_id: str) -> bool:
        """Hard-delete a task (nothing references tasks)"""
        result = self.cascade.delete("task", [task_id])
        if not result.changed:
            self.logger.debug(f"[TaskManager] Delete ignored, task {task_id} not found")
            return False

        self.logger.debug(f"[TaskManager] Task deleted: {task_id}")
        self.state.mark_changed("task_deleted")
        return True

    def reorder_tasks(
        self,
        task_ids: Sequence[str],
        project_id: Optional[str] = None,
        card_filter_active: bool = False,
    ) -> bool:
        """
        Apply a manual order to tasks

        Manual ordering is only supported in the list that is not filtered by
        card; a card-filtered list is always sorted by priority.

        Args:
            task_ids: Task ids in the desired order
            project_id: Project the ids belong to (default: current project)
            card_filter_active: Whether the caller's view is filtered by card

        Returns:
            True if the order was applied
        """
        if card_filter_active:
            self.logger.warning("[TaskManager] Manual reorder ignored in a card-filtered task list")
            return False

        project_id = project_id or self.state.current_project_id
        tasks: List[Task] = []
        seen = set()
        for task_id in task_ids:
            task = self.state.find("tasks", task_id)
            if task is None or task.project_id != project_id or task_id in seen:
                continue
            seen.add(task_id)
            tasks.append(task)

        if not tasks:
            return False

        self.state.replace_items("tasks", reindex(tasks))
        self.state.mark_changed("tasks_reordered")
        return True

    # -------------------- derived views --------------------

    def list_tasks(
        self,
        filters: Optional[TaskFilters] = None,
        project_id: Optional[str] = None,
    ) -> List[Task]:
        """
        Filtered and sorted tasks of a project

        Args:
            filters: Status, priority, search and card filters
            project_id: Project (default: current project)

        Returns:
            Tasks newest first, or by priority then newest when filtered to one card
        """
        filters = filters or TaskFilters()
        tasks = self._project_tasks(project_id)

        if filters.filters_by_card:
            if filters.card_id is None:
                tasks = [t for t in tasks if not t.card_id]
            else:
                tasks = [t for t in tasks if t.card_id == filters.card_id]

        if filters.status != "all":
            tasks = [t for t in tasks if t.status == filters.status]

        if filters.priority != "all":
            tasks = [t for t in tasks if t.priority == filters.priority]

        search = filters.search_term
        if search:
            tasks = [
                t for t in tasks
                if search in t.title.lower() or search in (t.description or "").lower()
            ]

        if filters.filters_by_card and filters.card_id:
            tasks.sort(key=lambda t: (priority_rank(t.priority), -t.created_at))
        else:
            # unordered tasks first (newest first), then manually ordered ones
            tasks.sort(key=lambda t: (t.order is not None, t.order or 0, -t.created_at))

        return self.state.snapshots(tasks)

    def get_task_counts(self, project_id: Optional[str] = None) -> TaskCounts:
        """Totals per status over the whole project, ignoring filters"""
        tasks = self._project_tasks(project_id)
        return TaskCounts(
            total=len(tasks),
            todo=sum(1 for t in tasks if t.status == TaskStatus.TODO),
            in_progress=sum(1 for t in tasks if t.status == TaskStatus.IN_PROGRESS),
            done=sum(1 for t in tasks if t.status == TaskStatus.DONE),
        )

    def get_card_progress(self, card_id: str, project_id: Optional[str] = None) -> CardProgress:
        """
        Completion of the tasks linked to a card

        Returns:
            CardProgress; percentage is 0 when no task is linked
        """
        return summarize_progress([t for t in self._project_tasks(project_id) if t.card_id == card_id])

    def get_card_tasks(self, card_id: str) -> List[Task]:
        """All tasks linked to a card, in store order"""
        return self.state.snapshots([t for t in self.state.tasks if t.card_id == card_id])

    # -------------------- helpers --------------------

    def _project_tasks(self, project_id: Optional[str]) -> List[Task]:
        project_id = project_id or self.state.current_project_id
        if not project_id:
            return []
        return [t for t in self.state.tasks if t.project_id == project_id]

    def _existing_card_id(self, card_id: Optional[str]) -> Optional[str]:
        """Keep a card link only if the card exists"""
        if card_id and not self.state.find("cards", card_id):
            self.logger.warning(f"[TaskManager] Card {card_id} not found, link dropped")
            return None
        return card_id
