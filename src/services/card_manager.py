"""
Card (deliverable) management service
"""

from typing import List, Optional
from src.config.constants import HIGH_PRIORITIES, STATUS_SUMMARY_LIMIT
from src.models.kanban import ArchiveReason, KanbanCard, CardUpdate
from src.models.response import CardAge, CardProgress, DeliverableStatus
from src.models.task import Priority, TaskStatus
from src.services.app_state import AppState
from src.services.cascade_policy import CascadePolicy
from src.services.task_manager import TaskManager, summarize_progress
from src.utils.formatters import format_days_in_column
from src.utils.logger import logger
from src.utils.ordering import sort_by_order, reindex, clamp_index, next_order


class CardManager:
    """Service for managing kanban cards"""

    def __init__(self, state: AppState, task_manager: TaskManager):
        """
        Initialize card manager

        Args:
            state: Shared application state
            task_manager: Task service used for progress rollups
        """
        self.state = state
        self.task_manager = task_manager
        self.cascade = CascadePolicy(state)
        self.logger = logger

    # -------------------- mutations --------------------

    def create_card(
        self,
        column_id: str,
        title: str,
        description: Optional[str] = None,
        priority: Optional[Priority] = None,
        due_date: Optional[int] = None,
    ) -> Optional[KanbanCard]:
        """
        Append a card to the bottom of a column

        Args:
            column_id: Owning column
            title: Card title
            description: Optional description
            priority: Priority (defaults to p2)
            due_date: Optional due timestamp

        Returns:
            Created card, or None if the column does not exist
        """
        if not self.state.find("columns", column_id):
            self.logger.warning(f"[CardManager] Column {column_id} not found, card not created")
            return None

        now = self.state.now()
        card = KanbanCard(
            id=self.state.new_id(),
            title=title,
            description=description,
            priority=priority or Priority.P2,
            column_id=column_id,
            order=next_order(self._active_cards(column_id)),
            created_at=now,
            updated_at=now,
            column_changed_at=now,
            due_date=due_date,
        )
        self.state.cards.append(card)
        self.logger.debug(f"[CardManager] Card created: {card.id} ('{title}', order {card.order})")
        self.state.mark_changed("card_created")
        return self.state.snapshot(card)

    def update_card(self, card_id: str, **changes) -> Optional[KanbanCard]:
        """
        Merge field changes into a card and refresh updatedAt

        Direct columnId/order edits are accepted as given (no sibling
        renumbering); use move_card for drag-and-drop. A columnId that differs
        from the current one also refreshes columnChangedAt.

        Returns:
            Updated card, or None if the card or target column does not exist
        """
        card = self.state.find("cards", card_id)
        if not card:
            self.logger.debug(f"[CardManager] Update ignored, card {card_id} not found")
            return None

        fields = CardUpdate(**changes).changes()
        new_column_id = fields.get("column_id")
        if new_column_id and not self.state.find("columns", new_column_id):
            self.logger.warning(f"[CardManager] Column {new_column_id} not found, card {card_id} not updated")
            return None

        now = self.state.now()
        if new_column_id and new_column_id != card.column_id:
            card.column_changed_at = now
        for name, value in fields.items():
            setattr(card, name, value)
        card.updated_at = now
        self.state.mark_changed("card_updated")
        return self.state.snapshot(card)

    def delete_card(self, card_id: str) -> bool:
        """
        Hard-delete a card

        Tasks and notes linked to it are kept with their cardId cleared; the
        selection is cleared if it pointed at this card.
        """
        card = self.state.find("cards", card_id)
        if not card:
            self.logger.debug(f"[CardManager] Delete ignored, card {card_id} not found")
            return False

        column_id = card.column_id
        result = self.cascade.delete("card", [card_id])
        self._renumber_column(column_id)

        unlinked = sum(len(ids) for ids in result.unlinked.values())
        self.logger.info(f"[CardManager] Card deleted: {card_id} ({unlinked} tasks/notes unlinked)")
        self.state.mark_changed("card_deleted")
        return True

    def permanent_delete_card(self, card_id: str) -> bool:
        """Delete a card from the archive view (same cascade as delete_card)"""
        return self.delete_card(card_id)

    def archive_card(self, card_id: str) -> Optional[KanbanCard]:
        """
        Take a card off the board without deleting it

        Returns:
            Archived card, or None if missing or already archived
        """
        card = self.state.find("cards", card_id)
        if not card or card.archived:
            self.logger.debug(f"[CardManager] Archive ignored for card {card_id}")
            return None

        now = self.state.now()
        card.archived = True
        card.archived_at = now
        card.archive_reason = ArchiveReason.ARCHIVED.value
        card.updated_at = now
        self._renumber_column(card.column_id)

        self.logger.debug(f"[CardManager] Card archived: {card_id}")
        self.state.mark_changed("card_archived")
        return self.state.snapshot(self.state.find("cards", card_id))

    def restore_card(self, card_id: str) -> Optional[KanbanCard]:
        """
        Return an archived card to the bottom of its column

        Returns:
            Restored card, or None if missing or not archived
        """
        card = self.state.find("cards", card_id)
        if not card or not card.archived:
            self.logger.debug(f"[CardManager] Restore ignored for card {card_id}")
            return None

        card.archived = None
        card.archived_at = None
        card.archive_reason = None
        card.order = next_order(self._active_cards(card.column_id, exclude=card_id))
        card.updated_at = self.state.now()

        self.logger.debug(f"[CardManager] Card restored: {card_id}")
        self.state.mark_changed("card_restored")
        return self.state.snapshot(card)

    def move_card(self, card_id: str, target_column_id: str, target_index: int) -> Optional[KanbanCard]:
        """
        Move a card to a position in a column (same or different)

        The moving card is taken out of the target column's active cards,
        reinserted at target_index (clamped), and the column is renumbered
        0..n-1. The source column is renumbered as well when it differs.

        Args:
            card_id: Card to move
            target_column_id: Destination column
            target_index: Destination position among the column's cards

        Returns:
            Moved card; None when the card is missing or archived, or the column is missing
        """
        card = self.state.find("cards", card_id)
        if not card or card.archived:
            self.logger.debug(f"[CardManager] Move ignored for card {card_id}")
            return None
        if not self.state.find("columns", target_column_id):
            self.logger.warning(f"[CardManager] Column {target_column_id} not found, card {card_id} not moved")
            return None

        now = self.state.now()
        source_column_id = card.column_id
        is_column_change = source_column_id != target_column_id

        siblings = sort_by_order(self._active_cards(target_column_id, exclude=card_id))
        moving = card.model_copy(update={"column_id": target_column_id, "updated_at": now})
        if is_column_change:
            moving.column_changed_at = now
        siblings.insert(clamp_index(target_index, len(siblings)), moving)
        self.state.replace_items("cards", reindex(siblings))

        if is_column_change:
            self._renumber_column(source_column_id)

        moved = self.state.find("cards", card_id)
        self.logger.debug(
            f"[CardManager] Card moved: {card_id} -> column {target_column_id} at {moved.order}"
        )
        self.state.mark_changed("card_moved")
        return self.state.snapshot(moved)

    # -------------------- derived views --------------------

    def get_card(self, card_id: str) -> Optional[KanbanCard]:
        card = self.state.find("cards", card_id)
        return self.state.snapshot(card) if card else None

    def get_column_cards(self, column_id: str) -> List[KanbanCard]:
        """Active (non-archived) cards of a column, top to bottom"""
        return self.state.snapshots(sort_by_order(self._active_cards(column_id)))

    def get_archived_cards(self, project_id: Optional[str] = None) -> List[KanbanCard]:
        """Archived cards of a project (default: current project), newest archive first"""
        project_id = project_id or self.state.current_project_id
        column_ids = {c.id for c in self.state.columns if c.project_id == project_id}
        archived = [c for c in self.state.cards if c.archived and c.column_id in column_ids]
        archived.sort(key=lambda c: c.archived_at or 0, reverse=True)
        return self.state.snapshots(archived)

    def get_card_progress(self, card_id: str) -> CardProgress:
        """Completion of the current project's tasks linked to the card"""
        return self.task_manager.get_card_progress(card_id)

    def get_days_in_column(self, card_id: str) -> Optional[CardAge]:
        """Staleness of a card in its current column"""
        card = self.state.find("cards", card_id)
        if not card:
            return None
        return format_days_in_column(card.column_changed_at, now=self.state.now())

    def get_deliverable_status(self, card_id: str) -> Optional[DeliverableStatus]:
        """
        Summarize a card's linked tasks

        Returns:
            DeliverableStatus with totals, percentage, recently completed,
            upcoming, overdue and high-priority open tasks; None if the card is missing
        """
        if not self.state.find("cards", card_id):
            return None

        now = self.state.now()
        tasks = self.task_manager.get_card_tasks(card_id)
        done = [t for t in tasks if t.status == TaskStatus.DONE]
        open_tasks = [t for t in tasks if t.status != TaskStatus.DONE]
        total = len(tasks)

        return DeliverableStatus(
            card_id=card_id,
            total=total,
            completed=len(done),
            in_progress=sum(1 for t in tasks if t.status == TaskStatus.IN_PROGRESS),
            todo=sum(1 for t in tasks if t.status == TaskStatus.TODO),
            percentage=summarize_progress(tasks).percentage,
            recently_completed=sorted(done, key=lambda t: t.updated_at, reverse=True)[:STATUS_SUMMARY_LIMIT],
            upcoming=sorted(
                [t for t in open_tasks if t.due_date and t.due_date > now],
                key=lambda t: t.due_date,
            )[:STATUS_SUMMARY_LIMIT],
            overdue=[t for t in open_tasks if t.due_date and t.due_date < now],
            high_priority=[t for t in open_tasks if t.priority in HIGH_PRIORITIES],
        )

    # -------------------- helpers --------------------

    def _active_cards(self, column_id: str, exclude: Optional[str] = None) -> List[KanbanCard]:
        return [
            c for c in self.state.cards
            if c.column_id == column_id and not c.archived and c.id != exclude
        ]

    def _renumber_column(self, column_id: str) -> None:
        self.state.replace_items("cards", reindex(sort_by_order(self._active_cards(column_id))))
