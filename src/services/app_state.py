"""
Canonical in-memory state.

AppState owns the five entity collections and the active project id. It is
passed by reference to the entity managers, which are the only code allowed to
mutate it. Every successful mutation ends with mark_changed(), which emits the
document_changed event the persistence gateway listens to.
"""

from typing import Callable, List, Optional, TypeVar
from pydantic import BaseModel
from src.models.document import AppDocument, COLLECTION_FIELDS
from src.services.events import ChangeNotifier, DOCUMENT_CHANGED
from src.services.view_state import ViewState
from src.utils.date_utils import now_ms
from src.utils.ids import generate_id
from src.utils.logger import logger

T = TypeVar("T", bound=BaseModel)


class AppState:
    """Single owner of the project document held in memory"""
    
    def __init__(
        self,
        document: Optional[AppDocument] = None,
        notifier: Optional[ChangeNotifier] = None,
        clock: Callable[[], int] = now_ms,
        id_factory: Callable[[], str] = generate_id,
    ):
        """
        Initialize state
        
        Args:
            document: Initial document (empty when omitted)
            notifier: Change notifier shared with observers
            clock: Millisecond clock used for all timestamps
            id_factory: Generator for new entity ids
        """
        self.notifier = notifier or ChangeNotifier()
        self.view = ViewState()
        self.clock = clock
        self.id_factory = id_factory
        self.logger = logger
        self._collections = {name: [] for name in COLLECTION_FIELDS}
        self.current_project_id: Optional[str] = None
        if document is not None:
            self.hydrate(document)
    
    # -------------------- document --------------------
    
    def hydrate(self, document: AppDocument) -> None:
        """Replace all state with a loaded document (does not emit a change)"""
        for name in COLLECTION_FIELDS:
            self._collections[name] = [item.model_copy(deep=True) for item in getattr(document, name)]
        self.current_project_id = document.current_project_id
        self.view.clear_selection()
        self.logger.info(
            f"[AppState] Hydrated: {len(self.projects)} projects, {len(self.columns)} columns, "
            f"{len(self.cards)} cards, {len(self.tasks)} tasks, {len(self.notes)} notes"
        )
    
    def to_document(self) -> AppDocument:
        """Snapshot the whole state as a persistable document"""
        data = {
            name: [item.model_copy(deep=True) for item in self._collections[name]]
            for name in COLLECTION_FIELDS
        }
        return AppDocument(current_project_id=self.current_project_id, **data)
    
    def mark_changed(self, reason: str) -> None:
        """Signal that the document changed"""
        self.logger.debug(f"[AppState] Document changed: {reason}")
        self.notifier.emit(DOCUMENT_CHANGED, reason=reason)
    
    # -------------------- collections --------------------
    
    @property
    def projects(self) -> list:
        return self._collections["projects"]
    
    @property
    def columns(self) -> list:
        return self._collections["columns"]
    
    @property
    def cards(self) -> list:
        return self._collections["cards"]
    
    @property
    def tasks(self) -> list:
        return self._collections["tasks"]
    
    @property
    def notes(self) -> list:
        return self._collections["notes"]
    
    def collection(self, name: str) -> list:
        return self._collections[name]
    
    def replace_collection(self, name: str, items: list) -> None:
        self._collections[name] = list(items)
    
    def replace_items(self, name: str, updated: list) -> None:
        """Swap in updated copies by id, keeping collection positions"""
        by_id = {item.id: item for item in updated}
        self._collections[name] = [by_id.get(item.id, item) for item in self._collections[name]]
    
    def find(self, name: str, entity_id: str):
        """Return the live entity with the given id, or None"""
        return next((item for item in self._collections[name] if item.id == entity_id), None)
    
    # -------------------- helpers --------------------
    
    def now(self) -> int:
        return self.clock()
    
    def new_id(self) -> str:
        return self.id_factory()
    
    def set_current_project_id(self, project_id: Optional[str]) -> bool:
        """Switch the active project; the card selection does not survive a switch"""
        if project_id == self.current_project_id:
            return False
        self.current_project_id = project_id
        self.view.clear_selection()
        return True
    
    @staticmethod
    def snapshot(item: T) -> T:
        return item.model_copy(deep=True)
    
    @staticmethod
    def snapshots(items: List[T]) -> List[T]:
        return [item.model_copy(deep=True) for item in items]
