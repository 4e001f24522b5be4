"""
Debounced persistence of the in-memory document.

The gateway listens for document_changed events and writes the whole document
to its store once changes have been quiet for the debounce window. Save
failures are recorded on the gateway and never roll back memory; the next
change (or an explicit flush) retries with the latest snapshot.
"""

import asyncio
from typing import Optional, Set
from src.config.settings import settings
from src.models.document import AppDocument, parse_document
from src.services.app_state import AppState
from src.services.document_store import DocumentStore
from src.services.events import DOCUMENT_CHANGED
from src.utils.error_handler import handle_error
from src.utils.logger import logger


class PersistenceGateway:
    """Load on start, save after a quiet period, flush on shutdown"""
    
    def __init__(self, state: AppState, store: DocumentStore, debounce_seconds: Optional[float] = None):
        """
        Initialize persistence gateway
        
        Args:
            state: Application state to load into and save from
            store: Document store
            debounce_seconds: Quiet period before a save (default from settings)
        """
        self.state = state
        self.store = store
        self.debounce_seconds = (
            settings.save_debounce_seconds if debounce_seconds is None else debounce_seconds
        )
        self.logger = logger
        
        self.is_hydrated = False
        self.is_saving = False
        self.load_error: Optional[str] = None
        self.save_error: Optional[str] = None
        
        self._dirty = False
        self._timer: Optional[asyncio.TimerHandle] = None
        self._in_flight: Set[asyncio.Task] = set()
        self._save_lock = asyncio.Lock()
        self._unsubscribe = state.notifier.subscribe(DOCUMENT_CHANGED, self._on_document_changed)
    
    @property
    def has_pending_changes(self) -> bool:
        return self._dirty
    
    async def load(self) -> AppDocument:
        """
        Load the stored document into state
        
        Never raises: on failure the empty document is used and load_error is set.
        
        Returns:
            Document that was hydrated
        """
        try:
            raw = await self.store.load()
            document = parse_document(raw)
            self.load_error = None
        except Exception as e:
            self.load_error = handle_error(e).message
            self.logger.warning(f"[Persistence] Load failed, starting with an empty document: {e}")
            document = AppDocument()
        
        self.state.hydrate(document)
        self.is_hydrated = True
        return document
    
    def schedule_save(self) -> None:
        """Mark the document dirty and (re)start the debounce timer"""
        self._dirty = True
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.logger.debug("[Persistence] No running event loop, save deferred until flush")
            return
        
        if self._timer is not None:
            self._timer.cancel()
        self._timer = loop.call_later(self.debounce_seconds, self._on_timer)
    
    async def save_now(self) -> bool:
        """
        Write the current state immediately
        
        Saves are serialized; each one snapshots state when it starts writing,
        so the last save to finish always carries the latest document.
        
        Returns:
            True if the store accepted the document
        """
        self._cancel_timer()
        async with self._save_lock:
            self._dirty = False
            payload = self.state.to_document().to_payload()
            self.is_saving = True
            try:
                await self.store.save(payload)
            except Exception as e:
                self._dirty = True
                self.save_error = handle_error(e).message
                self.logger.warning(f"[Persistence] Save failed, will retry on next change or flush: {e}")
                return False
            finally:
                self.is_saving = False
        
        self.save_error = None
        self.logger.debug("[Persistence] Document saved")
        return True
    
    async def flush(self) -> bool:
        """
        Save pending changes now and wait for saves already running
        
        Returns:
            True if nothing is left unsaved
        """
        self._cancel_timer()
        if self._in_flight:
            await asyncio.gather(*self._in_flight, return_exceptions=True)
        if self._dirty:
            return await self.save_now()
        return self.save_error is None
    
    async def shutdown(self) -> bool:
        """Flush and stop listening for changes"""
        saved = await self.flush()
        self._unsubscribe()
        if not saved:
            self.logger.error(f"[Persistence] Shutdown with unsaved changes: {self.save_error}")
        return saved
    
    def _on_document_changed(self, reason: Optional[str] = None, **kwargs) -> None:
        self.schedule_save()
    
    def _on_timer(self) -> None:
        self._timer = None
        task = asyncio.ensure_future(self._save_if_dirty())
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
    
    async def _save_if_dirty(self) -> None:
        if self._dirty:
            await self.save_now()
    
    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
