"""
Change notification for the in-memory document.

Stores emit events after every successful mutation; persistence (and any other
observer) subscribes here instead of being called by the stores directly.
"""

from typing import Callable, Dict, List
from src.utils.logger import logger

DOCUMENT_CHANGED = "document_changed"


class ChangeNotifier:
    """Minimal publish/subscribe hub"""
    
    def __init__(self):
        self.subscribers: Dict[str, List[Callable]] = {}  # event_type -> callbacks
        self.logger = logger
    
    def subscribe(self, event_type: str, callback: Callable) -> Callable[[], None]:
        """
        Register a callback for an event type
        
        Args:
            event_type: Event name
            callback: Called with the event's keyword arguments
            
        Returns:
            Function that removes the subscription
        """
        self.subscribers.setdefault(event_type, []).append(callback)
        
        def unsubscribe() -> None:
            callbacks = self.subscribers.get(event_type, [])
            if callback in callbacks:
                callbacks.remove(callback)
        
        return unsubscribe
    
    def emit(self, event_type: str, **kwargs) -> None:
        """Emit an event to all subscribers; a failing subscriber never breaks the caller"""
        for callback in list(self.subscribers.get(event_type, [])):
            try:
                callback(**kwargs)
            except Exception as e:
                self.logger.error(f"[Events] Error in {event_type} callback: {e}", exc_info=True)
