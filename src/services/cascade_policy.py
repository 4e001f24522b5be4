"""
Centralized delete cascade policy.

CASCADE_RULES lists, for every entity kind, which dependent fields must be
deleted or nulled when an entity of that kind is removed. Deletes recurse, so
removing a project removes its columns, their cards, and unlinks tasks/notes
pointing at those cards. New referencing fields only need a rule here.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Set, Tuple
from src.utils.logger import logger


class CascadeAction(str, Enum):
    DELETE = "delete"
    NULLIFY = "nullify"


@dataclass(frozen=True)
class CascadeRule:
    collection: str
    field: str
    action: CascadeAction


ENTITY_COLLECTIONS: Dict[str, str] = {
    "project": "projects",
    "column": "columns",
    "card": "cards",
    "task": "tasks",
    "note": "notes",
}
COLLECTION_KINDS: Dict[str, str] = {v: k for k, v in ENTITY_COLLECTIONS.items()}

CASCADE_RULES: Dict[str, Tuple[CascadeRule, ...]] = {
    "project": (
        CascadeRule("columns", "project_id", CascadeAction.DELETE),
        CascadeRule("tasks", "project_id", CascadeAction.DELETE),
        CascadeRule("notes", "project_id", CascadeAction.DELETE),
    ),
    "column": (
        CascadeRule("cards", "column_id", CascadeAction.DELETE),
    ),
    "card": (
        CascadeRule("tasks", "card_id", CascadeAction.NULLIFY),
        CascadeRule("notes", "card_id", CascadeAction.NULLIFY),
    ),
}


@dataclass
class CascadeResult:
    """Ids removed and ids unlinked, grouped by entity kind"""
    removed: Dict[str, Set[str]] = field(default_factory=lambda: defaultdict(set))
    unlinked: Dict[str, Set[str]] = field(default_factory=lambda: defaultdict(set))
    
    @property
    def changed(self) -> bool:
        return any(self.removed.values()) or any(self.unlinked.values())


class CascadePolicy:
    """Executes CASCADE_RULES against an AppState"""
    
    def __init__(self, state, rules: Dict[str, Tuple[CascadeRule, ...]] = CASCADE_RULES):
        self.state = state
        self.rules = rules
        self.logger = logger
    
    def delete(self, kind: str, ids: Iterable[str]) -> CascadeResult:
        """
        Delete entities of one kind together with everything that depends on them
        
        Args:
            kind: Entity kind ("project", "column", "card", "task", "note")
            ids: Ids to delete; unknown ids are ignored
            
        Returns:
            CascadeResult describing every removal and unlink performed
        """
        result = CascadeResult()
        self._delete(kind, set(ids), result)
        self.state.view.forget_cards(result.removed.get("card", set()))
        if result.changed:
            summary = {k: len(v) for k, v in result.removed.items() if v}
            self.logger.debug(f"[Cascade] Deleted {kind}: removed={summary}")
        return result
    
    def _delete(self, kind: str, ids: Set[str], result: CascadeResult) -> None:
        collection = ENTITY_COLLECTIONS[kind]
        items = self.state.collection(collection)
        doomed = {item.id for item in items if item.id in ids} - result.removed[kind]
        if not doomed:
            return
        
        result.removed[kind] |= doomed
        self.state.replace_collection(collection, [item for item in items if item.id not in doomed])
        
        for rule in self.rules.get(kind, ()):
            dependents = self.state.collection(rule.collection)
            if rule.action == CascadeAction.DELETE:
                child_ids = {d.id for d in dependents if getattr(d, rule.field) in doomed}
                self._delete(COLLECTION_KINDS[rule.collection], child_ids, result)
            else:
                now = self.state.now()
                for dependent in dependents:
                    if getattr(dependent, rule.field) in doomed:
                        setattr(dependent, rule.field, None)
                        dependent.updated_at = now
                        result.unlinked[COLLECTION_KINDS[rule.collection]].add(dependent.id)
