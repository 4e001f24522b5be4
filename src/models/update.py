"""
Base model for partial updates
"""

from typing import Any, ClassVar, Dict, Tuple
from pydantic import BaseModel


class PartialUpdate(BaseModel):
    """
    Partial update: only the fields the caller actually passed are applied.
    
    Passing None clears an optional field; for fields listed in
    REQUIRED_FIELDS a None is ignored instead.
    """
    
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ()
    
    def changes(self) -> Dict[str, Any]:
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None or name not in self.REQUIRED_FIELDS
        }
