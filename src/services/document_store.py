"""
Blob stores holding the whole persisted document
"""

import asyncio
import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Union
from src.models.document import RawDocument
from src.utils.error_handler import StorageError
from src.utils.logger import logger


class DocumentStore(ABC):
    """Load/save contract of an external document store"""
    
    @abstractmethod
    async def load(self) -> Dict[str, Any]:
        """
        Fetch the current document
        
        Raises:
            StorageError: If the store is unreachable or the content unreadable
        """
    
    @abstractmethod
    async def save(self, payload: Dict[str, Any]) -> None:
        """
        Replace the current document
        
        Raises:
            StorageError: If the document could not be written
        """


class JsonFileDocumentStore(DocumentStore):
    """Document kept in one pretty-printed JSON file"""
    
    def __init__(self, path: Union[str, Path]):
        """
        Initialize file store
        
        Args:
            path: JSON file path; created with the empty document on first access
        """
        self.path = Path(path)
        self.logger = logger
    
    async def load(self) -> Dict[str, Any]:
        return await asyncio.to_thread(self._read)
    
    async def save(self, payload: Dict[str, Any]) -> None:
        await asyncio.to_thread(self._write, payload)
    
    def ensure_file(self) -> None:
        """Create the data file with the default document if missing"""
        if self.path.exists():
            return
        self.logger.info(f"[FileStore] Creating data file {self.path}")
        self._write(RawDocument().to_payload())
    
    def _read(self) -> Dict[str, Any]:
        try:
            self.ensure_file()
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise StorageError(f"{self.path} is not valid JSON: {e}", error_code="corrupt") from e
        except OSError as e:
            raise StorageError(f"Cannot read {self.path}: {e}", error_code="read_failed") from e
    
    def _write(self, payload: Dict[str, Any]) -> None:
        tmp_path = self.path.parent / f"{self.path.name}.tmp"
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}", error_code="write_failed") from e
        self.logger.debug(f"[FileStore] Wrote {self.path}")
