"""
HTTP client for the document endpoints of the web service
"""

from typing import Any, Dict, Optional
import httpx
from src.api.base_client import BaseAPIClient
from src.config.constants import ALLOWED_URL_SCHEMES, DOCUMENT_ENDPOINT, OPEN_URL_ENDPOINT
from src.config.settings import settings
from src.services.document_store import DocumentStore
from src.utils.error_handler import StorageError


class DocumentClient(BaseAPIClient, DocumentStore):
    """Document store backed by GET/PUT /api/data"""
    
    def __init__(self, base_url: Optional[str] = None, client: Optional[httpx.AsyncClient] = None, **kwargs):
        super().__init__(base_url or settings.DATA_API_URL, client=client, **kwargs)
    
    async def load(self) -> Dict[str, Any]:
        try:
            return await self.get(DOCUMENT_ENDPOINT)
        except httpx.HTTPError as e:
            raise StorageError(f"Failed to load data: {e}", error_code="load_failed") from e
        except ValueError as e:
            raise StorageError(f"Server returned invalid JSON: {e}", error_code="corrupt") from e
    
    async def save(self, payload: Dict[str, Any]) -> None:
        try:
            await self.put(DOCUMENT_ENDPOINT, json_data=payload)
        except httpx.HTTPError as e:
            raise StorageError(f"Failed to save data: {e}", error_code="save_failed") from e
    
    async def open_url(self, url: str) -> bool:
        """
        Ask the service to open a link in the user's browser
        
        Args:
            url: http(s) URL
            
        Returns:
            True if the service accepted the request
        """
        if not url.startswith(ALLOWED_URL_SCHEMES):
            self.logger.warning(f"[DocumentClient] Refusing to open non-http URL: {url}")
            return False
        try:
            await self.post(OPEN_URL_ENDPOINT, json_data={"url": url}, retries=1)
            return True
        except httpx.HTTPError as e:
            self.logger.warning(f"[DocumentClient] Could not open {url}: {e}")
            return False
