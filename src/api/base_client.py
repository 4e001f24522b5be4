"""
Base API client with retrying HTTP requests
"""

import asyncio
from abc import ABC
from typing import Optional, Dict, Any
import httpx
from src.utils.logger import logger
from src.config.constants import MAX_RETRIES, RETRY_DELAY


class BaseAPIClient(ABC):
    """Base class for HTTP API clients"""
    
    def __init__(self, base_url: str, timeout: int = 30, client: Optional[httpx.AsyncClient] = None):
        """
        Initialize base API client
        
        Args:
            base_url: Base URL for API
            timeout: Request timeout in seconds
            client: Preconfigured httpx client (tests pass one with a mock transport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = client or httpx.AsyncClient(timeout=timeout)
        self.logger = logger
    
    async def _request(
        self,
        method: str,
        endpoint: str,
        json_data: Optional[Dict[str, Any]] = None,
        retries: int = MAX_RETRIES,
        retry_delay: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Make HTTP request, retrying with linear backoff
        
        Args:
            method: HTTP method
            endpoint: API endpoint
            json_data: JSON body
            retries: Number of attempts
            retry_delay: Base delay between attempts in seconds (default RETRY_DELAY)
            
        Returns:
            Decoded JSON body ({} for an empty body)
            
        Raises:
            httpx.HTTPError: If request fails after all retries
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        if retry_delay is None:
            retry_delay = RETRY_DELAY
        
        for attempt in range(retries):
            try:
                self.logger.debug(f"Request: {method} {url} (attempt {attempt + 1}/{retries})")
                response = await self.client.request(method, url, json=json_data)
                
                if response.status_code >= 400:
                    self.logger.warning(f"Error response {response.status_code}: {response.text[:1000]}")
                response.raise_for_status()
                
                if response.status_code == 204 or not response.text.strip():
                    return {}
                return response.json()
            
            except (httpx.HTTPStatusError, httpx.RequestError) as e:
                if attempt < retries - 1:
                    self.logger.warning(f"Request failed: {e}, retrying in {retry_delay * (attempt + 1)} seconds...")
                    await asyncio.sleep(retry_delay * (attempt + 1))
                else:
                    self.logger.error(f"Request failed after {retries} attempts: {e}")
                    raise
        return {}
    
    async def get(self, endpoint: str, **kwargs) -> Dict[str, Any]:
        """Make GET request"""
        return await self._request("GET", endpoint, **kwargs)
    
    async def post(self, endpoint: str, json_data: Optional[Dict[str, Any]] = None, **kwargs) -> Dict[str, Any]:
        """Make POST request"""
        return await self._request("POST", endpoint, json_data=json_data, **kwargs)
    
    async def put(self, endpoint: str, json_data: Optional[Dict[str, Any]] = None, **kwargs) -> Dict[str, Any]:
        """Make PUT request"""
        return await self._request("PUT", endpoint, json_data=json_data, **kwargs)
    
    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()
    
    async def __aenter__(self):
        """Async context manager entry"""
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()
