"""
Tests for the HTTP document client
"""

import json
import httpx
import pytest
from src.api.document_client import DocumentClient
from src.utils.error_handler import StorageError


def _client(handler):
    transport = httpx.MockTransport(handler)
    return DocumentClient(base_url="http://board.test", client=httpx.AsyncClient(transport=transport))


@pytest.mark.asyncio
async def test_load():
    """Test GET /api/data returns the document"""
    def handler(request):
        assert request.method == "GET"
        assert request.url.path == "/api/data"
        return httpx.Response(200, json={"projects": [], "currentProjectId": None})
    
    async with _client(handler) as client:
        assert await client.load() == {"projects": [], "currentProjectId": None}


@pytest.mark.asyncio
async def test_save_puts_payload():
    """Test PUT /api/data sends the whole document"""
    received = []
    
    def handler(request):
        received.append((request.method, json.loads(request.content)))
        return httpx.Response(200, json={"success": True})
    
    async with _client(handler) as client:
        await client.save({"projects": [{"id": "p1"}]})
    
    assert received == [("PUT", {"projects": [{"id": "p1"}]})]


@pytest.mark.asyncio
async def test_save_failure_raises_storage_error(monkeypatch):
    """Test server errors surface as StorageError after retries"""
    monkeypatch.setattr("src.api.base_client.RETRY_DELAY", 0)
    calls = []
    
    def handler(request):
        calls.append(request)
        return httpx.Response(500, json={"error": "Failed to save data"})
    
    async with _client(handler) as client:
        with pytest.raises(StorageError):
            await client.save({})
    
    assert len(calls) == 3


@pytest.mark.asyncio
async def test_open_url():
    """Test only http(s) links are forwarded"""
    posted = []
    
    def handler(request):
        posted.append(json.loads(request.content)["url"])
        return httpx.Response(200, json={"success": True})
    
    async with _client(handler) as client:
        assert await client.open_url("https://example.com") is True
        assert await client.open_url("file:///etc/passwd") is False
    
    assert posted == ["https://example.com"]
