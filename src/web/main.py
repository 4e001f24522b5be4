"""
Storage service: serves and stores the project document as a JSON file
"""

import asyncio
import json
import webbrowser
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from src.config.constants import ALLOWED_URL_SCHEMES, DOCUMENT_ENDPOINT, OPEN_URL_ENDPOINT
from src.config.settings import settings
from src.models.document import RawDocument, coerce_payload
from src.services.document_store import JsonFileDocumentStore
from src.utils.error_handler import DocumentValidationError, StorageError, format_error_message
from src.utils.logger import logger

app = FastAPI(title="Project Board Storage")

_store = JsonFileDocumentStore(settings.DATA_FILE_PATH)


def get_store() -> JsonFileDocumentStore:
    """Document store dependency (overridden in tests)"""
    return _store


@app.get(DOCUMENT_ENDPOINT)
async def read_document(store: JsonFileDocumentStore = Depends(get_store)):
    """Return the stored document; the empty document if it cannot be read"""
    try:
        return coerce_payload(await store.load())
    except (StorageError, DocumentValidationError) as e:
        logger.error(f"Error reading data: {e}")
        return RawDocument().to_payload()


@app.put(DOCUMENT_ENDPOINT)
async def write_document(request: Request, store: JsonFileDocumentStore = Depends(get_store)):
    """Replace the stored document"""
    try:
        payload = coerce_payload(await request.json())
    except (json.JSONDecodeError, DocumentValidationError) as e:
        logger.warning(f"Rejected save payload: {e}")
        return JSONResponse(status_code=400, content={"error": "Invalid data"})
    
    try:
        await store.save(payload)
    except StorageError as e:
        return JSONResponse(status_code=500, content={"error": format_error_message(e)})
    return {"success": True}


@app.post(OPEN_URL_ENDPOINT)
async def open_url(request: Request):
    """Open an http(s) link in the default browser of the machine running the service"""
    try:
        body = await request.json()
    except json.JSONDecodeError:
        body = None
    url = body.get("url") if isinstance(body, dict) else None
    
    if not isinstance(url, str) or not url:
        return JSONResponse(status_code=400, content={"error": "URL is required"})
    if not url.startswith(ALLOWED_URL_SCHEMES):
        return JSONResponse(status_code=400, content={"error": "Invalid URL"})
    
    try:
        await asyncio.to_thread(webbrowser.open, url)
    except webbrowser.Error as e:
        logger.error(f"Error opening URL {url}: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to open URL"})
    return {"success": True}


@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.WEB_HOST, port=settings.WEB_PORT)
