"""
Error types and conversion of failures into user-facing messages
"""

from typing import Optional
from src.models.response import ErrorResponse
from src.utils.logger import logger


class ProjectBoardError(Exception):
    """Base exception for project board errors"""
    
    error_code: Optional[str] = None
    
    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        if error_code is not None:
            self.error_code = error_code
        super().__init__(message)


class StorageError(ProjectBoardError):
    """Document store could not be read or written"""
    error_code = "storage_error"


class DocumentValidationError(ProjectBoardError):
    """Persisted document has an unusable shape"""
    error_code = "invalid_document"


MESSAGE_PREFIXES = {
    StorageError: "Storage error",
    DocumentValidationError: "Invalid document",
}


def handle_error(error: Exception) -> ErrorResponse:
    """
    Log a failure and describe it for the user
    
    Known board errors are logged as warnings; anything else is logged with
    its traceback.
    
    Args:
        error: Exception to handle
        
    Returns:
        ErrorResponse with user-friendly message
    """
    for error_type, prefix in MESSAGE_PREFIXES.items():
        if isinstance(error, error_type):
            logger.warning(f"{prefix}: {error.message}")
            return ErrorResponse(message=f"{prefix}: {error.message}", error_code=error.error_code)
    
    logger.error(f"Unexpected error: {error}", exc_info=True)
    return ErrorResponse(
        message="Something went wrong. Your changes are kept in memory and will be saved on the next edit.",
    )


def format_error_message(error: Exception) -> str:
    """User-facing message for an exception"""
    return handle_error(error).message
