# schoolhub/core/exceptions.py
"""Custom exceptions for the SchoolHub application."""
from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


class SchoolHubException(HTTPException):
    """Base exception for SchoolHub application."""
    def __init__(
        self,
        status_code: int,
        detail: str,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class NotFoundError(SchoolHubException):
    """Resource not found exception"""
    def __init__(self, resource: str):
        super().__init__(status_code=404, detail=f"{resource} not found")


class PermissionDeniedError(SchoolHubException):
    """Permission denied exception"""
    def __init__(self, message: str = "Access denied"):
        super().__init__(status_code=403, detail=message)


class BadRequestError(SchoolHubException):
    def __init__(self, message: str = "Bad request"):
        super().__init__(status_code=400, detail=message)


class DuplicateError(SchoolHubException):
    """Exception raised when a unique field is already taken."""
    def __init__(self, message: str):
        super().__init__(status_code=409, detail=message)


class AuthenticationError(SchoolHubException):
    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(
            status_code=401,
            detail=message,
            headers={"WWW-Authenticate": "Bearer"}
        )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.error(f"Unexpected error: {str(exc)} - Path: {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"message": "Server error"}
    )
