"""
Error types and FastAPI error handlers for the User Event Service
"""

import traceback

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from user_events.core.config import config
from user_events.core.logger import logger


class ErrorResponse(Exception):
    """Custom exception for application errors"""

    def __init__(self, message: str, status_code: int = 400, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class InvalidArgument(ErrorResponse):
    """A user event field violates a construction invariant"""

    def __init__(self, field: str, message: str = None):
        self.field = field
        super().__init__(
            message or f"{field} cannot be null or empty",
            status_code=400,
            details={"field": field},
        )


class DeserializationFailure(ErrorResponse):
    """A payload does not conform to the user event wire format"""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=422, details=details)


class TransportFailure(ErrorResponse):
    """The message broker failed to accept or deliver a message"""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=503, details=details)


class ErrorResponseModel(BaseModel):
    """Pydantic model for error responses"""
    error: str
    details: dict = None


async def error_response_handler(request: Request, exc: ErrorResponse):
    """Handler for custom ErrorResponse exceptions"""
    metadata = {
        "event": "error_response",
        "status_code": exc.status_code,
        "url": str(request.url),
        "method": request.method,
        **exc.details,
    }

    if config.environment == "development":
        metadata["traceback"] = "".join(traceback.format_exception(exc))

    logger.error(f"Error: {exc.message}", metadata=metadata)

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "details": exc.details}
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    """Handler for FastAPI HTTPException"""
    logger.error(
        f"HTTPException: {exc.detail}",
        metadata={
            "event": "http_exception",
            "status_code": exc.status_code,
            "url": str(request.url),
            "method": request.method,
        }
    )

    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})
