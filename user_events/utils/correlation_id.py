"""
Correlation ID utilities for distributed tracing
Shared across API and Consumer components
"""

import uuid
from contextvars import ContextVar
from typing import Mapping, Optional

CORRELATION_ID_HEADER = "X-Correlation-ID"

# Context variable to store correlation ID across async operations
correlation_id_context: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> Optional[str]:
    """
    Get the current correlation ID from context

    Returns:
        The correlation ID, or None when no request/message set one
    """
    return correlation_id_context.get("") or None


def set_correlation_id(correlation_id: str) -> None:
    """
    Set the correlation ID in context

    Args:
        correlation_id: The correlation ID to set
    """
    correlation_id_context.set(correlation_id)


def create_correlation_id() -> str:
    """
    Create a new correlation ID

    Returns:
        str: New UUID-based correlation ID
    """
    return str(uuid.uuid4())


def extract_correlation_id_from_headers(headers: Mapping[str, str], header_name: str = CORRELATION_ID_HEADER) -> str:
    """
    Extract correlation ID from request headers
    Generates new one if not present

    Args:
        headers: Request headers; case-insensitive mappings such as starlette's Headers are looked up directly
        header_name: Name of the correlation ID header

    Returns:
        str: Correlation ID from headers or newly generated
    """
    correlation_id = headers.get(header_name) or headers.get(header_name.lower())

    if not correlation_id:
        correlation_id = create_correlation_id()

    return correlation_id
