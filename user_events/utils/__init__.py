"""
Shared utilities
"""

from .correlation_id import (
    CORRELATION_ID_HEADER,
    create_correlation_id,
    extract_correlation_id_from_headers,
    get_correlation_id,
    set_correlation_id,
)

__all__ = [
    "CORRELATION_ID_HEADER",
    "create_correlation_id",
    "extract_correlation_id_from_headers",
    "get_correlation_id",
    "set_correlation_id",
]
