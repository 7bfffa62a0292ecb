"""
Core module initialization
"""

from .config import config
from .errors import (
    DeserializationFailure,
    ErrorResponse,
    ErrorResponseModel,
    InvalidArgument,
    TransportFailure,
)
from .logger import logger

__all__ = [
    "config",
    "ErrorResponse",
    "ErrorResponseModel",
    "InvalidArgument",
    "DeserializationFailure",
    "TransportFailure",
    "logger",
]
