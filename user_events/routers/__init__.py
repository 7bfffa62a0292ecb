# Router modules for the user event service
from .dapr_router import router as dapr_router
from .event_router import router as event_router
from .operational_router import router as operational_router

__all__ = [
    "dapr_router",
    "event_router",
    "operational_router",
]
