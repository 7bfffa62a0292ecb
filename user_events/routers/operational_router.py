"""
Operational/Infrastructure endpoints
These endpoints are used by monitoring systems, load balancers, and DevOps tools
"""

import time
from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from user_events.core.config import config
from user_events.dependencies import get_broker
from user_events.messaging.i_message_broker import IMessageBroker

router = APIRouter()

start_time = time.time()


@router.get("/health")
async def health(broker: IMessageBroker = Depends(get_broker)):
    """Service health including the message broker connection"""
    broker_healthy = broker.is_healthy()
    body = {
        "status": "healthy" if broker_healthy else "unhealthy",
        "service": config.service_name,
        "version": config.service_version,
        "timestamp": datetime.now().isoformat(),
        "uptimeSeconds": round(time.time() - start_time, 2),
        "checks": {"messageBroker": await broker.get_stats()},
    }
    if not broker_healthy:
        return JSONResponse(status_code=503, content=body)
    return body


@router.get("/health/live")
async def liveness():
    """Liveness probe - check if the app is running"""
    return {
        "status": "alive",
        "service": config.service_name,
        "timestamp": datetime.now().isoformat(),
    }
