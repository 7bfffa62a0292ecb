"""
Event publishing endpoints
Build user events from request bodies and publish them in either DTO style
"""

import time
from datetime import datetime

from fastapi import APIRouter, Depends

from user_events.core.errors import ErrorResponseModel
from user_events.core.logger import logger
from user_events.dependencies import get_pojo_producer, get_record_producer
from user_events.models import EventRequest, UserEvent, UserEventBean
from user_events.services.event_producer import UserEventProducer

router = APIRouter()


@router.post(
    "/record",
    response_model=dict,
    responses={400: {"model": ErrorResponseModel}},
)
async def send_record_event(
    request: EventRequest,
    producer: UserEventProducer = Depends(get_record_producer),
):
    """
    Publish an immutable (record) user event stamped with the current time.
    """
    event = UserEvent.of(request.user_id, request.event_type, datetime.now(), request.metadata)
    producer.publish(event)
    return {"message": "Record event sent successfully", "userId": event.user_id}


@router.post(
    "/pojo",
    response_model=dict,
    responses={400: {"model": ErrorResponseModel}},
)
async def send_pojo_event(
    request: EventRequest,
    producer: UserEventProducer = Depends(get_pojo_producer),
):
    """
    Publish a mutable (bean) user event stamped with the current time.
    """
    event = UserEventBean.of(request.user_id, request.event_type, datetime.now(), request.metadata)
    producer.publish(event)
    return {"message": "POJO event sent successfully", "userId": event.user_id}


@router.post("/sample", response_model=dict)
async def send_sample_events(
    record_producer: UserEventProducer = Depends(get_record_producer),
    pojo_producer: UserEventProducer = Depends(get_pojo_producer),
):
    """
    Publish one sample LOGIN event in each DTO style.
    """
    record_event = UserEvent.create_now(
        "sample-user-record",
        "LOGIN",
        {"source": "sample-api", "timestamp": int(time.time() * 1000)},
    )
    record_producer.publish(record_event)

    pojo_event = UserEventBean.create_now(
        "sample-user-pojo",
        "LOGIN",
        {"source": "sample-api", "timestamp": int(time.time() * 1000)},
    )
    pojo_producer.publish(pojo_event)

    logger.info("Sample events sent", metadata={"topics": [record_producer.topic, pojo_producer.topic]})

    return {"message": "Sample events sent successfully (both Record and POJO)"}


@router.get("/health")
async def events_health():
    """Health of the event API"""
    return {
        "status": "UP",
        "message": "Event API is running",
        "timestamp": datetime.now().isoformat(),
    }
