"""
Dapr Pub/Sub Subscription Endpoints
Handles incoming user events pushed by the Dapr sidecar
"""

import base64
import binascii
import json
from typing import Dict

from fastapi import APIRouter, Depends, Request

from user_events.consumer.consumer import UserEventConsumer
from user_events.core.config import config
from user_events.core.logger import logger
from user_events.dependencies import get_consumers
from user_events.messaging.i_message_broker import ChannelMetadata

router = APIRouter()


def unwrap_cloud_event(body: bytes) -> bytes:
    """
    Extract the original payload from a CloudEvents envelope.

    Dapr wraps published payloads in a CloudEvent; JSON payloads end up in
    ``data`` and binary ones in ``data_base64``. Bodies that are not
    CloudEvents are returned unchanged.
    """
    try:
        document = json.loads(body)
    except ValueError:
        return body

    if not isinstance(document, dict) or "specversion" not in document:
        return body

    if "data_base64" in document:
        try:
            return base64.b64decode(document["data_base64"])
        except (binascii.Error, TypeError):
            return body

    data = document.get("data")
    if isinstance(data, str):
        return data.encode("utf-8")
    return json.dumps(data).encode("utf-8")


@router.get("/subscribe")
async def get_subscriptions():
    """
    Dapr calls this endpoint to get list of subscriptions.
    Returns the topics this service wants to subscribe to.
    """
    subscriptions = [
        {
            "pubsubname": config.dapr_pubsub_name,
            "topic": topic,
            "route": f"/dapr/events/{topic}",
        }
        for topic in (config.record_events_topic, config.pojo_events_topic)
    ]

    logger.info(
        "Dapr subscriptions configured",
        metadata={
            "subscriptionCount": len(subscriptions),
            "topics": [s["topic"] for s in subscriptions]
        }
    )

    return subscriptions


@router.post("/events/{topic}")
async def handle_event(
    topic: str,
    request: Request,
    consumers: Dict[str, UserEventConsumer] = Depends(get_consumers),
):
    """
    Handle a user event delivered by Dapr.
    Always acknowledges with SUCCESS so Dapr does not redeliver; failures are logged.
    """
    consumer = consumers.get(topic)
    if consumer is None:
        logger.warning(f"No consumer registered for topic: {topic}", metadata={"topic": topic})
        return {"status": "SUCCESS"}

    try:
        payload = unwrap_cloud_event(await request.body())
        await consumer.on_receive(payload, ChannelMetadata(topic=topic))
    except Exception as e:
        logger.error(
            f"Error handling Dapr event for topic {topic}: {str(e)}",
            error=e,
            metadata={"topic": topic}
        )

    return {"status": "SUCCESS"}
