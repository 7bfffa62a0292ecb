"""
User Event Producer
Publishes user events to a topic, keyed by user ID
"""

import asyncio
from functools import partial
from typing import Iterable, List, Set

from user_events.core.errors import TransportFailure
from user_events.core.logger import logger
from user_events.messaging.i_message_broker import DeliveryResult, IMessageBroker
from user_events.services.event_codec import EventModel, UserEventCodec, record_codec


class UserEventProducer:
    """
    Producer side of the event transport.

    ``publish`` does not wait for the broker: it returns an asyncio future that
    resolves to a DeliveryResult or fails with TransportFailure. Both outcomes
    are logged by a completion callback. Nothing is retried.
    """

    def __init__(self, broker: IMessageBroker, topic: str, codec: UserEventCodec = record_codec):
        self.broker = broker
        self.topic = topic
        self.codec = codec
        self.label = codec.model.__name__
        # In-flight sends, removed by the completion callback
        self.pending: Set["asyncio.Task[DeliveryResult]"] = set()

    def publish(self, event: EventModel) -> "asyncio.Future[DeliveryResult]":
        """
        Encode an event and submit it to the broker

        Must be called from a running event loop. Encoding errors are raised
        immediately; transport errors only surface on the returned future.
        """
        payload = self.codec.encode(event)

        logger.info(
            f"Sending {self.label} event",
            user_id=event.user_id,
            metadata={"topic": self.topic, "eventType": event.event_type}
        )

        future = asyncio.create_task(self._send(event.user_id, payload))
        self.pending.add(future)
        future.add_done_callback(partial(self._on_delivery, event))
        return future

    def publish_all(self, events: Iterable[EventModel]) -> List["asyncio.Future[DeliveryResult]"]:
        """Publish each event independently; a failed event does not affect the others"""
        return [self.publish(event) for event in events]

    async def _send(self, key: str, payload: bytes) -> DeliveryResult:
        try:
            return await self.broker.publish(self.topic, key, payload)
        except TransportFailure:
            raise
        except Exception as e:
            raise TransportFailure(
                f"Failed to publish to {self.topic}: {e}",
                details={"topic": self.topic}
            ) from e

    def _on_delivery(self, event: EventModel, future: "asyncio.Future[DeliveryResult]") -> None:
        self.pending.discard(future)

        if future.cancelled():
            logger.warning(
                f"Sending {self.label} event was cancelled",
                user_id=event.user_id,
                metadata={"topic": self.topic}
            )
            return

        error = future.exception()
        if error is not None:
            # TODO: hand failed events to a dead-letter topic once one is provisioned
            logger.error(
                f"Failed to send {self.label} event: {event}",
                user_id=event.user_id,
                error=error,
                metadata={"topic": self.topic}
            )
            return

        result = future.result()
        logger.info(
            f"Successfully sent {self.label} event to partition {result.partition} with offset {result.offset}",
            user_id=event.user_id,
            metadata={"topic": result.topic, "partition": result.partition, "offset": result.offset}
        )
