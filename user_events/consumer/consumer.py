"""
User Event Consumer
Decodes payloads received from the message broker and hands them to a handler
"""

from typing import Any, Awaitable, Callable, Optional

from user_events.core.errors import DeserializationFailure
from user_events.core.logger import logger
from user_events.messaging.i_message_broker import ChannelMetadata, IMessageBroker
from user_events.services.event_codec import EventModel, UserEventCodec, record_codec
from user_events.consumer.handlers import handle_user_event

EventHandler = Callable[[EventModel, ChannelMetadata], Awaitable[Any]]


class UserEventConsumer:
    """
    Consumer side of the event transport.

    Every message counts as consumed once ``on_receive`` returns: decode and
    handler errors are logged and the message is dropped, so one bad message
    never stops the subscription. There is no retry or dead-letter handling.
    """

    def __init__(
        self,
        handler: EventHandler = handle_user_event,
        codec: UserEventCodec = record_codec,
        broker: Optional[IMessageBroker] = None,
        topic: Optional[str] = None,
        group_id: Optional[str] = None,
    ):
        self.handler = handler
        self.codec = codec
        self.broker = broker
        self.topic = topic
        self.group_id = group_id
        self.label = codec.model.__name__
        self.is_running = False
        self._owns_connection = False

    async def on_receive(self, payload: bytes, channel_metadata: ChannelMetadata) -> bool:
        """
        Decode one message and run the handler on it

        Returns:
            True if the handler processed the event, False if the message was dropped
        """
        delivery = {
            "topic": channel_metadata.topic,
            "partition": channel_metadata.partition,
            "offset": channel_metadata.offset,
        }

        try:
            event = self.codec.decode(payload)
        except DeserializationFailure as e:
            logger.error(
                f"Failed to deserialize {self.label} event",
                error=e,
                metadata={**delivery, **e.details}
            )
            return False

        logger.info(
            f"Received {self.label} event from topic: {channel_metadata.topic}, "
            f"partition: {channel_metadata.partition}, offset: {channel_metadata.offset}",
            user_id=event.user_id,
            metadata={**delivery, "eventType": event.event_type}
        )

        try:
            await self.handler(event, channel_metadata)
        except Exception as e:
            logger.error(f"Failed to process {self.label} event: {event}", user_id=event.user_id, error=e, metadata=delivery)
            return False

        logger.info(f"Successfully processed {self.label} event for user: {event.user_id}", user_id=event.user_id)
        return True

    async def start(self) -> None:
        """Connect the broker if needed and subscribe on_receive to the topic"""
        if self.broker is None or not self.topic or not self.group_id:
            raise RuntimeError("Consumer needs a broker, a topic and a group_id to start")

        logger.info(
            f"{self.label} consumer starting...",
            metadata={"topic": self.topic, "groupId": self.group_id}
        )

        if not self.broker.is_healthy():
            await self.broker.connect()
            self._owns_connection = True

        await self.broker.subscribe(self.topic, self.group_id, self.on_receive)
        self.is_running = True

    async def stop(self) -> None:
        """Stop consuming; disconnects the broker only if start() connected it"""
        logger.info(f"Stopping {self.label} consumer...")
        self.is_running = False

        if self.broker is not None and self._owns_connection:
            try:
                await self.broker.disconnect()
                logger.info("Message broker disconnected")
            except Exception as e:
                logger.error(f"Error disconnecting broker: {str(e)}", error=e)
            self._owns_connection = False

        logger.info(f"{self.label} consumer stopped")
