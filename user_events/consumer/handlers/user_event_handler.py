"""
Default handler for received user events
Logs logins and logouts; other event types are only traced at debug level
"""

from user_events.core.logger import logger
from user_events.messaging.i_message_broker import ChannelMetadata
from user_events.services.event_codec import EventModel


async def handle_user_event(event: EventModel, channel_metadata: ChannelMetadata) -> None:
    logger.debug(
        f"Processing {event.event_type} event for user {event.user_id}",
        metadata={"topic": channel_metadata.topic}
    )

    if event.is_login_event():
        logger.info(f"User {event.user_id} logged in at {event.timestamp}", user_id=event.user_id)
    elif event.is_logout_event():
        logger.info(f"User {event.user_id} logged out at {event.timestamp}", user_id=event.user_id)

    if event.metadata:
        logger.debug("Event metadata", user_id=event.user_id, metadata={"eventMetadata": event.metadata})
