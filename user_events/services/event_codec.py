"""
User Event Codec
Converts user events to and from their JSON wire representation

Wire format:
{
    "userId": "user-123",
    "eventType": "LOGIN",
    "timestamp": "2024-01-01T12:00:00",
    "metadata": {"ip": "1.2.3.4"}
}
"""

from typing import Type, Union

from pydantic import ValidationError

from user_events.core.errors import DeserializationFailure, InvalidArgument
from user_events.models import UserEvent, UserEventBean

EventModel = Union[UserEvent, UserEventBean]
Payload = Union[bytes, bytearray, str]


def encode(event: EventModel) -> bytes:
    """
    Serialize an event to its UTF-8 JSON wire representation

    The timestamp is written with second precision; any sub-second part is dropped.
    """
    return event.model_dump_json(by_alias=True).encode("utf-8")


def decode(payload: Payload, model: Type[EventModel] = UserEvent) -> EventModel:
    """
    Deserialize a wire payload into an event of the given model

    Decoding goes through the same validation and normalization as direct
    construction, for both the record and the bean.

    Raises:
        DeserializationFailure: malformed JSON, missing fields or violated invariants
    """
    if not isinstance(payload, (bytes, bytearray, str)):
        raise DeserializationFailure(
            f"Unsupported payload type: {type(payload).__name__}",
            details={"model": model.__name__},
        )

    try:
        return model.model_validate_json(payload, context={"strict": True})
    except InvalidArgument as e:
        raise DeserializationFailure(
            f"Invalid {model.__name__} payload: {e.message}",
            details={"model": model.__name__, "field": e.field},
        ) from e
    except ValidationError as e:
        raise DeserializationFailure(
            f"Malformed {model.__name__} payload: {e.error_count()} error(s)",
            details={"model": model.__name__, "errors": [err["type"] for err in e.errors()]},
        ) from e


class UserEventCodec:
    """Codec bound to one event model, handed to producers and consumers"""

    def __init__(self, model: Type[EventModel] = UserEvent):
        self.model = model

    def encode(self, event: EventModel) -> bytes:
        return encode(event)

    def decode(self, payload: Payload) -> EventModel:
        return decode(payload, self.model)


record_codec = UserEventCodec(UserEvent)
bean_codec = UserEventCodec(UserEventBean)
