from .user_event import UserEvent
from .user_event_bean import UserEventBean
from .user_event_base import WIRE_TIMESTAMP_FORMAT
from .event_request import EventRequest

__all__ = ["EventRequest", "UserEvent", "UserEventBean", "WIRE_TIMESTAMP_FORMAT"]
