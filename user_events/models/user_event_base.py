"""
Behaviour shared by both user event DTO styles.

Both the immutable record and the mutable bean expose the same derived
accessors, factories, structural equality and string form. The mixin only
reads the four event fields, so it works for either pydantic model.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from user_events.validators.user_event_validators import WIRE_TIMESTAMP_FORMAT

LOGIN = "LOGIN"
LOGOUT = "LOGOUT"


def _freeze(value: Any) -> Any:
    """Hashable view of a JSON-like value"""
    if isinstance(value, dict):
        return frozenset((key, _freeze(item)) for key, item in value.items())
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    if isinstance(value, set):
        return frozenset(_freeze(item) for item in value)
    return value


class UserEventBehaviour:
    """Accessors, factories and equality for user event models"""

    @classmethod
    def of(
        cls,
        user_id: Optional[str],
        event_type: Optional[str],
        timestamp: Optional[datetime],
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """Construct an event from all four fields, validating and normalizing them"""
        return cls(user_id=user_id, event_type=event_type, timestamp=timestamp, metadata=metadata)

    @classmethod
    def create_now(cls, user_id: str, event_type: str, metadata: Optional[Dict[str, Any]] = None):
        """Construct an event stamped with the current time"""
        return cls.of(user_id, event_type, datetime.now(), metadata)

    @classmethod
    def create_simple(cls, user_id: str, event_type: str):
        """Construct an event stamped with the current time and no metadata"""
        return cls.of(user_id, event_type, datetime.now(), {})

    def is_login_event(self) -> bool:
        return self.event_type == LOGIN

    def is_logout_event(self) -> bool:
        return self.event_type == LOGOUT

    def metadata_value(self, key: str) -> Optional[str]:
        """
        String form of a metadata entry.

        Returns None when there is no metadata, the key is missing, or the
        stored value is None.
        """
        if self.metadata is None:
            return None
        value = self.metadata.get(key)
        if value is None:
            return None
        return str(value)

    def _fields(self) -> tuple:
        return (self.user_id, self.event_type, self.timestamp, self.metadata)

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._fields() == other._fields()

    def __hash__(self) -> int:
        user_id, event_type, timestamp, metadata = self._fields()
        return hash((type(self).__name__, user_id, event_type, timestamp, _freeze(metadata)))

    def __str__(self) -> str:
        timestamp = self.timestamp.isoformat() if self.timestamp is not None else None
        return (
            f"{type(self).__name__}(userId={self.user_id!r}, eventType={self.event_type!r}, "
            f"timestamp={timestamp}, metadata={self.metadata!r})"
        )

    __repr__ = __str__
