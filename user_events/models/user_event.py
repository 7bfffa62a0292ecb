from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from user_events.models.user_event_base import WIRE_TIMESTAMP_FORMAT, UserEventBehaviour
from user_events.validators.user_event_validators import UserEventValidatorMixin


class UserEvent(UserEventBehaviour, UserEventValidatorMixin, BaseModel):
    """
    Immutable user event (record style).

    Fields are validated and normalized once, at construction, and cannot be
    reassigned afterwards. Equality and hashing are structural.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    user_id: str = Field(alias="userId")
    event_type: str = Field(alias="eventType")
    timestamp: datetime
    metadata: Optional[Dict[str, Any]] = None

    @field_serializer("timestamp", when_used="json")
    def serialize_timestamp(self, value: datetime) -> str:
        return value.strftime(WIRE_TIMESTAMP_FORMAT)

    def to_bean(self) -> "UserEventBean":
        """Mutable working copy of this event"""
        from user_events.models.user_event_bean import UserEventBean

        metadata = dict(self.metadata) if self.metadata is not None else None
        return UserEventBean.of(self.user_id, self.event_type, self.timestamp, metadata)
