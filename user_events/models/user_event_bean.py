from datetime import datetime
from typing import Any, ClassVar, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from user_events.models.user_event import UserEvent
from user_events.models.user_event_base import WIRE_TIMESTAMP_FORMAT, UserEventBehaviour
from user_events.validators.user_event_validators import UserEventValidatorMixin


class UserEventBean(UserEventBehaviour, UserEventValidatorMixin, BaseModel):
    """
    Mutable user event (bean/POJO style).

    ``UserEventBean()`` builds an empty bean whose fields are then assigned one
    by one. Construction with arguments applies the same validation and
    normalization as UserEvent, but attribute assignment is never validated:
    keeping a mutated bean valid is up to the caller.

    Equality and hashing follow the current field values, so a bean must not
    be mutated while it is used as a dict key or set member. Beans carry no
    synchronization; do not mutate one instance from several tasks.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=False)

    allow_empty_construction: ClassVar[bool] = True

    user_id: Optional[str] = Field(default=None, alias="userId")
    event_type: Optional[str] = Field(default=None, alias="eventType")
    timestamp: Optional[datetime] = None
    metadata: Optional[Dict[str, Any]] = None

    @field_serializer("timestamp", when_used="json")
    def serialize_timestamp(self, value: Optional[datetime]) -> Optional[str]:
        if value is None:
            return None
        return value.strftime(WIRE_TIMESTAMP_FORMAT)

    def to_record(self) -> UserEvent:
        """Validate the current values and freeze them into a UserEvent"""
        metadata = dict(self.metadata) if self.metadata is not None else None
        return UserEvent.of(self.user_id, self.event_type, self.timestamp, metadata)
