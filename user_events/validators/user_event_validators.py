from datetime import datetime, UTC
from typing import Any, ClassVar, Dict, Tuple

from pydantic import ValidationInfo, field_validator, model_validator

from user_events.core.errors import InvalidArgument

# Second precision, no offset
WIRE_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"

# (attribute name, wire alias), in validation order
USER_ID = ("user_id", "userId")
EVENT_TYPE = ("event_type", "eventType")
TIMESTAMP = ("timestamp", "timestamp")


def _lookup(data: Dict[str, Any], field: Tuple[str, str], strict: bool) -> Tuple[str, Any]:
    name, alias = field
    if alias in data or strict:
        return alias, data.get(alias)
    return name, data.get(name)


def _require_text(value: Any, alias: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgument(alias)
    return value.strip()


def parse_wire_timestamp(value: Any) -> datetime:
    """Parse a wire timestamp, which must be a "yyyy-MM-ddTHH:mm:ss" string"""
    if not isinstance(value, str):
        raise InvalidArgument(TIMESTAMP[1], f"timestamp must be a string in {WIRE_TIMESTAMP_FORMAT} format")
    try:
        return datetime.strptime(value, WIRE_TIMESTAMP_FORMAT)
    except ValueError as e:
        raise InvalidArgument(TIMESTAMP[1], f"timestamp {value!r} does not match {WIRE_TIMESTAMP_FORMAT}") from e


def normalize_event_fields(data: Dict[str, Any], strict: bool = False) -> Dict[str, Any]:
    """
    Check the construction invariants of a user event and return the normalized input.

    Raises InvalidArgument for the first offending field, checking userId,
    eventType and timestamp in that order. With ``strict`` (wire payloads)
    fields are only read by their wire names and the timestamp must be a
    string in WIRE_TIMESTAMP_FORMAT.
    """
    normalized = dict(data)

    key, user_id = _lookup(data, USER_ID, strict)
    normalized[key] = _require_text(user_id, USER_ID[1])

    key, event_type = _lookup(data, EVENT_TYPE, strict)
    normalized[key] = _require_text(event_type, EVENT_TYPE[1]).upper()

    key, timestamp = _lookup(data, TIMESTAMP, strict)
    if timestamp is None:
        raise InvalidArgument(TIMESTAMP[1])
    if strict:
        normalized[key] = parse_wire_timestamp(timestamp)

    return normalized


def to_naive_utc(value: datetime) -> datetime:
    """Wire timestamps carry no offset, so aware values are stored as naive UTC"""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(UTC).replace(tzinfo=None)
    return value


class UserEventValidatorMixin:
    # A bean may be built empty and filled in through attribute assignment
    allow_empty_construction: ClassVar[bool] = False

    @model_validator(mode="before")
    @classmethod
    def user_event_invariants(cls, data: Any, info: ValidationInfo) -> Any:
        if not isinstance(data, dict):
            return data
        strict = bool((info.context or {}).get("strict"))
        if not data and cls.allow_empty_construction and not strict:
            return data
        return normalize_event_fields(data, strict)

    @field_validator("timestamp")
    @classmethod
    def timestamp_without_offset(cls, v):
        return to_naive_utc(v)
