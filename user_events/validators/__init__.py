from .user_event_validators import UserEventValidatorMixin, normalize_event_fields

__all__ = ["UserEventValidatorMixin", "normalize_event_fields"]
