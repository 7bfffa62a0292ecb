from .user_event_handler import handle_user_event

__all__ = ["handle_user_event"]
