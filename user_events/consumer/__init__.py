"""
Event consumers
"""

from .consumer import UserEventConsumer

__all__ = ["UserEventConsumer"]
