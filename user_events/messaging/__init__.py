"""
Message broker abstraction and implementations
"""

from .i_message_broker import ChannelMetadata, DeliveryResult, IMessageBroker, MessageHandler
from .memory_broker import InMemoryBroker
from .message_broker_factory import MessageBrokerFactory

__all__ = [
    "ChannelMetadata",
    "DeliveryResult",
    "IMessageBroker",
    "MessageHandler",
    "InMemoryBroker",
    "MessageBrokerFactory",
]
