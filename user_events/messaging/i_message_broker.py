"""
Message Broker Interface
Defines the contract for all message broker implementations (Kafka, Dapr, in-memory)
Producers and consumers only talk to this interface, so brokers can be swapped by configuration.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional


@dataclass(frozen=True)
class DeliveryResult:
    """Where a published message landed"""
    topic: str
    partition: Optional[int]
    offset: Optional[int]


@dataclass(frozen=True)
class ChannelMetadata:
    """Delivery details handed to consumers along with each payload"""
    topic: str
    partition: Optional[int] = None
    offset: Optional[int] = None
    key: Optional[str] = None


MessageHandler = Callable[[bytes, ChannelMetadata], Awaitable[Any]]


class IMessageBroker(ABC):
    """Abstract base class for message broker implementations"""

    @abstractmethod
    async def connect(self) -> None:
        """
        Establish connection to the message broker
        """
        pass

    @abstractmethod
    async def publish(self, topic: str, key: str, payload: bytes) -> DeliveryResult:
        """
        Publish a payload to a topic, routed to a partition by key

        Args:
            topic: Name of the topic to publish to
            key: Routing key (the user ID for user events)
            payload: Encoded message

        Returns:
            DeliveryResult once the broker acknowledged the message

        Raises:
            TransportFailure: if the broker rejected or failed to deliver the message
        """
        pass

    @abstractmethod
    async def subscribe(self, topic: str, group_id: str, handler: MessageHandler) -> None:
        """
        Start delivering messages of a topic to a handler

        Args:
            topic: Name of the topic to consume from
            group_id: Consumer group ID
            handler: Async callback receiving (payload, ChannelMetadata)
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """
        Close connection to the message broker
        """
        pass

    @abstractmethod
    def is_healthy(self) -> bool:
        """
        Check if the broker connection is healthy

        Returns:
            True if connected and ready, False otherwise
        """
        pass

    @abstractmethod
    async def get_stats(self) -> Dict[str, Any]:
        """
        Get topic statistics (for monitoring)

        Returns:
            Dictionary with statistics
        """
        pass
