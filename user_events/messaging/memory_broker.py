"""
In-Memory Broker Implementation
Implements the IMessageBroker interface inside the current process

Messages are assigned to partitions by a stable hash of their key and get
increasing offsets per (topic, partition), like a Kafka topic would.
Every subscribed consumer group receives every message. Payloads are only
handed to subscribers; the broker keeps per-topic message counts, not the messages.

Not suitable for production: nothing is persisted and nothing leaves the process.
"""

import zlib
from collections import defaultdict
from typing import Any, Dict, Tuple

from user_events.core.errors import TransportFailure
from user_events.core.logger import logger
from .i_message_broker import ChannelMetadata, DeliveryResult, IMessageBroker, MessageHandler


def partition_for(key: str, partitions: int) -> int:
    """Stable partition for a routing key"""
    return zlib.crc32(key.encode("utf-8")) % partitions


class InMemoryBroker(IMessageBroker):
    """In-memory implementation of IMessageBroker"""

    def __init__(self, partitions: int = 3):
        if partitions < 1:
            raise ValueError("partitions must be at least 1")
        self.partitions = partitions
        self.subscriptions: Dict[str, Dict[str, MessageHandler]] = defaultdict(dict)
        self.message_counts: Dict[str, int] = defaultdict(int)
        self._offsets: Dict[Tuple[str, int], int] = defaultdict(int)
        self._is_connected = False

    async def connect(self) -> None:
        self._is_connected = True
        logger.info("In-memory broker connected", metadata={"partitions": self.partitions})

    async def publish(self, topic: str, key: str, payload: bytes) -> DeliveryResult:
        if not self._is_connected:
            raise TransportFailure("In-memory broker is not connected", details={"topic": topic})

        partition = partition_for(key, self.partitions)
        offset = self._offsets[(topic, partition)]
        self._offsets[(topic, partition)] = offset + 1

        channel_metadata = ChannelMetadata(topic=topic, partition=partition, offset=offset, key=key)
        self.message_counts[topic] += 1

        for group_id, handler in list(self.subscriptions[topic].items()):
            try:
                await handler(payload, channel_metadata)
            except Exception as e:
                # A failing subscriber does not fail the publish
                logger.error(
                    f"Subscriber {group_id} failed on {topic}",
                    error=e,
                    metadata={"topic": topic, "partition": partition, "offset": offset, "groupId": group_id}
                )

        return DeliveryResult(topic=topic, partition=partition, offset=offset)

    async def subscribe(self, topic: str, group_id: str, handler: MessageHandler) -> None:
        self.subscriptions[topic][group_id] = handler
        logger.info(f"Subscribed {group_id} to {topic}", metadata={"topic": topic, "groupId": group_id})

    async def disconnect(self) -> None:
        self.subscriptions.clear()
        self._is_connected = False
        logger.info("In-memory broker closed")

    def is_healthy(self) -> bool:
        return self._is_connected

    async def get_stats(self) -> Dict[str, Any]:
        return {
            "broker": "memory",
            "connected": self._is_connected,
            "partitions": self.partitions,
            "messages": dict(self.message_counts),
            "subscriptions": {topic: list(groups) for topic, groups in self.subscriptions.items()},
        }
