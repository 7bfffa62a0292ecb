"""
Kafka Broker Implementation
Implements the IMessageBroker interface for Apache Kafka using aiokafka
"""

import asyncio
from functools import partial
from typing import Any, Dict, List, Optional, Tuple

from aiokafka import AIOKafkaConsumer, AIOKafkaProducer
from aiokafka.errors import KafkaError

from user_events.core.errors import TransportFailure
from user_events.core.logger import logger
from .i_message_broker import ChannelMetadata, DeliveryResult, IMessageBroker, MessageHandler


class KafkaBroker(IMessageBroker):
    """Kafka implementation of IMessageBroker"""

    def __init__(self, brokers: List[str], client_id: str):
        """
        Initialize Kafka broker

        Args:
            brokers: List of Kafka broker addresses
            client_id: Client ID reported to the Kafka cluster
        """
        self.brokers = brokers
        self.client_id = client_id
        self.producer: Optional[AIOKafkaProducer] = None
        self.consumers: Dict[Tuple[str, str], AIOKafkaConsumer] = {}
        self._consume_tasks: List[asyncio.Task] = []

    async def connect(self) -> None:
        """Start the Kafka producer"""
        logger.info(
            "Connecting to Kafka...",
            metadata={"brokers": self.brokers, "clientId": self.client_id}
        )

        producer = AIOKafkaProducer(bootstrap_servers=self.brokers, client_id=self.client_id)
        try:
            await producer.start()
        except KafkaError as e:
            logger.error("Failed to connect to Kafka", error=e, metadata={"brokers": self.brokers})
            raise TransportFailure(f"Failed to connect to Kafka: {e}", details={"brokers": self.brokers}) from e

        self.producer = producer
        logger.info("Kafka producer connected", metadata={"brokers": self.brokers})

    async def publish(self, topic: str, key: str, payload: bytes) -> DeliveryResult:
        """Send a message and wait for the broker acknowledgment"""
        if self.producer is None:
            raise TransportFailure("Kafka producer is not connected", details={"topic": topic})

        try:
            record_metadata = await self.producer.send_and_wait(
                topic, value=payload, key=key.encode("utf-8")
            )
        except KafkaError as e:
            raise TransportFailure(
                f"Failed to publish to {topic}: {e}",
                details={"topic": topic, "key": key}
            ) from e

        return DeliveryResult(
            topic=record_metadata.topic,
            partition=record_metadata.partition,
            offset=record_metadata.offset,
        )

    async def subscribe(self, topic: str, group_id: str, handler: MessageHandler) -> None:
        """Start a consumer for the topic and deliver its records in a background task"""
        consumer = AIOKafkaConsumer(
            topic,
            bootstrap_servers=self.brokers,
            group_id=group_id,
            client_id=self.client_id,
        )
        try:
            await consumer.start()
        except KafkaError as e:
            raise TransportFailure(
                f"Failed to subscribe to {topic}: {e}",
                details={"topic": topic, "groupId": group_id}
            ) from e

        self.consumers[(topic, group_id)] = consumer
        task = asyncio.create_task(self._consume(consumer, handler))
        task.add_done_callback(partial(self._on_consume_done, topic, group_id))
        self._consume_tasks.append(task)

        logger.info(f"Subscribed {group_id} to {topic}", metadata={"topic": topic, "groupId": group_id})

    async def _consume(self, consumer: AIOKafkaConsumer, handler: MessageHandler) -> None:
        async for message in consumer:
            channel_metadata = ChannelMetadata(
                topic=message.topic,
                partition=message.partition,
                offset=message.offset,
                key=message.key.decode("utf-8") if message.key is not None else None,
            )
            try:
                await handler(message.value, channel_metadata)
            except Exception as e:
                logger.error(
                    f"Error processing Kafka message from {message.topic}",
                    error=e,
                    metadata={
                        "topic": message.topic,
                        "partition": message.partition,
                        "offset": message.offset,
                    }
                )

    def _on_consume_done(self, topic: str, group_id: str, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(
                f"Kafka consumer for {topic} stopped unexpectedly",
                error=error,
                metadata={"topic": topic, "groupId": group_id}
            )

    async def disconnect(self) -> None:
        """Stop consumers, their tasks and the producer"""
        for task in self._consume_tasks:
            task.cancel()
        await asyncio.gather(*self._consume_tasks, return_exceptions=True)
        self._consume_tasks.clear()

        for consumer in self.consumers.values():
            await consumer.stop()
        self.consumers.clear()

        if self.producer is not None:
            await self.producer.stop()
            self.producer = None

        logger.info("Kafka broker closed")

    def is_healthy(self) -> bool:
        """Check if broker connection is healthy"""
        return self.producer is not None

    async def get_stats(self) -> Dict[str, Any]:
        """Get Kafka statistics"""
        return {
            "broker": "kafka",
            "connected": self.producer is not None,
            "brokers": self.brokers,
            "subscriptions": [
                {"topic": topic, "groupId": group_id} for topic, group_id in self.consumers
            ],
        }
