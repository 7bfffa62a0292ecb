"""
Message Broker Factory
Creates the appropriate message broker instance based on configuration
"""

from user_events.core.config import Config, config as default_config
from user_events.core.logger import logger
from .i_message_broker import IMessageBroker
from .dapr_broker import DaprBroker
from .kafka_broker import KafkaBroker
from .memory_broker import InMemoryBroker


class MessageBrokerFactory:
    """Factory for creating message broker instances"""

    @staticmethod
    def create(config: Config = None) -> IMessageBroker:
        """
        Create a message broker instance based on config.message_broker_type

        Returns:
            IMessageBroker implementation
        """
        config = config or default_config
        broker_type = config.message_broker_type.lower()

        logger.info(f"Creating message broker: {broker_type}")

        if broker_type == "memory":
            return InMemoryBroker(partitions=config.topic_partitions)

        elif broker_type == "kafka":
            return KafkaBroker(config.kafka_brokers, config.kafka_client_id)

        elif broker_type == "dapr":
            return DaprBroker(config.dapr_http_port, config.dapr_pubsub_name)

        else:
            raise ValueError(
                f"Unsupported message broker type: {broker_type}. "
                f"Supported types: memory, kafka, dapr"
            )
