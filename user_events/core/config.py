"""
Core configuration and settings for the User Event Service
Values come from environment variables or a local .env file
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Allow extra fields to be ignored
    )

    # Service information
    service_name: str = Field(default="user-event-service")
    service_version: str = Field(default="1.0.0")
    environment: str = Field(default="development")

    # Server configuration
    port: int = Field(default=8080)
    host: str = Field(default="0.0.0.0")  # nosec B104

    # Logging configuration
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")
    log_to_file: bool = Field(default=False)
    log_to_console: bool = Field(default=True)
    log_file_path: str = Field(default="logs/user-event-service.log")

    # Tracing
    correlation_id_header: str = Field(default="X-Correlation-ID")

    # Message broker configuration
    message_broker_type: str = Field(default="memory")
    kafka_bootstrap_servers: str = Field(default="localhost:9092")
    kafka_client_id: str = Field(default="user-event-service")
    topic_partitions: int = Field(default=3)

    # Topics and consumer groups
    record_events_topic: str = Field(default="user-events-record")
    pojo_events_topic: str = Field(default="user-events-pojo")
    record_consumer_group: str = Field(default="record-consumer-group")
    pojo_consumer_group: str = Field(default="pojo-consumer-group")

    # Dapr configuration
    dapr_http_port: int = Field(default=3500)
    dapr_pubsub_name: str = Field(default="user-events-pubsub")

    @property
    def kafka_brokers(self) -> list:
        """Bootstrap servers as a list"""
        return [server.strip() for server in self.kafka_bootstrap_servers.split(",") if server.strip()]


# Global config instance
config = Config()
